# freshbulk/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from freshbulk.api.deps import (
    get_current_user,
    get_notification_service,
    get_storage,
    require_admin,
)
from freshbulk.domain.schemas import CheckoutIn, OrderOut, OrderStatusIn, UserOut
from freshbulk.repos.storage import Storage
from freshbulk.services.notification_service import NotificationService
from freshbulk.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    storage: Storage = Depends(get_storage),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(storage, notification_service)


@router.get("/", response_model=List[OrderOut], dependencies=[Depends(require_admin)])
def list_orders(svc: OrderService = Depends(get_service)):
    return svc.list_orders()


@router.get("/mine", response_model=List[OrderOut])
def my_orders(
    user: UserOut = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders_for(user)


@router.get("/track/{order_number}", response_model=OrderOut)
def track_order(order_number: str, svc: OrderService = Depends(get_service)):
    """
    Publiczne sledzenie zamowienia po numerze (FBO-00001 albo 00001).
    """
    order = svc.track_order(order_number)
    if not order:
        raise HTTPException(status_code=404, detail="Zamówienie nie znalezione")
    return order


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserOut = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    try:
        order = svc.get_order(order_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not order:
        raise HTTPException(status_code=404, detail="Zamówienie nie znalezione")
    return order


@router.post("/", response_model=OrderOut, status_code=201)
def place_order(payload: CheckoutIn, svc: OrderService = Depends(get_service)):
    """
    Zamowienie moze zlozyc kazdy, logowanie nie jest wymagane.
    Potwierdzenie email wysylane asynchronicznie.
    """
    try:
        return svc.place_order(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    svc: OrderService = Depends(get_service),
):
    order = svc.update_order_status(order_id, payload.status)
    if not order:
        raise HTTPException(status_code=404, detail="Zamówienie nie znalezione")
    return order
