# freshbulk/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from freshbulk.api.deps import get_current_user, get_storage
from freshbulk.domain.schemas import AddressCreate, AddressUpdate, AddressOut, UserOut
from freshbulk.repos.storage import Storage
from freshbulk.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])

NOT_FOUND = "Adres nie znaleziony"


def get_service(storage: Storage = Depends(get_storage)) -> AddressService:
    return AddressService(storage)


@router.get("/", response_model=List[AddressOut])
def list_addresses(
    email: str | None = Query(None),
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        return svc.list_addresses(user, email)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.get("/{address_id}", response_model=AddressOut)
def get_address(
    address_id: int,
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        address = svc.get_address(address_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not address:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return address


@router.post("/", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressCreate,
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        return svc.create_address(payload, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.put("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressUpdate,
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        address = svc.update_address(address_id, payload, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not address:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return address


@router.delete("/{address_id}", status_code=204)
def delete_address(
    address_id: int,
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        deleted = svc.delete_address(address_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)


@router.patch("/{address_id}/set-default", response_model=AddressOut)
def set_default_address(
    address_id: int,
    user: UserOut = Depends(get_current_user),
    svc: AddressService = Depends(get_service),
):
    try:
        address = svc.set_default_address(address_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not address:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return address
