# freshbulk/services/order_service.py
from typing import List

from freshbulk.domain.order_number import normalize_order_number
from freshbulk.domain.schemas import (
    CheckoutIn,
    OrderCreate,
    OrderItem,
    OrderOut,
    UserOut,
)
from freshbulk.repos.storage import Storage
from freshbulk.services.notification_service import NotificationService
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Use case'y dla zamowien: skladanie, sledzenie, zmiana statusu.
    Powiadomienia ida przez NotificationService i nigdy nie cofaja zapisu.
    """

    def __init__(self, storage: Storage, notification_service: NotificationService):
        self.storage = storage
        self.notification_service = notification_service

    #query
    def list_orders(self) -> List[OrderOut]:
        return self.storage.get_all_orders()

    def list_orders_for(self, user: UserOut) -> List[OrderOut]:
        return self.storage.get_orders_by_email(user.email)

    def get_order(self, order_id: int, user: UserOut) -> OrderOut | None:
        order = self.storage.get_order(order_id)

        if not order:
            return None

        if not user.is_admin and user.email != order.customer_email:
            raise PermissionError("Brak dostępu do zamówienia")

        return order

    def track_order(self, order_number: str) -> OrderOut | None:
        return self.storage.get_order_by_number(normalize_order_number(order_number))

    #commands
    def place_order(self, payload: CheckoutIn) -> OrderOut:
        """
        Use Case: Zlozenie zamowienia.

        1. Snapshot nazwy, ceny i jednostki kazdego produktu
        2. Zapis zamowienia (store liczy sumy i numer)
        3. Potwierdzenie email (async)
        """
        items = []
        for line in payload.items:
            product = self.storage.get_product(line.product_id)
            if not product:
                raise ValueError(f"Produkt {line.product_id} nie istnieje")

            items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    price=product.price,
                    quantity=line.quantity,
                    unit=product.unit,
                )
            )

        order = self.storage.create_order(
            OrderCreate(**payload.model_dump(exclude={"items"}), items=items)
        )

        logger.info(
            f"Order {order.order_number} created for {order.customer_email}, total {order.total_amount}"
        )

        self.notification_service.send_order_confirmation(order)
        return order

    def update_order_status(self, order_id: int, status: str) -> OrderOut | None:
        """
        Use Case: Zmiana statusu (admin).
        Bez walidacji przejsc - dowolny status nadpisuje obecny.
        """
        order = self.storage.update_order_status(order_id, status)

        if not order:
            logger.info(f"Zmiana statusu: zamowienie {order_id} nie istnieje")
            return None

        logger.info(f"Order {order.order_number} status -> {status}")

        self.notification_service.send_order_status_update(order, status)
        return order
