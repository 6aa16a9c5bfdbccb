# freshbulk/repos/mem_storage.py
import threading
from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from typing import Dict, List

from freshbulk.domain.order_number import generate_order_number
from freshbulk.domain.schemas import (
    OrderStatus,
    ProductCreate,
    ProductUpdate,
    ProductOut,
    OrderCreate,
    OrderOut,
    AddressCreate,
    AddressUpdate,
    AddressOut,
    UserRecordIn,
    UserInDB,
)
from freshbulk.repos.storage import Storage
from freshbulk.utils.settings import ORDER_NUMBER_PREFIX


class MemStorage(Storage):
    """
    Store w pamieci procesu.
    FastAPI wykonuje sync endpointy w puli watkow, wiec kazda operacja
    idzie pod jednym RLockiem (read-modify-write na domyslnych adresach).
    Na zewnatrz oddajemy kopie rekordow.
    """

    def __init__(self, order_number_prefix: str = ORDER_NUMBER_PREFIX):
        self._lock = threading.RLock()
        self._order_number_prefix = order_number_prefix

        self._products: Dict[int, ProductOut] = {}
        self._orders: Dict[int, OrderOut] = {}
        self._addresses: Dict[int, AddressOut] = {}
        self._users: Dict[int, UserInDB] = {}

        self._product_ids = count(1)
        self._order_ids = count(1)
        self._address_ids = count(1)
        self._user_ids = count(1)

    @staticmethod
    def _sorted(records: Dict[int, object]) -> list:
        return [records[k].model_copy(deep=True) for k in sorted(records)]

    # =====================================================
    # PRODUCTS
    # =====================================================
    def get_all_products(self) -> List[ProductOut]:
        with self._lock:
            return self._sorted(self._products)

    def get_product(self, product_id: int) -> ProductOut | None:
        with self._lock:
            product = self._products.get(product_id)
            return product.model_copy() if product else None

    def create_product(self, data: ProductCreate) -> ProductOut:
        with self._lock:
            product = ProductOut(id=next(self._product_ids), **data.model_dump())
            self._products[product.id] = product
            return product.model_copy()

    def update_product(self, product_id: int, data: ProductUpdate) -> ProductOut | None:
        with self._lock:
            existing = self._products.get(product_id)
            if not existing:
                return None

            updated = existing.model_copy(update=data.model_dump(exclude_unset=True))
            self._products[product_id] = updated
            return updated.model_copy()

    def delete_product(self, product_id: int) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    # =====================================================
    # ORDERS
    # =====================================================
    def get_all_orders(self) -> List[OrderOut]:
        with self._lock:
            return self._sorted(self._orders)

    def get_order(self, order_id: int) -> OrderOut | None:
        with self._lock:
            order = self._orders.get(order_id)
            return order.model_copy(deep=True) if order else None

    def get_order_by_number(self, order_number: str) -> OrderOut | None:
        with self._lock:
            for order in self._orders.values():
                if order.order_number == order_number:
                    return order.model_copy(deep=True)
            return None

    def get_orders_by_email(self, email: str) -> List[OrderOut]:
        with self._lock:
            return [o for o in self._sorted(self._orders) if o.customer_email == email]

    def create_order(self, data: OrderCreate) -> OrderOut:
        with self._lock:
            order_id = next(self._order_ids)
            items = [item.model_copy() for item in data.items]
            total = sum((i.total for i in items), Decimal("0.00"))

            order = OrderOut(
                **data.model_dump(exclude={"items", "status"}),
                id=order_id,
                order_number=generate_order_number(order_id, self._order_number_prefix),
                status=data.status or OrderStatus.PENDING.value,
                total_amount=total,
                created_at=datetime.now(timezone.utc),
                items=items,
            )
            self._orders[order_id] = order
            return order.model_copy(deep=True)

    def update_order_status(self, order_id: int, status: str) -> OrderOut | None:
        with self._lock:
            order = self._orders.get(order_id)
            if not order:
                return None

            updated = order.model_copy(update={"status": status})
            self._orders[order_id] = updated
            return updated.model_copy(deep=True)

    # =====================================================
    # ADDRESSES
    # =====================================================
    def _clear_defaults(self, email: str, keep_id: int | None = None) -> None:
        for address_id, address in self._addresses.items():
            if address.customer_email == email and address.is_default and address_id != keep_id:
                self._addresses[address_id] = address.model_copy(update={"is_default": False})

    def get_all_addresses(self) -> List[AddressOut]:
        with self._lock:
            return self._sorted(self._addresses)

    def get_addresses_by_email(self, email: str) -> List[AddressOut]:
        with self._lock:
            return [a for a in self._sorted(self._addresses) if a.customer_email == email]

    def get_address(self, address_id: int) -> AddressOut | None:
        with self._lock:
            address = self._addresses.get(address_id)
            return address.model_copy() if address else None

    def create_address(self, data: AddressCreate) -> AddressOut:
        with self._lock:
            has_siblings = any(
                a.customer_email == data.customer_email for a in self._addresses.values()
            )
            make_default = data.is_default or not has_siblings

            if make_default:
                self._clear_defaults(data.customer_email)

            address = AddressOut(
                **data.model_dump(exclude={"is_default"}),
                id=next(self._address_ids),
                is_default=make_default,
            )
            self._addresses[address.id] = address
            return address.model_copy()

    def update_address(self, address_id: int, data: AddressUpdate) -> AddressOut | None:
        with self._lock:
            existing = self._addresses.get(address_id)
            if not existing:
                return None

            changes = data.model_dump(exclude_unset=True)
            if changes.get("is_default"):
                self._clear_defaults(existing.customer_email, keep_id=address_id)

            updated = existing.model_copy(update=changes)
            self._addresses[address_id] = updated
            return updated.model_copy()

    def delete_address(self, address_id: int) -> bool:
        with self._lock:
            removed = self._addresses.pop(address_id, None)
            if removed is None:
                return False

            if removed.is_default:
                remaining = sorted(
                    k for k, a in self._addresses.items()
                    if a.customer_email == removed.customer_email
                )
                if remaining:
                    promoted = remaining[0]
                    self._addresses[promoted] = self._addresses[promoted].model_copy(
                        update={"is_default": True}
                    )
            return True

    def set_default_address(self, address_id: int) -> AddressOut | None:
        with self._lock:
            target = self._addresses.get(address_id)
            if not target:
                return None

            self._clear_defaults(target.customer_email)
            updated = target.model_copy(update={"is_default": True})
            self._addresses[address_id] = updated
            return updated.model_copy()

    # =====================================================
    # USERS
    # =====================================================
    def get_all_users(self) -> List[UserInDB]:
        with self._lock:
            return self._sorted(self._users)

    def get_user(self, user_id: int) -> UserInDB | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> UserInDB | None:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
            return None

    def create_user(self, data: UserRecordIn) -> UserInDB:
        with self._lock:
            # sprawdzenie i wstawienie pod tym samym lockiem
            if any(u.username == data.username for u in self._users.values()):
                raise ValueError("Nazwa uzytkownika jest juz zajeta")

            user = UserInDB(
                **data.model_dump(),
                id=next(self._user_ids),
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            return user.model_copy()
