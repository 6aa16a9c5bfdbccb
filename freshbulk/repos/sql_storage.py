# freshbulk/repos/sql_storage.py
import uuid
from contextlib import contextmanager
from decimal import Decimal
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshbulk.data.models.address import AddressModel
from freshbulk.data.models.order import OrderModel
from freshbulk.data.models.product import ProductModel
from freshbulk.data.models.user import UserModel
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
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


class SqlStorage(Storage):
    """
    Store na SQLAlchemy. Kazda operacja zapisu to jedna transakcja,
    np. wyczyszczenie domyslnych + ustawienie nowego idzie w jednym commit.
    """

    def __init__(self, db: Session, order_number_prefix: str = ORDER_NUMBER_PREFIX):
        self.db = db
        self.order_number_prefix = order_number_prefix

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception as e:
            logger.error(f"Rollback transakcji: {e}")
            self.db.rollback()
            raise

    # =====================================================
    # PRODUCTS
    # =====================================================
    def get_all_products(self) -> List[ProductOut]:
        rows = self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        return [ProductOut.model_validate(r) for r in rows]

    def get_product(self, product_id: int) -> ProductOut | None:
        product = self.db.get(ProductModel, product_id)
        return ProductOut.model_validate(product) if product else None

    def create_product(self, data: ProductCreate) -> ProductOut:
        product = ProductModel(**data.model_dump())
        with self._transaction():
            self.db.add(product)
        self.db.refresh(product)
        return ProductOut.model_validate(product)

    def update_product(self, product_id: int, data: ProductUpdate) -> ProductOut | None:
        product = self.db.get(ProductModel, product_id)
        if not product:
            return None

        with self._transaction():
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(product, field, value)
        self.db.refresh(product)
        return ProductOut.model_validate(product)

    def delete_product(self, product_id: int) -> bool:
        product = self.db.get(ProductModel, product_id)
        if not product:
            return False

        with self._transaction():
            self.db.delete(product)
        return True

    # =====================================================
    # ORDERS
    # =====================================================
    def get_all_orders(self) -> List[OrderOut]:
        rows = self.db.execute(select(OrderModel).order_by(OrderModel.id)).scalars().all()
        return [OrderOut.model_validate(r) for r in rows]

    def get_order(self, order_id: int) -> OrderOut | None:
        order = self.db.get(OrderModel, order_id)
        return OrderOut.model_validate(order) if order else None

    def get_order_by_number(self, order_number: str) -> OrderOut | None:
        order = self.db.execute(
            select(OrderModel).where(OrderModel.order_number == order_number)
        ).scalar_one_or_none()
        return OrderOut.model_validate(order) if order else None

    def get_orders_by_email(self, email: str) -> List[OrderOut]:
        rows = self.db.execute(
            select(OrderModel)
            .where(OrderModel.customer_email == email)
            .order_by(OrderModel.id)
        ).scalars().all()
        return [OrderOut.model_validate(r) for r in rows]

    def create_order(self, data: OrderCreate) -> OrderOut:
        total = sum((i.total for i in data.items), Decimal("0.00"))

        order = OrderModel(
            **data.model_dump(exclude={"items", "status"}),
            # tymczasowy unikalny numer, docelowy dopiero po nadaniu id
            order_number=f"tmp-{uuid.uuid4().hex}",
            status=data.status or OrderStatus.PENDING.value,
            total_amount=total,
            items=[i.model_dump(mode="json") for i in data.items],
        )

        with self._transaction():
            self.db.add(order)
            self.db.flush()
            order.order_number = generate_order_number(order.id, self.order_number_prefix)

        self.db.refresh(order)
        return OrderOut.model_validate(order)

    def update_order_status(self, order_id: int, status: str) -> OrderOut | None:
        order = self.db.get(OrderModel, order_id)
        if not order:
            return None

        with self._transaction():
            order.status = status
        self.db.refresh(order)
        return OrderOut.model_validate(order)

    # =====================================================
    # ADDRESSES
    # =====================================================
    def _siblings(self, email: str) -> List[AddressModel]:
        # FOR UPDATE blokuje adresy tego emaila do konca transakcji (postgres)
        return self.db.execute(
            select(AddressModel)
            .where(AddressModel.customer_email == email)
            .order_by(AddressModel.id)
            .with_for_update()
        ).scalars().all()

    def _clear_defaults(self, email: str, keep_id: int | None = None) -> None:
        stmt = update(AddressModel).where(
            AddressModel.customer_email == email,
            AddressModel.is_default.is_(True),
        )
        if keep_id is not None:
            stmt = stmt.where(AddressModel.id != keep_id)
        self.db.execute(stmt.values(is_default=False))

    def get_all_addresses(self) -> List[AddressOut]:
        rows = self.db.execute(select(AddressModel).order_by(AddressModel.id)).scalars().all()
        return [AddressOut.model_validate(r) for r in rows]

    def get_addresses_by_email(self, email: str) -> List[AddressOut]:
        rows = self.db.execute(
            select(AddressModel)
            .where(AddressModel.customer_email == email)
            .order_by(AddressModel.id)
        ).scalars().all()
        return [AddressOut.model_validate(r) for r in rows]

    def get_address(self, address_id: int) -> AddressOut | None:
        address = self.db.get(AddressModel, address_id)
        return AddressOut.model_validate(address) if address else None

    def create_address(self, data: AddressCreate) -> AddressOut:
        with self._transaction():
            siblings = self._siblings(data.customer_email)
            make_default = data.is_default or not siblings

            if make_default:
                self._clear_defaults(data.customer_email)

            address = AddressModel(
                **data.model_dump(exclude={"is_default"}),
                is_default=make_default,
            )
            self.db.add(address)

        self.db.refresh(address)
        return AddressOut.model_validate(address)

    def update_address(self, address_id: int, data: AddressUpdate) -> AddressOut | None:
        address = self.db.get(AddressModel, address_id)
        if not address:
            return None

        changes = data.model_dump(exclude_unset=True)
        with self._transaction():
            if changes.get("is_default"):
                self._siblings(address.customer_email)
                self._clear_defaults(address.customer_email, keep_id=address_id)
            for field, value in changes.items():
                setattr(address, field, value)

        self.db.refresh(address)
        return AddressOut.model_validate(address)

    def delete_address(self, address_id: int) -> bool:
        address = self.db.get(AddressModel, address_id)
        if not address:
            return False

        with self._transaction():
            email = address.customer_email
            was_default = address.is_default
            self.db.delete(address)
            self.db.flush()

            if was_default:
                remaining = self._siblings(email)
                if remaining:
                    remaining[0].is_default = True
        return True

    def set_default_address(self, address_id: int) -> AddressOut | None:
        address = self.db.get(AddressModel, address_id)
        if not address:
            return None

        with self._transaction():
            self._siblings(address.customer_email)
            self._clear_defaults(address.customer_email)
            address.is_default = True

        self.db.refresh(address)
        return AddressOut.model_validate(address)

    # =====================================================
    # USERS
    # =====================================================
    def get_all_users(self) -> List[UserInDB]:
        rows = self.db.execute(select(UserModel).order_by(UserModel.id)).scalars().all()
        return [UserInDB.model_validate(r) for r in rows]

    def get_user(self, user_id: int) -> UserInDB | None:
        user = self.db.get(UserModel, user_id)
        return UserInDB.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> UserInDB | None:
        user = self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()
        return UserInDB.model_validate(user) if user else None

    def create_user(self, data: UserRecordIn) -> UserInDB:
        user = UserModel(**data.model_dump())
        try:
            with self._transaction():
                self.db.add(user)
                self.db.flush()
        except IntegrityError as e:
            # unique na username pilnuje rownoleglych rejestracji
            raise ValueError("Nazwa uzytkownika jest juz zajeta") from e
        self.db.refresh(user)
        return UserInDB.model_validate(user)
