# freshbulk/repos/storage.py
from abc import ABC, abstractmethod
from typing import List

from freshbulk.domain.schemas import (
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


class Storage(ABC):
    """
    Wspolny kontrakt dla MemStorage i SqlStorage.

    - brak rekordu to None (albo False przy delete), nigdy wyjatek
    - update_* nadpisuje tylko pola jawnie przekazane
    - listy sa posortowane rosnaco po id
    - co najwyzej jeden domyslny adres na email, dokladnie jeden jesli email ma jakis adres
    """

    # products
    @abstractmethod
    def get_all_products(self) -> List[ProductOut]: ...

    @abstractmethod
    def get_product(self, product_id: int) -> ProductOut | None: ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> ProductOut: ...

    @abstractmethod
    def update_product(self, product_id: int, data: ProductUpdate) -> ProductOut | None: ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool: ...

    # orders
    @abstractmethod
    def get_all_orders(self) -> List[OrderOut]: ...

    @abstractmethod
    def get_order(self, order_id: int) -> OrderOut | None: ...

    @abstractmethod
    def get_order_by_number(self, order_number: str) -> OrderOut | None: ...

    @abstractmethod
    def get_orders_by_email(self, email: str) -> List[OrderOut]: ...

    @abstractmethod
    def create_order(self, data: OrderCreate) -> OrderOut:
        """Nadaje id, order_number i created_at; status domyslnie Pending."""

    @abstractmethod
    def update_order_status(self, order_id: int, status: str) -> OrderOut | None:
        """Nadpisuje status bez sprawdzania przejsc."""

    # addresses
    @abstractmethod
    def get_all_addresses(self) -> List[AddressOut]: ...

    @abstractmethod
    def get_addresses_by_email(self, email: str) -> List[AddressOut]: ...

    @abstractmethod
    def get_address(self, address_id: int) -> AddressOut | None: ...

    @abstractmethod
    def create_address(self, data: AddressCreate) -> AddressOut:
        """Pierwszy adres dla emaila albo jawnie is_default staje sie domyslnym."""

    @abstractmethod
    def update_address(self, address_id: int, data: AddressUpdate) -> AddressOut | None: ...

    @abstractmethod
    def delete_address(self, address_id: int) -> bool:
        """Usuniecie domyslnego awansuje pozostaly adres o najnizszym id."""

    @abstractmethod
    def set_default_address(self, address_id: int) -> AddressOut | None: ...

    # users
    @abstractmethod
    def get_all_users(self) -> List[UserInDB]: ...

    @abstractmethod
    def get_user(self, user_id: int) -> UserInDB | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserInDB | None: ...

    @abstractmethod
    def create_user(self, data: UserRecordIn) -> UserInDB:
        """ValueError gdy username jest juz zajety."""
