# freshbulk/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ProductCategory(str, Enum):
    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    LEAFY_GREENS = "Leafy Greens"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    DELIVERED = "Delivered"
    # statusy z wariantu relacyjnego
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    CANCELLED = "Cancelled"


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# =====================================================
# PRODUCTS
# =====================================================
class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=200)
    category: ProductCategory
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Cena za jednostke (musi być > 0)")
    unit: str = Field(..., min_length=1, max_length=50, description="np. kg, bunch")
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class ProductUpdate(BaseModel):
    """Czesciowa aktualizacja - pominiete pola zostaja bez zmian."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[ProductCategory] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("name", "category", "price", "unit")
    @classmethod
    def not_null(cls, v):
        # description i image_url mozna wyczyscic, reszta jest wymagana
        if v is None:
            raise ValueError("Pole nie moze byc null")
        return v


class ProductOut(BaseModel):
    id: int
    name: str
    category: str
    price: Decimal
    unit: str
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ORDERS
# =====================================================
class OrderItem(BaseModel):
    """
    Snapshot produktu w zamowieniu.
    total jest zawsze przeliczany z price * quantity.
    """

    product_id: int
    product_name: str
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    quantity: int = Field(..., gt=0)
    unit: str
    total: Decimal = Decimal("0")

    @model_validator(mode="after")
    def compute_total(self):
        self.total = self.price * self.quantity
        return self


class _CustomerContact(BaseModel):
    customer_name: str = Field(..., min_length=2, max_length=200)
    customer_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    customer_phone: str = Field(..., min_length=10, max_length=20)


class _DeliveryDetails(BaseModel):
    delivery_address: str = Field(..., min_length=5)
    delivery_city: str = Field(..., min_length=2)
    delivery_postal_code: str = Field(..., min_length=5, max_length=12)
    notes: Optional[str] = None


class OrderCreate(_CustomerContact, _DeliveryDetails):
    """Wejscie do store - pozycje juz zsnapshotowane."""

    status: Optional[OrderStatus] = None
    items: List[OrderItem] = Field(..., min_length=1)

    model_config = ConfigDict(use_enum_values=True)


class CheckoutItemIn(BaseModel):
    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość (musi być > 0)")


class CheckoutIn(_CustomerContact, _DeliveryDetails):
    """Schema dla skladania zamowienia przez klienta (rowniez gościa)."""

    items: List[CheckoutItemIn] = Field(..., min_length=1)


class OrderStatusIn(BaseModel):
    status: OrderStatus

    model_config = ConfigDict(use_enum_values=True)


class OrderOut(BaseModel):
    id: int
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    delivery_postal_code: str
    status: str
    notes: Optional[str] = None
    total_amount: Decimal
    created_at: datetime
    items: List[OrderItem]

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ADDRESSES
# =====================================================
class AddressCreate(_CustomerContact):
    address_line: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    postal_code: str = Field(..., min_length=5, max_length=12)
    is_default: bool = False


class AddressUpdate(BaseModel):
    """customer_email nie podlega zmianie - to klucz wlasciciela adresu."""

    customer_name: Optional[str] = Field(None, min_length=2, max_length=200)
    customer_phone: Optional[str] = Field(None, min_length=10, max_length=20)
    address_line: Optional[str] = Field(None, min_length=5)
    city: Optional[str] = Field(None, min_length=2)
    postal_code: Optional[str] = Field(None, min_length=5, max_length=12)
    is_default: Optional[bool] = None

    @field_validator(
        "customer_name", "customer_phone", "address_line", "city", "postal_code", "is_default"
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Pole nie moze byc null")
        return v


class AddressOut(BaseModel):
    id: int
    customer_email: str
    customer_name: str
    customer_phone: str
    address_line: str
    city: str
    postal_code: str
    is_default: bool

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# USERS
# =====================================================
class UserCreate(BaseModel):
    """Schema dla rejestracji użytkownika."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    role: UserRole = Field(UserRole.CUSTOMER, validate_default=True)

    model_config = ConfigDict(use_enum_values=True)


class UserRecordIn(BaseModel):
    """Wejscie do store - haslo juz zahashowane."""

    username: str
    password: str
    email: str
    role: str


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class UserInDB(UserOut):
    password: str
