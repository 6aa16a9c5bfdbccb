from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from freshbulk.api import create_app
from freshbulk.api.deps import get_notification_service, get_storage
from freshbulk.data.database import Base
from freshbulk.data import models  # noqa: F401
from freshbulk.domain.schemas import (
    AddressCreate,
    OrderCreate,
    OrderItem,
    ProductCreate,
    UserCreate,
)
from freshbulk.repos.mem_storage import MemStorage
from freshbulk.repos.sql_storage import SqlStorage
from freshbulk.services.user_service import UserService


class RecordingNotifier:
    """Zamiast Celery - zapisuje wywolania."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.confirmations = []
        self.status_updates = []

    def send_order_confirmation(self, order):
        self.confirmations.append(order)
        return not self.fail

    def send_order_status_update(self, order, status):
        self.status_updates.append((order, status))
        return not self.fail


@pytest.fixture
def sql_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    if request.param == "memory":
        return MemStorage()
    return SqlStorage(request.getfixturevalue("sql_session"))


@pytest.fixture
def notifier():
    return RecordingNotifier()


def make_product(storage, name="Tomatoes", price="25", unit="kg", category="Vegetables"):
    return storage.create_product(
        ProductCreate(name=name, category=category, price=Decimal(price), unit=unit)
    )


def make_order(storage, product, quantity=4, email="buyer@example.com", status=None):
    return storage.create_order(
        OrderCreate(
            customer_name="Ravi Kumar",
            customer_email=email,
            customer_phone="9876543210",
            delivery_address="12 Market Road",
            delivery_city="Pune",
            delivery_postal_code="411001",
            status=status,
            items=[
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    price=product.price,
                    quantity=quantity,
                    unit=product.unit,
                )
            ],
        )
    )


def make_address(storage, email="a@x.com", is_default=False, city="Pune"):
    return storage.create_address(
        AddressCreate(
            customer_name="Asha Patel",
            customer_email=email,
            customer_phone="9876543210",
            address_line="45 Garden Street",
            city=city,
            postal_code="411002",
            is_default=is_default,
        )
    )


ADMIN_AUTH = ("admin", "admin123")
ALICE_AUTH = ("alice", "alice123")
BOB_AUTH = ("bob", "bob12345")


@pytest.fixture
def mem_storage():
    storage = MemStorage()
    users = UserService(storage)
    users.register(UserCreate(username="admin", password="admin123", email="admin@freshbulk.com", role="admin"))
    users.register(UserCreate(username="alice", password="alice123", email="alice@example.com"))
    users.register(UserCreate(username="bob", password="bob12345", email="bob@example.com"))
    return storage


@pytest.fixture
def client(mem_storage, notifier):
    app = create_app()
    app.dependency_overrides[get_storage] = lambda: mem_storage
    app.dependency_overrides[get_notification_service] = lambda: notifier
    with TestClient(app) as c:
        yield c
