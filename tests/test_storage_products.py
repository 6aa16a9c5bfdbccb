from decimal import Decimal

import pytest
from pydantic import ValidationError

from freshbulk.domain.schemas import ProductCreate, ProductUpdate, UserRecordIn

from conftest import make_product


def test_create_assigns_increasing_ids(storage):
    first = make_product(storage, name="Tomatoes")
    second = make_product(storage, name="Apples", category="Fruits", price="120")

    assert first.id != second.id
    assert [p.name for p in storage.get_all_products()] == ["Tomatoes", "Apples"]


def test_get_product_missing_returns_none(storage):
    assert storage.get_product(999) is None


def test_partial_update_leaves_other_fields(storage):
    product = make_product(storage)

    updated = storage.update_product(product.id, ProductUpdate(price=Decimal("30")))

    assert updated.price == Decimal("30")
    assert updated.name == "Tomatoes"
    assert updated.unit == "kg"
    assert storage.get_product(product.id).price == Decimal("30")


def test_update_missing_product_returns_none(storage):
    assert storage.update_product(42, ProductUpdate(name="Ghost")) is None


def test_delete_product(storage):
    product = make_product(storage)

    assert storage.delete_product(product.id) is True
    assert storage.get_product(product.id) is None
    assert storage.delete_product(product.id) is False


def test_users_by_username(storage):
    created = storage.create_user(
        UserRecordIn(username="admin", password="hash.salt", email="admin@freshbulk.com", role="admin")
    )

    found = storage.get_user_by_username("admin")

    assert found.id == created.id
    assert found.role == "admin"
    assert found.password == "hash.salt"
    assert storage.get_user(created.id).username == "admin"
    assert storage.get_user_by_username("nobody") is None
    assert len(storage.get_all_users()) == 1


def test_duplicate_username_rejected(storage):
    record = UserRecordIn(username="alice", password="hash.salt", email="alice@example.com", role="customer")
    storage.create_user(record)

    with pytest.raises(ValueError):
        storage.create_user(record)

    assert len(storage.get_all_users()) == 1


@pytest.mark.parametrize("field", ["name", "category", "price", "unit"])
def test_update_rejects_null_for_required_fields(storage, field):
    product = make_product(storage)

    with pytest.raises(ValidationError):
        storage.update_product(product.id, ProductUpdate(**{field: None}))

    assert storage.get_product(product.id).name == "Tomatoes"


def test_update_can_clear_optional_fields(storage):
    product = storage.create_product(
        ProductCreate(
            name="Spinach",
            category="Leafy Greens",
            price=Decimal("40"),
            unit="bunch",
            description="Fresh bunches",
        )
    )

    updated = storage.update_product(product.id, ProductUpdate(description=None))

    assert updated.description is None
    assert updated.name == "Spinach"


def test_price_with_two_decimals_is_kept_exactly(storage):
    product = make_product(storage, price="10.25")

    assert storage.get_product(product.id).price == Decimal("10.25")


@pytest.mark.parametrize("price", ["10.005", "0.001"])
def test_price_with_more_than_two_decimals_rejected(price):
    with pytest.raises(ValidationError):
        ProductCreate(name="Tomatoes", category="Vegetables", price=Decimal(price), unit="kg")
    with pytest.raises(ValidationError):
        ProductUpdate(price=Decimal(price))
