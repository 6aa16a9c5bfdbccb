from decimal import Decimal

import pytest

from freshbulk.domain.schemas import CheckoutIn, UserOut
from freshbulk.services.order_service import OrderService

from conftest import RecordingNotifier, make_order, make_product


def checkout(*lines, email="buyer@example.com"):
    return CheckoutIn(
        customer_name="Ravi Kumar",
        customer_email=email,
        customer_phone="9876543210",
        delivery_address="12 Market Road",
        delivery_city="Pune",
        delivery_postal_code="411001",
        items=[{"product_id": pid, "quantity": qty} for pid, qty in lines],
    )


def user(email, role="customer"):
    return UserOut(id=1, username="u", email=email, role=role, created_at="2024-01-01T00:00:00Z")


def test_place_order_snapshots_products(storage, notifier):
    tomatoes = make_product(storage, name="Tomatoes", price="25", unit="kg")
    spinach = make_product(storage, name="Spinach", price="40", unit="bunch", category="Leafy Greens")
    svc = OrderService(storage, notifier)

    order = svc.place_order(checkout((tomatoes.id, 4), (spinach.id, 2)))

    assert [i.product_name for i in order.items] == ["Tomatoes", "Spinach"]
    assert order.items[1].unit == "bunch"
    assert order.total_amount == Decimal("180")
    assert order.status == "Pending"
    assert [o.order_number for o in notifier.confirmations] == [order.order_number]


def test_place_order_unknown_product(storage, notifier):
    svc = OrderService(storage, notifier)

    with pytest.raises(ValueError):
        svc.place_order(checkout((12345, 1)))

    assert storage.get_all_orders() == []
    assert notifier.confirmations == []


def test_place_order_survives_notification_failure(storage):
    product = make_product(storage)
    svc = OrderService(storage, RecordingNotifier(fail=True))

    order = svc.place_order(checkout((product.id, 1)))

    assert storage.get_order(order.id) is not None


def test_update_status_notifies(storage, notifier):
    product = make_product(storage)
    order = make_order(storage, product)
    svc = OrderService(storage, notifier)

    updated = svc.update_order_status(order.id, "In Progress")

    assert updated.status == "In Progress"
    assert len(notifier.status_updates) == 1
    sent_order, status = notifier.status_updates[0]
    assert sent_order.order_number == order.order_number
    assert status == "In Progress"


def test_update_status_missing_order_sends_nothing(storage, notifier):
    svc = OrderService(storage, notifier)

    assert svc.update_order_status(999, "Delivered") is None
    assert notifier.status_updates == []


def test_update_status_kept_when_notification_fails(storage):
    product = make_product(storage)
    order = make_order(storage, product)
    svc = OrderService(storage, RecordingNotifier(fail=True))

    svc.update_order_status(order.id, "Delivered")

    assert storage.get_order(order.id).status == "Delivered"


def test_get_order_permissions(storage, notifier):
    product = make_product(storage)
    order = make_order(storage, product, email="owner@example.com")
    svc = OrderService(storage, notifier)

    assert svc.get_order(order.id, user("owner@example.com")).id == order.id
    assert svc.get_order(order.id, user("boss@example.com", role="admin")).id == order.id
    assert svc.get_order(999, user("owner@example.com")) is None
    with pytest.raises(PermissionError):
        svc.get_order(order.id, user("stranger@example.com"))


def test_track_order_accepts_bare_number(storage, notifier):
    product = make_product(storage)
    order = make_order(storage, product)
    svc = OrderService(storage, notifier)

    bare = order.order_number.removeprefix("FBO-")

    assert svc.track_order(bare).id == order.id
    assert svc.track_order(order.order_number).id == order.id
    assert svc.track_order("FBO-77777") is None
