import random

import pytest
from pydantic import ValidationError

from freshbulk.domain.schemas import AddressUpdate

from conftest import make_address


def defaults(storage, email):
    return [a.id for a in storage.get_addresses_by_email(email) if a.is_default]


def test_first_address_becomes_default(storage):
    a1 = make_address(storage, email="a@x.com")

    assert a1.is_default is True


def test_explicit_default_moves_flag(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com", is_default=True)

    assert a2.is_default is True
    assert storage.get_address(a1.id).is_default is False
    assert defaults(storage, "a@x.com") == [a2.id]


def test_non_default_second_address_keeps_first(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")

    assert a2.is_default is False
    assert defaults(storage, "a@x.com") == [a1.id]


def test_defaults_are_per_email(storage):
    a = make_address(storage, email="a@x.com")
    b = make_address(storage, email="b@x.com")
    make_address(storage, email="a@x.com", is_default=True)

    assert storage.get_address(b.id).is_default is True
    assert storage.get_address(a.id).is_default is False


def test_update_to_default_clears_siblings(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")

    updated = storage.update_address(a2.id, AddressUpdate(is_default=True))

    assert updated.is_default is True
    assert defaults(storage, "a@x.com") == [a2.id]


def test_update_other_fields_only(storage):
    a1 = make_address(storage, email="a@x.com")

    updated = storage.update_address(a1.id, AddressUpdate(city="Mumbai"))

    assert updated.city == "Mumbai"
    assert updated.is_default is True
    assert updated.address_line == a1.address_line


def test_update_can_strip_only_default(storage):
    a1 = make_address(storage, email="a@x.com")

    updated = storage.update_address(a1.id, AddressUpdate(is_default=False))

    assert updated.is_default is False
    assert defaults(storage, "a@x.com") == []


def test_update_missing_address(storage):
    assert storage.update_address(77, AddressUpdate(city="Mumbai")) is None


@pytest.mark.parametrize("field", ["is_default", "customer_name", "city"])
def test_update_rejects_null_for_required_fields(storage, field):
    a1 = make_address(storage, email="a@x.com")

    with pytest.raises(ValidationError):
        storage.update_address(a1.id, AddressUpdate(**{field: None}))

    stored = storage.get_address(a1.id)
    assert stored.is_default is True
    assert stored.city == "Pune"


def test_set_default(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")

    result = storage.set_default_address(a2.id)

    assert result.id == a2.id
    assert result.is_default is True
    assert defaults(storage, "a@x.com") == [a2.id]
    assert storage.get_address(a1.id).is_default is False


def test_set_default_missing_returns_none(storage):
    a1 = make_address(storage, email="a@x.com")

    assert storage.set_default_address(999) is None
    assert defaults(storage, "a@x.com") == [a1.id]


def test_delete_only_address_leaves_nothing(storage):
    a1 = make_address(storage, email="a@x.com")

    assert storage.delete_address(a1.id) is True
    assert storage.get_addresses_by_email("a@x.com") == []
    assert storage.delete_address(a1.id) is False


def test_delete_default_promotes_remaining(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")

    storage.delete_address(a1.id)

    assert defaults(storage, "a@x.com") == [a2.id]


def test_delete_default_promotes_lowest_id(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")
    a3 = make_address(storage, email="a@x.com", is_default=True)

    storage.delete_address(a3.id)

    assert defaults(storage, "a@x.com") == [a1.id]
    assert storage.get_address(a2.id).is_default is False


def test_delete_non_default_keeps_default(storage):
    a1 = make_address(storage, email="a@x.com")
    a2 = make_address(storage, email="a@x.com")

    storage.delete_address(a2.id)

    assert defaults(storage, "a@x.com") == [a1.id]


def test_recreate_after_emptying_gets_default(storage):
    a1 = make_address(storage, email="a@x.com")
    storage.delete_address(a1.id)

    again = make_address(storage, email="a@x.com")

    assert again.is_default is True


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_single_default_over_random_operations(storage, seed):
    rng = random.Random(seed)
    email = "a@x.com"

    for _ in range(40):
        ids = [a.id for a in storage.get_addresses_by_email(email)]
        op = rng.choice(["create", "create", "update", "delete", "set_default"])

        if op == "create" or not ids:
            make_address(storage, email=email, is_default=rng.random() < 0.5)
        elif op == "update":
            target = rng.choice(ids)
            if rng.random() < 0.5:
                storage.update_address(target, AddressUpdate(is_default=True))
            else:
                storage.update_address(target, AddressUpdate(city=f"City {rng.randint(1, 9)}"))
        elif op == "delete":
            storage.delete_address(rng.choice(ids))
        else:
            storage.set_default_address(rng.choice(ids + [10_000]))

        addresses = storage.get_addresses_by_email(email)
        count = sum(1 for a in addresses if a.is_default)
        assert count <= 1
        if addresses:
            assert count == 1
