import pytest

from freshbulk.domain.order_number import generate_order_number, normalize_order_number


def test_generate_pads_to_five_digits():
    assert generate_order_number(1, "FBO-") == "FBO-00001"
    assert generate_order_number(4321, "FBO-") == "FBO-04321"


def test_generate_keeps_growing_past_five_digits():
    assert generate_order_number(123456, "FBO-") == "FBO-123456"


def test_generate_rejects_non_positive():
    with pytest.raises(ValueError):
        generate_order_number(0, "FBO-")


def test_normalize_adds_prefix_to_bare_number():
    assert normalize_order_number("00012", "FBO-") == "FBO-00012"


def test_normalize_keeps_prefixed_number():
    assert normalize_order_number(" fbo-00012 ", "FBO-") == "FBO-00012"
    assert normalize_order_number("FBO-00012", "FBO-") == "FBO-00012"


def test_normalize_empty():
    assert normalize_order_number("", "FBO-") == ""
