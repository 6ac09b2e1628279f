"""
Field helpers: slugs, read time, list and number parsing, error rebuild.
"""

from decimal import Decimal

import pytest

from lumen.core.errors import (
    DuplicateAccount, Forbidden, InvalidCredentials, NotFound, StoreUnavailable, Unauthenticated,
    ValidationError, error_from_response,
)
from lumen.core.fields import (
    MAX_INT, parse_decimal, parse_int, parse_list, price_display, read_time,
    require_date, require_non_negative_int, require_positive_id, require_price, slugify,
)


@pytest.mark.parametrize("title,expected", [
    ("Practice Shoes", "practice-shoes"),
    ("  Hello   World ", "-hello-world-"),
    ("Tango & Milonga: Night #2", "tango--milonga-night-2"),
    ("Café Latino", "caf-latino"),
    ("already-a-slug", "already-a-slug"),
])
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_is_idempotent():
    slug = slugify("Summer Salsa Intensive")
    assert slugify(slug) == slug


def test_read_time():
    assert read_time(None) is None
    assert read_time("   ") is None
    assert read_time("one") == "1 min read"
    assert read_time(" ".join(["w"] * 200)) == "1 min read"
    assert read_time(" ".join(["w"] * 201)) == "2 min read"


def test_parse_list():
    assert parse_list(None) is None
    assert parse_list("") == []
    assert parse_list(" a, ,b ,") == ["a", "b"]
    assert parse_list(["Salsa ", "", "Tango"]) == ["Salsa", "Tango"]


def test_parse_numbers():
    assert parse_int("12") == 12
    assert parse_int(3.0) == 3
    assert parse_int(3.5) is None
    assert parse_int(True) is None
    assert parse_int("") is None
    assert parse_decimal("29.99") == Decimal("29.99")
    assert parse_decimal(29.99) == Decimal("29.99")
    assert parse_decimal("abc") is None
    assert parse_decimal("Infinity") is None


def test_negative_counts_rejected():
    with pytest.raises(ValidationError) as excinfo:
        require_non_negative_int({"stock": "-2"}, "stock", required=True)
    assert excinfo.value.field == "stock"


def test_price_display_rounds_for_display_only():
    assert price_display(Decimal("29.995")) == "$30.00"
    assert price_display(Decimal("5")) == "$5.00"
    assert price_display(None) is None
    assert price_display(Decimal("1E+30")) is None


def test_price_ceiling():
    assert require_price({"price": "99999999.99"}, "price") == Decimal("99999999.99")
    with pytest.raises(ValidationError) as exc:
        require_price({"price": "1e8"}, "price")
    assert exc.value.field == "price"


def test_integers_capped_at_column_range():
    assert require_non_negative_int({"stock": MAX_INT}, "stock") == MAX_INT
    with pytest.raises(ValidationError):
        require_non_negative_int({"stock": MAX_INT + 1}, "stock")
    with pytest.raises(ValidationError):
        require_positive_id({"authorId": MAX_INT + 1}, "authorId")


def test_require_date_keeps_date_part():
    assert require_date({"date": "2026-04-18T19:00:00Z"}) == "2026-04-18"
    with pytest.raises(ValidationError):
        require_date({"date": "2026-13-01"})


@pytest.mark.parametrize("status,body,expected", [
    (400, {"error": "title is required", "code": "ValidationError", "field": "title"}, ValidationError),
    (401, {"error": "Authentication required"}, Unauthenticated),
    (403, {"error": "nope"}, Forbidden),
    (404, {"error": "Coach not found", "code": "NotFound"}, NotFound),
    (409, {"error": "Email already in use"}, DuplicateAccount),
    (500, None, StoreUnavailable),
    (401, {"error": "Invalid email or password", "code": "InvalidCredentials"}, InvalidCredentials),
])
def test_error_from_response(status, body, expected):
    error = error_from_response(status, body)
    assert type(error) is expected
    assert error.status_code in (status, 503)
    if body:
        assert error.message == body["error"]


def test_validation_error_keeps_field():
    error = error_from_response(400, {"error": "Invalid status", "field": "status"})
    assert error.field == "status"
    assert error.to_dict() == {"error": "Invalid status", "code": "ValidationError", "field": "status"}
