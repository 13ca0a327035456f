"""Unit tests for nullable scalars: JSON encode/decode and driver value scanning."""
from decimal import Decimal

import pydantic
import pytest

from userapi.models import User
from userapi.nullable import scan_int, scan_str


def test_present_values_round_trip_through_json():
    user = User(id=3, username="alice", password="pw", email="a@x.com")
    assert User.model_validate_json(user.model_dump_json()) == user


def test_absent_values_encode_as_null_and_decode_as_absent():
    user = User(username="alice", password="pw")
    data = user.model_dump(mode="json")
    assert data["id"] is None
    assert data["email"] is None
    back = User.model_validate_json(user.model_dump_json())
    assert back.id is None and back.email is None


def test_missing_keys_decode_as_absent():
    user = User.model_validate_json('{"username": "bob"}')
    assert user.username == "bob"
    assert user.id is None
    assert user.password is None


def test_empty_string_is_present_not_absent():
    user = User.model_validate_json('{"email": ""}')
    assert user.email == ""


@pytest.mark.parametrize(
    "body",
    [
        '{"id": "abc"}',
        '{"id": "5"}',
        '{"id": 1.5}',
        '{"id": true}',
        '{"username": 42}',
    ],
)
def test_wrong_type_is_a_decode_error_not_absent(body):
    with pytest.raises(pydantic.ValidationError):
        User.model_validate_json(body)


def test_scan_int():
    assert scan_int(None) is None
    assert scan_int(7) == 7
    assert scan_int(Decimal("3")) == 3
    assert scan_int(b"12") == 12
    assert scan_int("9") == 9


@pytest.mark.parametrize("value", [Decimal("1.5"), 2.5, True, "x", b"nope", object()])
def test_scan_int_rejects_non_integral(value):
    with pytest.raises(ValueError):
        scan_int(value)


def test_scan_str():
    assert scan_str(None) is None
    assert scan_str("alice") == "alice"
    assert scan_str(b"bob") == "bob"
    assert scan_str(bytearray(b"carol")) == "carol"
    with pytest.raises(ValueError):
        scan_str(5)


def test_from_row_binds_by_column_name():
    """Dict key order does not matter: username and password are never swapped."""
    row = {"email": "e@x.com", "password": "secret", "username": "dave", "id": 4}
    user = User.from_row(row)
    assert user == User(id=4, username="dave", password="secret", email="e@x.com")


def test_from_row_null_email():
    user = User.from_row({"id": 1, "username": "u", "password": "p", "email": None})
    assert user.email is None
