import uuid

from bluemoon.utils.ids import parse_id


def test_parse_valid_uuid():
    value = uuid.uuid4()
    assert parse_id(str(value)) == value


def test_parse_malformed_values():
    assert parse_id("not-an-id") is None
    assert parse_id("") is None
    assert parse_id("507f1f77bcf86cd799439011") is None
