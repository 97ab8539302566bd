"""Tests for resume_core.core.identity."""
import uuid

import pytest

from resume_core.core.identity import InvalidKey, Key, new_key, parse_key


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "u1",
        "not-a-uuid",
        "507f1f77bcf86cd799439011",  # 24-hex object id, wrong shape
        "g" * 32,
        "0" * 31,
        "0" * 33,
        "\x00" * 32,
        123,
        12.5,
        b"0123456789abcdef0123456789abcdef",
        ["0123456789abcdef0123456789abcdef"],
        {"id": "x"},
        object(),
    ],
)
def test_malformed_identifiers_are_invalid(raw):
    result = parse_key(raw)
    assert isinstance(result, InvalidKey)
    assert not result


def test_invalid_key_keeps_raw_input():
    assert parse_key("u1").raw == "u1"


class TestValidKeys:
    def test_hex_form(self):
        raw = uuid.uuid4().hex
        key = parse_key(raw)
        assert isinstance(key, Key)
        assert key.value == raw
        assert str(key) == raw

    def test_equivalent_spellings_share_one_key(self):
        u = uuid.uuid4()
        spellings = [u.hex, str(u), str(u).upper(), "{%s}" % u, "urn:uuid:%s" % u, "  %s  " % u.hex]
        assert {parse_key(s) for s in spellings} == {Key(u.hex)}

    def test_key_passes_through(self):
        key = new_key()
        assert parse_key(key) is key


def test_new_key_is_fresh_and_parseable():
    keys = {new_key() for _ in range(100)}
    assert len(keys) == 100
    for key in keys:
        assert parse_key(key.value) == key
        assert len(key.value) == 32
