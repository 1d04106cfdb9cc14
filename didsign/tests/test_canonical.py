"""
Tests for canonical serialization.

Critical: signed payload bytes must be reproducible.
"""

import pytest

from didsign.core.canonical import canonicalize, canonical_json_bytes, canonical_json_str
from didsign.core.errors import InvalidInputError


def test_canonicalize_dict_key_order():
    """Dict key order must not affect canonical output."""
    d1 = {"z": 1, "a": 2, "m": 3}
    d2 = {"a": 2, "m": 3, "z": 1}

    assert canonicalize(d1) == canonicalize(d2)
    assert canonical_json_bytes(d1) == canonical_json_bytes(d2)


def test_canonicalize_nested():
    """Nested structures must be canonicalized recursively."""
    obj = {"outer": {"z": (3, 1, 2), "a": {"nested": True}}}

    canon = canonicalize(obj)

    assert list(canon["outer"].keys()) == ["a", "z"]
    assert canon["outer"]["z"] == [3, 1, 2]


def test_canonical_json_str_compact():
    assert canonical_json_str({"b": 2, "a": 1}) == '{"a":1,"b":2}'


def test_canonical_handles_unicode():
    """Signer names with non-ASCII characters stay UTF-8."""
    s = canonical_json_str({"signer_name": "José Núñez"})

    assert "José Núñez" in s
    assert canonical_json_bytes({"signer_name": "José Núñez"}) == s.encode("utf-8")


def test_canonical_bytes_become_hex():
    assert canonicalize({"hash": b"\x00\xab"}) == {"hash": "00ab"}


def test_canonical_rejects_floats_and_non_string_keys():
    with pytest.raises(InvalidInputError):
        canonical_json_bytes({"amount": 1.5})
    with pytest.raises(InvalidInputError):
        canonical_json_bytes({1: "x"})
