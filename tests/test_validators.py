from __future__ import annotations

import pytest

from userhub.domain.validators import (
    ensure_present_keys,
    is_uuid_v4,
    normalize_mobile,
    validate_full_name,
    validate_pan,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("9876543210", "9876543210"),
        ("+91 98765 43210", "9876543210"),
        ("91-98765-43210", "9876543210"),
        ("09876543210", "9876543210"),
        ("(987) 654-3210", "9876543210"),
        (9876543210, "9876543210"),
        ("6000000000", "6000000000"),
    ],
)
def test_normalize_mobile_accepts_common_formats(raw, expected):
    assert normalize_mobile(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "12345", "5876543210", "98765432101", "0012345678", "abcdefghij", "+1 987 654 3210"],
)
def test_normalize_mobile_rejects_invalid(raw):
    assert normalize_mobile(raw) is None


def test_normalize_mobile_country_prefix_keeps_last_ten_digits():
    # 91 followed by 11 digits: only the last ten survive
    assert normalize_mobile("91 0 98765 43210") == "9876543210"


@pytest.mark.parametrize("raw", ["+91 98765 43210", "09876543210", "7012345678", "12345", None])
def test_normalize_mobile_is_idempotent(raw):
    once = normalize_mobile(raw)
    assert normalize_mobile(once) == once


def test_validate_pan_normalizes_case_and_whitespace():
    assert validate_pan("abcde1234f") == "ABCDE1234F"
    assert validate_pan("  ABCDE1234F ") == "ABCDE1234F"


@pytest.mark.parametrize("raw", [None, 1234, "", "ABCD1234F", "ABCDE12345", "1BCDE1234F", "ABCDE1234FF"])
def test_validate_pan_rejects_invalid(raw):
    assert validate_pan(raw) is None


@pytest.mark.parametrize("raw", ["abcde1234f", " pqrst6789z", "ABCDE1234F", "bad"])
def test_validate_pan_is_idempotent(raw):
    once = validate_pan(raw)
    if once is None:
        return
    assert validate_pan(once) == once


def test_is_uuid_v4():
    assert is_uuid_v4("3f1c1a50-0c9c-4a7d-9f56-9a0e6b96b8ab")
    assert is_uuid_v4("3F1C1A50-0C9C-4A7D-9F56-9A0E6B96B8AB")
    assert not is_uuid_v4("3f1c1a50-0c9c-1a7d-9f56-9a0e6b96b8ab")  # version 1
    assert not is_uuid_v4("3f1c1a50-0c9c-4a7d-cf56-9a0e6b96b8ab")  # bad variant
    assert not is_uuid_v4("3f1c1a50-0c9c-4a7d-9f56-9a0e6b96b8a")
    assert not is_uuid_v4(" 3f1c1a50-0c9c-4a7d-9f56-9a0e6b96b8ab")
    assert not is_uuid_v4(None)
    assert not is_uuid_v4(12345)


def test_validate_full_name():
    assert validate_full_name("  Asha Rao ") == "Asha Rao"
    assert validate_full_name("   ") is None
    assert validate_full_name("") is None
    assert validate_full_name(42) is None
    assert validate_full_name(None) is None


def test_ensure_present_keys():
    assert ensure_present_keys({"a": 1, "b": None}, ["a", "b"]) == []
    assert ensure_present_keys({"a": 1}, ["a", "b", "c"]) == ["b", "c"]
    assert ensure_present_keys(None, ["a"]) == ["a"]
