"""Tests for the rfc7519.util package."""

from __future__ import annotations

import math
from datetime import timedelta

import pytest

from rfc7519.util import (
    add_padding,
    base64url_decode,
    base64url_encode,
    canonical_json,
    decode_json_object,
    normalize_timedelta,
    random_128_bits,
)


def test_add_padding() -> None:
    assert add_padding("") == ""
    assert add_padding("Zg") == "Zg=="
    assert add_padding("Zgo") == "Zgo="
    assert add_padding("Zm8K") == "Zm8K"
    assert add_padding("Zm9vCg") == "Zm9vCg=="


def test_base64url_encode() -> None:
    assert base64url_encode(b"") == ""
    assert base64url_encode(b"f") == "Zg"
    assert base64url_encode(b"fo") == "Zm8"
    assert base64url_encode(b"foo") == "Zm9v"
    assert base64url_encode(b"\xfb\xff") == "-_8"


def test_base64url_decode() -> None:
    assert base64url_decode("") == b""
    assert base64url_decode("Zg") == b"f"
    assert base64url_decode("Zg==") == b"f"
    assert base64url_decode("Zm8") == b"fo"
    assert base64url_decode("Zm8=") == b"fo"
    assert base64url_decode("-_8") == b"\xfb\xff"

    # Characters outside the URL-safe alphabet.
    assert base64url_decode("+/8") is None
    assert base64url_decode("invalid@base64") is None
    assert base64url_decode("Zm9v\n") is None
    assert base64url_decode("Zm 9v") is None

    # Impossible lengths and misplaced padding.
    assert base64url_decode("Z") is None
    assert base64url_decode("Zm9vY") is None
    assert base64url_decode("Zg===") is None
    assert base64url_decode("Z=g") is None


def test_canonical_json() -> None:
    data = {"b": 1, "a": {"d": [1, 2.5], "c": None}, "é": True}
    assert canonical_json(data) == (
        '{"a":{"c":null,"d":[1,2.5]},"b":1,"é":true}'.encode()
    )

    with pytest.raises(ValueError, match="JSON"):
        canonical_json({"a": math.nan})


def test_decode_json_object() -> None:
    assert decode_json_object(b'{"a": [1, "b"]}') == {"a": [1, "b"]}
    assert decode_json_object('{"é": 1}'.encode()) == {"é": 1}

    with pytest.raises(ValueError, match="JSON object"):
        decode_json_object(b"[1, 2]")
    with pytest.raises(ValueError, match="JSON object"):
        decode_json_object(b'"string"')
    with pytest.raises(ValueError, match="not valid JSON"):
        decode_json_object(b'{"a": NaN}')
    with pytest.raises(ValueError, match="not valid JSON"):
        decode_json_object(b'{"a": -Infinity}')
    with pytest.raises(ValueError):
        decode_json_object(b"{invalid json}")
    with pytest.raises(ValueError):
        decode_json_object(b'{"a": "\xff"}')

    nested = b'{"a": ' + b"[" * 100_000 + b"]" * 100_000 + b"}"
    with pytest.raises(ValueError, match="nested too deeply"):
        decode_json_object(nested)


def test_normalize_timedelta() -> None:
    assert normalize_timedelta(10) == timedelta(seconds=10)
    assert normalize_timedelta(0.5) == timedelta(milliseconds=500)
    assert normalize_timedelta(timedelta(minutes=1)) == timedelta(minutes=1)
    assert normalize_timedelta(0) == timedelta(0)

    with pytest.raises(ValueError, match="negative"):
        normalize_timedelta(-1)
    with pytest.raises(ValueError, match="negative"):
        normalize_timedelta(timedelta(seconds=-1))
    with pytest.raises(ValueError, match="finite"):
        normalize_timedelta(math.inf)
    with pytest.raises(ValueError):
        normalize_timedelta(True)
    with pytest.raises(ValueError):
        normalize_timedelta("10")  # type: ignore[arg-type]


def test_random_128_bits() -> None:
    value = random_128_bits()
    assert len(value) == 22
    assert base64url_decode(value) is not None
    assert len(base64url_decode(value) or b"") == 16
    assert random_128_bits() != value
