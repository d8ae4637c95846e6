"""General utility functions."""

from __future__ import annotations

import base64
import binascii
import json
import math
import os
import re
from datetime import timedelta
from typing import Any

__all__ = [
    "add_padding",
    "base64url_decode",
    "base64url_encode",
    "canonical_json",
    "decode_json_object",
    "normalize_timedelta",
    "random_128_bits",
]

_BASE64URL_REGEX = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def add_padding(encoded: str) -> str:
    """Add padding to base64 encoded bytes.

    Parameters
    ----------
    encoded
        A base64-encoded string, possibly with the padding removed.

    Returns
    -------
    str
        A correctly-padded version of the encoded string.
    """
    underflow = len(encoded) % 4
    if underflow:
        return encoded + ("=" * (4 - underflow))
    else:
        return encoded


def base64url_encode(data: bytes) -> str:
    """Encode bytes with the URL-safe alphabet and no padding.

    Parameters
    ----------
    data
        Data to encode.

    Returns
    -------
    str
        Base64URL encoding as used in every segment of a compact JWT.
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(encoded: str) -> bytes | None:
    """Decode a Base64URL string, tolerating missing padding.

    Parameters
    ----------
    encoded
        Text to decode. Only the URL-safe alphabet is accepted, optionally
        followed by ``=`` padding.

    Returns
    -------
    bytes or None
        The decoded bytes, or `None` if the text is not valid Base64URL.
    """
    if not _BASE64URL_REGEX.fullmatch(encoded):
        return None
    stripped = encoded.rstrip("=")
    if len(stripped) % 4 == 1:
        return None
    try:
        return base64.urlsafe_b64decode(add_padding(stripped))
    except (binascii.Error, ValueError):
        return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def canonical_json(data: Any) -> bytes:
    """Serialize a JSON-compatible value deterministically.

    Keys are sorted at every nesting level and no insignificant whitespace is
    emitted, so the same claims always produce the same bytes.

    Parameters
    ----------
    data
        Value built from `dict`, `list`, `str`, `int`, `float`, `bool`, and
        `None`.

    Returns
    -------
    bytes
        UTF-8 encoded JSON.

    Raises
    ------
    ValueError
        Raised if the value contains a non-finite float.
    """
    encoded = json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return encoded.encode("utf-8")


def decode_json_object(data: bytes) -> dict[str, Any]:
    """Strictly decode a JSON object.

    Parameters
    ----------
    data
        UTF-8 encoded JSON.

    Returns
    -------
    dict
        The decoded object.

    Raises
    ------
    ValueError
        Raised if the data is not UTF-8, is not JSON, uses the non-standard
        ``NaN`` or ``Infinity`` constants, is nested too deeply for the
        decoder, or is not a JSON object.
    """
    text = data.decode("utf-8")
    try:
        result = json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON is nested too deeply") from e
    if not isinstance(result, dict):
        msg = f"Expected a JSON object, got {type(result).__name__}"
        raise ValueError(msg)
    return result


def normalize_timedelta(value: timedelta | float) -> timedelta:
    """Convert a duration in seconds to a `~datetime.timedelta`.

    Parameters
    ----------
    value
        Duration as a `~datetime.timedelta` or a number of seconds.

    Returns
    -------
    datetime.timedelta
        The corresponding duration.

    Raises
    ------
    ValueError
        Raised if the value is negative, not finite, or not a duration.
    """
    if isinstance(value, timedelta):
        result = value
    elif isinstance(value, int | float) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise ValueError(f"Duration must be finite, not {value}")
        result = timedelta(seconds=value)
    else:
        raise ValueError(f"Invalid duration {value!r}")
    if result < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return result


def random_128_bits() -> str:
    """Generate random 128 bits encoded in base64 without padding."""
    return base64.urlsafe_b64encode(os.urandom(16)).decode().rstrip("=")
