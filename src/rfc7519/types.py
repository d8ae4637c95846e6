"""Pydantic data types for rfc7519 models."""

import math
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any, overload

from pydantic import BeforeValidator, PlainSerializer

from .constants import EPOCH

__all__ = [
    "Timestamp",
    "normalize_timestamp",
    "timestamp_to_json",
]


@overload
def normalize_timestamp(v: None) -> None: ...


@overload
def normalize_timestamp(v: datetime | float) -> datetime: ...


def normalize_timestamp(v: Any) -> datetime | None:
    """Pydantic validator for NumericDate fields.

    The timing claims of a JWT are seconds since epoch and may be fractional.
    Convert them, or any `~datetime.datetime`, to an aware UTC datetime,
    preserving `None`.

    Parameters
    ----------
    v
        Seconds since epoch, a datetime, or `None`. Naive datetimes are
        assumed to be in UTC.

    Returns
    -------
    datetime.datetime or None
        The corresponding aware datetime in UTC.

    Raises
    ------
    ValueError
        Raised if the value is not a finite number or a datetime.
    """
    if v is None:
        return None
    elif isinstance(v, datetime):
        if v.tzinfo and v.tzinfo.utcoffset(v) is not None:
            return v.astimezone(UTC)
        else:
            return v.replace(tzinfo=UTC)
    elif isinstance(v, bool) or not isinstance(v, int | float):
        raise ValueError("Must be a datetime or seconds since epoch")
    elif not math.isfinite(v):
        raise ValueError(f"Timestamp must be finite, not {v}")
    try:
        return EPOCH + timedelta(seconds=v)
    except OverflowError as e:
        raise ValueError(f"Timestamp {v} out of range") from e


def timestamp_to_json(t: datetime) -> int | float:
    """Convert a datetime to seconds since epoch.

    Whole seconds become an `int` so that the common case encodes without a
    fractional part. Sub-second values become a `float`, which preserves
    microsecond precision for dates before the year 2106.
    """
    delta = t - EPOCH
    if delta.microseconds == 0:
        return delta.days * 86400 + delta.seconds
    return delta.total_seconds()


type Timestamp = Annotated[
    datetime,
    BeforeValidator(normalize_timestamp),
    PlainSerializer(timestamp_to_json, return_type=int | float),
]
"""Type for a `datetime` field that serializes to seconds since epoch."""
