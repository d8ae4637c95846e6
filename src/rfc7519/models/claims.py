"""Representation of claim and header parameter values of any JSON shape."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, NoReturn

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..constants import MAX_CLAIM_DEPTH

__all__ = [
    "ClaimKind",
    "ClaimValue",
    "freeze_open_map",
    "split_open_map",
]


class ClaimKind(StrEnum):
    """The JSON shape of a `ClaimValue`."""

    string = "string"
    integer = "integer"
    double = "double"
    boolean = "boolean"
    array = "array"
    object = "object"
    null = "null"


_KIND_TYPES: dict[ClaimKind, type] = {
    ClaimKind.string: str,
    ClaimKind.integer: int,
    ClaimKind.double: float,
    ClaimKind.boolean: bool,
    ClaimKind.array: list,
    ClaimKind.object: dict,
    ClaimKind.null: type(None),
}


class ClaimValue:
    """An immutable JSON value held in an open claim or parameter map.

    Claims and header parameters outside the registered set may hold any JSON
    value. This wraps such a value in a closed set of shapes (see `ClaimKind`)
    so that it can be compared, hashed, and re-encoded without loss, and so
    that callers can ask for it as a specific Python type without risking a
    type error.

    Parameters
    ----------
    value
        A `str`, `int`, `float`, `bool`, `None`, sequence, string-keyed
        mapping, or another `ClaimValue`. Nested containers are converted
        recursively.

    Raises
    ------
    TypeError
        Raised if the value, or anything nested inside it, has no JSON
        equivalent.
    ValueError
        Raised if the value contains a non-finite float or has arrays and
        objects nested more than `~rfc7519.constants.MAX_CLAIM_DEPTH`
        levels deep.

    Notes
    -----
    `bool` is never treated as an integer and integers are never treated as
    doubles, so ``ClaimValue(1) != ClaimValue(1.0) != ClaimValue(True)``.
    """

    __slots__ = ("_height", "_kind", "_value")

    _height: int
    _kind: ClaimKind
    _value: Any

    def __init__(self, value: Any) -> None:
        self._assign(*_convert(value, 1))

    @classmethod
    def _from_parts(
        cls, kind: ClaimKind, converted: Any, height: int
    ) -> ClaimValue:
        result = cls.__new__(cls)
        result._assign(kind, converted, height)
        return result

    def _assign(self, kind: ClaimKind, converted: Any, height: int) -> None:
        object.__setattr__(self, "_height", height)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_value", converted)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_json()
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> ClaimValue:
        if isinstance(value, ClaimValue):
            return value
        try:
            return cls(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @property
    def kind(self) -> ClaimKind:
        """The JSON shape of the value."""
        return self._kind

    @property
    def value(self) -> Any:
        """The value as plain Python objects.

        Arrays become `list` and objects become `dict`. A new copy is built
        on every access, so modifying it does not affect this object.
        """
        if self._kind == ClaimKind.array:
            return [v.value for v in self._value]
        elif self._kind == ClaimKind.object:
            return {k: v.value for k, v in self._value.items()}
        else:
            return self._value

    def as_type[T](self, type_: type[T]) -> T | None:
        """Return the value only if it has the requested Python type.

        Parameters
        ----------
        type_
            One of `str`, `int`, `float`, `bool`, `list`, `dict`, or
            ``type(None)``.

        Returns
        -------
        object or None
            The value (as returned by `value`) if its shape corresponds
            exactly to the requested type, otherwise `None`. No coercion is
            done, so an integer requested as `float` or a string requested as
            `int` returns `None`.
        """
        if _KIND_TYPES[self._kind] is type_:
            return self.value
        return None

    def to_json(self) -> Any:
        """Return the value in a form suitable for `json.dumps`."""
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClaimValue):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __hash__(self) -> int:
        if self._kind == ClaimKind.object:
            return hash((self._kind, frozenset(self._value.items())))
        return hash((self._kind, self._value))

    def __reduce__(self) -> tuple[type[ClaimValue], tuple[Any]]:
        return (type(self), (self.value,))

    def __repr__(self) -> str:
        return f"ClaimValue({self.value!r})"

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")


def _convert(value: Any, depth: int) -> tuple[ClaimKind, Any, int]:
    """Convert a Python value to the parts of a `ClaimValue`.

    Containers are converted level by level, and ``depth`` is the nesting
    level a container found here would occupy. Returns the kind, the stored
    value, and the number of container levels in the value.
    """
    if isinstance(value, ClaimValue):
        if value._height and depth + value._height - 1 > MAX_CLAIM_DEPTH:
            raise ValueError(_too_deep_message())
        return value._kind, value._value, value._height
    elif value is None:
        return ClaimKind.null, None, 0
    elif isinstance(value, bool):
        return ClaimKind.boolean, value, 0
    elif isinstance(value, int):
        return ClaimKind.integer, int(value), 0
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Claim value must be finite, not {value}")
        return ClaimKind.double, float(value), 0
    elif isinstance(value, str):
        return ClaimKind.string, str(value), 0
    elif not isinstance(value, Mapping | list | tuple):
        msg = f"Unsupported claim value type {type(value).__name__}"
        raise TypeError(msg)

    if depth > MAX_CLAIM_DEPTH:
        raise ValueError(_too_deep_message())
    height = 0
    if isinstance(value, Mapping):
        items = {}
        for key, item in value.items():
            if not isinstance(key, str):
                msg = f"Claim object keys must be strings, not {key!r}"
                raise TypeError(msg)
            child = ClaimValue._from_parts(*_convert(item, depth + 1))
            height = max(height, child._height)
            items[key] = child
        return ClaimKind.object, MappingProxyType(items), height + 1
    else:
        elements = []
        for item in value:
            child = ClaimValue._from_parts(*_convert(item, depth + 1))
            height = max(height, child._height)
            elements.append(child)
        return ClaimKind.array, tuple(elements), height + 1


def _too_deep_message() -> str:
    return f"Claim value nested more than {MAX_CLAIM_DEPTH} levels deep"


def freeze_open_map(
    values: Mapping[str, ClaimValue], registered: Iterable[str]
) -> Mapping[str, ClaimValue]:
    """Pydantic validator for open claim and parameter maps.

    Parameters
    ----------
    values
        Validated open map.
    registered
        Names that have typed fields and therefore may not appear in the open
        map.

    Returns
    -------
    Mapping of str to ClaimValue
        Read-only copy of the map.

    Raises
    ------
    ValueError
        Raised if the map contains a registered name.
    """
    duplicates = sorted(set(values) & set(registered))
    if duplicates:
        names = ", ".join(duplicates)
        raise ValueError(f"Registered names not allowed in open map: {names}")
    return MappingProxyType(dict(values))


def split_open_map(
    data: Mapping[str, Any], registered: Iterable[str]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split decoded JSON into registered members and everything else.

    Registered members whose value is JSON ``null`` are treated as absent.

    Parameters
    ----------
    data
        Decoded JSON object.
    registered
        Names that have typed fields.

    Returns
    -------
    tuple of dict, dict
        The registered members and the remaining members. No name appears in
        both.
    """
    names = set(registered)
    known = {k: v for k, v in data.items() if k in names and v is not None}
    rest = {k: v for k, v in data.items() if k not in names}
    return known, rest
