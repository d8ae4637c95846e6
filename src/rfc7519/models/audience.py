"""Representation of the ``aud`` claim."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import StrEnum
from typing import Any, NoReturn, Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

__all__ = [
    "Audience",
    "AudienceKind",
]


class AudienceKind(StrEnum):
    """How an `Audience` is encoded in JSON."""

    single = "single"
    """A bare string."""

    multiple = "multiple"
    """An array of strings."""


class Audience:
    """The recipients a JWT is intended for.

    RFC 7519 allows the ``aud`` claim to be either a single string or an array
    of strings. Both forms are represented here, and `values` gives a uniform
    view of either one.

    Parameters
    ----------
    audience
        A single audience or an iterable of audiences. An iterable with
        exactly one element is normalized to the single form.

    Raises
    ------
    TypeError
        Raised if any audience is not a string.
    """

    __slots__ = ("_kind", "_values")

    _kind: AudienceKind
    _values: tuple[str, ...]

    def __init__(self, audience: str | Iterable[str]) -> None:
        if isinstance(audience, str):
            values: tuple[str, ...] = (audience,)
        else:
            values = tuple(audience)
        if len(values) == 1:
            self._set(AudienceKind.single, values)
        else:
            self._set(AudienceKind.multiple, values)

    @classmethod
    def single(cls, audience: str) -> Self:
        """Create an audience that encodes as a bare string."""
        if not isinstance(audience, str):
            raise TypeError(f"Audience must be a string, not {audience!r}")
        return cls(audience)

    @classmethod
    def multiple(cls, audiences: Iterable[str]) -> Self:
        """Create an audience that encodes as an array.

        Unlike the constructor, a one-element iterable is kept in array form.
        """
        if isinstance(audiences, str):
            raise TypeError("Multiple audiences must not be a single string")
        result = cls.__new__(cls)
        result._set(AudienceKind.multiple, tuple(audiences))
        return result

    @classmethod
    def from_json(cls, value: Any) -> Self:
        """Decode the JSON value of an ``aud`` claim.

        The encoded form is preserved, so a one-element array decodes to the
        multiple form and re-encodes as an array.

        Parameters
        ----------
        value
            Decoded JSON value.

        Returns
        -------
        Audience
            The corresponding audience.

        Raises
        ------
        TypeError
            Raised if the value is neither a string nor an array of strings.
        """
        if isinstance(value, str):
            return cls.single(value)
        elif isinstance(value, list | tuple):
            return cls.multiple(value)
        else:
            msg = "Audience must be a string or array of strings"
            raise TypeError(msg)

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
    def _validate(cls, value: Any) -> Audience:
        if isinstance(value, Audience):
            return value
        try:
            return cls.from_json(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    def _set(self, kind: AudienceKind, values: tuple[str, ...]) -> None:
        for audience in values:
            if not isinstance(audience, str):
                type_name = type(audience).__name__
                msg = f"Audience must be a string, not {type_name}"
                raise TypeError(msg)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_values", values)

    @property
    def kind(self) -> AudienceKind:
        """Whether the audience encodes as a string or an array."""
        return self._kind

    @property
    def is_single(self) -> bool:
        """Whether the audience encodes as a bare string."""
        return self._kind == AudienceKind.single

    @property
    def values(self) -> list[str]:
        """All audiences, in order, regardless of the encoded form."""
        return list(self._values)

    def contains(self, audience: str) -> bool:
        """Check whether the given audience is one of the values."""
        return audience in self._values

    def to_json(self) -> str | list[str]:
        """Return the JSON form of the claim."""
        if self._kind == AudienceKind.single:
            return self._values[0]
        return list(self._values)

    def __contains__(self, audience: object) -> bool:
        return audience in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Audience):
            return NotImplemented
        return self._kind == other._kind and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._kind, self._values))

    def __reduce__(self) -> tuple[Any, ...]:
        if self._kind == AudienceKind.single:
            return (Audience.single, (self._values[0],))
        return (Audience.multiple, (self._values,))

    def __repr__(self) -> str:
        if self._kind == AudienceKind.single:
            return f"Audience.single({self._values[0]!r})"
        return f"Audience.multiple({list(self._values)!r})"

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")
