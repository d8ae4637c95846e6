"""Representation of the JOSE header of a JWT."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from ..constants import JWT_TYPE, REGISTERED_HEADER_PARAMETERS
from .claims import ClaimValue, freeze_open_map, split_open_map

__all__ = ["Header"]


class Header(BaseModel):
    """The header of a JWT.

    The parameters that have typed fields are ``alg``, ``typ``, ``cty``, and
    ``kid``. Any other parameter is kept in `additional_parameters`, and a
    parameter name never appears in both places.

    Notes
    -----
    ``typ`` defaults to ``JWT`` when a header is constructed directly, but a
    header decoded by `from_json_dict` leaves it unset if the token did not
    include it, so that decoding never invents parameters.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    alg: str = Field(
        ...,
        title="Algorithm",
        description=(
            "Name of the algorithm securing the token. This is opaque to the"
            " codec. The literal ``none`` marks an unsecured JWT."
        ),
        min_length=1,
        examples=["HS256", "RS256", "none"],
    )

    typ: str | None = Field(JWT_TYPE, title="Token type", examples=[JWT_TYPE])

    cty: str | None = Field(
        None,
        title="Content type",
        description="Set to ``JWT`` for nested tokens",
    )

    kid: str | None = Field(
        None,
        title="Key ID",
        description="Hint indicating which key secured the token",
    )

    additional_parameters: Mapping[str, ClaimValue] = Field(
        default_factory=dict,
        title="Additional parameters",
        description="Header parameters other than the registered ones",
        validate_default=True,
    )

    @field_validator("additional_parameters")
    @classmethod
    def _validate_additional_parameters(
        cls, v: Mapping[str, ClaimValue]
    ) -> Mapping[str, ClaimValue]:
        return freeze_open_map(v, REGISTERED_HEADER_PARAMETERS)

    @field_serializer("additional_parameters")
    def _serialize_additional_parameters(
        self, v: Mapping[str, ClaimValue]
    ) -> dict[str, Any]:
        return {k: c.to_json() for k, c in v.items()}

    @classmethod
    def from_json_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build a header from a decoded JSON object.

        Parameters
        ----------
        data
            The decoded header.

        Returns
        -------
        Header
            The corresponding header.

        Raises
        ------
        pydantic.ValidationError
            Raised if ``alg`` is missing or any registered parameter has the
            wrong type.
        """
        known, rest = split_open_map(data, REGISTERED_HEADER_PARAMETERS)
        return cls.model_validate(
            {"typ": None, **known, "additional_parameters": rest}
        )

    def to_json_dict(self) -> dict[str, Any]:
        """Return the header as a JSON-compatible dictionary.

        The registered parameters come first, in the order ``alg``, ``typ``,
        ``cty``, ``kid``, omitting any that are unset, followed by the
        additional parameters.
        """
        result: dict[str, Any] = {"alg": self.alg}
        for name in ("typ", "cty", "kid"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        for key, value in self.additional_parameters.items():
            result[key] = value.to_json()
        return result

    def additional_parameter[T](self, key: str, type_: type[T]) -> T | None:
        """Get an additional parameter as a specific type.

        Parameters
        ----------
        key
            Name of the parameter.
        type_
            Requested Python type, as for
            `~rfc7519.models.claims.ClaimValue.as_type`.

        Returns
        -------
        object or None
            The value of the parameter, or `None` if it is not present or is
            not of the requested type.
        """
        value = self.additional_parameters.get(key)
        return value.as_type(type_) if value is not None else None

    def __hash__(self) -> int:
        return hash(
            (
                self.alg,
                self.typ,
                self.cty,
                self.kid,
                frozenset(self.additional_parameters.items()),
            )
        )
