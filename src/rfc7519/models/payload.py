"""Representation of the claim set of a JWT."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from safir.datetime import current_datetime

from ..constants import DEFAULT_CLOCK_SKEW, REGISTERED_CLAIMS
from ..exceptions import TokenExpiredError, TokenNotYetValidError
from ..types import Timestamp, normalize_timestamp, timestamp_to_json
from ..util import normalize_timedelta
from .audience import Audience
from .claims import ClaimValue, freeze_open_map, split_open_map

__all__ = ["Payload"]


class Payload(BaseModel):
    """The claim set of a JWT.

    Every registered claim from RFC 7519 section 4.1 has a typed field. Any
    other claim is kept in `additional_claims`, and a claim name never
    appears in both places. All claims are optional.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    iss: str | None = Field(
        None,
        title="Issuer",
        description="Principal that issued the token",
        examples=["https://issuer.example.com/"],
    )

    sub: str | None = Field(
        None,
        title="Subject",
        description="Principal that is the subject of the token",
        examples=["1234567890"],
    )

    aud: Audience | None = Field(
        None,
        title="Audience",
        description="Recipients for which the token is intended",
    )

    exp: Timestamp | None = Field(
        None,
        title="Expiration time",
        description="Time after which the token must not be accepted",
    )

    nbf: Timestamp | None = Field(
        None,
        title="Not before",
        description="Time before which the token must not be accepted",
    )

    iat: Timestamp | None = Field(
        None,
        title="Issued at",
        description="Time at which the token was issued",
    )

    jti: str | None = Field(
        None, title="JWT ID", description="Unique identifier for the token"
    )

    additional_claims: Mapping[str, ClaimValue] = Field(
        default_factory=dict,
        title="Additional claims",
        description="Claims other than the registered ones",
        validate_default=True,
    )

    @field_validator("additional_claims")
    @classmethod
    def _validate_additional_claims(
        cls, v: Mapping[str, ClaimValue]
    ) -> Mapping[str, ClaimValue]:
        return freeze_open_map(v, REGISTERED_CLAIMS)

    @field_serializer("additional_claims")
    def _serialize_additional_claims(
        self, v: Mapping[str, ClaimValue]
    ) -> dict[str, Any]:
        return {k: c.to_json() for k, c in v.items()}

    @classmethod
    def from_json_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build a claim set from a decoded JSON object.

        Parameters
        ----------
        data
            The decoded payload.

        Returns
        -------
        Payload
            The corresponding claim set.

        Raises
        ------
        pydantic.ValidationError
            Raised if any registered claim has the wrong type.
        """
        known, rest = split_open_map(data, REGISTERED_CLAIMS)
        return cls.model_validate({**known, "additional_claims": rest})

    def to_json_dict(self) -> dict[str, Any]:
        """Return the claim set as a JSON-compatible dictionary.

        The registered claims come first, in the order ``iss``, ``sub``,
        ``aud``, ``exp``, ``nbf``, ``iat``, ``jti``, omitting any that are
        unset, followed by the additional claims.
        """
        result: dict[str, Any] = {}
        if self.iss is not None:
            result["iss"] = self.iss
        if self.sub is not None:
            result["sub"] = self.sub
        if self.aud is not None:
            result["aud"] = self.aud.to_json()
        for name in ("exp", "nbf", "iat"):
            value = getattr(self, name)
            if value is not None:
                result[name] = timestamp_to_json(value)
        if self.jti is not None:
            result["jti"] = self.jti
        for key, value in self.additional_claims.items():
            result[key] = value.to_json()
        return result

    def additional_claim[T](self, key: str, type_: type[T]) -> T | None:
        """Get an additional claim as a specific type.

        Parameters
        ----------
        key
            Name of the claim.
        type_
            Requested Python type, as for
            `~rfc7519.models.claims.ClaimValue.as_type`.

        Returns
        -------
        object or None
            The value of the claim, or `None` if it is not present or is not
            of the requested type.
        """
        value = self.additional_claims.get(key)
        return value.as_type(type_) if value is not None else None

    def validate_timing(
        self,
        current_time: datetime | float | None = None,
        clock_skew: timedelta | float = DEFAULT_CLOCK_SKEW,
    ) -> None:
        """Check the ``exp`` and ``nbf`` claims against the current time.

        A claim set with neither claim always passes, since RFC 7519 makes
        every claim optional. Callers that require an expiration time must
        check for ``exp`` separately.

        Parameters
        ----------
        current_time
            Time to check against, as a datetime or seconds since epoch.
            Defaults to the current time.
        clock_skew
            Tolerance for clock drift between issuer and verifier, as a
            `~datetime.timedelta` or seconds.

        Raises
        ------
        TokenExpiredError
            Raised if the current time is after ``exp`` plus the skew.
        TokenNotYetValidError
            Raised if the current time is before ``nbf`` minus the skew.
        ValueError
            Raised if the current time or clock skew is invalid, including a
            negative clock skew.
        """
        now = normalize_timestamp(current_time)
        if now is None:
            now = current_datetime(microseconds=True)
        skew = normalize_timedelta(clock_skew)
        if self.exp is not None and now > self.exp + skew:
            raise TokenExpiredError(self.exp)
        if self.nbf is not None and now < self.nbf - skew:
            raise TokenNotYetValidError(self.nbf)

    def __hash__(self) -> int:
        return hash(
            (
                self.iss,
                self.sub,
                self.aud,
                self.exp,
                self.nbf,
                self.iat,
                self.jti,
                frozenset(self.additional_claims.items()),
            )
        )
