"""Configuration for token issuance and verification.

Both configuration models may be constructed directly or populated from
environment variables. Environment variables use the ``RFC7519_ISSUER_`` or
``RFC7519_VERIFIER_`` prefix followed by the upper-case setting name, and
list settings are given as JSON arrays.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from safir.pydantic import HumanTimedelta

from .constants import (
    DEFAULT_CLOCK_SKEW,
    DEFAULT_LIFETIME,
    UNSECURED_ALGORITHM,
)

__all__ = [
    "IssuerConfig",
    "VerifierConfig",
]


class IssuerConfig(BaseSettings):
    """Configuration for `~rfc7519.issuer.TokenIssuer`."""

    model_config = SettingsConfigDict(
        env_prefix="RFC7519_ISSUER_", extra="forbid"
    )

    algorithm: str = Field(
        ...,
        title="Signing algorithm",
        description="Value of the ``alg`` header parameter of issued tokens",
        min_length=1,
        examples=["RS256"],
    )

    issuer: str = Field(
        ...,
        title="Issuer",
        description="Value of the ``iss`` claim of issued tokens",
        min_length=1,
        examples=["https://issuer.example.com/"],
    )

    audience: list[str] = Field(
        [],
        title="Audience",
        description=(
            "Value of the ``aud`` claim of issued tokens. A single audience"
            " is encoded as a string. If empty, no ``aud`` claim is added."
        ),
    )

    key_id: str | None = Field(
        None,
        title="Key ID",
        description="Value of the ``kid`` header parameter of issued tokens",
    )

    lifetime: HumanTimedelta = Field(
        DEFAULT_LIFETIME,
        title="Token lifetime",
        description="How long issued tokens are valid",
    )

    @field_validator("lifetime")
    @classmethod
    def _validate_lifetime(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("Token lifetime must be positive")
        return v


class VerifierConfig(BaseSettings):
    """Configuration for `~rfc7519.verify.TokenVerifier`."""

    model_config = SettingsConfigDict(
        env_prefix="RFC7519_VERIFIER_", extra="forbid"
    )

    algorithms: list[str] = Field(
        ...,
        title="Allowed algorithms",
        description=(
            "Tokens whose ``alg`` header parameter is not in this list are"
            " rejected before the signature is checked"
        ),
        min_length=1,
        examples=[["RS256", "ES256"]],
    )

    issuer: str | None = Field(
        None,
        title="Expected issuer",
        description="If set, the ``iss`` claim must match exactly",
    )

    audience: str | None = Field(
        None,
        title="Expected audience",
        description="If set, the ``aud`` claim must include this audience",
    )

    clock_skew: HumanTimedelta = Field(
        DEFAULT_CLOCK_SKEW,
        title="Clock skew",
        description="Tolerance applied to the ``exp`` and ``nbf`` claims",
    )

    require_expiration: bool = Field(
        False,
        title="Require expiration",
        description="Whether to reject tokens with no ``exp`` claim",
    )

    @field_validator("algorithms")
    @classmethod
    def _validate_algorithms(cls, v: list[str]) -> list[str]:
        if any(not a for a in v):
            raise ValueError("Algorithm names must not be empty")
        if UNSECURED_ALGORITHM in v and len(v) > 1:
            msg = f"{UNSECURED_ALGORITHM} cannot be combined with others"
            raise ValueError(msg)
        return v

    @field_validator("clock_skew")
    @classmethod
    def _validate_clock_skew(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("Clock skew must not be negative")
        return v
