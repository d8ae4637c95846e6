"""Exceptions for rfc7519."""

from __future__ import annotations

from datetime import datetime

__all__ = [
    "EmptyHeaderError",
    "EmptyPayloadError",
    "EmptyTokenError",
    "FormatError",
    "InvalidAudienceError",
    "InvalidBase64URLError",
    "InvalidClaimsError",
    "InvalidFormatError",
    "InvalidIssuerError",
    "InvalidJSONError",
    "InvalidSignatureError",
    "JWTError",
    "MissingClaimsError",
    "TimingError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "UnsupportedAlgorithmError",
    "VerificationError",
]


class JWTError(Exception):
    """Base class for all rfc7519 exceptions."""


class FormatError(JWTError):
    """The token is not a well-formed compact JWT.

    Format errors are permanent. Retrying with the same input will always
    fail the same way.
    """


class EmptyTokenError(FormatError):
    """The token to parse was empty."""

    def __init__(self) -> None:
        super().__init__("JWT cannot be empty")


class EmptyHeaderError(FormatError):
    """The header segment of the token was empty."""

    def __init__(self) -> None:
        super().__init__("JWT header cannot be empty")


class EmptyPayloadError(FormatError):
    """The payload segment of the token was empty."""

    def __init__(self) -> None:
        super().__init__("JWT payload cannot be empty")


class InvalidFormatError(FormatError):
    """The token did not consist of exactly three segments.

    Parameters
    ----------
    value
        The full token that was rejected.
    """

    def __init__(self, value: str) -> None:
        self.value = value
        msg = (
            "Invalid JWT format (expected header.payload.signature):"
            f" '{value}'"
        )
        super().__init__(msg)


class InvalidBase64URLError(FormatError):
    """A segment of the token was not valid Base64URL.

    Parameters
    ----------
    value
        The raw text of the segment.
    component
        Which segment failed: ``header``, ``payload``, or ``signature``.
    """

    def __init__(self, value: str, component: str) -> None:
        self.value = value
        self.component = component
        msg = f"Invalid Base64URL encoding in JWT {component}: '{value}'"
        super().__init__(msg)


class InvalidJSONError(FormatError):
    """A decoded segment was not JSON of the expected shape.

    Parameters
    ----------
    component
        Which segment failed: ``header`` or ``payload``.
    detail
        Description of the underlying problem.
    """

    def __init__(self, component: str, detail: str) -> None:
        self.component = component
        self.detail = detail
        super().__init__(f"Invalid JSON in JWT {component}: {detail}")


class TimingError(JWTError):
    """The token is outside its validity window.

    Unlike format errors, these may resolve themselves as time passes (for a
    token that is not yet valid) or reflect clock drift between the issuer and
    the verifier.
    """


class TokenExpiredError(TimingError):
    """The ``exp`` claim is in the past, beyond the allowed clock skew."""

    def __init__(self, expires: datetime) -> None:
        self.expires = expires
        super().__init__(f"Token expired at {expires.isoformat()}")


class TokenNotYetValidError(TimingError):
    """The ``nbf`` claim is in the future, beyond the allowed clock skew."""

    def __init__(self, not_before: datetime) -> None:
        self.not_before = not_before
        super().__init__(f"Token not valid before {not_before.isoformat()}")


class VerificationError(JWTError):
    """Base class for errors raised by token verification layers.

    The codec itself never raises these, since it performs no cryptography.
    """


class InvalidSignatureError(VerificationError):
    """The signature of the token did not verify."""


class UnsupportedAlgorithmError(VerificationError):
    """The ``alg`` header parameter names an algorithm that is not allowed."""


class InvalidClaimsError(VerificationError):
    """The claims of a verified token are not acceptable."""


class MissingClaimsError(InvalidClaimsError):
    """The token is missing a required claim."""


class InvalidIssuerError(InvalidClaimsError):
    """The ``iss`` claim does not match the expected issuer."""


class InvalidAudienceError(InvalidClaimsError):
    """The ``aud`` claim does not include the expected audience."""
