"""Constants for rfc7519."""

from datetime import UTC, datetime, timedelta

__all__ = [
    "DEFAULT_CLOCK_SKEW",
    "DEFAULT_LIFETIME",
    "EPOCH",
    "JWT_TYPE",
    "MAX_CLAIM_DEPTH",
    "REGISTERED_CLAIMS",
    "REGISTERED_HEADER_PARAMETERS",
    "UNSECURED_ALGORITHM",
]

DEFAULT_CLOCK_SKEW = timedelta(seconds=60)
"""Default tolerance applied to ``exp`` and ``nbf`` comparisons."""

DEFAULT_LIFETIME = timedelta(hours=1)
"""Default lifetime of tokens minted by the issuer."""

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
"""Origin of the NumericDate values used by the timing claims."""

JWT_TYPE = "JWT"
"""Value of the ``typ`` header parameter for tokens created here."""

MAX_CLAIM_DEPTH = 100
"""Maximum nesting of arrays and objects in a claim or parameter value."""

REGISTERED_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")
"""Registered claim names from RFC 7519 section 4.1, in encoding order."""

REGISTERED_HEADER_PARAMETERS = ("alg", "typ", "cty", "kid")
"""Header parameters with typed fields, in encoding order."""

UNSECURED_ALGORITHM = "none"
"""Algorithm name of an unsecured JWT, which carries an empty signature."""
