"""Parse, build, and serialize JSON Web Tokens in compact form."""

from .compact import CompactToken, TokenSegment
from .exceptions import (
    EmptyHeaderError,
    EmptyPayloadError,
    EmptyTokenError,
    FormatError,
    InvalidAudienceError,
    InvalidBase64URLError,
    InvalidClaimsError,
    InvalidFormatError,
    InvalidIssuerError,
    InvalidJSONError,
    InvalidSignatureError,
    JWTError,
    MissingClaimsError,
    TimingError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnsupportedAlgorithmError,
    VerificationError,
)
from .jwt import JWT
from .models.audience import Audience, AudienceKind
from .models.claims import ClaimKind, ClaimValue
from .models.header import Header
from .models.payload import Payload
from .signing import Signer, Verifier, create_jwt, verify, verify_and_validate

__all__ = [
    "JWT",
    "Audience",
    "AudienceKind",
    "ClaimKind",
    "ClaimValue",
    "CompactToken",
    "EmptyHeaderError",
    "EmptyPayloadError",
    "EmptyTokenError",
    "FormatError",
    "Header",
    "InvalidAudienceError",
    "InvalidBase64URLError",
    "InvalidClaimsError",
    "InvalidFormatError",
    "InvalidIssuerError",
    "InvalidJSONError",
    "InvalidSignatureError",
    "JWTError",
    "MissingClaimsError",
    "Payload",
    "Signer",
    "TimingError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "TokenSegment",
    "UnsupportedAlgorithmError",
    "VerificationError",
    "Verifier",
    "create_jwt",
    "verify",
    "verify_and_validate",
]
