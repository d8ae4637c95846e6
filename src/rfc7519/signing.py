"""Create and verify JWTs with caller-supplied cryptography.

No signature algorithm is implemented here. The caller provides functions
that sign or verify the signing input, and these helpers compose them with
the codec and with timing validation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from safir.datetime import current_datetime

from .constants import DEFAULT_CLOCK_SKEW, JWT_TYPE
from .jwt import JWT
from .models.audience import Audience
from .models.header import Header
from .models.payload import Payload
from .types import normalize_timestamp

type Signer = Callable[[bytes], bytes]
"""Function that signs a signing input and returns the signature."""

type Verifier = Callable[[bytes, bytes, str], bool]
"""Function that checks a signature.

Called with the signing input, the signature, and the algorithm name from the
header.
"""

__all__ = [
    "Signer",
    "Verifier",
    "create_jwt",
    "verify",
    "verify_and_validate",
]


class _Unset(Enum):
    """Marker for an argument that was not given."""

    token = "unset"


_UNSET = _Unset.token


def create_jwt(
    algorithm: str,
    *,
    issuer: str | None = None,
    subject: str | None = None,
    audience: str | None = None,
    audiences: Iterable[str] | None = None,
    expires_in: timedelta | float | None = None,
    expires_at: datetime | float | None = None,
    not_before: datetime | float | None = None,
    issued_at: datetime | float | _Unset | None = _UNSET,
    jti: str | None = None,
    claims: Mapping[str, Any] | None = None,
    header_parameters: Mapping[str, Any] | None = None,
    key_id: str | None = None,
    now: datetime | float | None = None,
    signer: Signer,
) -> JWT:
    """Create and sign a new JWT.

    Parameters
    ----------
    algorithm
        Value of the ``alg`` header parameter. This is passed through
        unchanged and is not interpreted.
    issuer
        Value of the ``iss`` claim.
    subject
        Value of the ``sub`` claim.
    audience
        Single value for the ``aud`` claim.
    audiences
        Values for the ``aud`` claim. Takes precedence over ``audience``. A
        single value is encoded as a bare string.
    expires_in
        Lifetime of the token, relative to ``now``, as a
        `~datetime.timedelta` or seconds. A negative lifetime creates a token
        that has already expired.
    expires_at
        Absolute expiration time. Takes precedence over ``expires_in``.
    not_before
        Value of the ``nbf`` claim.
    issued_at
        Value of the ``iat`` claim. Defaults to ``now``. Pass `None` to omit
        the claim.
    jti
        Value of the ``jti`` claim.
    claims
        Additional claims. Must not include any registered claim name.
    header_parameters
        Additional header parameters. Must not include any registered
        parameter name.
    key_id
        Value of the ``kid`` header parameter.
    now
        Time of creation. Defaults to the current time.
    signer
        Function that returns the signature of the signing input. For an
        unsecured JWT, this should return empty bytes.

    Returns
    -------
    JWT
        The signed token.

    Raises
    ------
    pydantic.ValidationError
        Raised if the claims or header parameters are invalid, such as an
        additional claim that reuses a registered name.
    Exception
        Any exception raised by ``signer`` is propagated unchanged.
    """
    if now is None:
        created = current_datetime()
    else:
        created = normalize_timestamp(now)

    if audiences is not None:
        aud: Audience | None = Audience(audiences)
    elif audience is not None:
        aud = Audience(audience)
    else:
        aud = None

    exp: datetime | float | None
    if expires_at is not None:
        exp = expires_at
    elif isinstance(expires_in, timedelta):
        exp = created + expires_in
    elif expires_in is not None:
        exp = created + timedelta(seconds=expires_in)
    else:
        exp = None

    header = Header(
        alg=algorithm,
        typ=JWT_TYPE,
        kid=key_id,
        additional_parameters=header_parameters or {},
    )
    payload = Payload(
        iss=issuer,
        sub=subject,
        aud=aud,
        exp=exp,
        nbf=not_before,
        iat=created if isinstance(issued_at, _Unset) else issued_at,
        jti=jti,
        additional_claims=claims or {},
    )
    unsigned = JWT(header, payload)
    signature = signer(unsigned.signing_input())
    return unsigned.replace(signature=signature)


def verify(jwt: JWT, verifier: Verifier) -> bool:
    """Check the signature of a JWT.

    Parameters
    ----------
    jwt
        Token to check.
    verifier
        Function called with the signing input, the signature, and the
        algorithm from the header.

    Returns
    -------
    bool
        The result of ``verifier``. Any exception it raises is propagated.
    """
    return verifier(jwt.signing_input(), jwt.signature, jwt.header.alg)


def verify_and_validate(
    jwt: JWT,
    verifier: Verifier,
    *,
    current_time: datetime | float | None = None,
    clock_skew: timedelta | float = DEFAULT_CLOCK_SKEW,
) -> bool:
    """Check the signature of a JWT and then its timing claims.

    Parameters
    ----------
    jwt
        Token to check.
    verifier
        Function that checks the signature, as for `verify`.
    current_time
        Time to check against. Defaults to the current time.
    clock_skew
        Tolerance for clock drift, as a `~datetime.timedelta` or seconds.

    Returns
    -------
    bool
        `False` if the signature did not verify, in which case the timing
        claims are not checked. `True` if both checks pass.

    Raises
    ------
    rfc7519.exceptions.TimingError
        Raised if the signature is valid but the token is expired or not yet
        valid.
    """
    if not verify(jwt, verifier):
        return False
    jwt.payload.validate_timing(current_time, clock_skew)
    return True
