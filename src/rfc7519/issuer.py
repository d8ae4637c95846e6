"""Token issuer."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from safir.datetime import format_datetime_for_logging
from structlog.stdlib import BoundLogger

from .config import IssuerConfig
from .jwt import JWT
from .signing import Signer, create_jwt
from .util import random_128_bits

__all__ = ["TokenIssuer"]


class TokenIssuer:
    """Issue new signed JWTs.

    Parameters
    ----------
    config
        Configuration parameters for the issuer.
    signer
        Function that signs the signing input with the configured algorithm.
    logger
        Logger to use to report status information.
    """

    def __init__(
        self, config: IssuerConfig, signer: Signer, logger: BoundLogger
    ) -> None:
        self._config = config
        self._signer = signer
        self._logger = logger

    def issue_token(
        self,
        subject: str,
        *,
        jti: str | None = None,
        claims: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> JWT:
        """Issue a token for a subject.

        The token carries the configured issuer, audience, and key ID, an
        ``iat`` claim, and an ``exp`` claim one lifetime after ``iat``.

        Parameters
        ----------
        subject
            Value of the ``sub`` claim.
        jti
            Unique identifier of the token. A random one is generated if not
            given.
        claims
            Additional claims to add to the token.
        now
            Time of issuance. Defaults to the current time.

        Returns
        -------
        JWT
            The new token.
        """
        if jti is None:
            jti = random_128_bits()
        token = create_jwt(
            self._config.algorithm,
            issuer=self._config.issuer,
            subject=subject,
            audiences=self._config.audience or None,
            expires_in=self._config.lifetime,
            jti=jti,
            claims=claims,
            key_id=self._config.key_id,
            now=now,
            signer=self._signer,
        )
        self._logger.debug(
            "Issued token",
            sub=subject,
            jti=jti,
            expires=format_datetime_for_logging(token.payload.exp),
        )
        return token
