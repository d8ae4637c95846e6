"""Verify a JWT."""

from __future__ import annotations

from datetime import datetime

from structlog.stdlib import BoundLogger

from .config import VerifierConfig
from .exceptions import (
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSignatureError,
    JWTError,
    MissingClaimsError,
    UnsupportedAlgorithmError,
)
from .jwt import JWT
from .signing import Verifier, verify

__all__ = ["TokenVerifier"]


class TokenVerifier:
    """Verifies the validity of a JWT.

    Parameters
    ----------
    config
        Verifier configuration.
    verifier
        Function that checks the signature of a token. It is only called for
        algorithms in the configured allow list.
    logger
        Logger to use to report status information.
    """

    def __init__(
        self,
        config: VerifierConfig,
        verifier: Verifier,
        logger: BoundLogger,
    ) -> None:
        self._config = config
        self._verifier = verifier
        self._logger = logger

    def verify_token(
        self, token: JWT | str, *, current_time: datetime | None = None
    ) -> JWT:
        """Verify a token and check its claims.

        Checks are done in order: token format, algorithm, signature, timing
        claims, and then the ``iss`` and ``aud`` claims if the configuration
        requires them.

        Parameters
        ----------
        token
            Token to verify, either parsed or in compact serialization.
        current_time
            Time to check the timing claims against. Defaults to the current
            time.

        Returns
        -------
        JWT
            The verified token.

        Raises
        ------
        rfc7519.exceptions.FormatError
            Raised if the token could not be parsed.
        rfc7519.exceptions.UnsupportedAlgorithmError
            Raised if the algorithm of the token is not allowed.
        rfc7519.exceptions.InvalidSignatureError
            Raised if the signature does not verify.
        rfc7519.exceptions.TimingError
            Raised if the token is expired or not yet valid.
        rfc7519.exceptions.InvalidClaimsError
            Raised if a required claim is missing or has the wrong value.
        """
        try:
            if isinstance(token, str):
                token = JWT.parse(token)
            self._verify(token, current_time)
        except JWTError as e:
            self._logger.warning("Token verification failed", error=str(e))
            raise
        self._logger.debug(
            "Verified token", sub=token.payload.sub, jti=token.payload.jti
        )
        return token

    def _verify(self, token: JWT, current_time: datetime | None) -> None:
        algorithm = token.header.alg
        if algorithm not in self._config.algorithms:
            msg = f"Algorithm {algorithm} not allowed"
            raise UnsupportedAlgorithmError(msg)
        if not verify(token, self._verifier):
            raise InvalidSignatureError("Token signature is invalid")

        payload = token.payload
        payload.validate_timing(current_time, self._config.clock_skew)
        if self._config.require_expiration and payload.exp is None:
            raise MissingClaimsError("No exp claim in token")

        if self._config.issuer is not None:
            if payload.iss is None:
                raise InvalidIssuerError("No iss claim in token")
            if payload.iss != self._config.issuer:
                raise InvalidIssuerError(f"Unknown issuer: {payload.iss}")

        expected = self._config.audience
        if expected is not None:
            if payload.aud is None:
                raise InvalidAudienceError("No aud claim in token")
            if expected not in payload.aud:
                msg = f"Token not intended for audience {expected}"
                raise InvalidAudienceError(msg)
