"""RSA and HMAC keys for signing test tokens."""

from __future__ import annotations

import hashlib
import hmac
from typing import Self

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

__all__ = [
    "HMACKey",
    "RSAKeyPair",
]


class RSAKeyPair:
    """An RSA key pair that signs and verifies with ``RS256``.

    Notes
    -----
    Created by calling :py:meth:`~RSAKeyPair.generate` rather than the
    constructor.
    """

    @classmethod
    def generate(cls) -> Self:
        """Generate a new RSA key pair.

        Returns
        -------
        RSAKeyPair
            Newly-generated key pair.
        """
        private_key = rsa.generate_private_key(
            public_exponent=65537, key_size=2048
        )
        return cls(private_key)

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        self.private_key = private_key
        self._private_key_as_pem: bytes | None = None
        self._public_key_as_pem: bytes | None = None

    def private_key_as_pem(self) -> bytes:
        """Return the private key encoded using PKCS#8 with no encryption."""
        if not self._private_key_as_pem:
            self._private_key_as_pem = self.private_key.private_bytes(
                Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
            )
        return self._private_key_as_pem

    def public_key_as_pem(self) -> bytes:
        """Return the public key in PEM SubjectPublicKeyInfo format."""
        if not self._public_key_as_pem:
            public_key = self.private_key.public_key()
            self._public_key_as_pem = public_key.public_bytes(
                Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
            )
        return self._public_key_as_pem

    def sign(self, signing_input: bytes) -> bytes:
        """Sign data with ``RS256``, for use as a token signer."""
        return self.private_key.sign(
            signing_input, padding.PKCS1v15(), hashes.SHA256()
        )

    def verify(
        self, signing_input: bytes, signature: bytes, algorithm: str
    ) -> bool:
        """Verify an ``RS256`` signature, for use as a token verifier."""
        if algorithm != "RS256":
            return False
        try:
            self.private_key.public_key().verify(
                signature, signing_input, padding.PKCS1v15(), hashes.SHA256()
            )
        except InvalidSignature:
            return False
        return True


class HMACKey:
    """A shared secret that signs and verifies with ``HS256``.

    Parameters
    ----------
    secret
        The shared secret.
    """

    def __init__(self, secret: bytes) -> None:
        self.secret = secret

    def sign(self, signing_input: bytes) -> bytes:
        """Sign data with ``HS256``, for use as a token signer."""
        return hmac.digest(self.secret, signing_input, hashlib.sha256)

    def verify(
        self, signing_input: bytes, signature: bytes, algorithm: str
    ) -> bool:
        """Verify an ``HS256`` signature, for use as a token verifier."""
        if algorithm != "HS256":
            return False
        return hmac.compare_digest(self.sign(signing_input), signature)
