"""Structural parsing of the JWT compact serialization."""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import (
    EmptyHeaderError,
    EmptyPayloadError,
    EmptyTokenError,
    InvalidBase64URLError,
    InvalidFormatError,
)
from .util import base64url_decode, base64url_encode

__all__ = [
    "CompactToken",
    "TokenSegment",
]


class TokenSegment(StrEnum):
    """One of the three segments of a compact JWT."""

    header = "header"
    payload = "payload"
    signature = "signature"


class CompactToken(BaseModel):
    """A JWT split into its three segments, without interpreting them.

    Notes
    -----
    The compact form is ``BASE64URL(header) "." BASE64URL(payload) "."
    BASE64URL(signature)``. This class holds both the decoded bytes of each
    segment and the exact text of each segment as it appeared in the token,
    so that the token and its signing input can be reproduced byte for byte
    even if the encoding was not canonical.

    Header and payload are left as bytes. Use `rfc7519.jwt.JWT` to decode
    them as JSON.
    """

    model_config = ConfigDict(frozen=True)

    header: bytes = Field(..., title="Decoded header bytes")

    payload: bytes = Field(..., title="Decoded payload bytes")

    signature: bytes = Field(
        b"",
        title="Decoded signature bytes",
        description="Empty for an unsecured JWT",
    )

    header_segment: str = Field(..., title="Encoded header as parsed")

    payload_segment: str = Field(..., title="Encoded payload as parsed")

    signature_segment: str = Field("", title="Encoded signature as parsed")

    @classmethod
    def from_bytes(
        cls, header: bytes, payload: bytes, signature: bytes = b""
    ) -> Self:
        """Build a token from decoded segments.

        Parameters
        ----------
        header
            Header bytes, normally UTF-8 JSON.
        payload
            Payload bytes.
        signature
            Signature bytes, empty for an unsecured JWT.

        Returns
        -------
        CompactToken
            The token, with every segment freshly encoded.

        Raises
        ------
        EmptyHeaderError
            Raised if the header is empty.
        EmptyPayloadError
            Raised if the payload is empty.
        """
        if not header:
            raise EmptyHeaderError()
        if not payload:
            raise EmptyPayloadError()
        return cls(
            header=header,
            payload=payload,
            signature=signature,
            header_segment=base64url_encode(header),
            payload_segment=base64url_encode(payload),
            signature_segment=base64url_encode(signature),
        )

    @classmethod
    def parse(cls, token: str | bytes) -> Self:
        """Parse a token in compact serialization.

        Parameters
        ----------
        token
            The token, as text or ASCII bytes.

        Returns
        -------
        CompactToken
            The parsed token.

        Raises
        ------
        EmptyTokenError
            Raised if the token is empty.
        InvalidFormatError
            Raised if the token does not contain exactly two periods, or if
            it was given as bytes that are not ASCII.
        EmptyHeaderError
            Raised if the header segment is empty.
        EmptyPayloadError
            Raised if the payload segment is empty.
        InvalidBase64URLError
            Raised if any segment is not valid Base64URL.
        """
        if not token:
            raise EmptyTokenError()
        if isinstance(token, bytes):
            try:
                token = token.decode("ascii")
            except UnicodeDecodeError:
                value = token.decode("utf-8", errors="replace")
                raise InvalidFormatError(value) from None
        if token.count(".") != 2:
            raise InvalidFormatError(token)
        header_segment, payload_segment, signature_segment = token.split(".")

        if not header_segment:
            raise EmptyHeaderError()
        header = base64url_decode(header_segment)
        if header is None:
            raise InvalidBase64URLError(header_segment, TokenSegment.header)

        if not payload_segment:
            raise EmptyPayloadError()
        payload = base64url_decode(payload_segment)
        if payload is None:
            raise InvalidBase64URLError(payload_segment, TokenSegment.payload)

        signature = base64url_decode(signature_segment)
        if signature is None:
            raise InvalidBase64URLError(
                signature_segment, TokenSegment.signature
            )

        return cls(
            header=header,
            payload=payload,
            signature=signature,
            header_segment=header_segment,
            payload_segment=payload_segment,
            signature_segment=signature_segment,
        )

    @property
    def signing_input(self) -> bytes:
        """The bytes a signature over this token is computed on."""
        return f"{self.header_segment}.{self.payload_segment}".encode("ascii")

    def __str__(self) -> str:
        """Return the token in compact serialization."""
        return ".".join(
            (self.header_segment, self.payload_segment, self.signature_segment)
        )
