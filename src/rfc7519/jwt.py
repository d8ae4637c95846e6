"""The JWT codec and container."""

from __future__ import annotations

from typing import Any, Self

from pydantic import ValidationError

from .compact import CompactToken, TokenSegment
from .exceptions import InvalidJSONError
from .models.header import Header
from .models.payload import Payload
from .util import base64url_encode, canonical_json, decode_json_object

__all__ = ["JWT"]


class JWT:
    """A JSON Web Token: header, claim set, and signature.

    A JWT is either parsed from its compact serialization with `parse` or
    built from its parts with the constructor. A parsed JWT remembers the
    exact text of its segments and reuses it for `serialize` and
    `signing_input`, so that a signature computed over the original bytes
    stays valid even if re-encoding the header or payload would produce
    different JSON. A constructed JWT has no original text and encodes its
    header and payload canonically (sorted keys, no whitespace).

    JWT objects are immutable. Use `replace` to derive a modified copy.

    Parameters
    ----------
    header
        The token header.
    payload
        The claim set.
    signature
        The signature bytes, empty for an unsecured JWT.
    """

    __slots__ = (
        "_header",
        "_header_segment",
        "_payload",
        "_payload_segment",
        "_signature",
        "_signature_segment",
    )

    def __init__(
        self, header: Header, payload: Payload, signature: bytes = b""
    ) -> None:
        self._header = header
        self._payload = payload
        self._signature = bytes(signature)
        self._header_segment: str | None = None
        self._payload_segment: str | None = None
        self._signature_segment: str | None = None

    @classmethod
    def parse(cls, token: str | bytes) -> Self:
        """Parse a JWT in compact serialization.

        Parameters
        ----------
        token
            The token, as text or ASCII bytes.

        Returns
        -------
        JWT
            The parsed token, retaining the original segment text.

        Raises
        ------
        rfc7519.exceptions.FormatError
            Raised if the token is malformed. The specific subclass says
            why: an empty token or segment, the wrong number of segments,
            invalid Base64URL, or JSON that is invalid or does not have the
            shape of a JWT header or claim set.
        """
        compact = CompactToken.parse(token)
        header_data = _decode_segment(compact.header, TokenSegment.header)
        payload_data = _decode_segment(compact.payload, TokenSegment.payload)
        try:
            header = Header.from_json_dict(header_data)
        except ValidationError as e:
            raise InvalidJSONError(TokenSegment.header, str(e)) from e
        try:
            payload = Payload.from_json_dict(payload_data)
        except ValidationError as e:
            raise InvalidJSONError(TokenSegment.payload, str(e)) from e

        result = cls(header, payload, compact.signature)
        result._header_segment = compact.header_segment
        result._payload_segment = compact.payload_segment
        result._signature_segment = compact.signature_segment
        return result

    @property
    def header(self) -> Header:
        """The token header."""
        return self._header

    @property
    def payload(self) -> Payload:
        """The claim set."""
        return self._payload

    @property
    def signature(self) -> bytes:
        """The signature bytes, empty for an unsecured JWT."""
        return self._signature

    @property
    def header_segment(self) -> str | None:
        """The header text as parsed, or `None` if not parsed."""
        return self._header_segment

    @property
    def payload_segment(self) -> str | None:
        """The payload text as parsed, or `None` if not parsed."""
        return self._payload_segment

    def encoded_header(self) -> str:
        """Return the Base64URL-encoded header.

        Returns
        -------
        str
            The original header text if this JWT was parsed, otherwise the
            canonical encoding of the header.
        """
        if self._header_segment is not None:
            return self._header_segment
        return base64url_encode(canonical_json(self._header.to_json_dict()))

    def encoded_payload(self) -> str:
        """Return the Base64URL-encoded claim set.

        Returns
        -------
        str
            The original payload text if this JWT was parsed, otherwise the
            canonical encoding of the claim set.
        """
        if self._payload_segment is not None:
            return self._payload_segment
        return base64url_encode(canonical_json(self._payload.to_json_dict()))

    def encoded_signature(self) -> str:
        """Return the Base64URL-encoded signature without padding."""
        if self._signature_segment is not None:
            return self._signature_segment
        return base64url_encode(self._signature)

    def signing_input(self) -> bytes:
        """Return the input to the signature algorithm.

        Per RFC 7515, this is the encoded header and encoded payload joined by
        a period, as ASCII bytes. It never includes the signature.
        """
        header = self.encoded_header()
        payload = self.encoded_payload()
        return f"{header}.{payload}".encode("ascii")

    def serialize(self) -> str:
        """Return the token in compact serialization.

        A parsed token that has not been modified serializes to exactly the
        text it was parsed from.
        """
        return ".".join(
            (
                self.encoded_header(),
                self.encoded_payload(),
                self.encoded_signature(),
            )
        )

    def replace(
        self,
        *,
        header: Header | None = None,
        payload: Payload | None = None,
        signature: bytes | None = None,
    ) -> JWT:
        """Return a copy of the token with some parts replaced.

        Original segment text is kept only for the parts that are not
        replaced, so a token with a new header or payload is re-encoded
        canonically on serialization while an unchanged header and payload
        keep their original text (and thus their original signing input).

        Parameters
        ----------
        header
            New header, if it should change.
        payload
            New claim set, if it should change.
        signature
            New signature, if it should change.

        Returns
        -------
        JWT
            The modified token.
        """
        result = JWT(
            header if header is not None else self._header,
            payload if payload is not None else self._payload,
            signature if signature is not None else self._signature,
        )
        if header is None and payload is None:
            result._header_segment = self._header_segment
            result._payload_segment = self._payload_segment
        if signature is None:
            result._signature_segment = self._signature_segment
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JWT):
            return NotImplemented
        return (
            self._header == other._header
            and self._payload == other._payload
            and self._signature == other._signature
        )

    def __hash__(self) -> int:
        return hash((self._header, self._payload, self._signature))

    def __repr__(self) -> str:
        return (
            f"JWT(header={self._header!r}, payload={self._payload!r},"
            f" signature={self._signature!r})"
        )

    def __str__(self) -> str:
        return self.serialize()


def _decode_segment(data: bytes, segment: TokenSegment) -> dict[str, Any]:
    """Decode the JSON object in a header or payload segment."""
    try:
        return decode_json_object(data)
    except ValueError as e:
        raise InvalidJSONError(segment, str(e)) from e
