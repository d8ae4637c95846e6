"""Tests for the rfc7519.compact package."""

from __future__ import annotations

import pytest

from rfc7519.compact import CompactToken, TokenSegment
from rfc7519.exceptions import (
    EmptyHeaderError,
    EmptyPayloadError,
    EmptyTokenError,
    FormatError,
    InvalidBase64URLError,
    InvalidFormatError,
)

from .support.tokens import EXAMPLE_TOKEN


def test_parse() -> None:
    token = CompactToken.parse(EXAMPLE_TOKEN)
    assert token.header == b'{"alg":"HS256","typ":"JWT"}'
    assert token.payload == (
        b'{"sub":"1234567890","name":"John Doe","iat":1516239022}'
    )
    assert len(token.signature) == 32
    header, payload, signature = EXAMPLE_TOKEN.split(".")
    assert token.header_segment == header
    assert token.payload_segment == payload
    assert token.signature_segment == signature
    assert token.signing_input == f"{header}.{payload}".encode()
    assert str(token) == EXAMPLE_TOKEN

    assert CompactToken.parse(EXAMPLE_TOKEN.encode()) == token


def test_parse_padded() -> None:
    token = CompactToken.parse("Zm8=.Zm9v.Zg==")
    assert token.header == b"fo"
    assert token.payload == b"foo"
    assert token.signature == b"f"
    assert str(token) == "Zm8=.Zm9v.Zg=="


def test_malformed() -> None:
    for value in ("a.b", "a.b.c.d", "abc", "...."):
        with pytest.raises(InvalidFormatError) as excinfo:
            CompactToken.parse(value)
        assert excinfo.value.value == value
        assert str(excinfo.value) == (
            "Invalid JWT format (expected header.payload.signature):"
            f" '{value}'"
        )

    with pytest.raises(EmptyTokenError, match="JWT cannot be empty"):
        CompactToken.parse("")
    with pytest.raises(EmptyTokenError):
        CompactToken.parse(b"")
    with pytest.raises(InvalidFormatError):
        CompactToken.parse("Zm9v.Zm9v.Zm9v".encode() + b"\xff")


def test_empty_segments() -> None:
    with pytest.raises(EmptyHeaderError, match="header cannot be empty"):
        CompactToken.parse(".UFBQUA.U1NTUw")
    with pytest.raises(EmptyPayloadError, match="payload cannot be empty"):
        CompactToken.parse("SEhISA..U1NTUw")
    with pytest.raises(EmptyHeaderError):
        CompactToken.parse("..")

    token = CompactToken.parse("SEhISA.UFBQUA.")
    assert token.header == b"HHHH"
    assert token.payload == b"PPPP"
    assert token.signature == b""
    assert token.signature_segment == ""
    assert str(token) == "SEhISA.UFBQUA."


def test_invalid_base64url() -> None:
    cases = (
        ("invalid@base64.UFBQUA.U1NTUw", TokenSegment.header),
        ("SEhISA.invalid@base64.U1NTUw", TokenSegment.payload),
        ("SEhISA.UFBQUA.invalid@base64", TokenSegment.signature),
        ("SEhI+A.UFBQUA.U1NTUw", TokenSegment.header),
        ("SEhISA.UFBQU.U1NTUw", TokenSegment.payload),
    )
    for value, component in cases:
        with pytest.raises(InvalidBase64URLError) as excinfo:
            CompactToken.parse(value)
        assert excinfo.value.component == component
        segment = value.split(".")[list(TokenSegment).index(component)]
        assert excinfo.value.value == segment
        assert str(excinfo.value) == (
            f"Invalid Base64URL encoding in JWT {component}: '{segment}'"
        )
        assert isinstance(excinfo.value, FormatError)


def test_from_bytes() -> None:
    token = CompactToken.from_bytes(b"HHHH", b"PPPP", b"SSSS")
    assert str(token) == "SEhISA.UFBQUA.U1NTUw"
    assert token.signing_input == b"SEhISA.UFBQUA"
    assert CompactToken.parse(str(token)) == token

    token = CompactToken.from_bytes(b"HHHH", b"PPPP")
    assert str(token) == "SEhISA.UFBQUA."

    with pytest.raises(EmptyHeaderError):
        CompactToken.from_bytes(b"", b"PPPP")
    with pytest.raises(EmptyPayloadError):
        CompactToken.from_bytes(b"HHHH", b"")
