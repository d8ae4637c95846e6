"""Tests for the command-line interface."""

from __future__ import annotations

import json
from datetime import timedelta

from click.testing import CliRunner
from safir.datetime import current_datetime

from rfc7519.cli import main
from rfc7519.signing import create_jwt

from .support.keypair import HMACKey
from .support.tokens import EXAMPLE_TOKEN


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["help"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Commands:" in result.output

    result = runner.invoke(main, ["help", "decode"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Print the header, payload, and signature" in result.output

    result = runner.invoke(main, ["help", "unknown-command"])
    assert result.exit_code != 0
    assert "Unknown help topic unknown-command" in result.output


def test_decode() -> None:
    runner = CliRunner()
    result = runner.invoke(
        main, ["decode", EXAMPLE_TOKEN], catch_exceptions=False
    )
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "header": {"alg": "HS256", "typ": "JWT"},
        "payload": {
            "sub": "1234567890",
            "name": "John Doe",
            "iat": 1516239022,
        },
        "signature": EXAMPLE_TOKEN.split(".")[2],
    }

    result = runner.invoke(
        main,
        ["decode", "-"],
        input=EXAMPLE_TOKEN + "\n",
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    assert json.loads(result.output)["payload"]["sub"] == "1234567890"


def test_decode_invalid() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["decode", "a.b"])
    assert result.exit_code == 1
    assert (
        "Error: Invalid JWT format (expected header.payload.signature):"
        " 'a.b'"
    ) in result.output

    result = runner.invoke(main, ["decode", "invalid@base64.UFBQUA.U1NTUw"])
    assert result.exit_code == 1
    assert "Invalid Base64URL encoding in JWT header" in result.output


def test_signing_input() -> None:
    runner = CliRunner()
    result = runner.invoke(
        main, ["signing-input", EXAMPLE_TOKEN], catch_exceptions=False
    )
    assert result.exit_code == 0
    header, payload, _ = EXAMPLE_TOKEN.split(".")
    assert result.output == f"{header}.{payload}\n"


def test_validate() -> None:
    key = HMACKey(b"some-shared-secret")
    now = current_datetime()
    token = create_jwt(
        "HS256",
        expires_at=now - timedelta(seconds=30),
        now=now - timedelta(hours=1),
        signer=key.sign,
    ).serialize()
    runner = CliRunner()

    result = runner.invoke(main, ["validate", token], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output == "Token is valid\n"

    result = runner.invoke(main, ["validate", "--clock-skew", "10", token])
    assert result.exit_code == 1
    assert "Error: Token expired at" in result.output

    result = runner.invoke(main, ["validate", "--clock-skew", "-1", token])
    assert result.exit_code == 2

    timestamp = str(int((now - timedelta(hours=1)).timestamp()))
    result = runner.invoke(
        main,
        ["validate", "--clock-skew", "0", "--now", timestamp, token],
        catch_exceptions=False,
    )
    assert result.exit_code == 0

    # The example token has no exp or nbf claim.
    result = runner.invoke(
        main, ["validate", "--now", "0", EXAMPLE_TOKEN], catch_exceptions=False
    )
    assert result.exit_code == 0


def test_log_level() -> None:
    runner = CliRunner()
    result = runner.invoke(
        main, ["--log-level", "VERBOSE", "decode", EXAMPLE_TOKEN]
    )
    assert result.exit_code == 2

    result = runner.invoke(
        main,
        ["decode", EXAMPLE_TOKEN],
        env={"RFC7519_LOG_LEVEL": "INFO"},
        catch_exceptions=False,
    )
    assert result.exit_code == 0
