"""Test fixtures."""

from __future__ import annotations

import os

import pytest
import structlog
from safir.logging import LogLevel, Profile, configure_logging
from structlog.stdlib import BoundLogger

from .support.keypair import HMACKey, RSAKeyPair

_RSA_KEY = RSAKeyPair.generate()
"""RSA key pair for token signing and verification.

Generating this takes a surprisingly long time when summed across every test,
so generate one statically at import time for each test run.
"""


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that would change configuration."""
    for name in list(os.environ):
        if name.startswith("RFC7519_"):
            monkeypatch.delenv(name)


@pytest.fixture
def hmac_key() -> HMACKey:
    return HMACKey(b"some-shared-secret")


@pytest.fixture
def logger() -> BoundLogger:
    """Configure JSON logging and return a logger that uses it."""
    configure_logging(
        name="rfc7519", profile=Profile.production, log_level=LogLevel.DEBUG
    )
    return structlog.get_logger("rfc7519")


@pytest.fixture
def rsa_key() -> RSAKeyPair:
    return _RSA_KEY
