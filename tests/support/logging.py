"""Helper functions for testing logging."""

from __future__ import annotations

import json
from typing import Any

import pytest

__all__ = ["parse_log"]


def parse_log(caplog: pytest.LogCaptureFixture) -> list[dict[str, Any]]:
    """Parse the accumulated logs as JSON.

    Checks and strips off the logger name and returns the rest as a list of
    dictionaries holding the parsed JSON of the log message.

    Parameters
    ----------
    caplog
        The log capture fixture.

    Returns
    -------
    list of dict
        List of parsed JSON dictionaries with the logger name removed (after
        validation).
    """
    messages = []
    for log_tuple in caplog.record_tuples:
        message = json.loads(log_tuple[2])
        assert message["logger"] == "rfc7519"
        del message["logger"]
        messages.append(message)
    return messages
