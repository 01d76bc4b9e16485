"""Fixtures for CLI tests."""

from __future__ import annotations

import sys
from typing import Any

import pytest
import structlog


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Record configure_logging calls instead of reconfiguring structlog.

    Log events go to the real stderr so command stdout stays parseable.

    Returns:
        Keyword arguments of each configure_logging call.
    """
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(
        "cats_publish.cli.main.configure_logging",
        lambda **kwargs: calls.append(kwargs),
    )
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    return calls
