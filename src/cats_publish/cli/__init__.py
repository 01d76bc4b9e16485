"""Command-line interface for cats-publish."""

from __future__ import annotations

from cats_publish.cli.main import cli

__all__ = ["cli"]
