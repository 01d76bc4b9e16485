"""CLI error handling for cats-publish.

Wraps pipeline exceptions into user-friendly messages with exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
import httpx
from pydantic import ValidationError as PydanticValidationError
import yaml

from cats_publish.cli.output import error
from cats_publish.errors import (
    ConfigurationError,
    PublishAuthenticationError,
    ToolchainError,
)

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_USER_ERROR = 1  # Configuration, credentials
EXIT_SYSTEM_ERROR = 2  # Missing file, toolchain, transport


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - project.version: Field required"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}" if loc else f"  - {e['msg']}")

    return "\n".join(lines)


def handle_yaml_error(err: yaml.YAMLError, file_path: str) -> NoReturn:
    """Handle YAML parsing errors with line number information.

    Raises:
        CLIError: Always.
    """
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        problem = getattr(err, "problem", None)
        error_msg = (
            f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: {problem}"
        )

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_publish_error(err: Exception, file_path: str) -> NoReturn:
    """Translate a pipeline exception into a CLIError.

    Exceptions without a CLI mapping are re-raised unchanged.

    Args:
        err: Exception raised while loading, assembling, resolving or uploading.
        file_path: Path to publish.yaml, for configuration messages.

    Raises:
        CLIError: For every known failure class.
    """
    if isinstance(err, yaml.YAMLError):
        handle_yaml_error(err, file_path)
    if isinstance(err, PydanticValidationError):
        raise CLIError(f"Invalid configuration in {file_path}:\n{format_pydantic_error(err)}")
    if isinstance(err, (ConfigurationError, PublishAuthenticationError)):
        raise CLIError(err.user_message)
    if isinstance(err, ToolchainError):
        raise CLIError(f"Build failed: {err.user_message}", exit_code=EXIT_SYSTEM_ERROR)
    if isinstance(err, httpx.HTTPStatusError):
        raise CLIError(
            f"Repository returned HTTP {err.response.status_code} for {err.request.url}",
            exit_code=EXIT_SYSTEM_ERROR,
        )
    if isinstance(err, httpx.RequestError):
        raise CLIError(
            f"Cannot reach repository at {err.request.url}: {type(err).__name__}",
            exit_code=EXIT_SYSTEM_ERROR,
        )
    if isinstance(err, FileNotFoundError):
        raise CLIError(
            f"File not found: {err.filename or file_path}\n\n"
            "Create publish.yaml, or use --file to specify a path.",
            exit_code=EXIT_SYSTEM_ERROR,
        )
    if isinstance(err, PermissionError):
        raise CLIError(
            f"Permission denied: Cannot access {err.filename}",
            exit_code=EXIT_SYSTEM_ERROR,
        )
    if isinstance(err, OSError):
        raise CLIError(
            f"Cannot read {err.filename or file_path}: {err.strerror or err}",
            exit_code=EXIT_SYSTEM_ERROR,
        )
    raise err
