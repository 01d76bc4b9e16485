"""Unit tests for cats_publish.cli.errors."""

from __future__ import annotations

import httpx
from pydantic import ValidationError
import pytest
import yaml

from cats_publish.cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    format_pydantic_error,
    handle_publish_error,
)
from cats_publish.errors import ConfigurationError, PublishAuthenticationError, ToolchainError
from cats_publish.schemas import ProjectIdentity


def translate(err: Exception) -> CLIError:
    """Run handle_publish_error and return the CLIError it raises."""
    with pytest.raises(CLIError) as exc_info:
        handle_publish_error(err, "publish.yaml")
    return exc_info.value


class TestFormatPydanticError:
    """Tests for format_pydantic_error()."""

    def test_field_paths(self) -> None:
        """Each error is listed with its dotted location."""
        with pytest.raises(ValidationError) as exc_info:
            ProjectIdentity.model_validate({"group": "me.owdding"})

        message = format_pydantic_error(exc_info.value)

        assert message.startswith("Validation failed:")
        assert "  - name: Field required" in message
        assert "  - version: Field required" in message


class TestHandlePublishError:
    """Tests for exception to exit code mapping."""

    def test_configuration_error(self) -> None:
        """Configuration problems are user errors."""
        error = translate(ConfigurationError("Bad override"))
        assert error.exit_code == EXIT_USER_ERROR
        assert error.format_message() == "Bad override"

    def test_authentication_error(self) -> None:
        """Rejected credentials are user errors."""
        error = translate(PublishAuthenticationError("https://repo/a.jar", 401, anonymous=True))
        assert error.exit_code == EXIT_USER_ERROR
        assert "HTTP 401" in error.format_message()

    def test_toolchain_error(self) -> None:
        """Toolchain failures are system errors."""
        error = translate(ToolchainError("javac failed", step="compile"))
        assert error.exit_code == EXIT_SYSTEM_ERROR
        assert error.format_message() == "Build failed: javac failed"

    def test_yaml_error(self) -> None:
        """YAML errors carry the line and column."""
        with pytest.raises(yaml.YAMLError) as exc_info:
            yaml.safe_load("project: [unclosed\n")

        error = translate(exc_info.value)

        assert error.exit_code == EXIT_USER_ERROR
        assert "YAML syntax error at line" in error.format_message()

    def test_http_status_error(self) -> None:
        """Unexpected HTTP statuses are system errors."""
        request = httpx.Request("PUT", "https://repo/a.jar")
        response = httpx.Response(500, request=request)
        err = httpx.HTTPStatusError("server error", request=request, response=response)

        error = translate(err)

        assert error.exit_code == EXIT_SYSTEM_ERROR
        assert error.format_message() == "Repository returned HTTP 500 for https://repo/a.jar"

    def test_request_error(self) -> None:
        """Network failures are system errors."""
        request = httpx.Request("PUT", "https://repo/a.jar")

        error = translate(httpx.ConnectError("refused", request=request))

        assert error.exit_code == EXIT_SYSTEM_ERROR
        assert "ConnectError" in error.format_message()

    def test_file_not_found(self) -> None:
        """Missing files are system errors."""
        error = translate(FileNotFoundError("File not found: publish.yaml"))
        assert error.exit_code == EXIT_SYSTEM_ERROR
        assert error.format_message().startswith("File not found: publish.yaml")

    def test_other_os_error(self) -> None:
        """Other OS errors are system errors naming the path."""
        err = IsADirectoryError(21, "Is a directory", "build/libs/cats4j-1.0.jar")

        error = translate(err)

        assert error.exit_code == EXIT_SYSTEM_ERROR
        assert error.format_message() == "Cannot read build/libs/cats4j-1.0.jar: Is a directory"

    def test_unknown_error_reraised(self) -> None:
        """Errors without a mapping are re-raised unchanged."""
        failure = RuntimeError("unexpected")
        with pytest.raises(RuntimeError) as exc_info:
            handle_publish_error(failure, "publish.yaml")
        assert exc_info.value is failure
