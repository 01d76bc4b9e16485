"""Custom exception hierarchy for cats-publish.

This module defines the exception classes raised by the publishing pipeline:
- CatsPublishError: Base exception for all cats-publish errors
- ConfigurationError: publish.yaml or a properties file is invalid
- ToolchainError: Compilation or packaging did not produce its outputs
- PublishAuthenticationError: The repository rejected the credentials

Missing credentials are not an error: they resolve to an anonymous
ResolvedCredential. Network failures raised by httpx are not wrapped.

User-facing messages are safe to display. Technical details are logged
internally via structlog and never included in the message.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class CatsPublishError(Exception):
    """Base exception for cats-publish.

    Args:
        user_message: Safe message to display to the user. Should NOT contain
            credentials or other secrets.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise CatsPublishError(
        ...     "Publication failed",
        ...     internal_details="PUT https://repo/... returned 500",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize CatsPublishError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "cats_publish_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(CatsPublishError):
    """Raised when publish.yaml or a build properties file cannot be used.

    Attributes:
        file_path: Path to the offending file (if known).
        field_path: Dot-separated path to the invalid field (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid repository URL",
        ...     file_path="publish.yaml",
        ...     field_path="repository.url",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with file context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class ToolchainError(CatsPublishError):
    """Raised when the toolchain does not produce the expected outputs.

    Use this exception when:
    - javac exits non-zero
    - jar packaging fails
    - An expected output file is missing after the toolchain ran
    - A completed run has no sources bundle (raised by the assembler)

    Attributes:
        step: Toolchain step that failed (e.g. "compile", "package").
        returncode: Process exit code, if a process was run.
    """

    def __init__(
        self,
        user_message: str,
        *,
        step: str,
        returncode: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ToolchainError.

        Args:
            user_message: Safe message to display to the user.
            step: Toolchain step that failed.
            returncode: Process exit code (optional).
            internal_details: Technical details (e.g. compiler stderr).
        """
        super().__init__(user_message, internal_details=internal_details)
        self.step = step
        self.returncode = returncode


class PublishAuthenticationError(CatsPublishError):
    """The repository rejected the upload because of credentials.

    Raised on HTTP 401 or 403. Credentials that resolved to "unset" only
    surface here, when the repository refuses an anonymous upload.

    Security:
        The username and password are never included in the message.

    Attributes:
        url: URL of the rejected upload.
        status_code: HTTP status returned by the repository.
        anonymous: True if the request was sent without credentials.
        unset_fields: Credential fields that did not resolve.
    """

    def __init__(
        self,
        url: str,
        status_code: int,
        *,
        anonymous: bool,
        unset_fields: tuple[str, ...] = (),
        internal_details: str | None = None,
    ) -> None:
        """Initialize PublishAuthenticationError.

        Args:
            url: URL of the rejected upload.
            status_code: HTTP status code (401 or 403).
            anonymous: Whether the upload was sent without credentials.
            unset_fields: Credential fields that did not resolve, e.g. ("password",).
            internal_details: Technical details for internal logging only.
        """
        if anonymous and len(unset_fields) == 1:
            hint = (
                f"{unset_fields[0]} is unset, so no credentials were sent; "
                "set both MAVEN_USER and MAVEN_PASS"
            )
        elif anonymous:
            hint = "no credentials were resolved; set MAVEN_USER/MAVEN_PASS"
        else:
            hint = "check the resolved repository credentials"
        user_message = f"Repository rejected upload to {url} (HTTP {status_code}): {hint}"

        super().__init__(user_message, internal_details=internal_details)

        self.url = url
        self.status_code = status_code
        self.anonymous = anonymous
        self.unset_fields = unset_fields
