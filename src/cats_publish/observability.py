"""Structured logging and OpenTelemetry spans for cats-publish.

This module provides:
- Structured logging setup via structlog
- OpenTelemetry span helper for publishing operations
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import structlog

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

# Module-level logger and tracer
_logger: BoundLogger | None = None
_tracer: Tracer | None = None

# Tracer name for OpenTelemetry
TRACER_NAME = "cats.publish"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        >>> logger = get_logger()
        >>> logger.info("artifact_uploaded", path="me/owdding/cats4j/1.0.0/cats4j-1.0.0.jar")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for cats-publish.

    Returns:
        OpenTelemetry Tracer instance.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for cats-publish.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=True)
    """
    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )


@contextmanager
def publish_operation(operation: str, **attributes: Any) -> Iterator[Span]:
    """Wrap a publishing step in a span with start/end logging.

    Exceptions are recorded on the span, logged, and re-raised unchanged.

    Args:
        operation: Operation name (e.g., "assemble", "resolve", "upload").
        **attributes: Span and log attributes. Must not contain secrets.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with publish_operation("upload", endpoint="https://repo/"):
        ...     uploader.upload(request)
    """
    tracer = get_tracer()
    logger = get_logger()
    span_attributes = {f"cats.{k}": str(v) for k, v in attributes.items()}
    start = time.perf_counter()

    with tracer.start_as_current_span(f"cats.{operation}", attributes=span_attributes) as s:
        logger.debug(f"{operation}_started", **attributes)
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.warning(
                f"{operation}_failed",
                error_type=type(exc).__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                **attributes,
            )
            raise
        s.set_status(Status(StatusCode.OK))
        logger.info(
            f"{operation}_completed",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            **attributes,
        )
