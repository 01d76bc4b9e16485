"""Rich console output utilities for the cats-publish CLI.

Colored success/error/warning messages, JSON output, and artifact tables.
Respects the NO_COLOR environment variable and the --no-color flag.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from cats_publish.schemas import Artifact

# Rich respects NO_COLOR itself; tracked here so --no-color can be layered on top
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with a green checkmark."""
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with a red X."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print JSON data with syntax highlighting.

    Args:
        data: JSON-serializable dictionary.
        **kwargs: Additional arguments passed to console.print_json().
    """
    console.print_json(json.dumps(data), **kwargs)


def print_artifacts(artifacts: Iterable[Artifact], title: str = "Artifacts") -> None:
    """Print artifacts as a table, primary first.

    Args:
        artifacts: Artifacts to list.
        title: Table title.
    """
    table = Table(title=title)
    table.add_column("Classifier")
    table.add_column("Path")
    for artifact in sorted(artifacts, key=lambda a: a.classifier.value):
        table.add_row(artifact.classifier.value, str(artifact.content_path))
    console.print(table)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
