"""Shared options and project loading for cats-publish commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from cats_publish.cli.errors import handle_publish_error
from cats_publish.properties import BuildProperties, parse_overrides
from cats_publish.schemas import PROJECT_FILE_NAME, ProjectConfig

F = TypeVar("F", bound=Callable[..., Any])


def project_options(func: F) -> F:
    """Add --file and --property options to a command."""
    func = click.option(
        "-P",
        "--property",
        "properties",
        multiple=True,
        metavar="KEY=VALUE",
        help="Build property override (repeatable), e.g. -P maven_username=bob",
    )(func)
    func = click.option(
        "-f",
        "--file",
        "file_path",
        type=click.Path(exists=False),
        default=f"./{PROJECT_FILE_NAME}",
        help=f"Path to {PROJECT_FILE_NAME} [default: ./{PROJECT_FILE_NAME}]",
    )(func)
    return func


def load_project(
    file_path: str,
    property_pairs: tuple[str, ...],
) -> tuple[ProjectConfig, BuildProperties]:
    """Load publish.yaml and the layered build properties.

    Args:
        file_path: Path to publish.yaml.
        property_pairs: Raw -P values.

    Returns:
        (ProjectConfig, BuildProperties) tuple.

    Raises:
        CLIError: If the file is missing or invalid.
    """
    try:
        config = ProjectConfig.from_yaml(Path(file_path))
        properties = BuildProperties.load(
            config.project_dir,
            overrides=parse_overrides(property_pairs),
        )
    except Exception as e:
        handle_publish_error(e, file_path)

    return config, properties
