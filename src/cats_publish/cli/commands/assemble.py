"""cats-publish assemble command - Compile and package the artifacts."""

from __future__ import annotations

import click

from cats_publish.cli.errors import handle_publish_error
from cats_publish.cli.options import load_project, project_options
from cats_publish.cli.output import print_artifacts, success


@click.command("assemble")
@project_options
def assemble(file_path: str, properties: tuple[str, ...]) -> None:
    """Compile the project and build the primary and sources jars.

    Nothing is uploaded.

    Examples:

        cats-publish assemble

        cats-publish assemble --file path/to/publish.yaml
    """
    config, build_properties = load_project(file_path, properties)

    from cats_publish.publisher import Publisher

    try:
        artifacts = Publisher(config, build_properties).assemble()
    except Exception as e:
        handle_publish_error(e, file_path)

    print_artifacts(artifacts, title=config.project.coordinates)
    success(f"Assembled {len(artifacts)} artifacts")
