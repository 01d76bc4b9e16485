"""cats-publish publish command - Build and upload to the Maven repository."""

from __future__ import annotations

import click

from cats_publish.cli.errors import handle_publish_error
from cats_publish.cli.options import load_project, project_options
from cats_publish.cli.output import success, warning


@click.command("publish")
@project_options
def publish(file_path: str, properties: tuple[str, ...]) -> None:
    """Compile, package and upload the artifacts with their POM.

    Credentials come from MAVEN_USER / MAVEN_PASS, falling back to the
    maven_username / maven_password build properties. With neither set the
    upload is attempted anonymously.

    Examples:

        cats-publish publish

        cats-publish publish -P maven_username=bob -P maven_password=secret
    """
    config, build_properties = load_project(file_path, properties)

    from cats_publish.publisher import Publisher

    try:
        result = Publisher(config, build_properties).publish()
    except Exception as e:
        handle_publish_error(e, file_path)

    if result.anonymous:
        warning("Published without credentials")
    success(f"Published {config.project.coordinates} to {config.repository.url}")
