"""cats-publish resolve command - Show the publication request.

Resolves credentials and prints the request that `publish` would send,
with secret values masked. Does not upload anything.
"""

from __future__ import annotations

from typing import Any

import click

from cats_publish.cli.errors import handle_publish_error
from cats_publish.cli.options import load_project, project_options
from cats_publish.cli.output import print_json


@click.command("resolve")
@project_options
@click.option(
    "--build",
    "build_first",
    is_flag=True,
    default=False,
    help="Compile and package before resolving (default: use planned jar paths)",
)
def resolve(file_path: str, properties: tuple[str, ...], build_first: bool) -> None:
    """Resolve credentials and print the publication request as JSON.

    Credential values are masked. Fields that resolved to nothing are null,
    and "anonymous" is true when neither username nor password is set.

    Examples:

        cats-publish resolve

        MAVEN_USER=alice cats-publish resolve -P maven_password=secret
    """
    config, build_properties = load_project(file_path, properties)

    from cats_publish.assembler import ArtifactAssembler
    from cats_publish.publisher import Publisher
    from cats_publish.toolchain import JavacToolchain

    try:
        publisher = Publisher(config, build_properties)
        if build_first:
            artifacts = publisher.assemble()
        else:
            planned = JavacToolchain().planned_output(config)
            artifacts = ArtifactAssembler().assemble(planned)
        request = publisher.resolve(artifacts)
    except Exception as e:
        handle_publish_error(e, file_path)

    payload: dict[str, Any] = request.model_dump(mode="json")
    payload["artifacts"] = [a.model_dump(mode="json") for a in request.ordered_artifacts()]
    payload["target"]["anonymous"] = request.target.credential.is_anonymous
    print_json(payload)
