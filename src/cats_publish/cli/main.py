"""CLI entry point for cats-publish.

Defines the main command group. Subcommands are imported on first use.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from cats_publish import __version__
from cats_publish.cli.output import set_no_color
from cats_publish.observability import configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports subcommands only when they are requested.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "assemble": "cats_publish.cli.commands.assemble.assemble",
    "resolve": "cats_publish.cli.commands.resolve.resolve",
    "publish": "cats_publish.cli.commands.publish.publish",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="cats-publish")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for pipeline events.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Emit log events as JSON lines.",
)
def cli(log_level: str, json_logs: bool) -> None:
    """cats-publish - Build cats4j and publish it to Maven.

    Compiles the library, packages the main and sources jars, resolves
    repository credentials and uploads everything with a POM.

    **Commands:**

    - `cats-publish assemble` - Build the two jars
    - `cats-publish resolve` - Show the resolved publication request
    - `cats-publish publish` - Build and upload

    **Credentials:**

    MAVEN_USER / MAVEN_PASS environment variables, falling back to the
    maven_username / maven_password build properties.
    """
    configure_logging(log_level=log_level.upper(), json_format=json_logs)


if __name__ == "__main__":
    cli()
