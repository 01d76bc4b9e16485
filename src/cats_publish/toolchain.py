"""Java toolchain adapter for cats-publish.

The compiler is an external collaborator: this module only runs it and
reports where its outputs landed.
- ToolchainOutput: Handle to a completed build
- Toolchain: Protocol for anything that can produce a ToolchainOutput
- JavacToolchain: javac + jar implementation
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import subprocess
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field
import structlog

from cats_publish.errors import ToolchainError
from cats_publish.schemas import ArtifactClassifier, ProjectConfig

logger = structlog.get_logger(__name__)


class ToolchainOutput(BaseModel):
    """Outputs of a completed toolchain run.

    Attributes:
        main_output: The designated main binary (the primary jar).
        outputs: Other binaries the toolchain produced, if any.
        sources_output: The sources bundle, if one was requested.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    main_output: Path = Field(
        ...,
        description="Designated main binary",
    )
    outputs: tuple[Path, ...] = Field(
        default=(),
        description="Other binaries produced by the toolchain",
    )
    sources_output: Path | None = Field(
        default=None,
        description="Sources bundle",
    )

    @property
    def binaries(self) -> tuple[Path, ...]:
        """Return every binary, main output first and without duplicates."""
        return (self.main_output, *(p for p in self.outputs if p != self.main_output))


class Toolchain(Protocol):
    """Anything that turns a project into a ToolchainOutput."""

    def build(self, config: ProjectConfig, *, include_sources: bool = True) -> ToolchainOutput:
        """Compile and package the project.

        Raises:
            ToolchainError: If compilation or packaging fails.
        """
        ...


class JavacToolchain:
    """Compile with javac and package with jar.

    Mirrors a plain Gradle "java" build: sources compiled with an explicit
    encoding into build/classes, then packed with resources into
    build/libs/<name>-<version>.jar, plus an optional
    build/libs/<name>-<version>-sources.jar.

    Example:
        >>> output = JavacToolchain().build(ProjectConfig.from_yaml("publish.yaml"))
        >>> output.main_output
        PosixPath('build/libs/cats4j-1.0.0-beta.1.jar')
    """

    def planned_output(
        self, config: ProjectConfig, *, include_sources: bool = True
    ) -> ToolchainOutput:
        """Return where build() writes its jars, without building.

        Args:
            config: Project configuration.
            include_sources: Whether the sources jar is part of the output.

        Returns:
            ToolchainOutput with the jar paths under <output_dir>/libs.
        """
        libs_dir = config.output_dir / "libs"
        identity = config.project
        sources_jar = None
        if include_sources:
            sources_jar = libs_dir / identity.file_name(ArtifactClassifier.SOURCES.maven_classifier)
        return ToolchainOutput(
            main_output=libs_dir / identity.file_name(),
            sources_output=sources_jar,
        )

    def build(self, config: ProjectConfig, *, include_sources: bool = True) -> ToolchainOutput:
        """Compile and package the project.

        Args:
            config: Project configuration.
            include_sources: Also produce the sources jar.

        Returns:
            ToolchainOutput describing the produced jars.

        Raises:
            ToolchainError: If no sources exist, a tool fails or is missing,
                or an expected jar was not written.
        """
        planned = self.planned_output(config, include_sources=include_sources)
        classes_dir = config.output_dir / "classes"
        classes_dir.mkdir(parents=True, exist_ok=True)
        planned.main_output.parent.mkdir(parents=True, exist_ok=True)

        sources = sorted(config.source_dir.rglob("*.java")) if config.source_dir.is_dir() else []
        if not sources:
            raise ToolchainError(
                f"No Java sources found under {config.build.source_dir}",
                step="compile",
            )

        self._run(
            "compile",
            [
                config.build.javac,
                "-encoding",
                config.build.encoding,
                "-d",
                str(classes_dir),
                *(str(s) for s in sources),
            ],
        )
        logger.info("sources_compiled", count=len(sources), classes_dir=str(classes_dir))

        main_jar = planned.main_output
        jar_inputs = ["-C", str(classes_dir), "."]
        if config.resources_dir.is_dir():
            jar_inputs += ["-C", str(config.resources_dir), "."]
        self._run("package", [config.build.jar, "--create", "--file", str(main_jar), *jar_inputs])

        sources_jar = planned.sources_output
        if sources_jar is not None:
            self._run(
                "package_sources",
                [
                    config.build.jar,
                    "--create",
                    "--file",
                    str(sources_jar),
                    "-C",
                    str(config.source_dir),
                    ".",
                ],
            )

        for produced in (main_jar, sources_jar):
            if produced is not None and not produced.is_file():
                raise ToolchainError(
                    f"Toolchain did not produce {produced.name}",
                    step="package",
                )

        logger.info(
            "toolchain_completed",
            main_output=str(main_jar),
            sources_output=str(sources_jar) if sources_jar else None,
        )
        return planned

    def _run(self, step: str, command: Sequence[str]) -> None:
        """Run one toolchain command.

        Raises:
            ToolchainError: If the executable is missing or exits non-zero.
        """
        logger.debug("toolchain_step", step=step, executable=command[0])
        try:
            result = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolchainError(
                f"Toolchain executable not found: {command[0]}",
                step=step,
                internal_details=str(e),
            ) from e

        if result.returncode != 0:
            raise ToolchainError(
                f"Toolchain step '{step}' failed with exit code {result.returncode}",
                step=step,
                returncode=result.returncode,
                internal_details=result.stderr.strip() or result.stdout.strip(),
            )
