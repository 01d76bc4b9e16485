"""Artifact Assembler for cats-publish.

Turns a completed toolchain run into the fixed artifact set published for
every release: the primary jar and the sources jar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cats_publish.errors import ToolchainError
from cats_publish.schemas import Artifact, ArtifactClassifier

if TYPE_CHECKING:
    from cats_publish.schemas import ProjectConfig
    from cats_publish.toolchain import Toolchain, ToolchainOutput

logger = structlog.get_logger(__name__)


class ArtifactAssembler:
    """Assemble the publishable artifact set from toolchain output.

    The assembler performs no I/O of its own. Toolchain errors propagate
    unchanged.

    Example:
        >>> assembler = ArtifactAssembler()
        >>> artifacts = assembler.assemble(
        ...     ToolchainOutput(
        ...         main_output=Path("build/libs/cats4j-1.0.jar"),
        ...         sources_output=Path("build/libs/cats4j-1.0-sources.jar"),
        ...     )
        ... )
        >>> sorted(a.classifier.value for a in artifacts)
        ['primary', 'sources']
    """

    def assemble(self, output: ToolchainOutput) -> frozenset[Artifact]:
        """Build the artifact set for a completed toolchain run.

        Only the toolchain's designated main output becomes the primary
        artifact, however many binaries it produced.

        Args:
            output: Handle to the completed toolchain run.

        Returns:
            Exactly two artifacts, classified primary and sources.

        Raises:
            ToolchainError: If the run did not produce a sources bundle.
        """
        if output.sources_output is None:
            raise ToolchainError(
                "Toolchain did not produce a sources bundle",
                step="package_sources",
            )

        if len(output.binaries) > 1:
            logger.debug(
                "extra_binaries_ignored",
                main_output=str(output.main_output),
                ignored=[str(p) for p in output.binaries[1:]],
            )

        return frozenset(
            {
                Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=output.main_output),
                Artifact(classifier=ArtifactClassifier.SOURCES, content_path=output.sources_output),
            }
        )

    def build(self, toolchain: Toolchain, config: ProjectConfig) -> frozenset[Artifact]:
        """Run the toolchain with the sources bundle requested, then assemble.

        Args:
            toolchain: Toolchain to invoke.
            config: Project configuration.

        Returns:
            Exactly two artifacts, classified primary and sources.

        Raises:
            ToolchainError: Propagated unchanged from the toolchain.
        """
        output = toolchain.build(config, include_sources=True)
        return self.assemble(output)
