"""Artifact models for cats-publish.

This module defines:
- ArtifactClassifier: Enum distinguishing the primary jar from the sources jar
- Artifact: A built file ready for publication
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ArtifactClassifier(str, Enum):
    """Label distinguishing artifacts that share the same coordinates.

    Values:
        PRIMARY: The compiled binary package (no Maven classifier).
        SOURCES: The sources package (Maven classifier "sources").
    """

    PRIMARY = "primary"
    SOURCES = "sources"

    @property
    def maven_classifier(self) -> str | None:
        """Return the classifier suffix used in Maven file names."""
        if self is ArtifactClassifier.PRIMARY:
            return None
        return self.value


class Artifact(BaseModel):
    """A named file produced by the build.

    Created by the Artifact Assembler after the toolchain completes and
    read-only afterward. Hashable, so artifacts can be collected in sets.

    Attributes:
        classifier: Which of the published packages this is.
        content_path: Path to the built file.

    Example:
        >>> Artifact(
        ...     classifier=ArtifactClassifier.SOURCES,
        ...     content_path=Path("build/libs/cats4j-1.0-sources.jar"),
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    classifier: ArtifactClassifier = Field(
        ...,
        description="Artifact classifier",
    )
    content_path: Path = Field(
        ...,
        description="Path to the artifact file",
    )
