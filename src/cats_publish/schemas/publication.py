"""Publication request models for cats-publish.

This module defines the terminal objects handed to the uploader:
- PublicationTarget: Repository endpoint plus resolved credentials
- PublicationRequest: Everything needed to upload one artifact set
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cats_publish.schemas.artifacts import Artifact, ArtifactClassifier
from cats_publish.schemas.credentials import ResolvedCredential
from cats_publish.schemas.identity import ProjectIdentity

# Classifiers every publication must carry, exactly once each
REQUIRED_CLASSIFIERS = frozenset(ArtifactClassifier)


class PublicationTarget(BaseModel):
    """Where to publish and with which credentials.

    Attributes:
        endpoint: Repository base URL, always ending with "/".
        credential: Credentials resolved for this attempt.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = Field(
        ...,
        min_length=1,
        description="Repository base URL",
    )
    credential: ResolvedCredential = Field(
        default_factory=ResolvedCredential,
        description="Resolved repository credentials",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint_format(cls, v: str) -> str:
        """Validate URL scheme and normalize to a trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"Repository URL must start with http:// or https://, got: {v}"
            raise ValueError(msg)
        return v.rstrip("/") + "/"


class PublicationRequest(BaseModel):
    """Fully resolved description of what to upload, where, and how.

    Never mutated after construction. Holds exactly one primary and one
    sources artifact.

    Attributes:
        identity: Coordinates of the artifact set.
        artifacts: The artifacts to upload.
        target: Repository endpoint and credentials.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identity: ProjectIdentity = Field(
        ...,
        description="Project coordinates",
    )
    artifacts: frozenset[Artifact] = Field(
        ...,
        description="Artifacts to upload",
    )
    target: PublicationTarget = Field(
        ...,
        description="Repository endpoint and credentials",
    )

    @field_validator("artifacts")
    @classmethod
    def validate_classifiers(cls, v: frozenset[Artifact]) -> frozenset[Artifact]:
        """Require exactly one artifact per classifier."""
        counts = Counter(artifact.classifier for artifact in v)
        duplicated = sorted(c.value for c, n in counts.items() if n > 1)
        if duplicated:
            msg = f"Duplicate artifact classifiers: {', '.join(duplicated)}"
            raise ValueError(msg)
        missing = sorted(c.value for c in REQUIRED_CLASSIFIERS - counts.keys())
        if missing:
            msg = f"Missing artifact classifiers: {', '.join(missing)}"
            raise ValueError(msg)
        return v

    def artifact(self, classifier: ArtifactClassifier) -> Artifact:
        """Return the artifact with the given classifier.

        Args:
            classifier: Classifier to look up.

        Returns:
            The matching artifact (always present by construction).
        """
        return next(a for a in self.artifacts if a.classifier is classifier)

    def ordered_artifacts(self) -> list[Artifact]:
        """Return artifacts in upload order (primary first)."""
        return [self.artifact(classifier) for classifier in ArtifactClassifier]
