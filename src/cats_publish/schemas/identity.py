"""Project identity (Maven coordinates) for cats-publish."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Maven groupId / artifactId characters
COORDINATE_PATTERN = r"^[A-Za-z0-9_.-]+$"


class ProjectIdentity(BaseModel):
    """Coordinates identifying a publishable artifact set.

    Set once at startup from publish.yaml and never mutated.

    Attributes:
        group: Maven groupId (e.g. "me.owdding").
        name: Maven artifactId (e.g. "cats4j").
        version: Version string, published as-is (e.g. "1.0.0-beta.1").

    Example:
        >>> identity = ProjectIdentity(group="me.owdding", name="cats4j", version="1.0.0-beta.1")
        >>> identity.coordinates
        'me.owdding:cats4j:1.0.0-beta.1'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str = Field(
        ...,
        min_length=1,
        pattern=COORDINATE_PATTERN,
        description="Maven groupId",
    )
    name: str = Field(
        ...,
        min_length=1,
        pattern=COORDINATE_PATTERN,
        description="Maven artifactId",
    )
    version: str = Field(
        ...,
        min_length=1,
        pattern=r"^[A-Za-z0-9_.+-]+$",
        description="Artifact version",
    )

    @property
    def coordinates(self) -> str:
        """Return the group:name:version string."""
        return f"{self.group}:{self.name}:{self.version}"

    @property
    def repository_path(self) -> str:
        """Return the Maven repository directory for these coordinates.

        Example:
            >>> ProjectIdentity(group="me.owdding", name="cats4j", version="1.0").repository_path
            'me/owdding/cats4j/1.0'
        """
        return "/".join([*self.group.split("."), self.name, self.version])

    def file_name(self, classifier: str | None = None, extension: str = "jar") -> str:
        """Return the Maven file name for an artifact of this project.

        Args:
            classifier: Optional Maven classifier (e.g. "sources").
            extension: File extension without the dot.

        Returns:
            File name such as "cats4j-1.0.jar" or "cats4j-1.0-sources.jar".
        """
        suffix = f"-{classifier}" if classifier else ""
        return f"{self.name}-{self.version}{suffix}.{extension}"
