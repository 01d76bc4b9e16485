"""ProjectConfig root model for cats-publish.

This module defines the publish.yaml configuration, constructed once at
process start and passed explicitly to the assembler, resolver, and
uploader:
- RepositoryConfig: Target Maven repository
- BuildConfig: Toolchain settings (source layout, encoding, executables)
- ProjectConfig: Root model with from_yaml()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml

from cats_publish.errors import ConfigurationError
from cats_publish.schemas.credentials import CredentialSource
from cats_publish.schemas.identity import ProjectIdentity

# Standard configuration file name
PROJECT_FILE_NAME = "publish.yaml"

# Repository the project publishes to unless publish.yaml says otherwise
DEFAULT_REPOSITORY_URL = "https://maven.teamresourceful.com/repository/thatgravyboat/"


class RepositoryConfig(BaseModel):
    """Target Maven repository.

    Attributes:
        url: Repository base URL. A single fixed value, not parameterized
            by environment.
        timeout_seconds: HTTP timeout for each upload request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(
        default=DEFAULT_REPOSITORY_URL,
        min_length=1,
        description="Maven repository base URL",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Upload request timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Validate URL format (must be http:// or https://)."""
        if not v.startswith(("http://", "https://")):
            msg = f"URL must start with http:// or https://, got: {v}"
            raise ValueError(msg)
        return v.rstrip("/") + "/"


class BuildConfig(BaseModel):
    """Toolchain settings.

    Relative paths are resolved against the directory containing
    publish.yaml.

    Attributes:
        source_dir: Java source root.
        resources_dir: Resource root packed into the primary jar if present.
        output_dir: Build output directory (classes and jars).
        encoding: Source file encoding passed to javac.
        javac: javac executable name or path.
        jar: jar executable name or path.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_dir: Path = Field(
        default=Path("src/main/java"),
        description="Java source root",
    )
    resources_dir: Path = Field(
        default=Path("src/main/resources"),
        description="Resource root included in the primary jar",
    )
    output_dir: Path = Field(
        default=Path("build"),
        description="Build output directory",
    )
    encoding: str = Field(
        default="UTF-8",
        min_length=1,
        description="Source encoding passed to javac",
    )
    javac: str = Field(
        default="javac",
        min_length=1,
        description="javac executable",
    )
    jar: str = Field(
        default="jar",
        min_length=1,
        description="jar executable",
    )


class ProjectConfig(BaseModel):
    """Root configuration model for publish.yaml.

    Attributes:
        project: Project coordinates.
        repository: Target repository.
        credentials: Credential lookup chains (names only, never values).
        build: Toolchain settings.
        project_dir: Directory that relative build paths resolve against.
            Set by from_yaml(); defaults to the current directory.

    Example:
        >>> config = ProjectConfig.from_yaml("publish.yaml")
        >>> config.project.coordinates
        'me.owdding:cats4j:1.0.0-beta.1'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project: ProjectIdentity = Field(
        ...,
        description="Project coordinates",
    )
    repository: RepositoryConfig = Field(
        default_factory=RepositoryConfig,
        description="Target Maven repository",
    )
    credentials: CredentialSource = Field(
        default_factory=CredentialSource,
        description="Credential lookup chains",
    )
    build: BuildConfig = Field(
        default_factory=BuildConfig,
        description="Toolchain settings",
    )
    project_dir: Path = Field(
        default=Path("."),
        description="Project root directory",
    )

    @property
    def source_dir(self) -> Path:
        """Source directory anchored at project_dir."""
        return self.project_dir / self.build.source_dir

    @property
    def resources_dir(self) -> Path:
        """Resource directory anchored at project_dir."""
        return self.project_dir / self.build.resources_dir

    @property
    def output_dir(self) -> Path:
        """Build output directory anchored at project_dir."""
        return self.project_dir / self.build.output_dir

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectConfig:
        """Load and validate ProjectConfig from a YAML file.

        Args:
            path: Path to publish.yaml.

        Returns:
            Validated ProjectConfig with project_dir set to the file's directory.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
            ConfigurationError: If the document is not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping", file_path=str(path))

        data.setdefault("project_dir", str(path.parent))
        return cls.model_validate(data)
