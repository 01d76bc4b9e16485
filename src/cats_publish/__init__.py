"""cats-publish: Compile a Java library and publish it to a Maven repository.

This package provides:
- ProjectConfig: Pydantic schema for publish.yaml
- ArtifactAssembler: Toolchain output -> primary and sources artifacts
- PublicationResolver: Credential fallback resolution -> PublicationRequest
- MavenUploader: Authenticated HTTP PUT into the Maven repository layout
- Publisher: The assemble -> resolve -> upload pipeline

Example:
    >>> from cats_publish import BuildProperties, ProjectConfig, Publisher
    >>> config = ProjectConfig.from_yaml("publish.yaml")
    >>> Publisher(config, BuildProperties.load(config.project_dir)).publish()
"""

from __future__ import annotations

__version__ = "0.1.0"

from cats_publish.assembler import ArtifactAssembler
from cats_publish.errors import (
    CatsPublishError,
    ConfigurationError,
    PublishAuthenticationError,
    ToolchainError,
)
from cats_publish.properties import BuildProperties
from cats_publish.publisher import Publisher
from cats_publish.resolver import (
    PublicationResolver,
    environment_lookup,
    property_lookup,
    resolve_publication,
)
from cats_publish.schemas import (
    Artifact,
    ArtifactClassifier,
    CredentialLookup,
    CredentialSource,
    CredentialSourceKind,
    ProjectConfig,
    ProjectIdentity,
    PublicationRequest,
    PublicationTarget,
    ResolvedCredential,
)
from cats_publish.toolchain import JavacToolchain, ToolchainOutput
from cats_publish.uploader import MavenUploader, UploadResult

__all__ = [
    "__version__",
    # Pipeline
    "ArtifactAssembler",
    "PublicationResolver",
    "MavenUploader",
    "Publisher",
    "JavacToolchain",
    "ToolchainOutput",
    "UploadResult",
    "BuildProperties",
    "environment_lookup",
    "property_lookup",
    "resolve_publication",
    # Errors
    "CatsPublishError",
    "ConfigurationError",
    "PublishAuthenticationError",
    "ToolchainError",
    # Schema models
    "Artifact",
    "ArtifactClassifier",
    "CredentialLookup",
    "CredentialSource",
    "CredentialSourceKind",
    "ProjectConfig",
    "ProjectIdentity",
    "PublicationRequest",
    "PublicationTarget",
    "ResolvedCredential",
]
