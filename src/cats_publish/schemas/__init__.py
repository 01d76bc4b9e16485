"""Schema models for cats-publish.

This package provides Pydantic models for:
- ProjectIdentity: Maven coordinates
- Artifact / ArtifactClassifier: Built files
- CredentialSource / CredentialLookup / ResolvedCredential: Credentials
- PublicationTarget / PublicationRequest: Upload descriptors
- ProjectConfig: publish.yaml root model
"""

from __future__ import annotations

from cats_publish.schemas.artifacts import Artifact, ArtifactClassifier
from cats_publish.schemas.credentials import (
    CredentialLookup,
    CredentialSource,
    CredentialSourceKind,
    ResolvedCredential,
)
from cats_publish.schemas.identity import ProjectIdentity
from cats_publish.schemas.project_config import (
    DEFAULT_REPOSITORY_URL,
    PROJECT_FILE_NAME,
    BuildConfig,
    ProjectConfig,
    RepositoryConfig,
)
from cats_publish.schemas.publication import PublicationRequest, PublicationTarget

__all__ = [
    "Artifact",
    "ArtifactClassifier",
    "BuildConfig",
    "CredentialLookup",
    "CredentialSource",
    "CredentialSourceKind",
    "DEFAULT_REPOSITORY_URL",
    "PROJECT_FILE_NAME",
    "ProjectConfig",
    "ProjectIdentity",
    "PublicationRequest",
    "PublicationTarget",
    "RepositoryConfig",
    "ResolvedCredential",
]
