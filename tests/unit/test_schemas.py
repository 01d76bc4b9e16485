"""Unit tests for cats_publish.schemas models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import SecretStr, ValidationError
import pytest
import yaml

from cats_publish.errors import ConfigurationError
from cats_publish.schemas import (
    DEFAULT_REPOSITORY_URL,
    Artifact,
    ArtifactClassifier,
    CredentialLookup,
    CredentialSource,
    CredentialSourceKind,
    ProjectConfig,
    ProjectIdentity,
    PublicationRequest,
    PublicationTarget,
    RepositoryConfig,
    ResolvedCredential,
)


class TestProjectIdentity:
    """Tests for ProjectIdentity coordinates."""

    def test_coordinates(self, identity: ProjectIdentity) -> None:
        """Test group:name:version rendering."""
        assert identity.coordinates == "me.owdding:cats4j:1.0"

    def test_repository_path_splits_group(self, identity: ProjectIdentity) -> None:
        """Test that the group is split into directories."""
        assert identity.repository_path == "me/owdding/cats4j/1.0"

    def test_file_names(self, identity: ProjectIdentity) -> None:
        """Test Maven file names with and without classifier."""
        assert identity.file_name() == "cats4j-1.0.jar"
        assert identity.file_name("sources") == "cats4j-1.0-sources.jar"
        assert identity.file_name(extension="pom") == "cats4j-1.0.pom"

    def test_prerelease_version_accepted(self) -> None:
        """Test that prerelease versions are published as-is."""
        identity = ProjectIdentity(group="me.owdding", name="cats4j", version="1.0.0-beta.1")
        assert identity.file_name() == "cats4j-1.0.0-beta.1.jar"

    @pytest.mark.parametrize("group", ["", "me/owdding", "me owdding"])
    def test_invalid_group_rejected(self, group: str) -> None:
        """Test that groups outside the coordinate alphabet are rejected."""
        with pytest.raises(ValidationError):
            ProjectIdentity(group=group, name="cats4j", version="1.0")

    def test_identity_is_frozen(self, identity: ProjectIdentity) -> None:
        """Test that identity cannot be mutated."""
        with pytest.raises(ValidationError):
            identity.version = "2.0"  # type: ignore[misc]


class TestArtifact:
    """Tests for Artifact and ArtifactClassifier."""

    def test_maven_classifier(self) -> None:
        """Test the file name suffix for each classifier."""
        assert ArtifactClassifier.PRIMARY.maven_classifier is None
        assert ArtifactClassifier.SOURCES.maven_classifier == "sources"

    def test_artifacts_are_hashable(self) -> None:
        """Test that equal artifacts collapse in a set."""
        a = Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=Path("a.jar"))
        b = Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=Path("a.jar"))
        assert len({a, b}) == 1


class TestCredentialSource:
    """Tests for credential fallback chain configuration."""

    def test_default_chains(self) -> None:
        """Test environment first, then build property, for each field."""
        source = CredentialSource()
        assert [str(step) for step in source.username] == [
            "environment:MAVEN_USER",
            "property:maven_username",
        ]
        assert [str(step) for step in source.password] == [
            "environment:MAVEN_PASS",
            "property:maven_password",
        ]

    def test_custom_chain_from_dict(self) -> None:
        """Test that chains can be configured from YAML-shaped data."""
        source = CredentialSource.model_validate(
            {"username": [{"kind": "property", "key": "repo_user"}]}
        )
        assert source.username == (
            CredentialLookup(kind=CredentialSourceKind.PROPERTY, key="repo_user"),
        )
        assert len(source.password) == 2

    def test_unknown_kind_rejected(self) -> None:
        """Test that only environment and property sources exist."""
        with pytest.raises(ValidationError):
            CredentialSource.model_validate({"username": [{"kind": "vault", "key": "x"}]})


class TestResolvedCredential:
    """Tests for ResolvedCredential."""

    def test_default_is_anonymous(self) -> None:
        """Test that absent credentials are None, not empty strings."""
        credential = ResolvedCredential()
        assert credential.username is None
        assert credential.password is None
        assert credential.is_anonymous
        assert credential.as_basic_auth() is None

    def test_complete_credential(self) -> None:
        """Test basic auth pair for a complete credential."""
        credential = ResolvedCredential(username=SecretStr("alice"), password=SecretStr("pw"))
        assert credential.is_complete
        assert not credential.is_anonymous
        assert credential.as_basic_auth() == ("alice", "pw")

    def test_partial_credential_has_no_basic_auth(self) -> None:
        """Test that a lone username yields no basic auth pair."""
        credential = ResolvedCredential(username=SecretStr("alice"))
        assert not credential.is_anonymous
        assert not credential.is_complete
        assert credential.as_basic_auth() is None

    def test_secrets_masked_in_repr(self) -> None:
        """Test that secret values never appear in repr."""
        credential = ResolvedCredential(username=SecretStr("alice"), password=SecretStr("pw"))
        assert "pw" not in repr(credential)
        assert "alice" not in repr(credential)


class TestPublicationRequest:
    """Tests for PublicationRequest invariants."""

    def test_valid_request(
        self, identity: ProjectIdentity, artifacts: frozenset[Artifact]
    ) -> None:
        """Test a request with exactly one primary and one sources artifact."""
        request = PublicationRequest(
            identity=identity,
            artifacts=artifacts,
            target=PublicationTarget(endpoint=DEFAULT_REPOSITORY_URL),
        )
        assert request.artifact(ArtifactClassifier.PRIMARY).content_path.name == "cats4j-1.0.jar"
        assert [a.classifier for a in request.ordered_artifacts()] == [
            ArtifactClassifier.PRIMARY,
            ArtifactClassifier.SOURCES,
        ]

    def test_missing_sources_rejected(self, identity: ProjectIdentity) -> None:
        """Test that a request without a sources artifact is invalid."""
        primary = Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=Path("a.jar"))
        with pytest.raises(ValidationError, match="Missing artifact classifiers: sources"):
            PublicationRequest(
                identity=identity,
                artifacts=frozenset({primary}),
                target=PublicationTarget(endpoint=DEFAULT_REPOSITORY_URL),
            )

    def test_duplicate_primary_rejected(
        self, identity: ProjectIdentity, artifacts: frozenset[Artifact]
    ) -> None:
        """Test that two primary artifacts are rejected."""
        extra = Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=Path("other.jar"))
        with pytest.raises(ValidationError, match="Duplicate artifact classifiers: primary"):
            PublicationRequest(
                identity=identity,
                artifacts=artifacts | {extra},
                target=PublicationTarget(endpoint=DEFAULT_REPOSITORY_URL),
            )

    def test_endpoint_normalized(self) -> None:
        """Test that the endpoint always ends with a slash."""
        target = PublicationTarget(endpoint="https://repo.example.com/releases")
        assert target.endpoint == "https://repo.example.com/releases/"

    def test_endpoint_scheme_required(self) -> None:
        """Test that non-HTTP endpoints are rejected."""
        with pytest.raises(ValidationError, match="http:// or https://"):
            PublicationTarget(endpoint="ftp://repo.example.com/")


class TestProjectConfig:
    """Tests for ProjectConfig loading."""

    def test_defaults(self, sample_config_dict: dict[str, Any]) -> None:
        """Test defaults for repository, credentials and build."""
        config = ProjectConfig.model_validate(sample_config_dict)
        assert config.repository.url == DEFAULT_REPOSITORY_URL
        assert config.repository.timeout_seconds == 60.0
        assert config.credentials == CredentialSource()
        assert config.build.encoding == "UTF-8"
        assert config.source_dir == Path("src/main/java")

    def test_from_yaml_sets_project_dir(self, project_dir: Path) -> None:
        """Test that paths are anchored at the directory holding publish.yaml."""
        config = ProjectConfig.from_yaml(project_dir / "publish.yaml")
        assert config.project_dir == project_dir
        assert config.output_dir == project_dir / "build"
        assert config.source_dir == project_dir / "src" / "main" / "java"

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        """Test FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError):
            ProjectConfig.from_yaml(tmp_path / "publish.yaml")

    def test_from_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        """Test that a YAML list is rejected with a ConfigurationError."""
        path = tmp_path / "publish.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ProjectConfig.from_yaml(path)

    def test_from_yaml_empty_file_requires_project(self, tmp_path: Path) -> None:
        """Test that an empty file fails validation on the project section."""
        path = tmp_path / "publish.yaml"
        path.write_text("")
        with pytest.raises(ValidationError, match="project"):
            ProjectConfig.from_yaml(path)

    def test_unknown_fields_rejected(self, sample_config_dict: dict[str, Any]) -> None:
        """Test extra="forbid" on the root model."""
        sample_config_dict["signing"] = {"key": "x"}
        with pytest.raises(ValidationError):
            ProjectConfig.model_validate(sample_config_dict)

    def test_repository_override(self, tmp_path: Path, sample_config_dict: dict[str, Any]) -> None:
        """Test a custom repository URL from YAML."""
        sample_config_dict["repository"] = {"url": "http://localhost:8081/repo"}
        path = tmp_path / "publish.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict))
        config = ProjectConfig.from_yaml(path)
        assert config.repository.url == "http://localhost:8081/repo/"

    @pytest.mark.parametrize("timeout", [0, -1, 601])
    def test_timeout_bounds(self, timeout: float) -> None:
        """Test timeout validation bounds."""
        with pytest.raises(ValidationError):
            RepositoryConfig(timeout_seconds=timeout)
