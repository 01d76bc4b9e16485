"""Shared test fixtures for cats-publish tests.

Provides a sample project on disk, credential-free environments, and
CliRunner fixtures.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest
import structlog
import yaml

from cats_publish.properties import GRADLE_USER_HOME_VAR
from cats_publish.schemas import (
    Artifact,
    ArtifactClassifier,
    ProjectConfig,
    ProjectIdentity,
)
from cats_publish.toolchain import ToolchainOutput

PROJECT_YAML_FILENAME = "publish.yaml"
CREDENTIAL_ENV_VARS = ("MAVEN_USER", "MAVEN_PASS")


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        # stdout is looked up per logger so capsys sees the output
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def isolated_credentials(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    """Remove CI credentials and point GRADLE_USER_HOME at an empty directory.

    Tests that need credentials set them explicitly.

    Returns:
        The empty Gradle user home.
    """
    for var in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    gradle_home = tmp_path_factory.mktemp("gradle-home")
    monkeypatch.setenv(GRADLE_USER_HOME_VAR, str(gradle_home))
    return gradle_home


@pytest.fixture
def identity() -> ProjectIdentity:
    """Return the cats4j coordinates used across tests."""
    return ProjectIdentity(group="me.owdding", name="cats4j", version="1.0")


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """Return a minimal valid publish.yaml document."""
    return {
        "project": {
            "group": "me.owdding",
            "name": "cats4j",
            "version": "1.0",
        },
    }


@pytest.fixture
def project_dir(tmp_path: Path, sample_config_dict: dict[str, Any]) -> Path:
    """Create a project directory with publish.yaml and one Java source.

    Returns:
        Path to the project directory.
    """
    (tmp_path / PROJECT_YAML_FILENAME).write_text(yaml.safe_dump(sample_config_dict))
    source = tmp_path / "src" / "main" / "java" / "me" / "owdding" / "cats4j" / "Cats.java"
    source.parent.mkdir(parents=True)
    source.write_text("package me.owdding.cats4j;\n\npublic final class Cats {}\n")
    return tmp_path


@pytest.fixture
def project_config(project_dir: Path) -> ProjectConfig:
    """Return the ProjectConfig loaded from project_dir."""
    return ProjectConfig.from_yaml(project_dir / PROJECT_YAML_FILENAME)


@pytest.fixture
def built_output(project_config: ProjectConfig) -> ToolchainOutput:
    """Write placeholder jars where the toolchain would put them.

    Returns:
        ToolchainOutput pointing at the written jars.
    """
    libs = project_config.output_dir / "libs"
    libs.mkdir(parents=True)
    main_jar = libs / "cats4j-1.0.jar"
    sources_jar = libs / "cats4j-1.0-sources.jar"
    main_jar.write_bytes(b"PK-main")
    sources_jar.write_bytes(b"PK-sources")
    return ToolchainOutput(main_output=main_jar, sources_output=sources_jar)


@pytest.fixture
def artifacts(built_output: ToolchainOutput) -> frozenset[Artifact]:
    """Return the primary and sources artifacts for built_output."""
    assert built_output.sources_output is not None
    return frozenset(
        {
            Artifact(classifier=ArtifactClassifier.PRIMARY, content_path=built_output.main_output),
            Artifact(
                classifier=ArtifactClassifier.SOURCES,
                content_path=built_output.sources_output,
            ),
        }
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner
