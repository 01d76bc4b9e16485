"""Publishing pipeline for cats-publish.

Runs the three steps sequentially: assemble, resolve, upload. Every
failure is surfaced to the caller unchanged; there is no recovery or retry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from cats_publish.assembler import ArtifactAssembler
from cats_publish.observability import get_logger, publish_operation
from cats_publish.resolver import PublicationResolver
from cats_publish.toolchain import JavacToolchain
from cats_publish.uploader import MavenUploader

if TYPE_CHECKING:
    from cats_publish.properties import BuildProperties
    from cats_publish.schemas import Artifact, ProjectConfig, PublicationRequest
    from cats_publish.toolchain import Toolchain
    from cats_publish.uploader import Uploader, UploadResult


class Publisher:
    """Publish a project's artifacts to its Maven repository.

    Attributes:
        config: Project configuration, built once at startup.
        properties: Build property source for credential fallback.
        toolchain: Toolchain that compiles and packages the project.
        uploader: Upload collaborator.

    Example:
        >>> config = ProjectConfig.from_yaml("publish.yaml")
        >>> publisher = Publisher(config, BuildProperties.load(config.project_dir))
        >>> result = publisher.publish()
    """

    def __init__(
        self,
        config: ProjectConfig,
        properties: BuildProperties,
        *,
        toolchain: Toolchain | None = None,
        uploader: Uploader | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the Publisher.

        Args:
            config: Project configuration.
            properties: Build property source.
            toolchain: Toolchain to use. Defaults to JavacToolchain.
            uploader: Uploader to use. Defaults to MavenUploader.
            environ: Environment for credential lookup. Defaults to os.environ.
        """
        self.config = config
        self.properties = properties
        self.toolchain: Toolchain = toolchain or JavacToolchain()
        self.uploader: Uploader = uploader or MavenUploader(
            timeout=config.repository.timeout_seconds
        )
        self._environ = environ
        self._assembler = ArtifactAssembler()

    def assemble(self) -> frozenset[Artifact]:
        """Compile, package and assemble the artifact set.

        Raises:
            ToolchainError: If the toolchain fails.
        """
        with publish_operation("assemble", coordinates=self.config.project.coordinates):
            return self._assembler.build(self.toolchain, self.config)

    def resolve(self, artifacts: frozenset[Artifact]) -> PublicationRequest:
        """Resolve credentials and build the publication request.

        Args:
            artifacts: Artifact set from assemble().

        Returns:
            Immutable PublicationRequest.
        """
        with publish_operation("resolve", endpoint=self.config.repository.url):
            resolver = PublicationResolver.from_config(
                self.config,
                self.properties,
                environ=self._environ,
            )
            return resolver.resolve(
                artifacts,
                self.config.repository.url,
                self.config.credentials,
            )

    def publish(self) -> UploadResult:
        """Assemble, resolve, and upload.

        Returns:
            UploadResult from the uploader.

        Raises:
            ToolchainError: If the toolchain fails (nothing is uploaded).
            PublishAuthenticationError: If the repository rejects credentials.
            httpx.HTTPError: For other transport failures.
        """
        artifacts = self.assemble()
        request = self.resolve(artifacts)
        with publish_operation(
            "upload",
            endpoint=request.target.endpoint,
            coordinates=request.identity.coordinates,
        ):
            result = self.uploader.upload(request)
        get_logger().info(
            "publish_completed",
            coordinates=request.identity.coordinates,
            files=len(result.uploaded),
        )
        return result
