"""Maven repository uploader for cats-publish.

This module provides the upload collaborator: plain authenticated HTTP PUT
of each file into the Maven repository layout. There is no retry; the
first failure ends the run and files already uploaded stay uploaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import hashlib
from typing import Protocol

import httpx
import structlog

from cats_publish.errors import PublishAuthenticationError
from cats_publish.pom import render_pom
from cats_publish.schemas import PublicationRequest

logger = structlog.get_logger(__name__)

# Checksum sidecars uploaded next to every file
CHECKSUM_ALGORITHMS = ("md5", "sha1")

# Statuses reported as authentication failures
AUTH_FAILURE_STATUSES = frozenset({401, 403})


@dataclass
class UploadResult:
    """Result of a completed upload.

    Attributes:
        uploaded: URLs uploaded, in order.
        anonymous: True if the upload was sent without credentials.
    """

    uploaded: list[str] = field(default_factory=list)
    anonymous: bool = False


class Uploader(Protocol):
    """Anything that can carry out a PublicationRequest."""

    def upload(self, request: PublicationRequest) -> UploadResult:
        """Upload every file of the request."""
        ...


def publication_files(request: PublicationRequest) -> list[tuple[str, bytes]]:
    """Read every file a request publishes.

    All content is read before the first upload, so a missing artifact
    fails the run before anything is sent.

    Args:
        request: Publication request.

    Returns:
        (file name, content) pairs: primary jar, sources jar, then the POM.

    Raises:
        OSError: If an artifact file cannot be read.
    """
    identity = request.identity
    files = [
        (
            identity.file_name(artifact.classifier.maven_classifier),
            artifact.content_path.read_bytes(),
        )
        for artifact in request.ordered_artifacts()
    ]
    files.append((identity.file_name(extension="pom"), render_pom(identity)))
    return files


class MavenUploader:
    """Upload a publication to a Maven repository over HTTP.

    Attributes:
        timeout: Per-request timeout in seconds.

    Example:
        >>> uploader = MavenUploader(timeout=30.0)
        >>> result = uploader.upload(request)
        >>> result.uploaded[0]
        'https://maven.example.com/repo/me/owdding/cats4j/1.0/cats4j-1.0.jar'
    """

    def __init__(
        self,
        *,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize MavenUploader.

        Args:
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.timeout = timeout
        self._transport = transport

    def upload(self, request: PublicationRequest) -> UploadResult:
        """Upload the artifacts, the POM, and their checksums.

        Args:
            request: Publication request.

        Returns:
            UploadResult listing every uploaded URL.

        Raises:
            PublishAuthenticationError: If the repository answers 401 or 403.
            httpx.HTTPStatusError: For any other error status.
            httpx.RequestError: For network failures.
            OSError: If an artifact file cannot be read.
        """
        credential = request.target.credential
        auth = credential.as_basic_auth()
        unset_fields: tuple[str, ...] = ()
        if auth is None and not credential.is_anonymous:
            unset_fields = tuple(
                field for field in ("username", "password") if getattr(credential, field) is None
            )
            logger.warning("credential_incomplete_sending_anonymously", unset=unset_fields)

        base_url = f"{request.target.endpoint}{request.identity.repository_path}/"
        files = publication_files(request)
        result = UploadResult(anonymous=auth is None)

        with httpx.Client(auth=auth, timeout=self.timeout, transport=self._transport) as client:
            for name, content in files:
                url = base_url + name
                self._put(
                    client, url, content, anonymous=result.anonymous, unset_fields=unset_fields
                )
                result.uploaded.append(url)
                for algorithm in CHECKSUM_ALGORITHMS:
                    digest = hashlib.new(algorithm, content).hexdigest()
                    checksum_url = f"{url}.{algorithm}"
                    self._put(
                        client,
                        checksum_url,
                        digest.encode("ascii"),
                        anonymous=result.anonymous,
                        unset_fields=unset_fields,
                    )
                    result.uploaded.append(checksum_url)

        logger.info(
            "publication_uploaded",
            coordinates=request.identity.coordinates,
            files=len(result.uploaded),
            anonymous=result.anonymous,
        )
        return result

    def _put(
        self,
        client: httpx.Client,
        url: str,
        content: bytes,
        *,
        anonymous: bool,
        unset_fields: tuple[str, ...] = (),
    ) -> None:
        """PUT one file.

        Raises:
            PublishAuthenticationError: On 401/403.
            httpx.HTTPStatusError: On other error statuses.
        """
        response = client.put(url, content=content)
        if response.status_code in AUTH_FAILURE_STATUSES:
            raise PublishAuthenticationError(
                url,
                response.status_code,
                anonymous=anonymous,
                unset_fields=unset_fields,
                internal_details=response.text[:200],
            )
        response.raise_for_status()
        logger.debug("file_uploaded", url=url, size=len(content), status=response.status_code)
