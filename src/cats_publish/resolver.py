"""Publication Resolver for cats-publish.

This module resolves repository credentials and assembles the
PublicationRequest handed to the uploader:
- Lookup: A credential lookup strategy (key -> value or None)
- environment_lookup / property_lookup: The two standard strategies
- PublicationResolver: Per-field fallback resolution and request assembly

Resolution order, applied independently to username and password:
    1. Environment variable (MAVEN_USER / MAVEN_PASS)
    2. Build property (maven_username / maven_password)
    3. Unset (None), which is not an error

A source that is set but empty stops the chain and resolves to None.

Nothing is cached: every resolve() call reads the environment and the
property source again, so rotated CI secrets are picked up.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import os
from typing import TYPE_CHECKING

from pydantic import SecretStr
import structlog

from cats_publish.schemas import (
    CredentialLookup,
    CredentialSource,
    CredentialSourceKind,
    ProjectIdentity,
    PublicationRequest,
    PublicationTarget,
    ResolvedCredential,
)

if TYPE_CHECKING:
    from cats_publish.properties import BuildProperties
    from cats_publish.schemas import Artifact, ProjectConfig

logger = structlog.get_logger(__name__)

# A lookup strategy: returns the value for a key, or None if absent
Lookup = Callable[[str], "str | None"]


def environment_lookup(environ: Mapping[str, str] | None = None) -> Lookup:
    """Create a lookup that reads environment variables.

    Args:
        environ: Mapping to read. Defaults to os.environ, read at call time.

    Returns:
        Lookup returning the variable's value, or None if unset.
    """

    def lookup(key: str) -> str | None:
        env = os.environ if environ is None else environ
        return env.get(key)

    return lookup


def property_lookup(properties: BuildProperties) -> Lookup:
    """Create a lookup that reads build properties.

    Args:
        properties: Layered build property source.

    Returns:
        Lookup returning the property's value, or None if unset.
    """

    def lookup(key: str) -> str | None:
        return properties.get(key)

    return lookup


class PublicationResolver:
    """Resolve credentials and assemble a PublicationRequest.

    The resolver is stateless and single-shot: one resolve() call yields
    one request, with no internal retries and no caching between calls.

    Attributes:
        identity: Coordinates of the project being published.
        lookups: Lookup strategy for each credential source kind.

    Example:
        >>> resolver = PublicationResolver(
        ...     identity,
        ...     lookups={
        ...         CredentialSourceKind.ENVIRONMENT: environment_lookup(),
        ...         CredentialSourceKind.PROPERTY: property_lookup(properties),
        ...     },
        ... )
        >>> request = resolver.resolve(artifacts, DEFAULT_REPOSITORY_URL, CredentialSource())
        >>> request.target.credential.is_anonymous
        False
    """

    def __init__(
        self,
        identity: ProjectIdentity,
        lookups: Mapping[CredentialSourceKind, Lookup],
    ) -> None:
        """Initialize the PublicationResolver.

        Args:
            identity: Project coordinates carried into every request.
            lookups: Lookup strategy per source kind.
        """
        self.identity = identity
        self.lookups = dict(lookups)

    @classmethod
    def from_config(
        cls,
        config: ProjectConfig,
        properties: BuildProperties,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> PublicationResolver:
        """Create a resolver wired to the environment and build properties.

        Args:
            config: Project configuration.
            properties: Build property source.
            environ: Environment mapping. Defaults to os.environ.

        Returns:
            Configured PublicationResolver.
        """
        return cls(
            config.project,
            lookups={
                CredentialSourceKind.ENVIRONMENT: environment_lookup(environ),
                CredentialSourceKind.PROPERTY: property_lookup(properties),
            },
        )

    def resolve_field(self, field: str, chain: Iterable[CredentialLookup]) -> SecretStr | None:
        """Resolve one credential field through its fallback chain.

        The first lookup that finds the key ends the chain, even when its
        value is empty. An empty value resolves to None so that empty
        credentials are never sent.

        Args:
            field: Field name, for logging only.
            chain: Ordered lookups to try.

        Returns:
            First present value wrapped in SecretStr, or None.
        """
        for step in chain:
            lookup = self.lookups.get(step.kind)
            if lookup is None:
                logger.warning("credential_source_unavailable", field=field, source=str(step))
                continue
            value = lookup(step.key)
            if value is None:
                continue
            if not value:
                logger.warning("credential_empty", field=field, source=str(step))
                return None
            logger.debug("credential_resolved", field=field, source=str(step))
            return SecretStr(value)

        logger.debug("credential_unset", field=field)
        return None

    def resolve_credential(self, source: CredentialSource) -> ResolvedCredential:
        """Resolve username and password independently.

        Args:
            source: Fallback chains for both fields.

        Returns:
            ResolvedCredential; either field may be None.
        """
        return ResolvedCredential(
            username=self.resolve_field("username", source.username),
            password=self.resolve_field("password", source.password),
        )

    def resolve(
        self,
        artifacts: Iterable[Artifact],
        endpoint_url: str,
        credential_source: CredentialSource,
    ) -> PublicationRequest:
        """Assemble the publication request.

        Never fails because of missing credentials: an unset credential is
        only discovered when the repository rejects the upload.

        Args:
            artifacts: Artifact set from the assembler.
            endpoint_url: Repository base URL.
            credential_source: Credential fallback chains.

        Returns:
            Immutable PublicationRequest.

        Raises:
            pydantic.ValidationError: If the artifact set does not hold
                exactly one primary and one sources artifact, or the URL
                is malformed.
        """
        credential = self.resolve_credential(credential_source)
        if credential.is_anonymous:
            logger.warning("publishing_anonymously", endpoint=endpoint_url)
        elif not credential.is_complete:
            logger.warning(
                "credential_incomplete",
                endpoint=endpoint_url,
                username_set=credential.username is not None,
                password_set=credential.password is not None,
            )

        return PublicationRequest(
            identity=self.identity,
            artifacts=frozenset(artifacts),
            target=PublicationTarget(endpoint=endpoint_url, credential=credential),
        )


def resolve_publication(
    config: ProjectConfig,
    artifacts: Iterable[Artifact],
    properties: BuildProperties,
    *,
    environ: Mapping[str, str] | None = None,
) -> PublicationRequest:
    """Convenience function to resolve a request straight from configuration.

    Args:
        config: Project configuration (identity, repository, credential chains).
        artifacts: Artifact set from the assembler.
        properties: Build property source.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Immutable PublicationRequest.
    """
    resolver = PublicationResolver.from_config(config, properties, environ=environ)
    return resolver.resolve(artifacts, config.repository.url, config.credentials)
