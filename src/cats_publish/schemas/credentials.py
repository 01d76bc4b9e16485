"""Credential configuration models for cats-publish.

This module defines credential lookup configuration including:
- CredentialSourceKind: Where a lookup reads from (environment, property)
- CredentialLookup: One step in a fallback chain
- CredentialSource: Ordered fallback chains for username and password
- ResolvedCredential: The outcome of resolution, with explicit absence

Secrets are never stored in publish.yaml. The configuration only names the
environment variables and build properties to read at publish time.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr

# Default lookup names, as read by the cats4j Gradle build
DEFAULT_USERNAME_ENV = "MAVEN_USER"
DEFAULT_PASSWORD_ENV = "MAVEN_PASS"
DEFAULT_USERNAME_PROPERTY = "maven_username"
DEFAULT_PASSWORD_PROPERTY = "maven_password"


class CredentialSourceKind(str, Enum):
    """Kinds of places a credential value can be read from.

    Values:
        ENVIRONMENT: Process environment variable.
        PROPERTY: Build property (gradle.properties or -P override).
    """

    ENVIRONMENT = "environment"
    PROPERTY = "property"


class CredentialLookup(BaseModel):
    """A single step of a credential fallback chain.

    Attributes:
        kind: Source to read from.
        key: Environment variable or property name.

    Example:
        >>> CredentialLookup(kind=CredentialSourceKind.ENVIRONMENT, key="MAVEN_USER")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: CredentialSourceKind = Field(
        ...,
        description="Source kind (environment or property)",
    )
    key: str = Field(
        ...,
        min_length=1,
        description="Environment variable or property name",
    )

    def __str__(self) -> str:
        """Return a readable description of the lookup."""
        return f"{self.kind.value}:{self.key}"


def _default_username_chain() -> tuple[CredentialLookup, ...]:
    return (
        CredentialLookup(kind=CredentialSourceKind.ENVIRONMENT, key=DEFAULT_USERNAME_ENV),
        CredentialLookup(kind=CredentialSourceKind.PROPERTY, key=DEFAULT_USERNAME_PROPERTY),
    )


def _default_password_chain() -> tuple[CredentialLookup, ...]:
    return (
        CredentialLookup(kind=CredentialSourceKind.ENVIRONMENT, key=DEFAULT_PASSWORD_ENV),
        CredentialLookup(kind=CredentialSourceKind.PROPERTY, key=DEFAULT_PASSWORD_PROPERTY),
    )


class CredentialSource(BaseModel):
    """Ordered credential fallback chains, one per credential field.

    Each field is resolved independently: the first lookup in its chain
    that yields a value wins. Static configuration, never mutated.

    Attributes:
        username: Lookup chain for the repository username.
        password: Lookup chain for the repository password.

    Example:
        >>> source = CredentialSource()
        >>> [str(lookup) for lookup in source.username]
        ['environment:MAVEN_USER', 'property:maven_username']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: tuple[CredentialLookup, ...] = Field(
        default_factory=_default_username_chain,
        description="Lookup chain for the username",
    )
    password: tuple[CredentialLookup, ...] = Field(
        default_factory=_default_password_chain,
        description="Lookup chain for the password",
    )


class ResolvedCredential(BaseModel):
    """Credential values resolved for one publish attempt.

    Absent values are legal and mean "send no credentials". They are None,
    never an empty string.

    Attributes:
        username: Resolved username, or None if unset.
        password: Resolved password, or None if unset.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: SecretStr | None = Field(
        default=None,
        description="Repository username",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Repository password",
    )

    @property
    def is_anonymous(self) -> bool:
        """True if neither field resolved."""
        return self.username is None and self.password is None

    @property
    def is_complete(self) -> bool:
        """True if both fields resolved, so basic auth can be sent."""
        return self.username is not None and self.password is not None

    def as_basic_auth(self) -> tuple[str, str] | None:
        """Return (username, password) for HTTP basic auth, or None.

        Returns:
            Credential pair when both fields are set, otherwise None.
        """
        if self.username is None or self.password is None:
            return None
        return (self.username.get_secret_value(), self.password.get_secret_value())
