"""Build property source for cats-publish.

This module provides the property lookup used as the second step of the
credential fallback chain. Properties are layered the way Gradle layers
them, later layers overriding earlier ones:

1. <project_dir>/gradle.properties
2. $GRADLE_USER_HOME/gradle.properties (default ~/.gradle/gradle.properties)
3. Command-line overrides (-P key=value)

Property files use the Java properties syntax: "key=value", "key: value" or
"key value", with "#" and "!" comments and backslash line continuation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import os
from pathlib import Path
import re

import structlog

from cats_publish.errors import ConfigurationError

logger = structlog.get_logger(__name__)

# Standard properties file name
PROPERTIES_FILE_NAME = "gradle.properties"

# Environment variable overriding the user-home properties directory
GRADLE_USER_HOME_VAR = "GRADLE_USER_HOME"


def gradle_user_home(environ: Mapping[str, str] | None = None) -> Path:
    """Return the Gradle user home directory.

    Args:
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        $GRADLE_USER_HOME if set, otherwise ~/.gradle.
    """
    env = os.environ if environ is None else environ
    override = env.get(GRADLE_USER_HOME_VAR)
    if override:
        return Path(override)
    return Path.home() / ".gradle"


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java properties text into a dictionary.

    Args:
        text: Properties file content.

    Returns:
        Mapping of keys to values. Later duplicates win.

    Example:
        >>> parse_properties("maven_username=bob\\n# comment\\nmaven_password: s3cret")
        {'maven_username': 'bob', 'maven_password': 's3cret'}
    """
    result: dict[str, str] = {}
    pending = ""

    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue

        # Odd number of trailing backslashes continues the logical line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        logical = pending + line
        pending = ""
        key, value = _split_entry(logical)
        result[key] = value

    if pending:
        key, value = _split_entry(pending)
        result[key] = value

    return result


def _split_entry(line: str) -> tuple[str, str]:
    # Key ends at the first unescaped "=", ":" or whitespace
    end = 0
    while end < len(line):
        char = line[end]
        if char == "\\":
            end += 2
            continue
        if char in "=:" or char.isspace():
            break
        end += 1

    rest = line[end:].lstrip()
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip()
    return _unescape(line[:end]), _unescape(rest)


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", lambda m: {"t": "\t", "n": "\n", "r": "\r"}.get(m[1], m[1]), value)


def parse_overrides(pairs: Iterable[str]) -> dict[str, str]:
    """Parse command-line "key=value" overrides.

    Args:
        pairs: Values given to -P/--property.

    Returns:
        Mapping of keys to values.

    Raises:
        ConfigurationError: If an entry has no "=" or an empty key.
    """
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(
                f"Invalid property override '{key.strip() or pair}': expected key=value"
            )
        result[key.strip()] = value
    return result


class BuildProperties:
    """Layered read-only build property source.

    Attributes:
        layers: Property mappings in increasing precedence order.

    Example:
        >>> props = BuildProperties.load(Path("."), overrides={"maven_username": "bob"})
        >>> props.get("maven_username")
        'bob'
    """

    def __init__(self, *layers: Mapping[str, str]) -> None:
        """Initialize BuildProperties.

        Args:
            *layers: Property mappings, lowest precedence first.
        """
        self.layers: tuple[dict[str, str], ...] = tuple(dict(layer) for layer in layers)

    def get(self, key: str) -> str | None:
        """Look up a property.

        Args:
            key: Property name.

        Returns:
            Value from the highest-precedence layer defining the key, or None.
        """
        for layer in reversed(self.layers):
            if key in layer:
                return layer[key]
        return None

    def __contains__(self, key: object) -> bool:
        return any(key in layer for layer in self.layers)

    @staticmethod
    def read_file(path: Path) -> dict[str, str]:
        """Read a properties file if it exists.

        Args:
            path: Path to a properties file.

        Returns:
            Parsed properties, or an empty mapping if the file is missing.

        Raises:
            ConfigurationError: If the file exists but cannot be read.
        """
        if not path.is_file():
            return {}
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                "Cannot read build properties",
                file_path=str(path),
                internal_details=str(e),
            ) from e
        properties = parse_properties(text)
        logger.debug("properties_loaded", path=str(path), count=len(properties))
        return properties

    @classmethod
    def load(
        cls,
        project_dir: Path,
        *,
        overrides: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> BuildProperties:
        """Load the standard property layers for a project.

        Args:
            project_dir: Project root containing gradle.properties.
            overrides: Command-line overrides (highest precedence).
            environ: Environment used to locate GRADLE_USER_HOME.

        Returns:
            BuildProperties with project, user-home and override layers.
        """
        project_layer = cls.read_file(project_dir / PROPERTIES_FILE_NAME)
        user_layer = cls.read_file(gradle_user_home(environ) / PROPERTIES_FILE_NAME)
        return cls(project_layer, user_layer, dict(overrides or {}))
