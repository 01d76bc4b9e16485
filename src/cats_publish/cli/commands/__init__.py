"""CLI command modules.

Each module exposes one click command, loaded on demand by the main group.
"""

from __future__ import annotations

__all__: list[str] = []
