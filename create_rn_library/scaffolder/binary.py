"""Detection of template files that must be copied verbatim."""

from __future__ import annotations

import os
from pathlib import PurePath

# The Gradle wrapper script contains shell ``${...}`` syntax and the rest are
# not text at all.  Matching is case-sensitive.
BINARY_NAMES: frozenset[str] = frozenset({"gradlew"})
BINARY_SUFFIXES: tuple[str, ...] = (".jar", ".keystore", ".png", ".jpg", ".gif")


def is_binary(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` if the file at *path* is copied byte-for-byte."""
    name = PurePath(path).name
    return name in BINARY_NAMES or name.endswith(BINARY_SUFFIXES)
