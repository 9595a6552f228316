"""Extension normalization and extension-based skipping."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Final

_VALID_EXTENSION: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9._-]+$")


def normalize_extension(value: str) -> str | None:
    """Canonicalize a user-entered extension.

    Trims whitespace, strips a single leading dot and lowercases.

    Args:
        value: Raw extension such as ``".LOG "``

    Returns:
        The canonical extension, or None if nothing is left or the result
        contains characters outside ``[a-z0-9._-]``

    Examples:
        >>> normalize_extension(".LOG ")
        'log'
        >>> normalize_extension("tar.gz")
        'tar.gz'
        >>> normalize_extension("c++") is None
        True
    """
    trimmed = value.strip().lower()
    if trimmed.startswith("."):
        trimmed = trimmed[1:]
    if not trimmed or not _VALID_EXTENSION.match(trimmed):
        return None
    return trimmed


def normalize_extensions(values: Iterable[str]) -> list[str]:
    """Canonicalize many extensions into a sorted, duplicate-free list.

    Invalid entries are dropped.
    """
    normalized = {ext for ext in map(normalize_extension, values) if ext is not None}
    return sorted(normalized)


def extension_set(values: Iterable[str]) -> frozenset[str]:
    """Canonicalize many extensions into a set for membership checks."""
    return frozenset(normalize_extensions(values))


def extension_key(path: str) -> str:
    """Return the extension a file is matched by.

    Uses the final path segment. A dotfile without a further extension
    (``.gitignore``) is keyed by the name after its leading dot, so dotfiles
    can be excluded by name.

    Examples:
        >>> extension_key("/src/App.TSX")
        'tsx'
        >>> extension_key("/repo/.gitignore")
        'gitignore'
        >>> extension_key("/repo/Makefile")
        ''
    """
    base = os.path.basename(path).lower()
    ext = os.path.splitext(base)[1]
    if ext:
        return ext[1:]
    if base.startswith(".") and len(base) > 1:
        return base[1:]
    return ""


def should_skip_extension(path: str, excluded: frozenset[str] | set[str]) -> bool:
    """Check whether a file's extension is in the excluded set."""
    key = extension_key(path)
    return bool(key) and key in excluded
