"""Path normalization for exclusion comparisons."""

from __future__ import annotations

import os
import re
import sys
from typing import Final
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

# Case-insensitive filesystems fold case before comparison
CASE_INSENSITIVE_FS: Final[bool] = sys.platform == "win32"

_SCHEME: Final[re.Pattern[str]] = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]+):")


def normalize_fs_path(path: str, *, case_insensitive: bool = CASE_INSENSITIVE_FS) -> str:
    """Canonicalize a filesystem path for equality comparison.

    Separators are canonicalized and trailing separators dropped via
    ``os.path.normpath``; case is folded only on case-insensitive
    filesystems. The function is idempotent.

    Args:
        path: Filesystem path
        case_insensitive: Fold case (defaults to the platform's behavior)

    Returns:
        Normalized path
    """
    normalized = os.path.normpath(path)
    return normalized.lower() if case_insensitive else normalized


def path_scheme(value: str) -> str | None:
    """Return the URI scheme of value, or None for a plain path.

    Single-letter schemes are drive letters, not URIs.
    """
    match = _SCHEME.match(value)
    return match.group(1).lower() if match else None


def resolve_fs_path(value: str) -> str:
    """Resolve a ``file:`` URI to a filesystem path.

    Plain paths and other URIs are returned unchanged.
    """
    if path_scheme(value) != "file":
        return value
    parts = urlsplit(value)
    if parts.netloc and parts.netloc != "localhost":
        # UNC path
        return url2pathname(f"//{parts.netloc}{parts.path}")
    return url2pathname(unquote(parts.path)) if sys.platform == "win32" else unquote(parts.path)


def is_within(path: str, folder: str) -> bool:
    """Check whether normalized path equals or lies inside normalized folder.

    Matching is boundary-exact: ``/root/foo2`` is not inside ``/root/foo``.
    """
    if path == folder:
        return True
    prefix = folder if folder.endswith(os.sep) else folder + os.sep
    return path.startswith(prefix)
