"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw
measurements into the strings shown in diagnostics and result listings.
"""

# Binary unit constants (1024-based)
_KB = 1024
_MB = _KB * 1024  # 1,048,576


def format_bytes(bytes: int) -> str:
    """Convert bytes to a short human-readable size.

    Uses binary units (1024-based) with one decimal place above 1 KB.

    Args:
        bytes: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable size string:
        - < 1024: "X B"
        - < 1024²: "X.Y KB"
        - otherwise: "X.Y MB"

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(25000)
        '24.4 KB'
        >>> format_bytes(1153434)
        '1.1 MB'
    """
    if bytes < 0:
        msg = "bytes must be non-negative"
        raise ValueError(msg)

    if bytes < _KB:
        return f"{bytes} B"

    kb = bytes / _KB
    if bytes < _MB:
        return f"{kb:.1f} KB"

    mb = bytes / _MB
    return f"{mb:.1f} MB"


def format_file_count(count: int, threshold_kb: int) -> str:
    """Return the scan summary label.

    Examples:
        >>> format_file_count(1, 20)
        '1 file over 20 KB'
        >>> format_file_count(3, 20)
        '3 files over 20 KB'
    """
    suffix = "" if count == 1 else "s"
    return f"{count} file{suffix} over {threshold_kb} KB"
