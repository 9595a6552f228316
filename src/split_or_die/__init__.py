"""Split or Die - flag source files that have grown past a size threshold.

Scans workspace roots for files larger than a configurable threshold,
reports each one with its size and line count, and keeps the report
current as files are saved or exclusions change.
"""

from split_or_die.__main__ import main

__all__ = ["main"]
