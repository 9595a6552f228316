"""Type aliases using modern PEP 695 syntax."""

from split_or_die.types.models import ScanEntry

# Result set keyed by normalized file path
# Owned by the scan session, replaced on bulk scans and patched on saves
type ResultSet = dict[str, ScanEntry]
