"""Data access: filesystem scanning and persisted per-project state."""
