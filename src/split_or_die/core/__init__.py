"""Core scanning logic: exclusions, bulk scan, incremental updates and session."""
