"""File system helpers for building catalog items."""
