"""Persistent storage for media catalogs."""
