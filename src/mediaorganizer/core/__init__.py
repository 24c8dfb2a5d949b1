"""Catalog logic that does not touch storage."""
