"""Catalog and recommendation services."""
