"""Destination database access."""
