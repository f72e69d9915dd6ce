"""Domain-specific exceptions for course-audit."""

from __future__ import annotations


class FetchError(Exception):
    """Raised when a source page cannot be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class DestinationLoadError(Exception):
    """Raised when the destination catalog cannot be read from the database."""


class ReportWriteError(Exception):
    """Raised when the integrity report cannot be written to disk."""


class ArchiveConfigError(Exception):
    """Platform URL or import secret is missing for archive calls."""
