"""Exception hierarchy shared across the ingestion pipeline."""

from __future__ import annotations


class LinkStashError(Exception):
    """Base class for every error raised by this package."""


class InvalidUrlError(LinkStashError, ValueError):
    """Raised when a string is empty or not an absolute URL."""


class PersistenceError(LinkStashError):
    """Raised when the stored link collection cannot be read or written.

    Always fatal: a run that hits this error has saved nothing.
    """


class InputReadError(LinkStashError):
    """Raised when the batch input file exists but cannot be read."""
