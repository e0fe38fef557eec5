"""Errors raised across port boundaries."""

from __future__ import annotations


class CommunicationError(RuntimeError):
    """Raised when a repository backend cannot be read from or written to."""
