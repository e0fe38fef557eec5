"""Domain port definitions for adapters."""

from __future__ import annotations

from .errors import CommunicationError
from .identifiers import IdentifierGenerator
from .repository import ClosableRoundtripRepository, RoundtripRepository

__all__ = [
    "ClosableRoundtripRepository",
    "CommunicationError",
    "IdentifierGenerator",
    "RoundtripRepository",
]
