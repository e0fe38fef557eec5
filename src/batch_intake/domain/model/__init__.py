"""Domain model for batch roundtrips."""

from __future__ import annotations

from .enums import EventKind
from .roundtrip import Event, Roundtrip

__all__ = [
    "Event",
    "EventKind",
    "Roundtrip",
]
