"""Roundtrips and the events recorded against them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class Event:
    """Immutable record of something that happened to a roundtrip.

    ``event_id`` is usually one of :class:`EventKind`, but repositories may hold
    other event identifiers which are carried through untouched.
    """

    event_id: str
    success: bool
    timestamp: datetime | None = None
    agent: str | None = None
    details: str = ""


@dataclass(frozen=True, slots=True)
class Roundtrip:
    """One numbered delivery of a batch with its chronological event history."""

    round_trip_number: int
    events: tuple[Event, ...] = ()
    batch_id: str | None = None
    pid: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.round_trip_number, bool) or not isinstance(
            self.round_trip_number, int
        ):
            raise TypeError(f"Roundtrip number must be an int, got {self.round_trip_number!r}")
        if self.round_trip_number < 1:
            raise ValueError(f"Roundtrip number must be positive, got {self.round_trip_number}")
        object.__setattr__(self, "events", tuple(self.events))

    def with_event(self, event: Event) -> Roundtrip:
        """Return a copy of this roundtrip with ``event`` appended."""

        return replace(self, events=(*self.events, event))
