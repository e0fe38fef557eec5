"""Ports for reading and appending roundtrip events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from batch_intake.domain.model import Roundtrip


@runtime_checkable
class RoundtripRepository(Protocol):
    """Event-tracking repository holding every roundtrip of every batch."""

    def fetch_roundtrips(self, batch_id: str) -> Sequence[Roundtrip] | None:
        """Return all known roundtrips of ``batch_id`` (``None`` or empty if there are none)."""
        ...

    def append_event(
        self,
        batch_id: str,
        round_trip_number: int,
        agent: str,
        timestamp: datetime,
        details: str,
        event_kind: str,
        success: bool,  # noqa: FBT001
    ) -> None:
        """Durably append one event, creating the roundtrip object if needed.

        Raises ``CommunicationError`` if the event could not be committed.
        """
        ...


@runtime_checkable
class ClosableRoundtripRepository(RoundtripRepository, Protocol):
    """Repository owning resources that must be released after use."""

    def close(self) -> None: ...
