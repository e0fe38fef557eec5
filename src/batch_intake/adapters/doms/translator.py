"""Translate DOMS payloads to and from domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from batch_intake.domain.model import Event, Roundtrip

from .schema import EventPayload

if TYPE_CHECKING:
    from datetime import datetime

    from .schema import RoundtripPayload


def translate_roundtrip(payload: RoundtripPayload, *, batch_id: str) -> Roundtrip:
    return Roundtrip(
        round_trip_number=payload.round_trip_number,
        events=tuple(translate_event(event) for event in payload.events),
        batch_id=batch_id,
        pid=payload.pid,
    )


def translate_event(payload: EventPayload) -> Event:
    return Event(
        event_id=payload.event_id,
        success=payload.success,
        timestamp=payload.date,
        agent=payload.agent,
        details=payload.details or "",
    )


def event_payload(
    *,
    event_kind: str,
    success: bool,
    timestamp: datetime,
    agent: str,
    details: str,
) -> EventPayload:
    return EventPayload(
        event_id=event_kind,
        success=success,
        date=timestamp,
        agent=agent,
        details=details,
    )
