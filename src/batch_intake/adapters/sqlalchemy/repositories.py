"""Roundtrip repository backed by a relational database."""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from batch_intake.domain.model import Event, Roundtrip
from batch_intake.domain.ports import CommunicationError

from .mappings import roundtrip_event_table, roundtrip_table

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.engine import Connection, Engine

    from batch_intake.domain.ports import IdentifierGenerator

log = getLogger(__name__)


class SqlAlchemyEventRepository:
    """Store roundtrips and their events in the tables from ``mappings``.

    Roundtrip identifiers come from ``identifiers`` when given, otherwise a
    ``uuid:`` identifier is generated locally.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        identifiers: IdentifierGenerator | None = None,
        dispose_on_close: bool = False,
    ) -> None:
        self.engine = engine
        self._identifiers = identifiers
        self._dispose_on_close = dispose_on_close

    def fetch_roundtrips(self, batch_id: str) -> list[Roundtrip]:
        roundtrip_stmt = (
            select(
                roundtrip_table.c.id,
                roundtrip_table.c.pid,
                roundtrip_table.c.round_trip_number,
            )
            .where(roundtrip_table.c.batch_id == batch_id)
            .order_by(roundtrip_table.c.round_trip_number)
        )
        event_stmt = (
            select(roundtrip_event_table)
            .join(roundtrip_table, roundtrip_table.c.id == roundtrip_event_table.c.roundtrip_id)
            .where(roundtrip_table.c.batch_id == batch_id)
            .order_by(roundtrip_event_table.c.id)
        )
        try:
            with self.engine.connect() as connection:
                roundtrip_rows = connection.execute(roundtrip_stmt).all()
                event_rows = connection.execute(event_stmt).all()
        except SQLAlchemyError as exc:
            raise CommunicationError(f"Reading roundtrips of batch '{batch_id}' failed") from exc

        events_by_roundtrip: dict[int, list[Event]] = {}
        for row in event_rows:
            events_by_roundtrip.setdefault(row.roundtrip_id, []).append(
                Event(
                    event_id=row.event_id,
                    success=row.success,
                    timestamp=row.timestamp,
                    agent=row.agent,
                    details=row.details,
                )
            )

        return [
            Roundtrip(
                round_trip_number=row.round_trip_number,
                events=tuple(events_by_roundtrip.get(row.id, ())),
                batch_id=batch_id,
                pid=row.pid,
            )
            for row in roundtrip_rows
        ]

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
        try:
            with self.engine.begin() as connection:
                roundtrip_id = self._ensure_roundtrip(connection, batch_id, round_trip_number)
                connection.execute(
                    insert(roundtrip_event_table).values(
                        roundtrip_id=roundtrip_id,
                        event_id=event_kind,
                        success=success,
                        timestamp=timestamp,
                        agent=agent,
                        details=details,
                    )
                )
        except SQLAlchemyError as exc:
            raise CommunicationError(
                f"Appending {event_kind} to batch '{batch_id}' roundtrip {round_trip_number} failed"
            ) from exc

    def close(self) -> None:
        if self._dispose_on_close:
            self.engine.dispose()

    def _ensure_roundtrip(
        self,
        connection: Connection,
        batch_id: str,
        round_trip_number: int,
    ) -> int:
        stmt = (
            select(roundtrip_table.c.id)
            .where(roundtrip_table.c.batch_id == batch_id)
            .where(roundtrip_table.c.round_trip_number == round_trip_number)
        )
        existing = connection.execute(stmt).scalar_one_or_none()
        if existing is not None:
            return existing

        pid = self._new_identifier()
        log.info(
            "Creating object %s for batch '%s' roundtrip %s", pid, batch_id, round_trip_number
        )
        result = connection.execute(
            insert(roundtrip_table).values(
                pid=pid,
                batch_id=batch_id,
                round_trip_number=round_trip_number,
            )
        )
        inserted = result.inserted_primary_key
        if inserted is None:
            raise CommunicationError("Database did not return the new roundtrip key")
        return inserted[0]

    def _new_identifier(self) -> str:
        if self._identifiers is None:
            return f"uuid:{uuid.uuid4()}"
        return self._identifiers.generate_identifier()
