"""SQLAlchemy table metadata for the local event store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

roundtrip_table = Table(
    "roundtrip",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("pid", String(255), nullable=False, unique=True),
    Column("batch_id", String(255), nullable=False, index=True),
    Column("round_trip_number", Integer, nullable=False),
    UniqueConstraint("batch_id", "round_trip_number"),
)

roundtrip_event_table = Table(
    "roundtrip_event",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "roundtrip_id",
        Integer,
        ForeignKey("roundtrip.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("event_id", String(255), nullable=False),
    Column("success", Boolean, nullable=False),
    Column("timestamp", UTCDateTime(), nullable=True),
    Column("agent", String(255), nullable=True),
    Column("details", Text, nullable=False, default=""),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
