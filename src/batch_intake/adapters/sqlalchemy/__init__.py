"""SQLAlchemy adapter package for the local event store."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, roundtrip_event_table, roundtrip_table
from .repositories import SqlAlchemyEventRepository

__all__ = [
    "SqlAlchemyEventRepository",
    "create_all_tables",
    "metadata",
    "roundtrip_event_table",
    "roundtrip_table",
]
