"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EventKind(StrEnum):
    """Event identifiers with meaning to the reconciliation engine."""

    DATA_RECEIVED = "Data_Received"
    ROUNDTRIP_APPROVED = "Roundtrip_Approved"
    MANUALLY_STOPPED = "Manually_stopped"
