"""Approval checks over roundtrip event histories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from batch_intake.domain.model import EventKind

if TYPE_CHECKING:
    from batch_intake.domain.model import Roundtrip


def is_approved(roundtrip: Roundtrip) -> bool:
    """Return whether ``roundtrip`` carries a successful approval event."""

    return any(
        event.event_id == EventKind.ROUNDTRIP_APPROVED and event.success is True
        for event in roundtrip.events
    )
