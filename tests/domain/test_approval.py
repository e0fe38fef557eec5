from __future__ import annotations

from batch_intake.domain.approval import is_approved
from batch_intake.domain.model import Event, EventKind, Roundtrip


def test_empty_history_is_not_approved() -> None:
    assert not is_approved(Roundtrip(1))


def test_successful_approval_event_approves() -> None:
    roundtrip = Roundtrip(
        1,
        (
            Event(event_id=EventKind.DATA_RECEIVED, success=True),
            Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=True),
        ),
    )

    assert is_approved(roundtrip)


def test_failed_approval_event_is_ignored() -> None:
    roundtrip = Roundtrip(1, (Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=False),))

    assert not is_approved(roundtrip)


def test_other_successful_events_do_not_approve() -> None:
    roundtrip = Roundtrip(
        1,
        (
            Event(event_id=EventKind.DATA_RECEIVED, success=True),
            Event(event_id=EventKind.MANUALLY_STOPPED, success=True),
            Event(event_id="Metadata_Archived", success=True),
        ),
    )

    assert not is_approved(roundtrip)


def test_approval_position_in_history_does_not_matter() -> None:
    roundtrip = Roundtrip(
        4,
        (
            Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=False),
            Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=True),
            Event(event_id=EventKind.MANUALLY_STOPPED, success=True),
        ),
    )

    assert is_approved(roundtrip)


def test_plain_string_event_id_matches_approval_kind() -> None:
    roundtrip = Roundtrip(1, (Event(event_id="Roundtrip_Approved", success=True),))

    assert is_approved(roundtrip)
