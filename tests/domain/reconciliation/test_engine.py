from __future__ import annotations

from datetime import UTC, datetime

import pytest

from batch_intake.domain.model import Event, EventKind, Roundtrip
from batch_intake.domain.reconciliation import DiagnosticReason, reconcile

NOW = datetime(2024, 5, 17, 9, 30, tzinfo=UTC)
AGENT = "batch-intake-test"


def _approved(number: int) -> Roundtrip:
    return Roundtrip(
        number,
        (
            Event(event_id=EventKind.DATA_RECEIVED, success=True),
            Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=True),
        ),
    )


def _summary(plan: object) -> list[tuple[int, EventKind, bool]]:
    return [
        (registration.round_trip_number, registration.event_kind, registration.success)
        for registration in plan  # type: ignore[attr-defined]
    ]


@pytest.mark.parametrize("existing", [[], None, ()])
def test_empty_batch_registers_only_data_received(existing: list[Roundtrip] | None) -> None:
    plan = reconcile("B1", 1, AGENT, existing, NOW)

    assert _summary(plan) == [(1, EventKind.DATA_RECEIVED, True)]
    assert plan.registrations[0].details == ""
    assert plan.activates_new_round_trip


def test_older_roundtrip_is_stopped_when_newer_arrives() -> None:
    plan = reconcile("B1", 2, AGENT, [Roundtrip(1)], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, True),
        (1, EventKind.MANUALLY_STOPPED, True),
    ]
    assert plan.registrations[0].details == ""
    assert plan.registrations[1].details == (
        "Newer roundtrip (2) has been received, so this batch should be stopped"
    )
    assert plan.stopped_round_trips == (1,)


def test_approved_older_roundtrip_stops_new_roundtrip() -> None:
    plan = reconcile("B1", 2, AGENT, [_approved(1)], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, True),
        (2, EventKind.MANUALLY_STOPPED, True),
    ]
    assert plan.registrations[0].details == (
        "Roundtrip (1) is already approved, so this roundtrip (2) should not be triggered here\n"
    )
    assert plan.registrations[1].details == (
        "Another Roundtrip is already approved, so this batch should be stopped"
    )
    assert plan.already_approved
    assert not plan.activates_new_round_trip


def test_newer_roundtrip_marks_new_registration_failed() -> None:
    plan = reconcile("B1", 2, AGENT, [Roundtrip(3)], NOW)

    assert _summary(plan) == [(2, EventKind.DATA_RECEIVED, False)]
    assert plan.registrations[0].details == (
        "Roundtrip (3) is newer than this roundtrip (2), so this roundtrip will not be triggered here\n"
    )
    assert plan.newer_round_trip_received
    assert plan.stopped_round_trips == ()


def test_newer_roundtrip_touches_no_other_roundtrips() -> None:
    plan = reconcile("B1", 3, AGENT, [Roundtrip(1), Roundtrip(2), Roundtrip(5)], NOW)

    assert _summary(plan) == [(3, EventKind.DATA_RECEIVED, False)]


def test_all_other_roundtrips_are_stopped_in_scan_order() -> None:
    existing = [Roundtrip(3), Roundtrip(1), Roundtrip(4), Roundtrip(2)]

    plan = reconcile("B1", 4, AGENT, existing, NOW)

    assert _summary(plan) == [
        (4, EventKind.DATA_RECEIVED, True),
        (3, EventKind.MANUALLY_STOPPED, True),
        (1, EventKind.MANUALLY_STOPPED, True),
        (2, EventKind.MANUALLY_STOPPED, True),
    ]


def test_already_stopped_roundtrips_are_stopped_again() -> None:
    stopped = Roundtrip(1, (Event(event_id=EventKind.MANUALLY_STOPPED, success=True),))

    plan = reconcile("B1", 2, AGENT, [stopped], NOW)

    assert plan.stopped_round_trips == (1,)


def test_reregistering_an_approved_roundtrip_stops_it() -> None:
    plan = reconcile("B1", 2, AGENT, [Roundtrip(1), _approved(2)], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, True),
        (2, EventKind.MANUALLY_STOPPED, True),
    ]


def test_same_number_without_approval_is_not_stopped() -> None:
    plan = reconcile("B1", 2, AGENT, [Roundtrip(1), Roundtrip(2)], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, True),
        (1, EventKind.MANUALLY_STOPPED, True),
    ]


def test_newer_and_approved_roundtrip_reports_both_and_stops_new() -> None:
    plan = reconcile("B1", 2, AGENT, [_approved(3)], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, False),
        (2, EventKind.MANUALLY_STOPPED, True),
    ]
    assert [d.reason for d in plan.registrations[0].diagnostics] == [
        DiagnosticReason.NEWER_ROUNDTRIP_EXISTS,
        DiagnosticReason.ROUNDTRIP_APPROVED,
    ]
    assert plan.registrations[0].details.splitlines() == [
        "Roundtrip (3) is newer than this roundtrip (2), so this roundtrip will not be triggered here",
        "Roundtrip (3) is already approved, so this roundtrip (2) should not be triggered here",
    ]


def test_diagnostics_accumulate_across_roundtrips() -> None:
    plan = reconcile("B1", 2, AGENT, [_approved(1), Roundtrip(4), Roundtrip(5)], NOW)

    assert [(d.reason, d.round_trip_number) for d in plan.registrations[0].diagnostics] == [
        (DiagnosticReason.ROUNDTRIP_APPROVED, 1),
        (DiagnosticReason.NEWER_ROUNDTRIP_EXISTS, 4),
        (DiagnosticReason.NEWER_ROUNDTRIP_EXISTS, 5),
    ]
    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, False),
        (2, EventKind.MANUALLY_STOPPED, True),
    ]


def test_failed_approval_does_not_stop_new_roundtrip() -> None:
    rejected = Roundtrip(1, (Event(event_id=EventKind.ROUNDTRIP_APPROVED, success=False),))

    plan = reconcile("B1", 2, AGENT, [rejected], NOW)

    assert _summary(plan) == [
        (2, EventKind.DATA_RECEIVED, True),
        (1, EventKind.MANUALLY_STOPPED, True),
    ]


def test_every_registration_carries_provenance() -> None:
    plan = reconcile("B7", 3, AGENT, [Roundtrip(1), Roundtrip(2)], NOW)

    assert {r.batch_id for r in plan} == {"B7"}
    assert {r.agent for r in plan} == {AGENT}
    assert {r.timestamp for r in plan} == {NOW}


def test_reconcile_is_deterministic() -> None:
    existing = [Roundtrip(1), _approved(3), Roundtrip(2)]

    first = reconcile("B1", 2, AGENT, existing, NOW)
    second = reconcile("B1", 2, AGENT, existing, NOW)

    assert first == second
    assert list(first) == list(second)


def test_reconcile_accepts_generators() -> None:
    plan = reconcile("B1", 3, AGENT, (Roundtrip(n) for n in (1, 2)), NOW)

    assert plan.stopped_round_trips == (1, 2)
    assert len(plan) == 3
