"""Reconciliation of a newly received roundtrip against its batch siblings.

Given every roundtrip already known for a batch, the engine decides whether the
new roundtrip becomes the active one, whether it has to be stopped straight
away, and which of the other roundtrips need stopping as a consequence. It only
builds a plan; ``apply.apply_plan`` performs the writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from batch_intake.domain.approval import is_approved
from batch_intake.domain.model import EventKind

from .plan import Diagnostic, DiagnosticReason, EventRegistration, RegistrationPlan

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from batch_intake.domain.model import Roundtrip


def reconcile(
    batch_id: str,
    new_round_trip_number: int,
    agent: str,
    existing_roundtrips: Iterable[Roundtrip] | None,
    now: datetime,
) -> RegistrationPlan:
    """Compute the registrations needed to receive ``new_round_trip_number``.

    The first registration always marks the new roundtrip as received; it fails
    when a strictly newer roundtrip exists. If any roundtrip is approved (the new
    number included) the new roundtrip is stopped as well. Otherwise, if the new
    roundtrip is the newest, every other roundtrip is stopped.
    """

    roundtrips = tuple(existing_roundtrips or ())
    newer_round_trip_received = False
    already_approved = False
    diagnostics: list[Diagnostic] = []

    for roundtrip in roundtrips:
        number = roundtrip.round_trip_number
        if number > new_round_trip_number:
            newer_round_trip_received = True
            diagnostics.append(
                Diagnostic(
                    reason=DiagnosticReason.NEWER_ROUNDTRIP_EXISTS,
                    round_trip_number=number,
                    new_round_trip_number=new_round_trip_number,
                )
            )
        if is_approved(roundtrip):
            already_approved = True
            diagnostics.append(
                Diagnostic(
                    reason=DiagnosticReason.ROUNDTRIP_APPROVED,
                    round_trip_number=number,
                    new_round_trip_number=new_round_trip_number,
                )
            )

    def register(
        round_trip_number: int,
        event_kind: EventKind,
        *,
        success: bool,
        diagnostics: tuple[Diagnostic, ...],
    ) -> EventRegistration:
        return EventRegistration(
            batch_id=batch_id,
            round_trip_number=round_trip_number,
            event_kind=event_kind,
            success=success,
            agent=agent,
            timestamp=now,
            diagnostics=diagnostics,
        )

    registrations = [
        register(
            new_round_trip_number,
            EventKind.DATA_RECEIVED,
            success=not newer_round_trip_received,
            diagnostics=tuple(diagnostics),
        )
    ]

    if already_approved:
        registrations.append(
            register(
                new_round_trip_number,
                EventKind.MANUALLY_STOPPED,
                success=True,
                diagnostics=(
                    Diagnostic(
                        reason=DiagnosticReason.STOPPED_BY_APPROVAL,
                        new_round_trip_number=new_round_trip_number,
                    ),
                ),
            )
        )
    elif not newer_round_trip_received:
        stop_reason = (
            Diagnostic(
                reason=DiagnosticReason.STOPPED_BY_NEWER_ROUNDTRIP,
                new_round_trip_number=new_round_trip_number,
            ),
        )
        registrations.extend(
            register(
                roundtrip.round_trip_number,
                EventKind.MANUALLY_STOPPED,
                success=True,
                diagnostics=stop_reason,
            )
            for roundtrip in roundtrips
            if roundtrip.round_trip_number != new_round_trip_number
        )

    return RegistrationPlan(
        batch_id=batch_id,
        new_round_trip_number=new_round_trip_number,
        registrations=tuple(registrations),
        newer_round_trip_received=newer_round_trip_received,
        already_approved=already_approved,
    )
