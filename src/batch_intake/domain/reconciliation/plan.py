"""Registration plan types produced by the reconciliation engine.

The plan is the contract between the pure engine and whatever applies it to a
repository. Diagnostics stay structured until ``EventRegistration.details``
renders them, so the engine never deals with text layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from batch_intake.domain.model import EventKind

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime


class DiagnosticReason(StrEnum):
    """Why the engine held back or stopped a roundtrip."""

    NEWER_ROUNDTRIP_EXISTS = "newer_roundtrip_exists"
    ROUNDTRIP_APPROVED = "roundtrip_approved"
    STOPPED_BY_APPROVAL = "stopped_by_approval"
    STOPPED_BY_NEWER_ROUNDTRIP = "stopped_by_newer_roundtrip"


_MESSAGES: Final[dict[DiagnosticReason, str]] = {
    DiagnosticReason.NEWER_ROUNDTRIP_EXISTS: (
        "Roundtrip ({subject}) is newer than this roundtrip ({new}), "
        "so this roundtrip will not be triggered here"
    ),
    DiagnosticReason.ROUNDTRIP_APPROVED: (
        "Roundtrip ({subject}) is already approved, "
        "so this roundtrip ({new}) should not be triggered here"
    ),
    DiagnosticReason.STOPPED_BY_APPROVAL: (
        "Another Roundtrip is already approved, so this batch should be stopped"
    ),
    DiagnosticReason.STOPPED_BY_NEWER_ROUNDTRIP: (
        "Newer roundtrip ({new}) has been received, so this batch should be stopped"
    ),
}


@dataclass(frozen=True, slots=True, kw_only=True)
class Diagnostic:
    """One line of explanation attached to a registration.

    ``round_trip_number`` names the existing roundtrip that triggered the line,
    where there is one.
    """

    reason: DiagnosticReason
    new_round_trip_number: int
    round_trip_number: int | None = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason].format(
            subject=self.round_trip_number,
            new=self.new_round_trip_number,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class EventRegistration:
    """An event the engine wants appended to one roundtrip."""

    batch_id: str
    round_trip_number: int
    event_kind: EventKind
    success: bool
    agent: str
    timestamp: datetime
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def details(self) -> str:
        messages = [diagnostic.message for diagnostic in self.diagnostics]
        # received details are newline-terminated lines; a stop reason is one bare line
        if self.event_kind is EventKind.DATA_RECEIVED:
            return "".join(f"{message}\n" for message in messages)
        return "\n".join(messages)


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistrationPlan:
    """Ordered registrations for one reconciliation run."""

    batch_id: str
    new_round_trip_number: int
    registrations: tuple[EventRegistration, ...]
    newer_round_trip_received: bool = False
    already_approved: bool = False

    def __iter__(self) -> Iterator[EventRegistration]:
        return iter(self.registrations)

    def __len__(self) -> int:
        return len(self.registrations)

    @property
    def activates_new_round_trip(self) -> bool:
        """Whether the new roundtrip ends up received and not stopped."""

        return not (self.newer_round_trip_received or self.already_approved)

    @property
    def stopped_round_trips(self) -> tuple[int, ...]:
        return tuple(
            registration.round_trip_number
            for registration in self.registrations
            if registration.event_kind is EventKind.MANUALLY_STOPPED
        )
