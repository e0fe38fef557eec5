"""Apply a registration plan through a repository port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from batch_intake.domain.ports import CommunicationError

if TYPE_CHECKING:
    from batch_intake.domain.ports import RoundtripRepository

    from .plan import RegistrationPlan

log = getLogger(__name__)


def apply_plan(plan: RegistrationPlan, repository: RoundtripRepository) -> int:
    """Append every registration of ``plan`` in order and return how many were applied.

    The first failure aborts the run. Events appended before it stay in place.
    """

    applied = 0
    for registration in plan:
        try:
            repository.append_event(
                registration.batch_id,
                registration.round_trip_number,
                registration.agent,
                registration.timestamp,
                registration.details,
                registration.event_kind.value,
                registration.success,
            )
        except CommunicationError:
            log.error(
                "Registering %s on batch '%s' roundtrip %s failed after %s of %s events",
                registration.event_kind,
                registration.batch_id,
                registration.round_trip_number,
                applied,
                len(plan),
            )
            raise
        applied += 1
    return applied
