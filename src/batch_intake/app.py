"""Application orchestration entry points."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from batch_intake.adapters.doms import DomsEventRepository, PidGeneratorClient
from batch_intake.adapters.sqlalchemy import SqlAlchemyEventRepository, create_all_tables
from batch_intake.config import ConfigurationError
from batch_intake.domain.ports import CommunicationError
from batch_intake.domain.reconciliation import DiagnosticReason, apply_plan, reconcile

if TYPE_CHECKING:
    from batch_intake.config import RepositoryConfig
    from batch_intake.domain.ports import ClosableRoundtripRepository, RoundtripRepository
    from batch_intake.domain.reconciliation import RegistrationPlan


log = getLogger(__name__)


def build_repository(config: RepositoryConfig) -> ClosableRoundtripRepository:
    """Pick the repository adapter matching the configured endpoint URL.

    ``http``/``https`` endpoints talk to DOMS; anything else is taken as a
    SQLAlchemy database URL, with the configured credentials filled in where
    a server database URL carries none.
    """

    if config.is_http:
        return DomsEventRepository(config=config)

    try:
        url = make_url(config.endpoint_url)
        if url.username is None and config.username and url.get_backend_name() != "sqlite":
            url = url.set(username=config.username, password=config.password or None)
        engine = create_engine(url)
    except ArgumentError as exc:
        raise ConfigurationError(f"Unsupported repository endpoint: {config.endpoint_url}") from exc

    try:
        create_all_tables(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise CommunicationError(f"Preparing event store {url!r} failed") from exc
    return SqlAlchemyEventRepository(
        engine,
        identifiers=PidGeneratorClient(config=config),
        dispose_on_close=True,
    )


def register_batch_received(
    *,
    batch_id: str,
    round_trip_number: int,
    agent: str,
    repository: RoundtripRepository | None = None,
    config: RepositoryConfig | None = None,
    now: datetime | None = None,
) -> RegistrationPlan:
    """Register ``round_trip_number`` of ``batch_id`` as received and stop what it supersedes."""

    if round_trip_number < 1:
        raise ValueError(f"Roundtrip number must be positive, got {round_trip_number}")

    owned: ClosableRoundtripRepository | None = None
    if repository is None:
        if config is None:
            raise ConfigurationError("Either a repository or a repository config is required")
        owned = build_repository(config)
        repository = owned

    timestamp = now or datetime.now(UTC)
    log.info(
        "Registering batch '%s' roundtrip %s received by %s", batch_id, round_trip_number, agent
    )
    try:
        roundtrips = repository.fetch_roundtrips(batch_id)
        plan = reconcile(batch_id, round_trip_number, agent, roundtrips, timestamp)
        _log_plan(plan)
        applied = apply_plan(plan, repository)
    finally:
        if owned is not None:
            owned.close()

    log.info(
        "Finished batch '%s' roundtrip %s: events=%s, active=%s, stopped=%s",
        batch_id,
        round_trip_number,
        applied,
        plan.activates_new_round_trip,
        list(plan.stopped_round_trips),
    )
    return plan


def _log_plan(plan: RegistrationPlan) -> None:
    batch_id = plan.batch_id
    new_number = plan.new_round_trip_number
    for registration in plan:
        for diagnostic in registration.diagnostics:
            if diagnostic.reason is DiagnosticReason.NEWER_ROUNDTRIP_EXISTS:
                log.warning(
                    "Not adding new batch '%s' roundtrip %s because a newer roundtrip %s exists",
                    batch_id,
                    new_number,
                    diagnostic.round_trip_number,
                )
            elif diagnostic.reason is DiagnosticReason.ROUNDTRIP_APPROVED:
                log.warning(
                    "Stopping batch '%s' roundtrip %s because roundtrip %s is already approved",
                    batch_id,
                    new_number,
                    diagnostic.round_trip_number,
                )
            elif diagnostic.reason is DiagnosticReason.STOPPED_BY_NEWER_ROUNDTRIP:
                log.warning(
                    "Stopping processing of batch '%s' roundtrip %s because a newer "
                    "roundtrip %s was received",
                    batch_id,
                    registration.round_trip_number,
                    new_number,
                )
