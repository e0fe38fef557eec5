"""Roundtrip repository backed by the DOMS HTTP API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .client import DomsAPIError, DomsClient
from .identifiers import PidGeneratorClient
from .translator import event_payload, translate_roundtrip

if TYPE_CHECKING:
    from datetime import datetime

    from batch_intake.config.repository import RepositoryConfig
    from batch_intake.domain.model import Roundtrip
    from batch_intake.domain.ports import IdentifierGenerator

log = getLogger(__name__)


class DomsEventRepository:
    """Read roundtrips from DOMS and append events, creating roundtrip objects on demand."""

    def __init__(
        self,
        *,
        config: RepositoryConfig,
        client: DomsClient | None = None,
        identifiers: IdentifierGenerator | None = None,
    ) -> None:
        self._client = client or DomsClient(config=config)
        self._identifiers = identifiers or PidGeneratorClient(config=config)

    def fetch_roundtrips(self, batch_id: str) -> list[Roundtrip]:
        response = self._client.list_roundtrips(batch_id)
        if response is None:
            return []
        return [translate_roundtrip(payload, batch_id=batch_id) for payload in response.roundtrips]

    def append_event(
        self,
        batch_id: str,
        round_trip_number: int,
        agent: str,
        timestamp: datetime,
        details: str,
        event_kind: str,
        success: bool,  # noqa: FBT001
    ) -> None:
        payload = event_payload(
            event_kind=event_kind,
            success=success,
            timestamp=timestamp,
            agent=agent,
            details=details,
        )
        if self._client.add_event(batch_id, round_trip_number, payload):
            return

        pid = self._identifiers.generate_identifier()
        log.info(
            "Creating object %s for batch '%s' roundtrip %s", pid, batch_id, round_trip_number
        )
        self._client.create_roundtrip(batch_id, round_trip_number, pid)
        if not self._client.add_event(batch_id, round_trip_number, payload):
            raise DomsAPIError(
                f"Roundtrip {round_trip_number} of batch '{batch_id}' missing after creation"
            )

    def close(self) -> None:
        """Nothing to release; HTTP clients are scoped to each call."""
