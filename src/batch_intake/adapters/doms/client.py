"""HTTP client for the DOMS event repository."""

from __future__ import annotations

import asyncio
from http import HTTPStatus
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from batch_intake.adapters.http_resilience import ResilientClient
from batch_intake.domain.ports import CommunicationError

from .schema import CreateRoundtripRequest, RoundtripListResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from batch_intake.config.http_resilience import ResilienceConfig
    from batch_intake.config.repository import RepositoryConfig

    from .schema import EventPayload

log = getLogger(__name__)


class DomsAPIError(CommunicationError):
    """Raised when the repository answers with an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _roundtrip_path(batch_id: str, round_trip_number: int) -> str:
    return f"batches/{quote(batch_id, safe='')}/roundtrips/{round_trip_number}"


class DomsClient:
    """Low-level HTTP client for the DOMS event repository."""

    def __init__(
        self,
        *,
        config: RepositoryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def list_roundtrips(self, batch_id: str) -> RoundtripListResponse | None:
        """Return every roundtrip of ``batch_id``, or ``None`` if the batch is unknown."""

        return asyncio.run(self._list_roundtrips_async(batch_id))

    def add_event(self, batch_id: str, round_trip_number: int, event: EventPayload) -> bool:
        """Append ``event``; returns ``False`` when the roundtrip object does not exist."""

        return asyncio.run(self._add_event_async(batch_id, round_trip_number, event))

    def create_roundtrip(self, batch_id: str, round_trip_number: int, pid: str) -> None:
        asyncio.run(self._create_roundtrip_async(batch_id, round_trip_number, pid))

    async def _list_roundtrips_async(self, batch_id: str) -> RoundtripListResponse | None:
        path = f"batches/{quote(batch_id, safe='')}/roundtrips"
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client, "GET", path)
        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        self._raise_for_status(response)

        try:
            return RoundtripListResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise DomsAPIError(
                f"Unexpected roundtrip listing for batch '{batch_id}': {exc}",
                status_code=response.status_code,
            ) from exc

    async def _add_event_async(
        self,
        batch_id: str,
        round_trip_number: int,
        event: EventPayload,
    ) -> bool:
        path = f"{_roundtrip_path(batch_id, round_trip_number)}/events"
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client,
                "POST",
                path,
                json=event.model_dump(mode="json", by_alias=True),
            )
        if response.status_code == HTTPStatus.NOT_FOUND:
            return False
        self._raise_for_status(response)
        return True

    async def _create_roundtrip_async(
        self,
        batch_id: str,
        round_trip_number: int,
        pid: str,
    ) -> None:
        body = CreateRoundtripRequest(pid=pid)
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client,
                "PUT",
                _roundtrip_path(batch_id, round_trip_number),
                json=body.model_dump(mode="json", by_alias=True),
            )
        self._raise_for_status(response)

    async def _perform_request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object | None = None,
    ) -> httpx.Response:
        if self._resilience.base_url is None:
            raise DomsAPIError("Missing DOMS base_url in resilience configuration")
        try:
            if json is None:
                return await client.request(method, path)
            return await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            log.error("DOMS %s %s failed: %s", method, path, exc)
            raise DomsAPIError(f"DOMS {method} {path} failed: {exc}") from exc

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        request = response.request
        raise DomsAPIError(
            f"DOMS {request.method} {request.url} returned {response.status_code}",
            status_code=response.status_code,
        )
