"""Client for the identifier (PID) generator service."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from batch_intake.adapters.http_resilience import ResilientClient

from .client import DomsAPIError

if TYPE_CHECKING:
    from collections.abc import Callable

    from batch_intake.config.http_resilience import ResilienceConfig
    from batch_intake.config.repository import RepositoryConfig

log = getLogger(__name__)


class PidGeneratorClient:
    """Mint object identifiers from the PID generator web service."""

    def __init__(
        self,
        *,
        config: RepositoryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._namespace = config.identifier_namespace
        self._resilience = config.identifier_resilience()
        self._client_factory = client_factory or ResilientClient

    def generate_identifier(self) -> str:
        return asyncio.run(self._generate_identifier_async())

    async def _generate_identifier_async(self) -> str:
        path = f"generatePid/{quote(self._namespace, safe='')}"
        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.get(path, headers={"Accept": "text/plain"})
        except httpx.HTTPError as exc:
            raise DomsAPIError(f"PID generator request failed: {exc}") from exc

        if not response.is_success:
            raise DomsAPIError(
                f"PID generator returned {response.status_code}",
                status_code=response.status_code,
            )
        pid = response.text.strip()
        if not pid:
            raise DomsAPIError("PID generator returned an empty identifier")
        log.debug("Minted identifier %s", pid)
        return pid
