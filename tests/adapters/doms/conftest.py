"""Shared fixtures for DOMS adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from batch_intake.adapters.http_resilience import ResilientClient
from batch_intake.config import RepositoryConfig, get_repository_config

if TYPE_CHECKING:
    from collections.abc import Callable

    from batch_intake.config import ResilienceConfig



@pytest.fixture
def repository_config() -> RepositoryConfig:
    return get_repository_config(
        endpoint_url="http://doms.example/fedora",
        username="fedoraAdmin",
        password="secret",
        identifier_service_url="http://pidgen.example/pidgenerator-service/rest/pids",
    )


@pytest.fixture
def make_client_factory() -> Callable[
    [Callable[[httpx.Request], httpx.Response]],
    Callable[[ResilienceConfig], ResilientClient],
]:
    def build(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> Callable[[ResilienceConfig], ResilientClient]:
        def factory(resilience: ResilienceConfig) -> ResilientClient:
            return ResilientClient(resilience, transport=httpx.MockTransport(handler))

        return factory

    return build
