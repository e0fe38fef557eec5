from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from batch_intake.adapters.doms import DomsAPIError, PidGeneratorClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from batch_intake.adapters.http_resilience import ResilientClient
    from batch_intake.config import RepositoryConfig, ResilienceConfig

    FactoryBuilder = Callable[
        [Callable[[httpx.Request], httpx.Response]],
        Callable[[ResilienceConfig], ResilientClient],
    ]


def test_generate_identifier_requests_namespace(
    repository_config: RepositoryConfig,
    make_client_factory: FactoryBuilder,
) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text="uuid:0b7b5a1e-4c4f-4f0e-9a53-3f3f2d8f1c11\n")

    client = PidGeneratorClient(
        config=repository_config,
        client_factory=make_client_factory(handler),
    )

    assert client.generate_identifier() == "uuid:0b7b5a1e-4c4f-4f0e-9a53-3f3f2d8f1c11"
    [request] = requests
    assert request.method == "GET"
    assert str(request.url) == (
        "http://pidgen.example/pidgenerator-service/rest/pids/generatePid/uuid"
    )
    assert "Authorization" not in request.headers


@pytest.mark.parametrize(
    ("response", "message"),
    [
        (httpx.Response(503), "returned 503"),
        (httpx.Response(200, text="  "), "empty identifier"),
    ],
)
def test_generate_identifier_failures(
    response: httpx.Response,
    message: str,
    repository_config: RepositoryConfig,
    make_client_factory: FactoryBuilder,
) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return response

    client = PidGeneratorClient(
        config=repository_config,
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(DomsAPIError, match=message):
        client.generate_identifier()


def test_generate_identifier_transport_error(
    repository_config: RepositoryConfig,
    make_client_factory: FactoryBuilder,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = PidGeneratorClient(
        config=repository_config,
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(DomsAPIError, match="PID generator request failed"):
        client.generate_identifier()
