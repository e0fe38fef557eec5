"""Event repository configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_IDENTIFIER_NAMESPACE = "uuid"
REPOSITORY_TIMEOUT_SECONDS = 30.0
HTTP_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class RepositoryConfig:
    """Where the event repository lives and how to authenticate against it."""

    endpoint_url: str
    username: str
    password: str = field(repr=False)
    identifier_service_url: str
    identifier_namespace: str = DEFAULT_IDENTIFIER_NAMESPACE
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(name="repository")
    )

    @property
    def is_http(self) -> bool:
        return urlsplit(self.endpoint_url).scheme.lower() in HTTP_SCHEMES

    def identifier_resilience(self) -> ResilienceConfig:
        """Resilience settings for the identifier service (same limits, no auth)."""

        return ResilienceConfig(
            name="identifiers",
            base_url=self.identifier_service_url.rstrip("/") + "/",
            timeout_seconds=self.resilience.timeout_seconds,
            retry=RetryPolicy(total=self.resilience.retry.total, allowed_methods=frozenset()),
            ratelimit=self.resilience.ratelimit,
        )


def get_repository_config(
    *,
    endpoint_url: str,
    username: str,
    password: str,
    identifier_service_url: str,
    identifier_namespace: str = DEFAULT_IDENTIFIER_NAMESPACE,
    resilience: ResilienceConfig | None = None,
) -> RepositoryConfig:
    values = {
        "repository endpoint URL": endpoint_url,
        "username": username,
        "identifier generator URL": identifier_service_url,
    }
    missing = [name for name, value in values.items() if not value or not value.strip()]
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")

    identifier_scheme = urlsplit(identifier_service_url).scheme.lower()
    if identifier_scheme not in HTTP_SCHEMES:
        raise ConfigurationError(
            f"Identifier generator URL must be http(s), got: {identifier_service_url}"
        )

    endpoint = endpoint_url.strip()
    return RepositoryConfig(
        endpoint_url=endpoint,
        username=username,
        password=password,
        identifier_service_url=identifier_service_url.strip(),
        identifier_namespace=identifier_namespace,
        resilience=resilience
        or ResilienceConfig(
            name="repository",
            base_url=endpoint.rstrip("/") + "/",
            timeout_seconds=REPOSITORY_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            basic_auth=(username, password),
            default_headers={"Accept": "application/json"},
        ),
    )
