"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .repository import RepositoryConfig, get_repository_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RepositoryConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_repository_config",
]
