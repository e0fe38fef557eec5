"""Errors raised while building repository and endpoint settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """An endpoint URL or credential cannot be used as given."""


class MissingConfigurationError(ConfigurationError):
    """A required endpoint URL or credential is absent or blank."""
