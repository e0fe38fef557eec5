"""DOMS event repository adapter."""

from __future__ import annotations

from .client import DomsAPIError, DomsClient
from .gateway import DomsEventRepository
from .identifiers import PidGeneratorClient

__all__ = [
    "DomsAPIError",
    "DomsClient",
    "DomsEventRepository",
    "PidGeneratorClient",
]
