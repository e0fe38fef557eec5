"""Port for minting repository object identifiers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdentifierGenerator(Protocol):
    """Source of fresh object identifiers for newly registered roundtrips."""

    def generate_identifier(self) -> str: ...
