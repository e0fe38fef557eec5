"""DOMS event repository payload schemas."""

from __future__ import annotations

import logging
from datetime import datetime  # noqa: TC003
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class DomsBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[tuple[str, str]]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        model_name = type(self).__name__
        new_keys = {key for key in extras if (model_name, key) not in self._logged_extra_keys}
        if not new_keys:
            return
        self._logged_extra_keys.update((model_name, key) for key in new_keys)
        log.debug(
            "DOMS %s: unmodeled keys: %s",
            model_name,
            ", ".join(sorted(new_keys)),
        )


class EventPayload(DomsBaseModel):
    event_id: str = Field(alias="eventID")
    success: bool
    date: datetime | None = None
    agent: str | None = None
    details: str | None = None


class RoundtripPayload(DomsBaseModel):
    round_trip_number: int = Field(alias="roundTripNumber", ge=1)
    pid: str | None = None
    events: list[EventPayload] = Field(default_factory=list["EventPayload"])


class RoundtripListResponse(DomsBaseModel):
    roundtrips: list[RoundtripPayload] = Field(default_factory=list["RoundtripPayload"])


class CreateRoundtripRequest(DomsBaseModel):
    pid: str
