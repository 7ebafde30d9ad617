from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class FilterRuleName(str, Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


class EventFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: FilterRuleName
    value: str


class EventSubscriptionRequest(BaseModel):
    """An `event_consumers` entry declared on the bucket service.

    `filters=None` and `filters=[]` both mean the notification carries no key filter.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    service_name: Optional[str] = None
    bucket_events: list[str] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("bucket_events", "event_names"),
    )
    filters: Optional[list[EventFilter]] = None

    @field_validator("bucket_events")
    @classmethod
    def _drop_duplicate_events(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))
