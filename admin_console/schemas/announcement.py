"""Announcement Schemas — banner body as cached, and the admin publish request.

Invariants:
    - Announcement serializes with camelCase keys and ISO-8601 instants, lossless on round trip
    - Naive instants are read as UTC
    - AnnouncementCreate.message: 1-500 chars, stripped, non-empty
    - end_at, when both are given, is after start_at
    - end_at, when given, is in the future at request time
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import (
    AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator,
)
from pydantic.alias_generators import to_camel

from admin_console.core.domain_types import Severity


def _assume_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Announcement(_CamelModel):
    """Banner body stored under announcement:<id>."""
    id: str
    message: str
    severity: Severity
    start_at: UtcDatetime | None = None
    end_at: UtcDatetime | None = None
    created_at: UtcDatetime

    def to_cache(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_cache(cls, payload: str) -> "Announcement":
        return cls.model_validate_json(payload)


class AnnouncementCreate(_CamelModel):
    """Admin publish request."""
    message: str = Field(min_length=1, max_length=500)
    severity: Severity = Severity.INFO
    start_at: UtcDatetime | None = None
    end_at: UtcDatetime | None = None

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("message cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def validate_window(self):
        if self.start_at and self.end_at and self.end_at <= self.start_at:
            raise ValueError("endAt must be after startAt")
        if self.end_at and self.end_at <= datetime.now(timezone.utc):
            raise ValueError("endAt must be in the future")
        return self
