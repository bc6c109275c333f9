"""Pydantic schemas for Events Service."""

import enum
import uuid
from datetime import date as dt_date
from datetime import datetime
from datetime import time as dt_time
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class EventLookupKey(str, enum.Enum):
    """Unique column a single-event lookup filters by."""

    ID = "id"
    SLUG = "slug"


class EventBase(BaseModel):
    """Base event schema."""

    title: str
    slug: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: dt_date
    time: dt_time
    rsvp_end_date: dt_date
    created_by: uuid.UUID


class EventCreate(EventBase):
    """Schema for creating an event."""

    pass


class EventUpdate(BaseModel):
    """Schema for updating an event. Only fields that are set get written."""

    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[dt_date] = None
    time: Optional[dt_time] = None
    rsvp_end_date: Optional[dt_date] = None
    created_by: Optional[uuid.UUID] = None

    @field_validator("title", "slug", "date", "time", "rsvp_end_date", "created_by")
    @classmethod
    def reject_null(cls, v):
        # Defaults are not validated, so this only sees values the caller sent
        if v is None:
            raise ValueError("may be omitted but not set to null")
        return v


class EventResponse(EventBase):
    """Event response schema."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class EventsFilter(BaseModel):
    """
    Optional filter fields for listing events.

    Equality fields match the column exactly; the ``_gt``/``_gte``/``_lt``/``_lte``
    fields bound ``date`` and ``rsvp_end_date``; ``q`` is a free-text search
    over title, description and location.
    """

    location: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt_date] = None
    rsvp_end_date: Optional[dt_date] = None

    date_gt: Optional[dt_date] = None
    date_gte: Optional[dt_date] = None
    date_lt: Optional[dt_date] = None
    date_lte: Optional[dt_date] = None

    rsvp_end_date_gt: Optional[dt_date] = None
    rsvp_end_date_gte: Optional[dt_date] = None
    rsvp_end_date_lt: Optional[dt_date] = None
    rsvp_end_date_lte: Optional[dt_date] = None

    q: Optional[str] = None


class AttendeeResponse(BaseModel):
    """An RSVP joined to the account that made it."""

    rsvp_id: uuid.UUID
    event_id: uuid.UUID
    account_id: uuid.UUID
    rsvp_created_at: datetime
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)
