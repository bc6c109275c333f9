"""Events Service schemas package."""

from services.events_service.schemas.main import (
    AttendeeResponse,
    EventBase,
    EventCreate,
    EventLookupKey,
    EventResponse,
    EventsFilter,
    EventUpdate,
)

__all__ = [
    "AttendeeResponse",
    "EventBase",
    "EventCreate",
    "EventLookupKey",
    "EventResponse",
    "EventsFilter",
    "EventUpdate",
]
