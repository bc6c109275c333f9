"""Events Service models package."""

from services.events_service.models.core import RSVP, SEARCH_CONFIG, Event

__all__ = [
    "Event",
    "RSVP",
    "SEARCH_CONFIG",
]
