"""
Persistence operations for events and their attendees.

Every method issues its query on the session it was given and awaits the
result; nothing is cached and storage errors propagate unchanged. Lookups
that match nothing raise ``EventNotFoundError``.

``filter_events`` and ``get_all`` differ on empty results: an empty filter
result is a valid answer, an empty page is a 404.
"""

import uuid
from typing import Any, Mapping, Union

from libs.common.logging import get_logger
from services.accounts_service.models import Account
from services.accounts_service.resource import AccountNotFoundError
from services.events_service.errors import EventNotFoundError
from services.events_service.filters import compose_filters
from services.events_service.models import RSVP, Event
from services.events_service.schemas import (
    AttendeeResponse,
    EventCreate,
    EventLookupKey,
    EventResponse,
    EventsFilter,
    EventUpdate,
)
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

LOOKUP_COLUMNS = {
    EventLookupKey.ID: Event.id,
    EventLookupKey.SLUG: Event.slug,
}

ATTENDEE_COLUMNS = (
    RSVP.id.label("rsvp_id"),
    RSVP.event_id,
    RSVP.account_id,
    RSVP.created_at.label("rsvp_created_at"),
    Account.email,
    Account.first_name,
    Account.last_name,
)


def _as_uuid(value: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class EventsResource:
    """CRUD, filtering and pagination over the events table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, event_body: Union[EventCreate, Mapping[str, Any]]
    ) -> EventResponse:
        """Insert an event and return it with its generated id."""
        if not isinstance(event_body, EventCreate):
            event_body = EventCreate.model_validate(event_body)

        event = Event(**event_body.model_dump())

        self.db.add(event)
        await self._commit()
        await self.db.refresh(event)

        logger.info("Created event %s (%s)", event.id, event.slug)
        return EventResponse.model_validate(event)

    async def get_event(
        self, lookup_key: Union[EventLookupKey, str], value: Union[str, uuid.UUID]
    ) -> EventResponse:
        """Fetch the single event whose ``lookup_key`` column equals ``value``."""
        lookup_key = EventLookupKey(lookup_key)
        event = await self._find(lookup_key, value)

        if event is None:
            raise EventNotFoundError(
                f"no event with {lookup_key.value} {value} found", 404
            )
        return EventResponse.model_validate(event)

    async def filter_events(
        self, filter_body: Union[EventsFilter, Mapping[str, Any], None]
    ) -> list[EventResponse]:
        """Return every event matching the filter. May be empty."""
        apply_filters = compose_filters(filter_body)
        query = apply_filters(select(Event))

        result = await self.db.execute(query)
        events = result.scalars().all()

        logger.debug("Filter matched %d events", len(events))
        return [EventResponse.model_validate(event) for event in events]

    async def get_all(self, offset: int, limit: int) -> list[EventResponse]:
        """
        Return one page of events in insertion order.

        Raises:
            ValueError: ``offset`` is negative or ``limit`` is not positive.
            EventNotFoundError: the page is empty.
        """
        if offset < 0:
            raise ValueError("offset must not be negative")
        if limit < 1:
            raise ValueError("limit must be positive")

        query = (
            select(Event)
            .order_by(Event.created_at, Event.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        events = result.scalars().all()

        if not events:
            raise EventNotFoundError("no events found that match your query", 404)

        return [EventResponse.model_validate(event) for event in events]

    async def update(
        self,
        update_body: Union[EventUpdate, Mapping[str, Any]],
        event_id: Union[str, uuid.UUID],
    ) -> EventResponse:
        """Apply the fields set in ``update_body`` and return the stored row."""
        if not isinstance(update_body, EventUpdate):
            update_body = EventUpdate.model_validate(update_body)

        event = await self._find(EventLookupKey.ID, event_id)
        if event is None:
            raise EventNotFoundError(f"no event with id {event_id} found", 404)

        # Update only provided fields
        for field, value in update_body.model_dump(exclude_unset=True).items():
            setattr(event, field, value)

        await self._commit()
        await self.db.refresh(event)

        logger.info("Updated event %s", event.id)
        return EventResponse.model_validate(event)

    async def delete(self, event_id: Union[str, uuid.UUID]) -> None:
        """Delete an event; its RSVPs go with it."""
        try:
            key = _as_uuid(event_id)
        except ValueError:
            raise EventNotFoundError(f"no event with id {event_id} found", 404) from None

        try:
            result = await self.db.execute(delete(Event).where(Event.id == key))
        except Exception:
            await self.db.rollback()
            raise
        await self._commit()

        if not result.rowcount:
            raise EventNotFoundError(f"no event with id {event_id} found", 404)
        logger.info("Deleted event %s", key)

    async def get_attendees(
        self, event_id: Union[str, uuid.UUID]
    ) -> list[AttendeeResponse]:
        """Return the event's RSVPs joined to the accounts that made them."""
        try:
            key = _as_uuid(event_id)
        except ValueError:
            return []

        query = (
            select(*ATTENDEE_COLUMNS)
            .join(Account, Account.id == RSVP.account_id)
            .where(RSVP.event_id == key)
            .order_by(RSVP.created_at)
        )
        result = await self.db.execute(query)
        return [AttendeeResponse.model_validate(dict(row)) for row in result.mappings()]

    async def add_rsvp(
        self, event_id: Union[str, uuid.UUID], account_id: Union[str, uuid.UUID]
    ) -> AttendeeResponse:
        """
        Register ``account_id`` as attending ``event_id``.

        Raises:
            EventNotFoundError: no event has ``event_id``.
            AccountNotFoundError: ``account_id`` is not a UUID.
        """
        try:
            account_key = _as_uuid(account_id)
        except ValueError:
            raise AccountNotFoundError(
                f"no account with id {account_id} found", 404
            ) from None

        event = await self._find(EventLookupKey.ID, event_id)
        if event is None:
            raise EventNotFoundError(f"no event with id {event_id} found", 404)

        rsvp_id = uuid.uuid4()
        event_key = event.id

        self.db.add(RSVP(id=rsvp_id, event_id=event_key, account_id=account_key))
        await self._commit()

        result = await self.db.execute(
            select(*ATTENDEE_COLUMNS)
            .join(Account, Account.id == RSVP.account_id)
            .where(RSVP.id == rsvp_id)
        )
        logger.info("Account %s RSVPed to event %s", account_key, event_key)
        return AttendeeResponse.model_validate(dict(result.mappings().one()))

    async def _commit(self) -> None:
        # A failed flush leaves the session unusable until it is rolled back
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _find(
        self, lookup_key: EventLookupKey, value: Union[str, uuid.UUID]
    ) -> Union[Event, None]:
        if lookup_key is EventLookupKey.ID:
            try:
                value = _as_uuid(value)
            except ValueError:
                # Not a UUID, so it cannot be any event's id
                return None
        else:
            value = str(value)

        column = LOOKUP_COLUMNS[lookup_key]
        result = await self.db.execute(select(Event).where(column == value).limit(1))
        return result.scalars().first()
