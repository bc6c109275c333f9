"""Events Service models."""

import uuid
from datetime import date as dt_date
from datetime import datetime
from datetime import time as dt_time
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import (
    Computed,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TSVECTOR, UUID
from sqlalchemy.orm import Mapped, mapped_column

# Text-search configuration shared by the stored document and search queries
SEARCH_CONFIG = "english"

DOCUMENT_EXPRESSION = (
    f"to_tsvector('{SEARCH_CONFIG}', "
    "coalesce(title, '') || ' ' || "
    "coalesce(description, '') || ' ' || "
    "coalesce(location, ''))"
)


class Event(Base):
    """Something people can RSVP to."""

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_document", "document", postgresql_using="gin"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    date: Mapped[dt_date] = mapped_column(Date, nullable=False)
    time: Mapped[dt_time] = mapped_column(Time, nullable=False)
    rsvp_end_date: Mapped[dt_date] = mapped_column(Date, nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id"), nullable=False
    )

    # Generated by Postgres, only ever read by search queries
    document: Mapped[Optional[str]] = mapped_column(
        TSVECTOR, Computed(DOCUMENT_EXPRESSION, persisted=True), deferred=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Event {self.slug}>"


class RSVP(Base):
    """An account's RSVP to an event."""

    __tablename__ = "rsvps"
    __table_args__ = (UniqueConstraint("event_id", "account_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<RSVP event={self.event_id} account={self.account_id}>"
