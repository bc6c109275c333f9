"""create_accounts_events_rsvps

Revision ID: 3f9c2a7d1b4e
Revises:
Create Date: 2026-10-18 09:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import TSVECTOR, UUID


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b4e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DOCUMENT_EXPRESSION = (
    "to_tsvector('english', "
    "coalesce(title, '') || ' ' || "
    "coalesce(description, '') || ' ' || "
    "coalesce(location, ''))"
)


def upgrade() -> None:
    """Upgrade schema - Add accounts, events and rsvps tables."""

    op.create_table(
        'accounts',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_accounts'),
    )
    op.create_index('ix_accounts_email', 'accounts', ['email'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('rsvp_end_date', sa.Date(), nullable=False),
        sa.Column('created_by', UUID(as_uuid=True), nullable=False),
        sa.Column(
            'document',
            TSVECTOR(),
            sa.Computed(DOCUMENT_EXPRESSION, persisted=True),
            nullable=True,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['created_by'], ['accounts.id'],
            name='fk_events_created_by_accounts',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_events'),
        sa.UniqueConstraint('slug', name='uq_events_slug'),
    )
    op.create_index(
        'ix_events_document', 'events', ['document'], postgresql_using='gin'
    )

    op.create_table(
        'rsvps',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', UUID(as_uuid=True), nullable=False),
        sa.Column('account_id', UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['event_id'], ['events.id'],
            name='fk_rsvps_event_id_events', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['account_id'], ['accounts.id'],
            name='fk_rsvps_account_id_accounts', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_rsvps'),
        sa.UniqueConstraint('event_id', 'account_id', name='uq_rsvps_event_id'),
    )
    op.create_index('ix_rsvps_event_id', 'rsvps', ['event_id'])


def downgrade() -> None:
    """Downgrade schema - Drop rsvps, events and accounts tables."""
    op.drop_index('ix_rsvps_event_id', table_name='rsvps')
    op.drop_table('rsvps')
    op.drop_index('ix_events_document', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_accounts_email', table_name='accounts')
    op.drop_table('accounts')
