"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2025-01-06

Schema:
- restaurant: calendar-relevant slice of a restaurant (hours, open days, owner)
- dining_table: tables with section and capacity
- reservation: reservations with a generated tsrange slot
- schedule_exception: blackout windows with a generated daterange period

Both overlap rules are enforced by gist exclusion constraints (btree_gist
provides '=' on text columns inside gist indexes).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import DATERANGE, TSRANGE, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')

    op.create_table(
        'restaurant',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('owner_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('days_open', sa.ARRAY(sa.String(length=9)), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_restaurant_owner_id'), 'restaurant', ['owner_id'])

    op.create_table(
        'dining_table',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('section_id', sa.String(length=64), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('label', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurant.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_dining_table_restaurant_id'), 'dining_table', ['restaurant_id'])

    op.create_table(
        'reservation',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('table_id', sa.String(length=64), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.Column('number_of_guests', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column(
            'slot',
            TSRANGE(),
            sa.Computed(
                "tsrange(reservation_date + reservation_time, "
                "reservation_date + reservation_time + duration_minutes * interval '1 minute', '[)')",
                persisted=True,
            ),
        ),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurant.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['table_id'], ['dining_table.id'], ondelete='CASCADE'),
        sa.CheckConstraint('number_of_guests >= 1', name='reservation_guests_positive'),
        sa.CheckConstraint('duration_minutes > 0', name='reservation_duration_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reservation_restaurant_id'), 'reservation', ['restaurant_id'])
    op.create_index(op.f('ix_reservation_user_id'), 'reservation', ['user_id'])
    op.create_index('ix_reservation_table_date', 'reservation', ['table_id', 'reservation_date'])
    op.execute(
        """
        ALTER TABLE reservation
        ADD CONSTRAINT reservation_table_slot_no_overlap
        EXCLUDE USING gist (table_id WITH =, slot WITH &&)
        WHERE (status <> 'CANCELLED')
        """
    )

    op.create_table(
        'schedule_exception',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column(
            'period',
            DATERANGE(),
            sa.Computed("daterange(start_date, end_date, '[]')", persisted=True),
        ),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurant.id'], ondelete='CASCADE'),
        sa.CheckConstraint('start_date <= end_date', name='schedule_exception_range_valid'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_schedule_exception_restaurant_id'), 'schedule_exception', ['restaurant_id']
    )
    op.execute(
        """
        ALTER TABLE schedule_exception
        ADD CONSTRAINT schedule_exception_no_overlap
        EXCLUDE USING gist (restaurant_id WITH =, period WITH &&)
        """
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('schedule_exception')
    op.drop_table('reservation')
    op.drop_table('dining_table')
    op.drop_table('restaurant')
