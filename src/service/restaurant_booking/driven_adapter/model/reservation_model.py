from datetime import date, datetime, time
from typing import Any
import uuid

from sqlalchemy import (
    CheckConstraint,
    Computed,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    text,
)
from sqlalchemy.dialects.postgresql import TSRANGE, UUID as PG_UUID, ExcludeConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


RESERVATION_NO_OVERLAP_CONSTRAINT = 'reservation_table_slot_no_overlap'


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (
        # Two active reservations of one table never share an instant
        ExcludeConstraint(
            ('table_id', '='),
            ('slot', '&&'),
            name=RESERVATION_NO_OVERLAP_CONSTRAINT,
            using='gist',
            where=text("status <> 'CANCELLED'"),
        ),
        CheckConstraint('number_of_guests >= 1', name='reservation_guests_positive'),
        CheckConstraint('duration_minutes > 0', name='reservation_duration_positive'),
        Index('ix_reservation_table_date', 'table_id', 'reservation_date'),
    )

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    restaurant_id: Mapped[str] = mapped_column(
        String(64), ForeignKey('restaurant.id', ondelete='CASCADE'), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    table_id: Mapped[str] = mapped_column(
        String(64), ForeignKey('dining_table.id', ondelete='CASCADE'), nullable=False
    )
    reservation_date: Mapped[date] = mapped_column(Date, nullable=False)
    reservation_time: Mapped[time] = mapped_column(Time, nullable=False)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default='PENDING')
    # [start, start + duration) derived by postgres, never written by the app
    slot: Mapped[Any] = mapped_column(
        TSRANGE,
        Computed(
            "tsrange(reservation_date + reservation_time, "
            "reservation_date + reservation_time + duration_minutes * interval '1 minute', '[)')",
            persisted=True,
        ),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
