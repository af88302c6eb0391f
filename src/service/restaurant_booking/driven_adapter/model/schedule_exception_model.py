from datetime import date, datetime
from typing import Any, Optional
import uuid

from sqlalchemy import CheckConstraint, Computed, Date, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import DATERANGE, UUID as PG_UUID, ExcludeConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


SCHEDULE_EXCEPTION_NO_OVERLAP_CONSTRAINT = 'schedule_exception_no_overlap'


class ScheduleExceptionModel(Base):
    __tablename__ = 'schedule_exception'
    __table_args__ = (
        ExcludeConstraint(
            ('restaurant_id', '='),
            ('period', '&&'),
            name=SCHEDULE_EXCEPTION_NO_OVERLAP_CONSTRAINT,
            using='gist',
        ),
        CheckConstraint('start_date <= end_date', name='schedule_exception_range_valid'),
    )

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    restaurant_id: Mapped[str] = mapped_column(
        String(64), ForeignKey('restaurant.id', ondelete='CASCADE'), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Inclusive calendar range as a postgres daterange
    period: Mapped[Any] = mapped_column(
        DATERANGE, Computed("daterange(start_date, end_date, '[]')", persisted=True)
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
