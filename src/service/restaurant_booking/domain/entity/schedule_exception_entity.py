from datetime import date, datetime, timezone
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.domain.reservation_errors import ValidationError
from src.service.restaurant_booking.domain.value_object.time_window import DateRange


def _validate_range(start_date: date, end_date: date) -> None:
    if start_date is None or end_date is None:
        raise ValidationError('start_date and end_date are required')
    if start_date > end_date:
        raise ValidationError('start_date must not be after end_date')


@attrs.define
class ScheduleException:
    """A blackout of whole days during which a restaurant takes no reservations"""

    id: UUID
    restaurant_id: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        restaurant_id: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> 'ScheduleException':
        _validate_range(start_date, end_date)
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            restaurant_id=restaurant_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_at=now,
            updated_at=now,
        )

    @property
    def date_range(self) -> DateRange:
        return DateRange(start_date=self.start_date, end_date=self.end_date)

    def covers(self, day: date) -> bool:
        return self.date_range.covers(day)

    def overlaps(self, other: 'ScheduleException') -> bool:
        return self.date_range.overlaps(other.date_range)

    @Logger.io
    def update(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> 'ScheduleException':
        new_start = start_date or self.start_date
        new_end = end_date or self.end_date
        _validate_range(new_start, new_end)
        return attrs.evolve(
            self,
            start_date=new_start,
            end_date=new_end,
            reason=reason if reason is not None else self.reason,
            updated_at=datetime.now(timezone.utc),
        )
