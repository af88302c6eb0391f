"""
Half-open interval arithmetic shared by the reservation conflict check and the
schedule exception overlap guard.
"""

from datetime import date, datetime, time, timedelta
from typing import Protocol, TypeVar

import attrs


class _Comparable(Protocol):
    def __lt__(self, other: object, /) -> bool: ...


_T = TypeVar('_T', bound=_Comparable)


def intervals_overlap(a_start: _T, a_end: _T, b_start: _T, b_end: _T) -> bool:
    """[a_start, a_end) and [b_start, b_end) share at least one instant.

    Back-to-back intervals (a_end == b_start) do not overlap.
    """
    return a_start < b_end and b_start < a_end


@attrs.frozen
class TimeWindow:
    """Conflict window [start_at, end_at) of a reservation"""

    start_at: datetime
    end_at: datetime

    @classmethod
    def starting_at(cls, *, day: date, at: time, duration_minutes: int) -> 'TimeWindow':
        start_at = datetime.combine(day, at.replace(second=0, microsecond=0))
        return cls(start_at=start_at, end_at=start_at + timedelta(minutes=duration_minutes))

    def overlaps(self, other: 'TimeWindow') -> bool:
        return intervals_overlap(self.start_at, self.end_at, other.start_at, other.end_at)

    def is_within(self, outer: 'TimeWindow') -> bool:
        return outer.start_at <= self.start_at and self.end_at <= outer.end_at


@attrs.frozen
class DateRange:
    """Inclusive calendar range [start_date, end_date] (blackouts are whole days)"""

    start_date: date
    end_date: date

    def overlaps(self, other: 'DateRange') -> bool:
        # Inclusive days become half-open by extending the end by one day
        one_day = timedelta(days=1)
        return intervals_overlap(
            self.start_date, self.end_date + one_day, other.start_date, other.end_date + one_day
        )

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
