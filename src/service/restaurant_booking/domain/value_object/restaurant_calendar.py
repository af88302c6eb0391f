from datetime import date, datetime, time

import attrs

from src.service.restaurant_booking.domain.enum.weekday import Weekday
from src.service.restaurant_booking.domain.value_object.time_window import TimeWindow


def parse_hhmm(value: str | time) -> time:
    """'09:00' -> time(9, 0); seconds are ignored"""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    hour, minute = value.strip().split(':')[:2]
    return time(int(hour), int(minute))


@attrs.frozen
class RestaurantCalendarSnapshot:
    """Operating snapshot of a restaurant as seen by the reservation core"""

    restaurant_id: str
    open_time: time = attrs.field(converter=parse_hhmm)
    close_time: time = attrs.field(converter=parse_hhmm)
    days_open: frozenset[Weekday] = attrs.field(
        converter=lambda days: frozenset(Weekday.parse(str(d)) for d in days)
    )
    active: bool = True
    owner_id: str | None = None

    def is_open_on(self, day: date) -> bool:
        return Weekday.of(day) in self.days_open

    def operating_window(self, day: date) -> TimeWindow:
        return TimeWindow(
            start_at=datetime.combine(day, self.open_time),
            end_at=datetime.combine(day, self.close_time),
        )

    @property
    def has_valid_hours(self) -> bool:
        return self.open_time < self.close_time
