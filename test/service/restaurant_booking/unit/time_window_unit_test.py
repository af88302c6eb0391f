from datetime import date, datetime, time

import pytest

from src.service.restaurant_booking.domain.enum.weekday import Weekday
from src.service.restaurant_booking.domain.reservation_domain_service import add_months
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)
from src.service.restaurant_booking.domain.value_object.time_window import (
    DateRange,
    TimeWindow,
    intervals_overlap,
)


def _window(start: time, minutes: int = 90) -> TimeWindow:
    return TimeWindow.starting_at(day=date(2025, 3, 10), at=start, duration_minutes=minutes)


@pytest.mark.unit
class TestIntervalsOverlap:
    @pytest.mark.parametrize(
        'a, b, expected',
        [
            ((1, 3), (2, 4), True),
            ((1, 5), (2, 3), True),
            ((1, 3), (3, 5), False),
            ((3, 5), (1, 3), False),
            ((1, 2), (4, 5), False),
        ],
    )
    def test_half_open_overlap(self, a: tuple, b: tuple, expected: bool) -> None:
        assert intervals_overlap(a[0], a[1], b[0], b[1]) is expected
        assert intervals_overlap(b[0], b[1], a[0], a[1]) is expected


@pytest.mark.unit
class TestTimeWindow:
    def test_half_hour_later_overlaps_a_ninety_minute_slot(self) -> None:
        assert _window(time(19, 0)).overlaps(_window(time(19, 30)))

    def test_back_to_back_slots_do_not_overlap(self) -> None:
        assert not _window(time(19, 0)).overlaps(_window(time(20, 30)))

    def test_slot_ending_at_close_is_within_operating_hours(self) -> None:
        operating = TimeWindow(
            start_at=datetime(2025, 3, 10, 9, 0), end_at=datetime(2025, 3, 10, 22, 0)
        )

        assert _window(time(20, 30)).is_within(operating)
        assert not _window(time(21, 0)).is_within(operating)
        assert not _window(time(8, 30)).is_within(operating)


@pytest.mark.unit
class TestDateRange:
    def test_inclusive_ranges_sharing_a_day_overlap(self) -> None:
        jan_10_15 = DateRange(start_date=date(2025, 1, 10), end_date=date(2025, 1, 15))
        jan_15_20 = DateRange(start_date=date(2025, 1, 15), end_date=date(2025, 1, 20))

        assert jan_10_15.overlaps(jan_15_20)
        assert jan_15_20.overlaps(jan_10_15)

    def test_adjacent_ranges_do_not_overlap(self) -> None:
        jan_10_15 = DateRange(start_date=date(2025, 1, 10), end_date=date(2025, 1, 15))
        jan_16_20 = DateRange(start_date=date(2025, 1, 16), end_date=date(2025, 1, 20))

        assert not jan_10_15.overlaps(jan_16_20)

    def test_single_day_range_covers_its_day(self) -> None:
        christmas = DateRange(start_date=date(2025, 12, 25), end_date=date(2025, 12, 25))

        assert christmas.covers(date(2025, 12, 25))
        assert not christmas.covers(date(2025, 12, 26))


@pytest.mark.unit
class TestRestaurantCalendar:
    def test_weekday_tokens_are_case_insensitive(self) -> None:
        restaurant = RestaurantCalendarSnapshot(
            restaurant_id='r', open_time='09:00', close_time='22:00', days_open=['monday', 'Friday']
        )

        assert restaurant.days_open == frozenset({Weekday.MONDAY, Weekday.FRIDAY})
        assert restaurant.is_open_on(date(2025, 3, 10))
        assert not restaurant.is_open_on(date(2025, 3, 9))

    def test_unknown_weekday_token_is_rejected(self) -> None:
        with pytest.raises(ValueError, match='Invalid weekday'):
            Weekday.parse('Funday')

    def test_close_before_open_is_not_a_valid_window(self) -> None:
        restaurant = RestaurantCalendarSnapshot(
            restaurant_id='r', open_time='22:00', close_time='09:00', days_open=['MONDAY']
        )

        assert not restaurant.has_valid_hours


@pytest.mark.unit
class TestAddMonths:
    def test_day_is_clamped_to_the_end_of_a_short_month(self) -> None:
        assert add_months(datetime(2025, 1, 31, 10, 0), 1) == datetime(2025, 2, 28, 10, 0)

    def test_year_rolls_over(self) -> None:
        assert add_months(datetime(2025, 11, 15), 3) == datetime(2026, 2, 15)
