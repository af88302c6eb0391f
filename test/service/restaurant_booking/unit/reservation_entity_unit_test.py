"""
Unit tests for the Reservation entity

Test Focus:
1. Creation validation (identifiers, guests, duration)
2. Status machine: PENDING -> CONFIRMED -> CANCELLED, CANCELLED is terminal
3. Updates never touch status and are refused once cancelled
"""

from datetime import date, datetime, time

import pytest
from uuid_utils import UUID

from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.reservation_errors import (
    InvalidStateTransitionError,
    ValidationError,
)


RESERVATION_ID = UUID('00000000-0000-0000-0000-00000000000a')


def _create(**overrides) -> Reservation:
    fields = {
        'id': RESERVATION_ID,
        'restaurant_id': 'restaurant-1',
        'user_id': 'diner-1',
        'table_id': 'table-1',
        'reservation_date': date(2025, 3, 10),
        'reservation_time': time(19, 0),
        'number_of_guests': 2,
    }
    fields.update(overrides)
    return Reservation.create(**fields)


@pytest.mark.unit
class TestReservationCreate:
    def test_new_reservation_is_pending_with_default_duration(self) -> None:
        reservation = _create()

        assert reservation.status == ReservationStatus.PENDING
        assert reservation.duration_minutes == 90
        assert reservation.is_active
        assert reservation.window.start_at == datetime(2025, 3, 10, 19, 0)
        assert reservation.window.end_at == datetime(2025, 3, 10, 20, 30)

    def test_identifiers_are_trimmed(self) -> None:
        reservation = _create(user_id='  diner-1 ', table_id=' table-1')

        assert reservation.user_id == 'diner-1'
        assert reservation.table_id == 'table-1'

    def test_seconds_are_dropped_from_the_start_time(self) -> None:
        reservation = _create(reservation_time=time(19, 0, 45))

        assert reservation.reservation_time == time(19, 0)

    @pytest.mark.parametrize('field', ['restaurant_id', 'user_id', 'table_id'])
    def test_blank_identifier_is_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError, match=f'{field} is required'):
            _create(**{field: '   '})

    @pytest.mark.parametrize('guests', [0, -3])
    def test_guest_count_below_one_is_rejected(self, guests: int) -> None:
        with pytest.raises(ValidationError, match='at least 1'):
            _create(number_of_guests=guests)

    @pytest.mark.parametrize('duration', [0, -30])
    def test_non_positive_duration_is_rejected(self, duration: int) -> None:
        with pytest.raises(ValidationError, match='duration_minutes'):
            _create(duration_minutes=duration)


@pytest.mark.unit
class TestReservationStatus:
    def test_pending_can_be_confirmed_then_cancelled(self) -> None:
        confirmed = _create().confirm()
        cancelled = confirmed.cancel()

        assert confirmed.status == ReservationStatus.CONFIRMED
        assert cancelled.status == ReservationStatus.CANCELLED
        assert not cancelled.is_active

    def test_status_change_leaves_original_untouched(self) -> None:
        reservation = _create()

        reservation.confirm()

        assert reservation.status == ReservationStatus.PENDING

    def test_confirmed_cannot_go_back_to_pending(self) -> None:
        confirmed = _create().confirm()

        with pytest.raises(InvalidStateTransitionError):
            confirmed.change_status(ReservationStatus.PENDING)

    @pytest.mark.parametrize('target', [ReservationStatus.PENDING, ReservationStatus.CONFIRMED])
    def test_cancelled_is_terminal(self, target: ReservationStatus) -> None:
        cancelled = _create().cancel()

        with pytest.raises(InvalidStateTransitionError) as exc_info:
            cancelled.change_status(target)

        assert exc_info.value.status_code == 409
        assert exc_info.value.context['current_status'] == 'CANCELLED'

    def test_cancelling_twice_is_a_no_op(self) -> None:
        cancelled = _create().cancel()

        assert cancelled.cancel() is cancelled


@pytest.mark.unit
class TestReservationUpdate:
    def test_update_applies_only_given_fields(self) -> None:
        reservation = _create()

        updated = reservation.update(number_of_guests=4)

        assert updated.number_of_guests == 4
        assert updated.reservation_date == reservation.reservation_date
        assert updated.reservation_time == reservation.reservation_time
        assert updated.status == ReservationStatus.PENDING

    def test_update_moves_the_window(self) -> None:
        updated = _create().update(reservation_time=time(20, 30), duration_minutes=60)

        assert updated.window.start_at == datetime(2025, 3, 10, 20, 30)
        assert updated.window.end_at == datetime(2025, 3, 10, 21, 30)

    def test_cancelled_reservation_cannot_be_updated(self) -> None:
        cancelled = _create().cancel()

        with pytest.raises(InvalidStateTransitionError):
            cancelled.update(number_of_guests=3)

    def test_update_rejects_invalid_guest_count(self) -> None:
        with pytest.raises(ValidationError):
            _create().update(number_of_guests=0)

    def test_snapshot_round_trips_through_rehydrate(self) -> None:
        reservation = _create().confirm()

        rebuilt = Reservation.rehydrate(reservation.snapshot())

        assert rebuilt == reservation
