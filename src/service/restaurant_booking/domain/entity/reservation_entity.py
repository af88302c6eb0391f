from datetime import date, datetime, time, timezone
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.reservation_errors import (
    InvalidStateTransitionError,
    ValidationError,
)
from src.service.restaurant_booking.domain.value_object.time_window import TimeWindow


def _require_id(name: str, value: Optional[str]) -> str:
    trimmed = (value or '').strip()
    if not trimmed:
        raise ValidationError(f'{name} is required')
    return trimmed


def _validate_guests(number_of_guests: Optional[int]) -> int:
    if number_of_guests is None or isinstance(number_of_guests, bool):
        raise ValidationError('number_of_guests is required')
    if number_of_guests < 1:
        raise ValidationError('number_of_guests must be at least 1')
    return number_of_guests


def _validate_duration(duration_minutes: int) -> int:
    if duration_minutes <= 0:
        raise ValidationError('duration_minutes must be positive')
    return duration_minutes


@attrs.frozen
class ReservationSnapshot:
    """Persisted shape of a reservation (what the store reads and writes)"""

    id: UUID
    restaurant_id: str
    user_id: str
    table_id: str
    reservation_date: date
    reservation_time: time
    number_of_guests: int
    duration_minutes: int
    status: ReservationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@attrs.define
class Reservation:
    id: UUID
    restaurant_id: str
    user_id: str
    table_id: str
    reservation_date: date
    reservation_time: time
    number_of_guests: int
    duration_minutes: int = settings.RESERVATION_SLOT_DURATION_MINUTES
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        restaurant_id: str,
        user_id: str,
        table_id: str,
        reservation_date: date,
        reservation_time: time,
        number_of_guests: int,
        duration_minutes: Optional[int] = None,
    ) -> 'Reservation':
        if reservation_date is None or reservation_time is None:
            raise ValidationError('reservation_date and reservation_time are required')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            restaurant_id=_require_id('restaurant_id', restaurant_id),
            user_id=_require_id('user_id', user_id),
            table_id=_require_id('table_id', table_id),
            reservation_date=reservation_date,
            reservation_time=reservation_time.replace(second=0, microsecond=0),
            number_of_guests=_validate_guests(number_of_guests),
            duration_minutes=_validate_duration(
                duration_minutes
                if duration_minutes is not None
                else settings.RESERVATION_SLOT_DURATION_MINUTES
            ),
            status=ReservationStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def rehydrate(cls, snapshot: ReservationSnapshot) -> 'Reservation':
        """Rebuild from persisted state; creation-time checks are not re-run"""
        return cls(**attrs.asdict(snapshot, recurse=False))

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.starting_at(
            day=self.reservation_date,
            at=self.reservation_time,
            duration_minutes=self.duration_minutes,
        )

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @Logger.io
    def update(
        self,
        *,
        reservation_date: Optional[date] = None,
        reservation_time: Optional[time] = None,
        number_of_guests: Optional[int] = None,
        duration_minutes: Optional[int] = None,
    ) -> 'Reservation':
        """
        Apply the proposed changes; status never changes here

        Returns:
            Updated Reservation (the original is left untouched)
        """
        if self.status == ReservationStatus.CANCELLED:
            raise InvalidStateTransitionError(
                current=self.status.value, requested='RESCHEDULED'
            )

        return attrs.evolve(
            self,
            reservation_date=reservation_date or self.reservation_date,
            reservation_time=(
                reservation_time.replace(second=0, microsecond=0)
                if reservation_time is not None
                else self.reservation_time
            ),
            number_of_guests=(
                _validate_guests(number_of_guests)
                if number_of_guests is not None
                else self.number_of_guests
            ),
            duration_minutes=(
                _validate_duration(duration_minutes)
                if duration_minutes is not None
                else self.duration_minutes
            ),
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def change_status(self, next_status: ReservationStatus) -> 'Reservation':
        if not self.status.can_transition_to(next_status):
            raise InvalidStateTransitionError(
                current=self.status.value, requested=next_status.value
            )
        return attrs.evolve(self, status=next_status, updated_at=datetime.now(timezone.utc))

    def confirm(self) -> 'Reservation':
        return self.change_status(ReservationStatus.CONFIRMED)

    def cancel(self) -> 'Reservation':
        # Cancelling twice is not an error
        if self.status == ReservationStatus.CANCELLED:
            return self
        return self.change_status(ReservationStatus.CANCELLED)

    def snapshot(self) -> ReservationSnapshot:
        return ReservationSnapshot(**attrs.asdict(self, recurse=False))
