"""Inputs of the reservation domain service"""

from datetime import date, time
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus


@attrs.frozen(kw_only=True)
class ReservationScheduleRequest:
    reservation_id: UUID
    user_id: str
    restaurant_id: str
    table_id: str
    reservation_date: date
    reservation_time: time
    number_of_guests: int
    duration_minutes: Optional[int] = None


@attrs.frozen(kw_only=True)
class ReservationUpdateRequest:
    reservation_id: UUID
    user_id: str
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    number_of_guests: Optional[int] = None
    duration_minutes: Optional[int] = None
    # Set only after the owner/admin gate has passed; skips the diner ownership check
    acting_as_owner: bool = False

    @property
    def reschedules(self) -> bool:
        return (
            self.reservation_date is not None
            or self.reservation_time is not None
            or self.duration_minutes is not None
        )


@attrs.frozen(kw_only=True)
class ReservationCancellationRequest:
    reservation_id: UUID
    user_id: str
    acting_as_owner: bool = False


@attrs.frozen(kw_only=True)
class ReservationStatusChangeRequest:
    reservation_id: UUID
    status: ReservationStatus
