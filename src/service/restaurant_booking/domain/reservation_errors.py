"""
Reservation domain errors

Every error is an expected outcome surfaced to the caller with a stable kind
(`error_code`) and an HTTP-equivalent status; none of them is retried.
"""

from datetime import date, datetime
from typing import Any

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)


class ValidationError(DomainError):
    error_code = 'validation_error'

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 400, **kwargs)


# ---------------------------------------------------------------- 404


class TableNotFoundError(NotFoundError):
    error_code = 'table_not_found'

    def __init__(self, table_id: str) -> None:
        super().__init__(f'Table {table_id} not found', context={'table_id': table_id})


class RestaurantNotBookableError(NotFoundError):
    error_code = 'restaurant_not_bookable'

    def __init__(self, restaurant_id: str) -> None:
        super().__init__(
            f'Restaurant {restaurant_id} is not accepting reservations',
            context={'restaurant_id': restaurant_id},
        )


class RestaurantNotFoundError(NotFoundError):
    error_code = 'restaurant_not_found'

    def __init__(self, restaurant_id: str) -> None:
        super().__init__(
            f'Restaurant {restaurant_id} not found', context={'restaurant_id': restaurant_id}
        )


class ReservationNotFoundError(NotFoundError):
    error_code = 'reservation_not_found'

    def __init__(self, reservation_id: object) -> None:
        super().__init__(
            f'Reservation {reservation_id} not found',
            context={'reservation_id': str(reservation_id)},
        )


class ScheduleExceptionNotFoundError(NotFoundError):
    error_code = 'schedule_exception_not_found'

    def __init__(self, exception_id: object) -> None:
        super().__init__(
            f'Schedule exception {exception_id} not found',
            context={'schedule_exception_id': str(exception_id)},
        )


class UserNotFoundError(NotFoundError):
    error_code = 'user_not_found'

    def __init__(self, user_id: str) -> None:
        super().__init__(f'User {user_id} not found', context={'user_id': user_id})


# ---------------------------------------------------------------- 400


class TableRestaurantMismatchError(DomainError):
    error_code = 'table_restaurant_mismatch'

    def __init__(self, *, table_id: str, restaurant_id: str) -> None:
        super().__init__(
            f'Table {table_id} does not belong to restaurant {restaurant_id}',
            context={'table_id': table_id, 'restaurant_id': restaurant_id},
        )


class OutsideOperatingHoursError(DomainError):
    error_code = 'outside_operating_hours'

    def __init__(self, restaurant_id: str, reason: str) -> None:
        super().__init__(
            f'Requested slot is outside the operating hours of restaurant {restaurant_id}: {reason}',
            context={'restaurant_id': restaurant_id, 'reason': reason},
        )


class TableCapacityExceededError(DomainError):
    error_code = 'table_capacity_exceeded'

    def __init__(self, *, table_id: str, capacity: int) -> None:
        super().__init__(
            f'Table {table_id} seats at most {capacity} guests',
            context={'table_id': table_id, 'capacity': capacity},
        )


class MaxAdvanceWindowError(DomainError):
    error_code = 'max_advance_window'

    def __init__(self, months: int) -> None:
        super().__init__(
            f'Reservations can be made at most {months} months in advance',
            context={'max_advance_months': months},
        )


# ---------------------------------------------------------------- 409


class RestaurantClosedByExceptionError(DomainError):
    error_code = 'restaurant_closed_by_exception'

    def __init__(self, *, restaurant_id: str, day: date, reason: str | None = None) -> None:
        detail = f' ({reason})' if reason else ''
        super().__init__(
            f'Restaurant {restaurant_id} is closed on {day.isoformat()}{detail}',
            409,
            context={'restaurant_id': restaurant_id, 'date': day.isoformat(), 'reason': reason},
        )


class TableConflictError(ConflictError):
    error_code = 'table_conflict'

    def __init__(
        self, *, table_id: str, start_at: datetime, conflicting_reservation_id: object | None
    ) -> None:
        self.conflicting_reservation_id = (
            str(conflicting_reservation_id) if conflicting_reservation_id is not None else None
        )
        super().__init__(
            f'Table {table_id} is already reserved around {start_at.isoformat(timespec="minutes")}',
            context={
                'table_id': table_id,
                'conflicting_reservation_id': self.conflicting_reservation_id,
            },
        )


class UserTimeConflictError(ConflictError):
    error_code = 'user_time_conflict'

    def __init__(
        self, *, user_id: str, start_at: datetime, conflicting_reservation_id: object
    ) -> None:
        super().__init__(
            f'User {user_id} already has a reservation around '
            f'{start_at.isoformat(timespec="minutes")}',
            context={
                'user_id': user_id,
                'conflicting_reservation_id': str(conflicting_reservation_id),
            },
        )


class ScheduleExceptionOverlapError(ConflictError):
    error_code = 'schedule_exception_overlap'

    def __init__(self, *, restaurant_id: str, overlapping_id: object | None = None) -> None:
        super().__init__(
            'Schedule exception overlaps with an existing exception',
            context={
                'restaurant_id': restaurant_id,
                'overlapping_exception_id': str(overlapping_id) if overlapping_id else None,
            },
        )


class InvalidStateTransitionError(ConflictError):
    error_code = 'invalid_state_transition'

    def __init__(self, *, current: str, requested: str) -> None:
        super().__init__(
            f'Cannot move reservation from {current} to {requested}',
            context={'current_status': current, 'requested_status': requested},
        )


# ---------------------------------------------------------------- 403


class ReservationOwnershipError(ForbiddenError):
    error_code = 'reservation_ownership'

    def __init__(self) -> None:
        super().__init__('Reservation does not belong to the requesting user')
