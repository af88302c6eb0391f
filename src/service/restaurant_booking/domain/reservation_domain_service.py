"""
Reservation Domain Service

Turns "table T, date D, time H, N guests" into a legal, conflict-free
reservation. Pure orchestration over the ports; every check runs before the
single write so a failed request never leaves partial state behind.

Check order for a new reservation:
    user -> table -> table/restaurant match -> capacity -> calendar
    -> future slot -> advance window -> open day -> operating hours
    -> blackout -> table conflict -> diner conflict -> create + save
"""

import calendar
from datetime import date, datetime
from typing import Callable, Optional

from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.restaurant_booking.app.interface.i_restaurant_calendar_provider import (
    IRestaurantCalendarProvider,
)
from src.service.restaurant_booking.app.interface.i_table_directory_provider import (
    ITableDirectoryProvider,
)
from src.service.restaurant_booking.app.interface.i_user_existence import IUserExistence
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.reservation_errors import (
    MaxAdvanceWindowError,
    OutsideOperatingHoursError,
    ReservationNotFoundError,
    ReservationOwnershipError,
    RestaurantClosedByExceptionError,
    RestaurantNotBookableError,
    TableCapacityExceededError,
    TableConflictError,
    TableNotFoundError,
    TableRestaurantMismatchError,
    UserNotFoundError,
    UserTimeConflictError,
    ValidationError,
)
from src.service.restaurant_booking.domain.value_object.reservation_request import (
    ReservationCancellationRequest,
    ReservationScheduleRequest,
    ReservationStatusChangeRequest,
    ReservationUpdateRequest,
)
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)
from src.service.restaurant_booking.domain.value_object.table_snapshot import TableSnapshot
from src.service.restaurant_booking.domain.value_object.time_window import TimeWindow


def add_months(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` later, clamped to the last day (Jan 31 + 1 -> Feb 28/29)"""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class ReservationDomainService:
    def __init__(
        self,
        *,
        reservation_command_repo: IReservationCommandRepo,
        table_directory_provider: ITableDirectoryProvider,
        restaurant_calendar_provider: IRestaurantCalendarProvider,
        user_existence: IUserExistence,
        clock: Callable[[], datetime] = datetime.now,
        max_advance_months: int = settings.RESERVATION_MAX_ADVANCE_MONTHS,
        default_duration_minutes: int = settings.RESERVATION_SLOT_DURATION_MINUTES,
    ) -> None:
        self.reservation_command_repo = reservation_command_repo
        self.table_directory_provider = table_directory_provider
        self.restaurant_calendar_provider = restaurant_calendar_provider
        self.user_existence = user_existence
        # Wall clock of the restaurants' local time; reservation slots are naive local datetimes
        self.clock = clock
        self.max_advance_months = max_advance_months
        self.default_duration_minutes = default_duration_minutes

    # ------------------------------------------------------------------ commands

    @Logger.io
    async def schedule_reservation(self, request: ReservationScheduleRequest) -> Reservation:
        if request.number_of_guests is None or request.number_of_guests < 1:
            raise ValidationError('number_of_guests must be at least 1')
        duration_minutes = (
            request.duration_minutes
            if request.duration_minutes is not None
            else self.default_duration_minutes
        )
        if duration_minutes <= 0:
            raise ValidationError('duration_minutes must be positive')

        await self._ensure_user(request.user_id)
        table = await self._ensure_table(request.table_id)
        if table.restaurant_id != request.restaurant_id:
            raise TableRestaurantMismatchError(
                table_id=table.table_id, restaurant_id=request.restaurant_id
            )
        self._ensure_capacity(table, request.number_of_guests)
        restaurant = await self._ensure_bookable_restaurant(request.restaurant_id)

        window = TimeWindow.starting_at(
            day=request.reservation_date,
            at=request.reservation_time,
            duration_minutes=duration_minutes,
        )
        await self._ensure_slot_is_legal(restaurant=restaurant, window=window)
        await self._ensure_table_is_free(table_id=table.table_id, window=window)
        await self._ensure_user_is_free(user_id=request.user_id, window=window)

        reservation = Reservation.create(
            id=request.reservation_id,
            restaurant_id=request.restaurant_id,
            user_id=request.user_id,
            table_id=request.table_id,
            reservation_date=request.reservation_date,
            reservation_time=request.reservation_time,
            number_of_guests=request.number_of_guests,
            duration_minutes=duration_minutes,
        )
        return await self._save(reservation)

    @Logger.io
    async def update_reservation(self, request: ReservationUpdateRequest) -> Reservation:
        reservation = await self._ensure_reservation(request.reservation_id)
        if not request.acting_as_owner and not reservation.is_owned_by(request.user_id):
            raise ReservationOwnershipError()

        # Rejects cancelled reservations and invalid guest counts
        candidate = reservation.update(
            reservation_date=request.reservation_date,
            reservation_time=request.reservation_time,
            number_of_guests=request.number_of_guests,
            duration_minutes=request.duration_minutes,
        )

        table = await self._ensure_table(candidate.table_id)
        self._ensure_capacity(table, candidate.number_of_guests)

        if request.reschedules:
            restaurant = await self._ensure_bookable_restaurant(candidate.restaurant_id)
            await self._ensure_slot_is_legal(restaurant=restaurant, window=candidate.window)
            await self._ensure_table_is_free(
                table_id=candidate.table_id,
                window=candidate.window,
                exclude_reservation_id=candidate.id,
            )
            await self._ensure_user_is_free(
                user_id=candidate.user_id,
                window=candidate.window,
                exclude_reservation_id=candidate.id,
            )

        return await self._save(candidate)

    @Logger.io
    async def cancel_reservation(self, request: ReservationCancellationRequest) -> Reservation:
        reservation = await self._ensure_reservation(request.reservation_id)
        if not request.acting_as_owner and not reservation.is_owned_by(request.user_id):
            raise ReservationOwnershipError()

        cancelled = reservation.cancel()
        if cancelled is reservation:
            return reservation
        return await self.reservation_command_repo.save(reservation=cancelled)

    @Logger.io
    async def change_reservation_status(
        self, request: ReservationStatusChangeRequest
    ) -> Reservation:
        reservation = await self._ensure_reservation(request.reservation_id)
        if request.status == ReservationStatus.CANCELLED:
            changed = reservation.cancel()
            if changed is reservation:
                return reservation
        else:
            changed = reservation.change_status(request.status)
        return await self.reservation_command_repo.save(reservation=changed)

    @Logger.io
    async def delete_reservation(self, *, reservation_id: UUID) -> Reservation:
        reservation = await self._ensure_reservation(reservation_id)
        await self.reservation_command_repo.delete(reservation_id=reservation.id)
        return reservation

    async def get_reservation(self, *, reservation_id: UUID) -> Reservation:
        return await self._ensure_reservation(reservation_id)

    # ------------------------------------------------------------------ checks

    async def _ensure_user(self, user_id: str) -> None:
        if not await self.user_existence.exists(user_id=user_id):
            raise UserNotFoundError(user_id)

    async def _ensure_table(self, table_id: str) -> TableSnapshot:
        table = await self.table_directory_provider.load_by_id(table_id=table_id)
        if not table:
            raise TableNotFoundError(table_id)
        return table

    @staticmethod
    def _ensure_capacity(table: TableSnapshot, number_of_guests: int) -> None:
        if table.capacity and number_of_guests > table.capacity:
            raise TableCapacityExceededError(table_id=table.table_id, capacity=table.capacity)

    async def _ensure_bookable_restaurant(self, restaurant_id: str) -> RestaurantCalendarSnapshot:
        restaurant = await self.restaurant_calendar_provider.load_by_id(
            restaurant_id=restaurant_id
        )
        if not restaurant or not restaurant.active:
            raise RestaurantNotBookableError(restaurant_id)
        return restaurant

    async def _ensure_reservation(self, reservation_id: UUID) -> Reservation:
        reservation = await self.reservation_command_repo.get_by_id(reservation_id=reservation_id)
        if not reservation:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    async def _ensure_slot_is_legal(
        self, *, restaurant: RestaurantCalendarSnapshot, window: TimeWindow
    ) -> None:
        now = self.clock()
        if window.start_at <= now:
            raise ValidationError('Reservation time must be in the future')
        if window.start_at > add_months(now, self.max_advance_months):
            raise MaxAdvanceWindowError(self.max_advance_months)

        day = window.start_at.date()
        if not restaurant.is_open_on(day):
            raise OutsideOperatingHoursError(
                restaurant.restaurant_id, f'closed on {day.strftime("%A")}'
            )
        if not restaurant.has_valid_hours:
            raise OutsideOperatingHoursError(restaurant.restaurant_id, 'operating hours are invalid')
        if not window.is_within(restaurant.operating_window(day)):
            raise OutsideOperatingHoursError(
                restaurant.restaurant_id,
                f'open {restaurant.open_time:%H:%M}-{restaurant.close_time:%H:%M}',
            )

        await self._ensure_not_blacked_out(restaurant_id=restaurant.restaurant_id, day=day)

    async def _ensure_not_blacked_out(self, *, restaurant_id: str, day: date) -> None:
        blackout = await self.restaurant_calendar_provider.find_exception_covering(
            restaurant_id=restaurant_id, day=day
        )
        if blackout:
            raise RestaurantClosedByExceptionError(
                restaurant_id=restaurant_id, day=day, reason=blackout.reason
            )

    async def _ensure_table_is_free(
        self,
        *,
        table_id: str,
        window: TimeWindow,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> None:
        candidates = await self.reservation_command_repo.find_active_on_table(
            table_id=table_id,
            reservation_date=window.start_at.date(),
            exclude_reservation_id=exclude_reservation_id,
        )
        for existing in candidates:
            if existing.id == exclude_reservation_id or not existing.is_active:
                continue
            if existing.window.overlaps(window):
                raise TableConflictError(
                    table_id=table_id,
                    start_at=window.start_at,
                    conflicting_reservation_id=existing.id,
                )

    async def _ensure_user_is_free(
        self,
        *,
        user_id: str,
        window: TimeWindow,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> None:
        candidates = await self.reservation_command_repo.find_active_for_user(
            user_id=user_id,
            reservation_date=window.start_at.date(),
            exclude_reservation_id=exclude_reservation_id,
        )
        for existing in candidates:
            if existing.id == exclude_reservation_id or not existing.is_active:
                continue
            if existing.window.overlaps(window):
                raise UserTimeConflictError(
                    user_id=user_id,
                    start_at=window.start_at,
                    conflicting_reservation_id=existing.id,
                )

    async def _save(self, reservation: Reservation) -> Reservation:
        try:
            return await self.reservation_command_repo.save(reservation=reservation)
        except TableConflictError:
            raise
        except ConflictError as e:
            # Lost the race against a concurrent write the lookup could not see
            raise TableConflictError(
                table_id=reservation.table_id,
                start_at=reservation.window.start_at,
                conflicting_reservation_id=e.context.get('conflicting_reservation_id'),
            ) from e
