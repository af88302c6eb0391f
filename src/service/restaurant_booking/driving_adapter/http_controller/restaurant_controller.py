"""Owner-side routes: reservations of one restaurant and its blackout windows"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.restaurant_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.restaurant_booking.app.command.change_reservation_status_use_case import (
    ChangeReservationStatusUseCase,
)
from src.service.restaurant_booking.app.command.create_schedule_exception_use_case import (
    CreateScheduleExceptionUseCase,
)
from src.service.restaurant_booking.app.command.delete_reservation_use_case import (
    DeleteReservationUseCase,
)
from src.service.restaurant_booking.app.command.delete_schedule_exception_use_case import (
    DeleteScheduleExceptionUseCase,
)
from src.service.restaurant_booking.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.restaurant_booking.app.command.update_schedule_exception_use_case import (
    UpdateScheduleExceptionUseCase,
)
from src.service.restaurant_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.restaurant_booking.app.query.list_schedule_exceptions_use_case import (
    ListScheduleExceptionsUseCase,
)
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.driving_adapter.http_controller.auth.jwt_auth import (
    CurrentUser,
)
from src.service.restaurant_booking.driving_adapter.http_controller.auth.role_auth import (
    require_owner,
)
from src.service.restaurant_booking.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationResponse,
    ReservationStatusUpdateRequest,
    ReservationUpdateRequest,
)
from src.service.restaurant_booking.driving_adapter.http_controller.schema.schedule_exception_schema import (
    ScheduleExceptionCreateRequest,
    ScheduleExceptionResponse,
    ScheduleExceptionUpdateRequest,
)


router = APIRouter()


# ---------------------------------------------------------------- reservations


@router.get('/{restaurant_id}/reservation')
@Logger.io
async def list_restaurant_reservations(
    restaurant_id: str,
    reservation_status: Optional[ReservationStatus] = None,
    reservation_date: Optional[date] = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    current_user: CurrentUser = Depends(require_owner),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_restaurant_reservations(
        restaurant_id=restaurant_id,
        owner_id=current_user.user_id,
        status=reservation_status,
        reservation_date=reservation_date,
        limit=limit,
        offset=offset,
        is_admin=current_user.is_admin,
    )
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.patch('/{restaurant_id}/reservation/{reservation_id}')
@Logger.io
async def owner_reschedule_reservation(
    restaurant_id: str,
    reservation_id: UtilsUUID7,
    request: ReservationUpdateRequest,
    current_user: CurrentUser = Depends(require_owner),
    use_case: UpdateReservationUseCase = Depends(UpdateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.user_id,
        owner_id=current_user.user_id,
        restaurant_id=restaurant_id,
        reservation_date=request.reservation_date,
        reservation_time=request.reservation_time,
        number_of_guests=request.number_of_guests,
        duration_minutes=request.duration_minutes,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)


@router.post('/{restaurant_id}/reservation/{reservation_id}/status')
@Logger.io
async def change_reservation_status(
    restaurant_id: str,
    reservation_id: UtilsUUID7,
    request: ReservationStatusUpdateRequest,
    current_user: CurrentUser = Depends(require_owner),
    use_case: ChangeReservationStatusUseCase = Depends(ChangeReservationStatusUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        status=ReservationStatus(request.status),
        owner_id=current_user.user_id,
        restaurant_id=restaurant_id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)


@router.post('/{restaurant_id}/reservation/{reservation_id}/cancel')
@Logger.io
async def owner_cancel_reservation(
    restaurant_id: str,
    reservation_id: UtilsUUID7,
    current_user: CurrentUser = Depends(require_owner),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.user_id,
        owner_id=current_user.user_id,
        restaurant_id=restaurant_id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)


@router.delete(
    '/{restaurant_id}/reservation/{reservation_id}', status_code=status.HTTP_204_NO_CONTENT
)
@Logger.io
async def delete_reservation(
    restaurant_id: str,
    reservation_id: UtilsUUID7,
    current_user: CurrentUser = Depends(require_owner),
    use_case: DeleteReservationUseCase = Depends(DeleteReservationUseCase.depends),
) -> None:
    await use_case.execute(
        reservation_id=reservation_id,
        owner_id=current_user.user_id,
        restaurant_id=restaurant_id,
        is_admin=current_user.is_admin,
    )


# ---------------------------------------------------------------- schedule exceptions


@router.get('/{restaurant_id}/schedule_exception')
@Logger.io
async def list_schedule_exceptions(
    restaurant_id: str,
    current_user: CurrentUser = Depends(require_owner),
    use_case: ListScheduleExceptionsUseCase = Depends(ListScheduleExceptionsUseCase.depends),
) -> List[ScheduleExceptionResponse]:
    exceptions = await use_case.execute(
        restaurant_id=restaurant_id,
        owner_id=current_user.user_id,
        is_admin=current_user.is_admin,
    )
    return [ScheduleExceptionResponse.from_entity(e) for e in exceptions]


@router.post('/{restaurant_id}/schedule_exception', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_schedule_exception(
    restaurant_id: str,
    request: ScheduleExceptionCreateRequest,
    current_user: CurrentUser = Depends(require_owner),
    use_case: CreateScheduleExceptionUseCase = Depends(CreateScheduleExceptionUseCase.depends),
) -> ScheduleExceptionResponse:
    schedule_exception = await use_case.execute(
        restaurant_id=restaurant_id,
        owner_id=current_user.user_id,
        start_date=request.start_date,
        end_date=request.end_date,
        reason=request.reason,
        is_admin=current_user.is_admin,
    )
    return ScheduleExceptionResponse.from_entity(schedule_exception)


@router.patch('/{restaurant_id}/schedule_exception/{exception_id}')
@Logger.io
async def update_schedule_exception(
    restaurant_id: str,
    exception_id: UtilsUUID7,
    request: ScheduleExceptionUpdateRequest,
    current_user: CurrentUser = Depends(require_owner),
    use_case: UpdateScheduleExceptionUseCase = Depends(UpdateScheduleExceptionUseCase.depends),
) -> ScheduleExceptionResponse:
    schedule_exception = await use_case.execute(
        restaurant_id=restaurant_id,
        exception_id=exception_id,
        owner_id=current_user.user_id,
        start_date=request.start_date,
        end_date=request.end_date,
        reason=request.reason,
        is_admin=current_user.is_admin,
    )
    return ScheduleExceptionResponse.from_entity(schedule_exception)


@router.delete(
    '/{restaurant_id}/schedule_exception/{exception_id}', status_code=status.HTTP_204_NO_CONTENT
)
@Logger.io
async def delete_schedule_exception(
    restaurant_id: str,
    exception_id: UtilsUUID7,
    current_user: CurrentUser = Depends(require_owner),
    use_case: DeleteScheduleExceptionUseCase = Depends(DeleteScheduleExceptionUseCase.depends),
) -> None:
    await use_case.execute(
        restaurant_id=restaurant_id,
        exception_id=exception_id,
        owner_id=current_user.user_id,
        is_admin=current_user.is_admin,
    )
