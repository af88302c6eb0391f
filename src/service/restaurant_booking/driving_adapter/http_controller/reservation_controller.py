from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.restaurant_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.restaurant_booking.app.command.schedule_reservation_use_case import (
    ScheduleReservationUseCase,
)
from src.service.restaurant_booking.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.restaurant_booking.app.query.get_reservation_use_case import (
    GetReservationUseCase,
)
from src.service.restaurant_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.driving_adapter.http_controller.auth.jwt_auth import (
    CurrentUser,
)
from src.service.restaurant_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_diner,
)
from src.service.restaurant_booking.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationCreateRequest,
    ReservationResponse,
    ReservationUpdateRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def schedule_reservation(
    request: ReservationCreateRequest,
    current_user: CurrentUser = Depends(require_diner),
    use_case: ScheduleReservationUseCase = Depends(ScheduleReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        user_id=current_user.user_id,
        restaurant_id=request.restaurant_id,
        table_id=request.table_id,
        reservation_date=request.reservation_date,
        reservation_time=request.reservation_time,
        number_of_guests=request.number_of_guests,
        duration_minutes=request.duration_minutes,
    )
    return ReservationResponse.from_entity(reservation)


@router.get('')
@Logger.io
async def list_my_reservations(
    reservation_status: Optional[ReservationStatus] = None,
    current_user: CurrentUser = Depends(require_diner),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_diner_reservations(
        user_id=current_user.user_id, status=reservation_status
    )
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get('/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.user_id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}')
@Logger.io
async def reschedule_reservation(
    reservation_id: UtilsUUID7,
    request: ReservationUpdateRequest,
    current_user: CurrentUser = Depends(require_diner),
    use_case: UpdateReservationUseCase = Depends(UpdateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.user_id,
        reservation_date=request.reservation_date,
        reservation_time=request.reservation_time,
        number_of_guests=request.number_of_guests,
        duration_minutes=request.duration_minutes,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)


@router.post('/{reservation_id}/cancel')
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    current_user: CurrentUser = Depends(require_diner),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.user_id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.from_entity(reservation)
