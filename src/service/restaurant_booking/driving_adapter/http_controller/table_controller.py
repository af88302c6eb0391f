from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.command.release_table_use_case import ReleaseTableUseCase
from src.service.restaurant_booking.app.command.select_table_use_case import SelectTableUseCase
from src.service.restaurant_booking.driving_adapter.http_controller.auth.jwt_auth import (
    CurrentUser,
)
from src.service.restaurant_booking.driving_adapter.http_controller.auth.role_auth import (
    require_diner,
)
from src.service.restaurant_booking.driving_adapter.http_controller.schema.reservation_schema import (
    TableReleaseResponse,
    TableSelectionResponse,
    TableSelectRequest,
)


router = APIRouter()


@router.post('/{table_id}/select')
@Logger.io
async def select_table(
    table_id: str,
    request: TableSelectRequest,
    current_user: CurrentUser = Depends(require_diner),
    use_case: SelectTableUseCase = Depends(SelectTableUseCase.depends),
) -> TableSelectionResponse:
    """A table held by someone else is reported with success=false, not as an error"""
    result = await use_case.execute(
        table_id=table_id,
        restaurant_id=request.restaurant_id,
        user_id=current_user.user_id,
        session_id=request.session_id,
    )
    return TableSelectionResponse.from_result(result)


@router.post('/{table_id}/release')
@Logger.io
async def release_table(
    table_id: str,
    current_user: CurrentUser = Depends(require_diner),
    use_case: ReleaseTableUseCase = Depends(ReleaseTableUseCase.depends),
) -> TableReleaseResponse:
    released = await use_case.execute(table_id=table_id, user_id=current_user.user_id)
    return TableReleaseResponse(table_id=table_id, released=released)
