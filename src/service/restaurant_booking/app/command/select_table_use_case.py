from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.command.table_hold_coordinator import (
    TableHoldCoordinator,
)
from src.service.restaurant_booking.app.interface.i_table_directory_provider import (
    ITableDirectoryProvider,
)
from src.service.restaurant_booking.domain.reservation_errors import (
    TableNotFoundError,
    TableRestaurantMismatchError,
)
from src.service.restaurant_booking.domain.value_object.table_hold import TableSelectionResult


class SelectTableUseCase:
    def __init__(
        self,
        *,
        table_hold_coordinator: TableHoldCoordinator,
        table_directory_provider: ITableDirectoryProvider,
    ) -> None:
        self.table_hold_coordinator = table_hold_coordinator
        self.table_directory_provider = table_directory_provider

    @classmethod
    @inject
    def depends(
        cls,
        table_hold_coordinator: TableHoldCoordinator = Depends(
            Provide[Container.table_hold_coordinator]
        ),
        table_directory_provider: ITableDirectoryProvider = Depends(
            Provide[Container.table_directory_provider]
        ),
    ) -> Self:
        return cls(
            table_hold_coordinator=table_hold_coordinator,
            table_directory_provider=table_directory_provider,
        )

    @Logger.io
    async def execute(
        self,
        *,
        table_id: str,
        restaurant_id: str,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> TableSelectionResult:
        table = await self.table_directory_provider.load_by_id(table_id=table_id)
        if not table:
            raise TableNotFoundError(table_id)
        if table.restaurant_id != restaurant_id:
            raise TableRestaurantMismatchError(table_id=table_id, restaurant_id=restaurant_id)

        return await self.table_hold_coordinator.select(
            table_id=table.table_id,
            restaurant_id=table.restaurant_id,
            section_id=table.section_id,
            user_id=user_id,
            session_id=session_id,
        )
