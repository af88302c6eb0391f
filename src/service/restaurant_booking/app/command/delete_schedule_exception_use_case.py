from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.domain.schedule_exception_guard import ScheduleExceptionGuard


class DeleteScheduleExceptionUseCase:
    def __init__(
        self,
        *,
        schedule_exception_guard: ScheduleExceptionGuard,
        ownership_assertion: IOwnershipAssertion,
    ) -> None:
        self.schedule_exception_guard = schedule_exception_guard
        self.ownership_assertion = ownership_assertion

    @classmethod
    @inject
    def depends(
        cls,
        schedule_exception_guard: ScheduleExceptionGuard = Depends(
            Provide[Container.schedule_exception_guard]
        ),
        ownership_assertion: IOwnershipAssertion = Depends(
            Provide[Container.ownership_assertion]
        ),
    ) -> Self:
        return cls(
            schedule_exception_guard=schedule_exception_guard,
            ownership_assertion=ownership_assertion,
        )

    @Logger.io
    async def execute(
        self, *, restaurant_id: str, exception_id: UUID, owner_id: str, is_admin: bool = False
    ) -> None:
        if not is_admin:
            await self.ownership_assertion.assert_restaurant_ownership(
                restaurant_id=restaurant_id, owner_id=owner_id
            )

        await self.schedule_exception_guard.delete_exception(
            restaurant_id=restaurant_id, exception_id=exception_id
        )
