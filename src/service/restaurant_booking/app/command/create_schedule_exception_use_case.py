from datetime import date
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.schedule_exception_guard import ScheduleExceptionGuard


class CreateScheduleExceptionUseCase:
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
        self,
        *,
        restaurant_id: str,
        owner_id: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        is_admin: bool = False,
    ) -> ScheduleException:
        if not is_admin:
            await self.ownership_assertion.assert_restaurant_ownership(
                restaurant_id=restaurant_id, owner_id=owner_id
            )

        return await self.schedule_exception_guard.create_exception(
            restaurant_id=restaurant_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
