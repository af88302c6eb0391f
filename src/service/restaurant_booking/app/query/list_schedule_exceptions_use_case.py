from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.app.interface.i_restaurant_calendar_provider import (
    IRestaurantCalendarProvider,
)
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)


class ListScheduleExceptionsUseCase:
    def __init__(
        self,
        *,
        restaurant_calendar_provider: IRestaurantCalendarProvider,
        ownership_assertion: IOwnershipAssertion,
    ) -> None:
        self.restaurant_calendar_provider = restaurant_calendar_provider
        self.ownership_assertion = ownership_assertion

    @classmethod
    @inject
    def depends(
        cls,
        restaurant_calendar_provider: IRestaurantCalendarProvider = Depends(
            Provide[Container.restaurant_calendar_provider]
        ),
        ownership_assertion: IOwnershipAssertion = Depends(
            Provide[Container.ownership_assertion]
        ),
    ) -> Self:
        return cls(
            restaurant_calendar_provider=restaurant_calendar_provider,
            ownership_assertion=ownership_assertion,
        )

    @Logger.io
    async def execute(
        self, *, restaurant_id: str, owner_id: str, is_admin: bool = False
    ) -> List[ScheduleException]:
        """Blackout windows of the restaurant ordered by start date"""
        if not is_admin:
            await self.ownership_assertion.assert_restaurant_ownership(
                restaurant_id=restaurant_id, owner_id=owner_id
            )
        return await self.restaurant_calendar_provider.list_exceptions(
            restaurant_id=restaurant_id
        )
