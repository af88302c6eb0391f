from datetime import date
from typing import AsyncContextManager, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_restaurant_calendar_provider import (
    IRestaurantCalendarProvider,
)
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.enum.weekday import Weekday
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)
from src.service.restaurant_booking.driven_adapter.model.restaurant_model import RestaurantModel
from src.service.restaurant_booking.driven_adapter.model.schedule_exception_model import (
    ScheduleExceptionModel,
)
from src.service.restaurant_booking.driven_adapter.repo.schedule_exception_repo_impl import (
    to_schedule_exception,
)


class RestaurantCalendarProviderImpl(IRestaurantCalendarProvider):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def load_by_id(self, *, restaurant_id: str) -> RestaurantCalendarSnapshot | None:
        async with self.session_factory() as session:
            restaurant = await session.get(RestaurantModel, restaurant_id)

        if not restaurant or restaurant.open_time is None or restaurant.close_time is None:
            return None

        days_open = []
        for token in restaurant.days_open or []:
            try:
                days_open.append(Weekday.parse(token))
            except ValueError:
                Logger.base.warning(
                    f'restaurant {restaurant_id} has an unknown open day {token!r}, ignoring it'
                )
        if not days_open:
            return None

        return RestaurantCalendarSnapshot(
            restaurant_id=restaurant.id,
            owner_id=restaurant.owner_id,
            open_time=restaurant.open_time,
            close_time=restaurant.close_time,
            days_open=days_open,
            active=restaurant.is_active,
        )

    @Logger.io
    async def list_exceptions(self, *, restaurant_id: str) -> List[ScheduleException]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ScheduleExceptionModel)
                .where(ScheduleExceptionModel.restaurant_id == restaurant_id)
                .order_by(ScheduleExceptionModel.start_date)
            )
            return [to_schedule_exception(row) for row in result.scalars().all()]

    @Logger.io
    async def find_exception_covering(
        self, *, restaurant_id: str, day: date
    ) -> ScheduleException | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ScheduleExceptionModel)
                .where(ScheduleExceptionModel.restaurant_id == restaurant_id)
                .where(ScheduleExceptionModel.start_date <= day)
                .where(ScheduleExceptionModel.end_date >= day)
                .limit(1)
            )
            row = result.scalars().first()
            return to_schedule_exception(row) if row else None
