from abc import ABC, abstractmethod
from datetime import date
from typing import List

from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)


class IRestaurantCalendarProvider(ABC):
    """Read-only view of restaurant opening hours and blackout windows"""

    @abstractmethod
    async def load_by_id(self, *, restaurant_id: str) -> RestaurantCalendarSnapshot | None:
        """
        Load the operating snapshot of a restaurant

        Returns:
            None when the restaurant is missing, has no open/close time or no open days
        """
        pass

    @abstractmethod
    async def list_exceptions(self, *, restaurant_id: str) -> List[ScheduleException]:
        """Blackout windows of the restaurant ordered by start date"""
        pass

    @abstractmethod
    async def find_exception_covering(
        self, *, restaurant_id: str, day: date
    ) -> ScheduleException | None:
        """First blackout window containing `day`, if any"""
        pass
