from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)


class IScheduleExceptionRepo(ABC):
    """
    Storage of restaurant blackout windows.

    `create` / `update` raise ConflictError when the storage layer itself rejects
    an overlapping window.
    """

    @abstractmethod
    async def get_by_id(self, *, exception_id: UUID) -> ScheduleException | None:
        pass

    @abstractmethod
    async def list_by_restaurant(self, *, restaurant_id: str) -> List[ScheduleException]:
        pass

    @abstractmethod
    async def create(self, *, schedule_exception: ScheduleException) -> ScheduleException:
        pass

    @abstractmethod
    async def update(self, *, schedule_exception: ScheduleException) -> ScheduleException:
        pass

    @abstractmethod
    async def delete(self, *, exception_id: UUID) -> bool:
        pass
