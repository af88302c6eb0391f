"""
Schedule Exception Overlap Guard

Blackout windows of one restaurant never overlap. The guard recomputes the
overlap with the same half-open primitive the reservation conflict check uses;
the storage layer enforces the same rule and its rejection is mapped to the
same error.
"""

from datetime import date
from typing import Iterable, Optional

from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.types import new_uuid7
from src.service.restaurant_booking.app.interface.i_schedule_exception_repo import (
    IScheduleExceptionRepo,
)
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.reservation_errors import (
    ScheduleExceptionNotFoundError,
    ScheduleExceptionOverlapError,
)


def find_overlapping(
    candidate: ScheduleException, others: Iterable[ScheduleException]
) -> Optional[ScheduleException]:
    for other in others:
        if other.id == candidate.id:
            continue
        if candidate.overlaps(other):
            return other
    return None


class ScheduleExceptionGuard:
    def __init__(self, *, schedule_exception_repo: IScheduleExceptionRepo) -> None:
        self.schedule_exception_repo = schedule_exception_repo

    @Logger.io
    async def create_exception(
        self,
        *,
        restaurant_id: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        exception_id: Optional[UUID] = None,
    ) -> ScheduleException:
        candidate = ScheduleException.create(
            id=exception_id or new_uuid7(),
            restaurant_id=restaurant_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        await self._ensure_no_overlap(candidate)
        try:
            return await self.schedule_exception_repo.create(schedule_exception=candidate)
        except ConflictError as e:
            raise ScheduleExceptionOverlapError(restaurant_id=restaurant_id) from e

    @Logger.io
    async def update_exception(
        self,
        *,
        restaurant_id: str,
        exception_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> ScheduleException:
        existing = await self.get_exception(restaurant_id=restaurant_id, exception_id=exception_id)
        candidate = existing.update(start_date=start_date, end_date=end_date, reason=reason)
        await self._ensure_no_overlap(candidate)
        try:
            return await self.schedule_exception_repo.update(schedule_exception=candidate)
        except ConflictError as e:
            raise ScheduleExceptionOverlapError(restaurant_id=restaurant_id) from e

    @Logger.io
    async def delete_exception(self, *, restaurant_id: str, exception_id: UUID) -> None:
        await self.get_exception(restaurant_id=restaurant_id, exception_id=exception_id)
        await self.schedule_exception_repo.delete(exception_id=exception_id)

    async def get_exception(self, *, restaurant_id: str, exception_id: UUID) -> ScheduleException:
        existing = await self.schedule_exception_repo.get_by_id(exception_id=exception_id)
        # An exception of another restaurant is reported as missing
        if not existing or existing.restaurant_id != restaurant_id:
            raise ScheduleExceptionNotFoundError(exception_id)
        return existing

    async def _ensure_no_overlap(self, candidate: ScheduleException) -> None:
        others = await self.schedule_exception_repo.list_by_restaurant(
            restaurant_id=candidate.restaurant_id
        )
        overlapping = find_overlapping(candidate, others)
        if overlapping:
            raise ScheduleExceptionOverlapError(
                restaurant_id=candidate.restaurant_id, overlapping_id=overlapping.id
            )
