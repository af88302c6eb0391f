from typing import AsyncContextManager, Callable, List
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.integrity import is_exclusion_violation
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_schedule_exception_repo import (
    IScheduleExceptionRepo,
)
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.reservation_errors import ScheduleExceptionNotFoundError
from src.service.restaurant_booking.driven_adapter.model.schedule_exception_model import (
    SCHEDULE_EXCEPTION_NO_OVERLAP_CONSTRAINT,
    ScheduleExceptionModel,
)


def to_schedule_exception(db_exception: ScheduleExceptionModel) -> ScheduleException:
    return ScheduleException(
        id=UUID(str(db_exception.id)),
        restaurant_id=db_exception.restaurant_id,
        start_date=db_exception.start_date,
        end_date=db_exception.end_date,
        reason=db_exception.reason,
        created_at=db_exception.created_at,
        updated_at=db_exception.updated_at,
    )


class ScheduleExceptionRepoImpl(IScheduleExceptionRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, exception_id: UUID) -> ScheduleException | None:
        async with self.session_factory() as session:
            db_exception = await session.get(ScheduleExceptionModel, uuid.UUID(str(exception_id)))
            return to_schedule_exception(db_exception) if db_exception else None

    @Logger.io
    async def list_by_restaurant(self, *, restaurant_id: str) -> List[ScheduleException]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ScheduleExceptionModel)
                .where(ScheduleExceptionModel.restaurant_id == restaurant_id)
                .order_by(ScheduleExceptionModel.start_date)
            )
            return [to_schedule_exception(row) for row in result.scalars().all()]

    @Logger.io
    async def create(self, *, schedule_exception: ScheduleException) -> ScheduleException:
        async with self.session_factory() as session:
            db_exception = ScheduleExceptionModel(
                id=uuid.UUID(str(schedule_exception.id)),
                restaurant_id=schedule_exception.restaurant_id,
                start_date=schedule_exception.start_date,
                end_date=schedule_exception.end_date,
                reason=schedule_exception.reason,
            )
            session.add(db_exception)
            await self._commit(session, schedule_exception)
            await session.refresh(db_exception)
            return to_schedule_exception(db_exception)

    @Logger.io
    async def update(self, *, schedule_exception: ScheduleException) -> ScheduleException:
        async with self.session_factory() as session:
            db_exception = await session.get(
                ScheduleExceptionModel, uuid.UUID(str(schedule_exception.id))
            )
            if db_exception is None:
                raise ScheduleExceptionNotFoundError(schedule_exception.id)
            db_exception.start_date = schedule_exception.start_date
            db_exception.end_date = schedule_exception.end_date
            db_exception.reason = schedule_exception.reason
            await self._commit(session, schedule_exception)
            await session.refresh(db_exception)
            return to_schedule_exception(db_exception)

    @Logger.io
    async def delete(self, *, exception_id: UUID) -> bool:
        async with self.session_factory() as session:
            db_exception = await session.get(ScheduleExceptionModel, uuid.UUID(str(exception_id)))
            if db_exception is None:
                return False
            await session.delete(db_exception)
            await session.commit()
            return True

    @staticmethod
    async def _commit(session: AsyncSession, schedule_exception: ScheduleException) -> None:
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            if is_exclusion_violation(e, constraint_name=SCHEDULE_EXCEPTION_NO_OVERLAP_CONSTRAINT):
                raise ConflictError(
                    f'Schedule exception overlaps another window of restaurant '
                    f'{schedule_exception.restaurant_id}'
                ) from e
            raise
