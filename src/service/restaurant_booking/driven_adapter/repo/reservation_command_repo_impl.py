from datetime import date
from typing import AsyncContextManager, Callable, List, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.integrity import is_exclusion_violation
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import (
    ACTIVE_RESERVATION_STATUSES,
    ReservationStatus,
)
from src.service.restaurant_booking.driven_adapter.model.reservation_model import (
    RESERVATION_NO_OVERLAP_CONSTRAINT,
    ReservationModel,
)


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(db_reservation: ReservationModel) -> Reservation:
        # SQLAlchemy returns stdlib uuid.UUID; the domain works with uuid_utils.UUID
        return Reservation(
            id=UUID(str(db_reservation.id)),
            restaurant_id=db_reservation.restaurant_id,
            user_id=db_reservation.user_id,
            table_id=db_reservation.table_id,
            reservation_date=db_reservation.reservation_date,
            reservation_time=db_reservation.reservation_time,
            number_of_guests=db_reservation.number_of_guests,
            duration_minutes=db_reservation.duration_minutes,
            status=ReservationStatus(db_reservation.status),
            created_at=db_reservation.created_at,
            updated_at=db_reservation.updated_at,
        )

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        async with self.session_factory() as session:
            db_reservation = await session.get(ReservationModel, uuid.UUID(str(reservation_id)))
            return self._to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def find_active_on_table(
        self,
        *,
        table_id: str,
        reservation_date: date,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> List[Reservation]:
        stmt = (
            select(ReservationModel)
            .where(ReservationModel.table_id == table_id)
            .where(ReservationModel.reservation_date == reservation_date)
            .where(ReservationModel.status.in_([s.value for s in ACTIVE_RESERVATION_STATUSES]))
            .order_by(ReservationModel.reservation_time)
        )
        if exclude_reservation_id is not None:
            stmt = stmt.where(ReservationModel.id != uuid.UUID(str(exclude_reservation_id)))

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def find_active_for_user(
        self,
        *,
        user_id: str,
        reservation_date: date,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> List[Reservation]:
        stmt = (
            select(ReservationModel)
            .where(ReservationModel.user_id == user_id)
            .where(ReservationModel.reservation_date == reservation_date)
            .where(ReservationModel.status.in_([s.value for s in ACTIVE_RESERVATION_STATUSES]))
            .order_by(ReservationModel.reservation_time)
        )
        if exclude_reservation_id is not None:
            stmt = stmt.where(ReservationModel.id != uuid.UUID(str(exclude_reservation_id)))

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_by_user(
        self, *, user_id: str, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        stmt = (
            select(ReservationModel)
            .where(ReservationModel.user_id == user_id)
            .order_by(
                ReservationModel.reservation_date.desc(), ReservationModel.reservation_time.desc()
            )
        )
        if status is not None:
            stmt = stmt.where(ReservationModel.status == status.value)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_by_restaurant(
        self,
        *,
        restaurant_id: str,
        status: Optional[ReservationStatus] = None,
        reservation_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Reservation]:
        stmt = (
            select(ReservationModel)
            .where(ReservationModel.restaurant_id == restaurant_id)
            .order_by(ReservationModel.reservation_date, ReservationModel.reservation_time)
            .limit(limit)
            .offset(offset)
        )
        if status is not None:
            stmt = stmt.where(ReservationModel.status == status.value)
        if reservation_date is not None:
            stmt = stmt.where(ReservationModel.reservation_date == reservation_date)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def save(self, *, reservation: Reservation) -> Reservation:
        snapshot = reservation.snapshot()
        async with self.session_factory() as session:
            db_reservation = await session.get(ReservationModel, uuid.UUID(str(snapshot.id)))
            if db_reservation is None:
                db_reservation = ReservationModel(id=uuid.UUID(str(snapshot.id)))
                session.add(db_reservation)

            db_reservation.restaurant_id = snapshot.restaurant_id
            db_reservation.user_id = snapshot.user_id
            db_reservation.table_id = snapshot.table_id
            db_reservation.reservation_date = snapshot.reservation_date
            db_reservation.reservation_time = snapshot.reservation_time
            db_reservation.number_of_guests = snapshot.number_of_guests
            db_reservation.duration_minutes = snapshot.duration_minutes
            db_reservation.status = snapshot.status.value

            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if not is_exclusion_violation(
                    e, constraint_name=RESERVATION_NO_OVERLAP_CONSTRAINT
                ):
                    raise
                conflicting = await self._find_table_conflict(reservation)
                raise ConflictError(
                    f'Table {snapshot.table_id} already has an overlapping reservation',
                    context={
                        'conflicting_reservation_id': str(conflicting.id) if conflicting else None
                    },
                ) from e

            await session.refresh(db_reservation)
            return self._to_entity(db_reservation)

    async def _find_table_conflict(self, reservation: Reservation) -> Reservation | None:
        # None when the winning reservation was cancelled again in the meantime
        candidates = await self.find_active_on_table(
            table_id=reservation.table_id,
            reservation_date=reservation.reservation_date,
            exclude_reservation_id=reservation.id,
        )
        return next((r for r in candidates if r.window.overlaps(reservation.window)), None)

    @Logger.io
    async def delete(self, *, reservation_id: UUID) -> bool:
        async with self.session_factory() as session:
            db_reservation = await session.get(ReservationModel, uuid.UUID(str(reservation_id)))
            if db_reservation is None:
                return False
            await session.delete(db_reservation)
            await session.commit()
            return True
