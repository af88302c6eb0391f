from typing import AsyncContextManager, Callable, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.domain.reservation_errors import (
    ReservationNotFoundError,
    RestaurantNotFoundError,
)
from src.service.restaurant_booking.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.restaurant_booking.driven_adapter.model.restaurant_model import RestaurantModel


class OwnershipAssertionImpl(IOwnershipAssertion):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def assert_restaurant_ownership(self, *, restaurant_id: str, owner_id: str) -> None:
        async with self.session_factory() as session:
            restaurant_owner = await session.scalar(
                select(RestaurantModel.owner_id).where(RestaurantModel.id == restaurant_id)
            )
        if restaurant_owner is None:
            raise RestaurantNotFoundError(restaurant_id)
        if restaurant_owner != owner_id:
            raise ForbiddenError('Only the restaurant owner can perform this action')

    @Logger.io
    async def assert_reservation_ownership(
        self, *, reservation_id: UUID, owner_id: str, restaurant_id: Optional[str] = None
    ) -> None:
        async with self.session_factory() as session:
            row = (
                await session.execute(
                    select(ReservationModel.restaurant_id, RestaurantModel.owner_id)
                    .join(RestaurantModel, RestaurantModel.id == ReservationModel.restaurant_id)
                    .where(ReservationModel.id == uuid.UUID(str(reservation_id)))
                )
            ).first()
        if row is None or (restaurant_id is not None and row.restaurant_id != restaurant_id):
            raise ReservationNotFoundError(reservation_id)
        if row.owner_id != owner_id:
            raise ForbiddenError('Only the restaurant owner can perform this action')
