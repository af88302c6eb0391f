from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.reservation_errors import (
    ReservationNotFoundError,
    ReservationOwnershipError,
)


class GetReservationUseCase:
    def __init__(
        self,
        *,
        reservation_command_repo: IReservationCommandRepo,
        ownership_assertion: IOwnershipAssertion,
    ) -> None:
        self.reservation_command_repo = reservation_command_repo
        self.ownership_assertion = ownership_assertion

    @classmethod
    @inject
    def depends(
        cls,
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
        ownership_assertion: IOwnershipAssertion = Depends(
            Provide[Container.ownership_assertion]
        ),
    ) -> Self:
        return cls(
            reservation_command_repo=reservation_command_repo,
            ownership_assertion=ownership_assertion,
        )

    @Logger.io
    async def execute(
        self, *, reservation_id: UUID, user_id: str, is_admin: bool = False
    ) -> Reservation:
        """Visible to the diner who made it and to the owner of the restaurant"""
        reservation = await self.reservation_command_repo.get_by_id(reservation_id=reservation_id)
        if not reservation:
            raise ReservationNotFoundError(reservation_id)
        if is_admin or reservation.is_owned_by(user_id):
            return reservation

        try:
            await self.ownership_assertion.assert_reservation_ownership(
                reservation_id=reservation_id, owner_id=user_id
            )
        except ForbiddenError as e:
            raise ReservationOwnershipError() from e
        return reservation
