from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus


class ListReservationsUseCase:
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
    async def list_diner_reservations(
        self, *, user_id: str, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        return await self.reservation_command_repo.list_by_user(user_id=user_id, status=status)

    @Logger.io
    async def list_restaurant_reservations(
        self,
        *,
        restaurant_id: str,
        owner_id: str,
        status: Optional[ReservationStatus] = None,
        reservation_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
        is_admin: bool = False,
    ) -> List[Reservation]:
        if not is_admin:
            await self.ownership_assertion.assert_restaurant_ownership(
                restaurant_id=restaurant_id, owner_id=owner_id
            )
        return await self.reservation_command_repo.list_by_restaurant(
            restaurant_id=restaurant_id,
            status=status,
            reservation_date=reservation_date,
            limit=limit,
            offset=offset,
        )
