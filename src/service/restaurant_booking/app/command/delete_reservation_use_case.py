from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_ownership_assertion import (
    IOwnershipAssertion,
)
from src.service.restaurant_booking.app.interface.i_reservation_event_publisher import (
    IReservationEventPublisher,
)
from src.service.restaurant_booking.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
    ReservationEventType,
)
from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)


class DeleteReservationUseCase:
    """Hard delete by the restaurant owner (cancellation keeps the row, this does not)"""

    def __init__(
        self,
        *,
        reservation_domain_service: ReservationDomainService,
        ownership_assertion: IOwnershipAssertion,
        event_publisher: IReservationEventPublisher,
    ) -> None:
        self.reservation_domain_service = reservation_domain_service
        self.ownership_assertion = ownership_assertion
        self.event_publisher = event_publisher

    @classmethod
    @inject
    def depends(
        cls,
        reservation_domain_service: ReservationDomainService = Depends(
            Provide[Container.reservation_domain_service]
        ),
        ownership_assertion: IOwnershipAssertion = Depends(
            Provide[Container.ownership_assertion]
        ),
        event_publisher: IReservationEventPublisher = Depends(
            Provide[Container.reservation_event_publisher]
        ),
    ) -> Self:
        return cls(
            reservation_domain_service=reservation_domain_service,
            ownership_assertion=ownership_assertion,
            event_publisher=event_publisher,
        )

    @Logger.io
    async def execute(
        self,
        *,
        reservation_id: UUID,
        owner_id: str,
        restaurant_id: Optional[str] = None,
        is_admin: bool = False,
    ) -> None:
        if not is_admin:
            await self.ownership_assertion.assert_reservation_ownership(
                reservation_id=reservation_id, owner_id=owner_id, restaurant_id=restaurant_id
            )

        reservation = await self.reservation_domain_service.delete_reservation(
            reservation_id=reservation_id
        )

        await self.event_publisher.publish(
            event=ReservationDomainEvent.from_reservation(
                type=ReservationEventType.DELETED, reservation=reservation
            )
        )
