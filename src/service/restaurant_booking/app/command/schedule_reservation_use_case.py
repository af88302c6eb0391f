from datetime import date, time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.types import new_uuid7
from src.service.restaurant_booking.app.command.table_hold_coordinator import (
    TableHoldCoordinator,
)
from src.service.restaurant_booking.app.interface.i_reservation_event_publisher import (
    IReservationEventPublisher,
)
from src.service.restaurant_booking.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
    ReservationEventType,
)
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)
from src.service.restaurant_booking.domain.value_object.reservation_request import (
    ReservationScheduleRequest,
)


class ScheduleReservationUseCase:
    """
    Book a table for a diner.

    Flow:
    1. Domain service validates the slot and persists a PENDING reservation
    2. The diner's hold on the table (if any) is dropped
    3. reservation.created is published

    Steps 2 and 3 are best effort: the reservation is already committed.
    """

    def __init__(
        self,
        *,
        reservation_domain_service: ReservationDomainService,
        table_hold_coordinator: TableHoldCoordinator,
        event_publisher: IReservationEventPublisher,
    ) -> None:
        self.reservation_domain_service = reservation_domain_service
        self.table_hold_coordinator = table_hold_coordinator
        self.event_publisher = event_publisher

    @classmethod
    @inject
    def depends(
        cls,
        reservation_domain_service: ReservationDomainService = Depends(
            Provide[Container.reservation_domain_service]
        ),
        table_hold_coordinator: TableHoldCoordinator = Depends(
            Provide[Container.table_hold_coordinator]
        ),
        event_publisher: IReservationEventPublisher = Depends(
            Provide[Container.reservation_event_publisher]
        ),
    ) -> Self:
        return cls(
            reservation_domain_service=reservation_domain_service,
            table_hold_coordinator=table_hold_coordinator,
            event_publisher=event_publisher,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        restaurant_id: str,
        table_id: str,
        reservation_date: date,
        reservation_time: time,
        number_of_guests: int,
        duration_minutes: Optional[int] = None,
    ) -> Reservation:
        reservation = await self.reservation_domain_service.schedule_reservation(
            ReservationScheduleRequest(
                reservation_id=new_uuid7(),
                user_id=user_id,
                restaurant_id=restaurant_id,
                table_id=table_id,
                reservation_date=reservation_date,
                reservation_time=reservation_time,
                number_of_guests=number_of_guests,
                duration_minutes=duration_minutes,
            )
        )

        await self.table_hold_coordinator.consume(table_id=reservation.table_id, user_id=user_id)
        await self.event_publisher.publish(
            event=ReservationDomainEvent.from_reservation(
                type=ReservationEventType.CREATED, reservation=reservation
            )
        )
        return reservation
