from abc import ABC, abstractmethod

from src.service.restaurant_booking.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
)


class IReservationEventPublisher(ABC):
    @abstractmethod
    async def publish(self, *, event: ReservationDomainEvent) -> None:
        pass
