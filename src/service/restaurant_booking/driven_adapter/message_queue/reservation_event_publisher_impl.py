"""
Reservation Event Publisher Implementation

Publishes reservation events on the Kvrocks pub/sub channel
`reservation_events:{restaurant_id}` so owner dashboards of one restaurant
only receive their own traffic. Publishing is best effort: the reservation is
already committed when this runs, so failures are logged and dropped.
"""

from typing import Callable

import orjson
from redis.asyncio import Redis

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client, make_key
from src.service.restaurant_booking.app.interface.i_reservation_event_publisher import (
    IReservationEventPublisher,
)
from src.service.restaurant_booking.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
)


class ReservationEventPublisherImpl(IReservationEventPublisher):
    def __init__(self, *, client_factory: Callable[[], Redis] = kvrocks_client.get_client) -> None:
        self._client_factory = client_factory

    @staticmethod
    def channel_name(*, restaurant_id: str) -> str:
        return make_key('reservation_events', restaurant_id)

    @Logger.io
    async def publish(self, *, event: ReservationDomainEvent) -> None:
        channel = self.channel_name(restaurant_id=event.restaurant_id)
        try:
            subscribers = await self._client_factory().publish(
                channel, orjson.dumps(event.to_dict())
            )
            Logger.base.info(
                f'📡 [KVROCKS] Published {event.type} to {channel}: subscribers={subscribers}'
            )
        except Exception as e:
            Logger.base.warning(f'⚠️ [Reservation Event Publisher] Publish failed: {e}')
