"""
Reservation Domain Events

Published after a reservation changes so other parts of the platform
(notifications, owner dashboards) can react. Delivery is best effort.
"""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

import attrs
from uuid_utils import UUID

from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation


class ReservationEventType(StrEnum):
    CREATED = 'reservation.created'
    UPDATED = 'reservation.updated'
    CANCELLED = 'reservation.cancelled'
    STATUS_CHANGED = 'reservation.status_changed'
    DELETED = 'reservation.deleted'


@attrs.define
class ReservationDomainEvent:
    type: ReservationEventType
    reservation_id: UUID
    restaurant_id: str
    user_id: str
    occurred_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] = attrs.field(factory=dict)

    @classmethod
    def from_reservation(
        cls, *, type: ReservationEventType, reservation: Reservation
    ) -> 'ReservationDomainEvent':
        return cls(
            type=type,
            reservation_id=reservation.id,
            restaurant_id=reservation.restaurant_id,
            user_id=reservation.user_id,
            data={
                'table_id': reservation.table_id,
                'reservation_date': reservation.reservation_date.isoformat(),
                'reservation_time': reservation.reservation_time.strftime('%H:%M'),
                'number_of_guests': reservation.number_of_guests,
                'duration_minutes': reservation.duration_minutes,
                'status': reservation.status.value,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.type.value,
            'reservation_id': str(self.reservation_id),
            'restaurant_id': self.restaurant_id,
            'user_id': self.user_id,
            'occurred_at': self.occurred_at.isoformat(),
            'data': self.data,
        }
