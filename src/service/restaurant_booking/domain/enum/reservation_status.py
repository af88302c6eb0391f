from enum import StrEnum


class ReservationStatus(StrEnum):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'

    @property
    def is_active(self) -> bool:
        """Active reservations occupy their table; cancelled ones never conflict"""
        return self in ACTIVE_RESERVATION_STATUSES

    def can_transition_to(self, next_status: 'ReservationStatus') -> bool:
        return next_status in ALLOWED_TRANSITIONS[self]


ACTIVE_RESERVATION_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.PENDING, ReservationStatus.CONFIRMED}
)

# CANCELLED is terminal, CONFIRMED never goes back to PENDING
ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CANCELLED}),
    ReservationStatus.CANCELLED: frozenset(),
}
