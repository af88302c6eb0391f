"""
Reservation Store Interface

Persistence of reservations plus the conflict lookup the domain service runs
before every write. Implementations must also reject overlapping active
reservations of one table at write time (raising ConflictError), since the
lookup and the write are not atomic.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from uuid_utils import UUID

from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        """
        Get single reservation by ID

        Returns:
            Reservation entity or None if not found
        """
        pass

    @abstractmethod
    async def find_active_on_table(
        self,
        *,
        table_id: str,
        reservation_date: date,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> List[Reservation]:
        """
        PENDING and CONFIRMED reservations of a table on one date

        Args:
            table_id: Table to inspect
            reservation_date: Calendar date of the proposed slot
            exclude_reservation_id: Reservation being rescheduled (never conflicts with itself)
        """
        pass

    @abstractmethod
    async def find_active_for_user(
        self,
        *,
        user_id: str,
        reservation_date: date,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> List[Reservation]:
        """PENDING and CONFIRMED reservations of one diner on one date, on any table"""
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: str, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        """A diner's reservations, most recent slot first"""
        pass

    @abstractmethod
    async def list_by_restaurant(
        self,
        *,
        restaurant_id: str,
        status: Optional[ReservationStatus] = None,
        reservation_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Reservation]:
        """
        One page of a restaurant's reservations ordered by slot

        Args:
            status: Only reservations in this status
            reservation_date: Only reservations on this date
        """
        pass

    @abstractmethod
    async def save(self, *, reservation: Reservation) -> Reservation:
        """
        Insert or update a reservation

        Raises:
            ConflictError: the write would overlap another active reservation of the table;
                context carries `conflicting_reservation_id` when it can still be found
        """
        pass

    @abstractmethod
    async def delete(self, *, reservation_id: UUID) -> bool:
        """Hard delete; returns False when nothing was deleted"""
        pass
