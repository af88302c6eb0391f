from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID


class IOwnershipAssertion(ABC):
    """
    Gate in front of every owner-initiated mutation.

    Raises:
        ForbiddenError: the caller does not own the restaurant
        RestaurantNotFoundError / ReservationNotFoundError: the target does not exist
    """

    @abstractmethod
    async def assert_restaurant_ownership(self, *, restaurant_id: str, owner_id: str) -> None:
        pass

    @abstractmethod
    async def assert_reservation_ownership(
        self, *, reservation_id: UUID, owner_id: str, restaurant_id: Optional[str] = None
    ) -> None:
        """
        The reservation must belong to a restaurant owned by `owner_id`
        (and to `restaurant_id` when given, otherwise it is reported as missing)
        """
        pass
