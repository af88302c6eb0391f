"""
Table Hold Store Interface

Backing store of the table hold coordinator. Every operation is atomic per
table: two concurrent `acquire` calls for one table never both succeed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.restaurant_booking.domain.value_object.table_hold import TableHold


class ITableHoldStore(ABC):
    @abstractmethod
    async def acquire(self, *, hold: TableHold, ttl_seconds: int) -> TableHold:
        """
        Take the hold unless another user holds the table

        Returns:
            The hold now in force: `hold` when it was taken, the existing hold when
            the same user already held the table, another user's hold on rejection
        """
        pass

    @abstractmethod
    async def get(self, *, table_id: str) -> Optional[TableHold]:
        """Current unexpired hold of a table"""
        pass

    @abstractmethod
    async def release(self, *, table_id: str, user_id: str) -> bool:
        """Drop the hold only when `user_id` holds it; returns whether it did"""
        pass
