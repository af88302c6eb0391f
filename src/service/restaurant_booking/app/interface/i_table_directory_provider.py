from abc import ABC, abstractmethod

from src.service.restaurant_booking.domain.value_object.table_snapshot import TableSnapshot


class ITableDirectoryProvider(ABC):
    @abstractmethod
    async def load_by_id(self, *, table_id: str) -> TableSnapshot | None:
        """None means the table does not exist"""
        pass
