from typing import AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_table_directory_provider import (
    ITableDirectoryProvider,
)
from src.service.restaurant_booking.domain.value_object.table_snapshot import TableSnapshot
from src.service.restaurant_booking.driven_adapter.model.dining_table_model import (
    DiningTableModel,
)


class TableDirectoryProviderImpl(ITableDirectoryProvider):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def load_by_id(self, *, table_id: str) -> TableSnapshot | None:
        async with self.session_factory() as session:
            table = await session.get(DiningTableModel, table_id)
            if not table:
                return None
            return TableSnapshot(
                table_id=table.id,
                section_id=table.section_id,
                restaurant_id=table.restaurant_id,
                capacity=table.capacity,
            )
