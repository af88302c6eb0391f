"""
Table Hold Coordinator

Short-lived exclusive claims on a table while a diner picks a slot. Holds
only improve the interactive experience: losing the hold store never
compromises reservation correctness, which is enforced on write.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.restaurant_booking.app.interface.i_table_hold_store import ITableHoldStore
from src.service.restaurant_booking.domain.value_object.table_hold import (
    TableHold,
    TableSelectionResult,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TableHoldCoordinator:
    def __init__(
        self,
        *,
        table_hold_store: ITableHoldStore,
        ttl_seconds: int = settings.TABLE_HOLD_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.table_hold_store = table_hold_store
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    @Logger.io
    async def select(
        self,
        *,
        table_id: str,
        restaurant_id: str,
        section_id: str,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> TableSelectionResult:
        requested = TableHold(
            table_id=table_id,
            restaurant_id=restaurant_id,
            section_id=section_id,
            holder_user_id=user_id,
            session_id=session_id,
            expires_at=self.clock() + timedelta(seconds=self.ttl_seconds),
        )
        current = await self.table_hold_store.acquire(hold=requested, ttl_seconds=self.ttl_seconds)

        # Re-selecting keeps the original expiry; holds are never extended
        if current.is_held_by(user_id):
            return TableSelectionResult.held(current)
        return TableSelectionResult.rejected(table_id=table_id, message='table currently held')

    @Logger.io
    async def release(
        self, *, table_id: str, restaurant_id: str, section_id: str, user_id: str
    ) -> bool:
        """Only the holder can release; absent, expired or foreign holds are left alone"""
        released = await self.table_hold_store.release(table_id=table_id, user_id=user_id)
        if released:
            Logger.base.info(
                f'table hold released: restaurant={restaurant_id} section={section_id} '
                f'table={table_id} user={user_id}'
            )
        return released

    async def current_hold(self, *, table_id: str) -> Optional[TableHold]:
        return await self.table_hold_store.get(table_id=table_id)

    async def consume(self, *, table_id: str, user_id: str) -> None:
        """Drop the caller's hold once their reservation is committed"""
        try:
            await self.table_hold_store.release(table_id=table_id, user_id=user_id)
        except Exception as e:
            Logger.base.warning(f'failed to drop table hold after reservation: table={table_id} {e}')
