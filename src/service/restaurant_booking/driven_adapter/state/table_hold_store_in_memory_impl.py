from datetime import datetime, timezone
from typing import Callable, Optional

import anyio

from src.service.restaurant_booking.app.interface.i_table_hold_store import ITableHoldStore
from src.service.restaurant_booking.domain.value_object.table_hold import TableHold


class TableHoldStoreInMemoryImpl(ITableHoldStore):
    """
    Process-local hold store for single-instance deployments and tests.

    Expired holds are dropped lazily when their table is touched.
    """

    def __init__(
        self, *, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ) -> None:
        self._holds: dict[str, TableHold] = {}
        self._lock = anyio.Lock()
        self._clock = clock

    def _live_hold(self, table_id: str) -> Optional[TableHold]:
        hold = self._holds.get(table_id)
        if hold is not None and not hold.is_active(now=self._clock()):
            del self._holds[table_id]
            return None
        return hold

    async def acquire(self, *, hold: TableHold, ttl_seconds: int) -> TableHold:
        async with self._lock:
            existing = self._live_hold(hold.table_id)
            if existing is not None:
                return existing
            self._holds[hold.table_id] = hold
            return hold

    async def get(self, *, table_id: str) -> Optional[TableHold]:
        async with self._lock:
            return self._live_hold(table_id)

    async def release(self, *, table_id: str, user_id: str) -> bool:
        async with self._lock:
            existing = self._live_hold(table_id)
            if existing is None or not existing.is_held_by(user_id):
                return False
            del self._holds[table_id]
            return True
