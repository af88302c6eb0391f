"""
Table Hold Store - Kvrocks

One hash per table (`table_hold:{table_id}`) with the holder id and the
serialized hold, expired by Kvrocks itself. Check-and-set and
compare-and-delete run as Lua scripts so concurrent selects of the same
table are serialized by the server.
"""

from typing import Any, Callable, Optional

import orjson
from redis.asyncio import Redis
from redis.commands.core import AsyncScript
from redis.exceptions import NoScriptError

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client, make_key
from src.service.restaurant_booking.app.interface.i_table_hold_store import ITableHoldStore
from src.service.restaurant_booking.domain.value_object.table_hold import TableHold
from src.service.restaurant_booking.driven_adapter.state.lua_script import (
    ACQUIRE_TABLE_HOLD_SCRIPT,
    RELEASE_TABLE_HOLD_SCRIPT,
)


def _hold_key(table_id: str) -> str:
    return make_key('table_hold', table_id)


def _decode(payload: bytes | str) -> TableHold:
    return TableHold.from_dict(orjson.loads(payload))


class TableHoldStoreKvrocksImpl(ITableHoldStore):
    def __init__(self, *, client_factory: Callable[[], Redis] = kvrocks_client.get_client) -> None:
        self._client_factory = client_factory
        self._scripts: dict[str, AsyncScript] = {}

    async def _run(self, source: str, *, keys: list[str], args: list[Any]) -> Any:
        client = self._client_factory()
        script = self._scripts.get(source)
        if script is None:
            script = self._scripts[source] = client.register_script(source)
        try:
            return await script(keys=keys, args=args, client=client)
        except NoScriptError:
            Logger.base.warning('⚠️ [LUA] table hold script not found, re-registering...')
            script = self._scripts[source] = client.register_script(source)
            return await script(keys=keys, args=args, client=client)

    @Logger.io
    async def acquire(self, *, hold: TableHold, ttl_seconds: int) -> TableHold:
        payload = await self._run(
            ACQUIRE_TABLE_HOLD_SCRIPT,
            keys=[_hold_key(hold.table_id)],
            args=[orjson.dumps(hold.to_dict()), hold.holder_user_id, ttl_seconds * 1000],
        )
        return _decode(payload)

    @Logger.io
    async def get(self, *, table_id: str) -> Optional[TableHold]:
        client = self._client_factory()
        payload = await client.hget(_hold_key(table_id), 'payload')  # type: ignore[misc]
        return _decode(payload) if payload else None

    @Logger.io
    async def release(self, *, table_id: str, user_id: str) -> bool:
        deleted = await self._run(
            RELEASE_TABLE_HOLD_SCRIPT, keys=[_hold_key(table_id)], args=[user_id]
        )
        return bool(deleted)
