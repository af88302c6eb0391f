"""
Production FastAPI Application

Restaurant booking API with Postgres (reservations, blackout windows) and
Kvrocks (table holds, reservation event pub/sub).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Restaurant Booking] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Restaurant Booking] Dependency injection wired')

    get_engine()
    Logger.base.info('🗄️  [Restaurant Booking] Database engine ready')

    # Local runs bootstrap the schema; deployed databases are migrated with alembic
    if settings.DEBUG:
        await create_db_and_tables()

    # Kvrocks carries table holds and event pub/sub; the in-memory hold backend runs without it
    if settings.TABLE_HOLD_BACKEND == 'kvrocks':
        await kvrocks_client.initialize()
        Logger.base.info('📡 [Restaurant Booking] Kvrocks initialized')

    Logger.base.info('✅ [Restaurant Booking] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Restaurant Booking] Shutting down...')

    await kvrocks_client.disconnect()
    await dispose_engine()
    Logger.base.info('🗄️  [Restaurant Booking] Database engine disposed')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Restaurant Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
