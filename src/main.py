"""
Production FastAPI Application

Run with:
    uvicorn src.main:app --host 0.0.0.0 --port 8080
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Cinema Service] Starting up...')

    tracing = TracingConfig(service_name='cinema-service')
    tracing.setup()
    exporter_state = 'exporting spans' if tracing.is_exporting else 'no exporter configured'
    Logger.base.info(f'📊 [Cinema Service] OpenTelemetry tracing configured ({exporter_state})')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Service] Dependency injection wired')

    database = container.database()
    await database.create_db_and_tables()
    tracing.instrument_sqlalchemy(engine=database.engine)
    Logger.base.info('🗄️  [Cinema Service] Database schema ready + instrumented')

    Logger.base.info('✅ [Cinema Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Cinema Service] Shutting down...')

    await cleanup()
    Logger.base.info('🗄️  [Cinema Service] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Cinema Service] Shutdown complete')


app = create_app(lifespan=lifespan)
