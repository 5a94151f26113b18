"""
Production FastAPI Application

Serves the booking API on top of PostgreSQL with tracing and metrics.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Booking Service] Starting up...')

    tracing = TracingConfig(service_name=settings.OTEL_SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Booking Service] OpenTelemetry tracing configured')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Booking Service] Dependency injection wired')

    # Engines are bound to the serving event loop, create and instrument them now
    tracing.instrument_sqlalchemy(engine=get_engine())
    tracing.instrument_sqlalchemy(engine=get_engine(read_only=True))
    Logger.base.info('🗄️  [Booking Service] Database engines ready + instrumented')

    Logger.base.info('✅ [Booking Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Booking Service] Shutting down...')

    await get_engine().dispose()
    await get_engine(read_only=True).dispose()
    Logger.base.info('🗄️  [Booking Service] Database engines disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Booking Service] Tracing shutdown complete')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Booking Service] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Hotel Booking Service - view, create and move hotel room reservations',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
