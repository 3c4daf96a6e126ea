"""
FastAPI app factory shared by src/main.py and the test app

Routes sit at the root: /movies, /showtimes, /bookings, plus /health and
/metrics from the system router.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import BOOKING_BASE, MOVIE_BASE, SHOWTIME_BASE
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.cinema.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.cinema.driving_adapter.http_controller.movie_controller import (
    router as movie_router,
)
from src.service.cinema.driving_adapter.http_controller.showtime_controller import (
    router as showtime_router,
)


# (router, prefix, tag)
SERVICE_ROUTERS: tuple[tuple[APIRouter, str, str], ...] = (
    (movie_router, MOVIE_BASE, 'movie'),
    (showtime_router, SHOWTIME_BASE, 'showtime'),
    (booking_router, BOOKING_BASE, 'booking'),
)

system_router = APIRouter(tags=['system'])


@system_router.get('/', include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')


@system_router.get('/health')
async def health_check() -> dict[str, str]:
    """Liveness probe."""
    return {'status': 'healthy', 'service': settings.PROJECT_NAME}


@system_router.get('/metrics')
async def get_metrics() -> PlainTextResponse:
    """Prometheus scrape endpoint."""
    return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Movie catalog, theater scheduling and seat booking',
    service_name: str = 'cinema-service',
) -> FastAPI:
    """
    Args:
        lifespan: Startup/shutdown context (production or test flavour)
        title_suffix: Appended to PROJECT_NAME in the OpenAPI title
        service_name: Service name reported on FastAPI spans
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Must run before routes are mounted
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_exception_handlers(app)

    for router, prefix, tag in SERVICE_ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])
    app.include_router(system_router)

    return app
