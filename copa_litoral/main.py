from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from copa_litoral.api.errors import register_exception_handlers
from copa_litoral.api.middleware import install_middleware
from copa_litoral.api.routes.auth import router as auth_router
from copa_litoral.api.routes.categorias import router as categorias_router
from copa_litoral.api.routes.health import router as health_router
from copa_litoral.api.routes.jugadores import router as jugadores_router
from copa_litoral.api.routes.partidos import router as partidos_router
from copa_litoral.api.routes.player_partidos import router as player_partidos_router
from copa_litoral.api.routes.torneos import router as torneos_router
from copa_litoral.core.config import get_settings
from copa_litoral.core.logging import configure_logging
from copa_litoral.db.session import engine

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_startup")
    yield
    await engine.dispose()
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.uses_default_jwt_secret:
        logger.warning("jwt_secret_default_in_use", environment=settings.environment)

    app = FastAPI(
        title="Copa Litoral API",
        version="1.0.0",
        docs_url="/docs" if settings.enable_openapi_docs else None,
        redoc_url="/redoc" if settings.enable_openapi_docs else None,
        openapi_url="/openapi.json" if settings.enable_openapi_docs else None,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    install_middleware(app, settings)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(categorias_router)
    app.include_router(jugadores_router)
    app.include_router(torneos_router)
    app.include_router(partidos_router)
    app.include_router(player_partidos_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "copa_litoral.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        proxy_headers=True,
        forwarded_allow_ips=settings.trusted_proxies,
    )


if __name__ == "__main__":
    run()
