import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi_problem.handler import add_exception_handler
from src.core.config import settings
from src.core.database.session import engine
from src.core.database.utils import init_db
from src.core.exceptions.handler import eh
from src.core.logging import get_logger, setup_exception_logging, setup_logging
from src.core.middlewares import RequestThrottlerMiddleware, RequestUtilsMiddleware
from src.core.openapi import OpenAPI
from src.domain.routers import health_router, stores_router

setup_logging()

if settings.ENVIRONMENT in ["staging", "production"]:
    setup_exception_logging()


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """
    Application lifespan manager.
    """
    try:
        logger.info("Application startup initiated", extra={"event_type": "app_startup_start"})

        await init_db(engine)

        logger.info(
            "Application startup completed successfully",
            extra={
                "event_type": "app_startup_complete",
                "environment": settings.ENVIRONMENT,
                "app_version": settings.APP_VERSION,
            },
        )

        yield

    except Exception as exc:
        logger.error(
            "Application startup failed",
            exc_info=True,
            extra={
                "event_type": "app_startup_failed",
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
        )
        raise
    finally:
        try:
            await engine.dispose()
            logger.info("Application shutdown completed", extra={"event_type": "app_shutdown_complete"})
        except asyncio.CancelledError:
            logger.info(
                "Application shutdown cancelled - graceful shutdown",
                extra={"event_type": "app_shutdown_cancelled"},
            )


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url=None,
    openapi_url=None,
    redoc_url=None,
)

add_exception_handler(app, eh)


openapi = OpenAPI()


# Middlewares
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


if settings.ENVIRONMENT in ["production"]:
    app.add_middleware(HTTPSRedirectMiddleware)


app.add_middleware(GZipMiddleware, compresslevel=5)
app.add_middleware(RequestUtilsMiddleware)
app.add_middleware(RequestThrottlerMiddleware, exempt_paths=["/health", "/health/"])


# Routers
app.include_router(health_router, prefix="/health", include_in_schema=False)
app.include_router(stores_router, prefix=f"{settings.API_STR}/stores", tags=["Stores"])


openapi.setup(app)
