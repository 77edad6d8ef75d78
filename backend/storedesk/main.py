import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

from storedesk.api import api_router
from storedesk.core.config import settings
from storedesk.core.errors import StoreDeskError, Unavailable
from storedesk.core.logging_config import setup_logging
from storedesk.core.middleware import TimeoutMiddleware

logger = logging.getLogger(__name__)


async def storedesk_error_handler(request: Request, exc: StoreDeskError) -> JSONResponse:
    """Map StoreDeskError subclasses to their HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Record conflicts with existing data", "error_type": "Conflict"},
    )


async def unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
    return await storedesk_error_handler(request, Unavailable())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="StoreDesk API",
        description="Orders, catalog and site content for a multi-branch retail shop",
        version="0.1.0",
    )

    app.add_middleware(TimeoutMiddleware, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreDeskError, storedesk_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    for exc_type in (OperationalError, InterfaceError, ConnectionRefusedError):
        app.add_exception_handler(exc_type, unavailable_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(api_router)

    # Serve uploaded images
    uploads_dir = Path(settings.UPLOAD_DIR)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": "0.1.0"}

    return app


app = create_app()
