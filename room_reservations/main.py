import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from room_reservations.config import settings
from room_reservations.database import SessionLocal, check_db_connection, init_database
from room_reservations.seed import seed_sample_catalog
from room_reservations.utils.exceptions import AppException
from room_reservations.utils.log_buffer import install_log_buffer
from room_reservations.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    operational_error_handler,
    generic_exception_handler,
)

from room_reservations.api.v1 import rooms
from room_reservations.api.v1 import time_slots
from room_reservations.api.v1 import reservations
from room_reservations.api.v1 import availability
from room_reservations.api.v1 import logs

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
install_log_buffer(settings.LOG_BUFFER_SIZE)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Check the store, create missing tables and seed the sample catalog."""
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")
    ok = check_db_connection()
    logger.info("DB connected" if ok else "DB connection FAILED")
    init_database()
    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_catalog(db)
        finally:
            db.close()
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        description="Room & time-slot reservation API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(OperationalError, operational_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = settings.API_PREFIX
    app.include_router(rooms.router,        prefix=PREFIX, tags=["Rooms"])
    app.include_router(time_slots.router,   prefix=PREFIX, tags=["Time Slots"])
    app.include_router(reservations.router, prefix=PREFIX, tags=["Reservations"])
    app.include_router(availability.router, prefix=PREFIX, tags=["Availability"])
    app.include_router(logs.router,         prefix=PREFIX, tags=["Logs"])

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": VERSION}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("room_reservations.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
