import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from ledger.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_ledger_error,
    handle_validation_error,
)
from ledger.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from ledger.api.v1 import router as v1_router
from ledger.api.v1.health import router as health_router
from ledger.config import settings
from ledger.core.exceptions import LedgerError
from ledger.db.session import async_engine, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        await init_db()
    logger.info(f"Ledger API started ({settings.app_env})")
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="ZKB Ledger API",
        description="ZKB account statement import, categorization and summaries",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(LedgerError, handle_ledger_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
