from __future__ import annotations

import datetime
import logging
from typing import Annotated, Any, Dict

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.api import auth
from backend.core.config import cors_origins
from backend.core.dependencies import get_db
from backend.core.logging import configure_logging
from backend.db.init_db import init_db

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid input")
    return f"{location}: {message}" if location else message


def create_app(*, create_tables: bool = True) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        create_tables: Create missing tables on the configured engine.

    Returns:
        FastAPI: Configured FastAPI app.
    """
    configure_logging()

    app = FastAPI(
        title="Wardrobe API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Cookie-bearing clients need explicit origins when credentials are allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _first_validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(auth.router)

    # Basic service endpoints
    @app.get("/", tags=["Service"])
    def root() -> Dict[str, Any]:
        """Root endpoint to verify the service is running."""
        return {"status": "ok", "service": "Wardrobe API"}

    @app.get("/health", tags=["Service"])
    def health(db: Annotated[Session, Depends(get_db)]) -> JSONResponse:
        """Health check endpoint; verifies the database connection."""
        timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Health check failed")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "status": "error",
                    "message": "Database connection failed",
                    "timestamp": timestamp,
                },
            )
        return JSONResponse(
            content={
                "status": "ok",
                "message": "API is running and database is connected",
                "timestamp": timestamp,
            }
        )

    if create_tables:
        init_db()

    return app


# ASGI entrypoint
app = create_app()
