"""FastAPI application entry point."""

import logging
import sys
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from poi_api.config import settings
from poi_api.errors import POIServiceError
from poi_api.routers import auth_router
from poi_api.routes import pois_router

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure logging for the API process."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def _simplify_errors(errors) -> list[dict]:
    """Reduce pydantic error dicts to JSON-safe location/message/type triples."""
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in errors
    ]


setup_logging()

app = FastAPI(
    title="POI Map API",
    description="Backend API for the POI map - role-gated points of interest with JSON export",
    version="0.1.0",
)

# CORS middleware - allow frontend origins
origins = list(settings.cors_origins)
if settings.frontend_url and settings.frontend_url not in origins:
    origins.append(settings.frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Exports of large maps compress well
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(auth_router)
app.include_router(pois_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "poi-api"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(POIServiceError)
async def poi_service_error_handler(request: Request, exc: POIServiceError):
    """Translate domain errors (validation, forbidden, not found) to their status codes."""
    logger.info(
        "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies, paths and queries are client errors (400)."""
    logger.info("Invalid request on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid data",
            "errors": _simplify_errors(exc.errors()),
            "error_type": "ValidationError",
        },
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Handle database integrity errors (unique constraint, foreign key violations).

    Returns 409 Conflict for constraint violations.
    """
    logger.warning(
        f"Database integrity error on {request.method} {request.url}: {exc.orig}"
    )
    error_msg = str(exc.orig) if exc.orig else str(exc)

    if "foreign key" in error_msg.lower():
        detail = "Referenced resource does not exist"
    elif "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
        detail = "Resource already exists"
    else:
        detail = "Database constraint violation"

    return JSONResponse(
        status_code=409,
        content={"detail": detail, "error_type": "IntegrityError"},
    )


@app.exception_handler(OperationalError)
async def operational_error_handler(request: Request, exc: OperationalError):
    """Handle database operational errors (connection issues, timeouts).

    Returns 503 Service Unavailable for database connectivity issues.
    """
    logger.error(
        f"Database operational error on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Database temporarily unavailable",
            "error_type": "OperationalError",
        },
    )


@app.exception_handler(DataError)
async def data_error_handler(request: Request, exc: DataError):
    """Handle database data errors (invalid data types, out of range values)."""
    logger.warning(
        f"Database data error on {request.method} {request.url}: {exc.orig}"
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid data format for database field",
            "error_type": "DataError",
        },
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing.

    Request bodies are covered by RequestValidationError; this catches errors
    during response serialization or in repository code.
    """
    logger.warning(
        f"Validation error on {request.method} {request.url}: {exc}"
    )
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Data validation failed",
            "errors": _simplify_errors(exc.errors()),
            "error_type": "ValidationError",
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors and return a consistent JSON 500 response."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )


def run() -> None:
    """Entry point for the API server."""
    import uvicorn

    uvicorn.run("poi_api.main:app", host="0.0.0.0", port=8000, log_level=settings.log_level)


if __name__ == "__main__":
    run()
