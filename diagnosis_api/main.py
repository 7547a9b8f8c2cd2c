"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from diagnosis_api.config import settings
from diagnosis_api.database import Database
from diagnosis_api.exceptions import DiagnosisError
from diagnosis_api.routes import diagnoses
from diagnosis_api.scripts.seed_database import seed_database
from diagnosis_api.services.diagnosis import DiagnosisService

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events for startup/shutdown."""
    # Startup: open the store client, then prepare schema and seed data
    database = Database.from_settings(settings)
    if await database.verify_connectivity():
        if settings.create_schema_on_startup:
            await database.create_schema()
            logger.info("Database schema ensured")
        if settings.seed_on_startup:
            stats = await seed_database(database)
            logger.info("Seeded %d diagnoses", stats["inserted"])
    else:
        logger.warning("Database not available - skipping schema creation and seeding")

    app.state.database = database
    app.state.diagnosis_service = DiagnosisService(database)

    yield  # Application runs here

    # Shutdown: release pooled connections
    await database.close()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app = FastAPI(
    title="Diagnosis API",
    description="Clinical diagnosis records with therapist challenges",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware for the frontend origin(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(DiagnosisError)
async def diagnosis_error_handler(request: Request, exc: DiagnosisError) -> JSONResponse:
    """Render domain errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed request bodies with 400 instead of 422."""
    logger.info("Rejected request body for %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep the error body shape for framework errors (unknown route, bad method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail).lower()},
        headers=getattr(exc, "headers", None),
    )


# Include API routers
app.include_router(diagnoses.router, prefix="/api")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Diagnosis API",
        "version": "0.1.0",
        "docs": "/docs",
    }
