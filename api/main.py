"""
Sensor Monitor - FastAPI Application

This is the main entry point for the FastAPI backend.
It combines all route modules and provides system-wide endpoints.

Features:
- Sensor reading ingestion and recent-readings query
- Append-only alert thresholds
- Credential check for the dashboard login
- Interactive API documentation (Swagger/OpenAPI)

Access Points:
- API Root: http://localhost:8000
- Swagger Docs: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
- OpenAPI JSON: http://localhost:8000/openapi.json
"""

import os
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import __version__
from api.database import check_database_health, init_database
from api.routes import readings_router, thresholds_router, auth_router
from api.models import SystemHealth

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown to manage resources.
    """
    logger.info("Starting Sensor Monitor API...")

    try:
        db_health = check_database_health()
        if db_health["status"] == "healthy":
            logger.info("Database connection verified")
        else:
            logger.warning(f"Database health check failed: {db_health}")

        init_database()

    except Exception as e:
        logger.error(f"Startup error: {e}")
        # Don't prevent startup - database might come up later

    logger.info("Sensor Monitor API started successfully")

    yield

    logger.info("Shutting down Sensor Monitor API...")


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Sensor Monitor API",
    description="""
## Temperature & Humidity Telemetry Backend

Receives readings from the sensor device, keeps them with a server
timestamp and serves the most recent ones to the dashboard together
with the configured alert thresholds.

### Endpoints

- **Readings**: `POST /api/v1/readings` to ingest, `GET /api/v1/readings` for the last 30 (oldest first)
- **Thresholds**: `GET /api/v1/thresholds` for the current pair, `POST /api/v1/thresholds` to append a new one
- **Login**: `POST /api/v1/auth/login` with form fields `email` and `password`

### Error Conventions

- Missing required fields: `400`
- Non-numeric values: `422`
- Storage failures: `500`
- Login outcomes: always `200`, distinguished by `success` and `message`
    """,
    version=__version__,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

class PreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers preflight requests with an empty 204."""

    def preflight_response(self, request_headers):
        response = super().preflight_response(request_headers=request_headers)
        headers = {
            key: value for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)


app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Reject payloads whose values have the wrong type."""
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "error": True,
            "message": "Invalid request payload",
            "detail": jsonable_encoder(exc.errors()),
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# =========================================
# Include Routers
# =========================================

app.include_router(readings_router, prefix="/api/v1")
app.include_router(thresholds_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1")


# =========================================
# Root Endpoints
# =========================================

@app.options("/{path:path}", include_in_schema=False)
async def options_fallback(path: str):
    """Answer OPTIONS requests that are not CORS preflights."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Sensor Monitor API",
        "version": __version__,
        "description": "Temperature and humidity telemetry backend",
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check the health status of the API and its database"
)
async def health_check():
    """System health check endpoint."""
    db_health = check_database_health()

    overall_status = "ok" if db_health["status"] == "healthy" else "degraded"

    return SystemHealth(
        status=overall_status,
        version=__version__,
        timestamp=datetime.utcnow(),
        database=db_health["status"],
        components={
            "api": "ok",
            "database": db_health["status"],
        }
    )


@app.get(
    "/ready",
    tags=["System"],
    summary="Readiness Check",
    description="Check if the API is ready to receive traffic"
)
async def readiness_check():
    """Kubernetes-style readiness probe."""
    db_health = check_database_health()

    if db_health["status"] != "healthy":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not ready"
        )

    return {"ready": True}


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


# =========================================
# Run with Uvicorn (for development)
# =========================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
