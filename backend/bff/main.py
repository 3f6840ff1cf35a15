"""BFF Gateway — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {message, statusCode, errors?} envelope
    - CORS configured from settings (not hardcoded)
    - Upstream clients and response cache created on startup, closed on shutdown
    - No persistent state: everything on app.state is rebuilt on restart

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Request log middleware binds the request id and emits one structured line per request
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from bff.api.error_handlers import register_error_handlers
from bff.api.routes import auth, health, properties, transfers
from bff.config import get_settings
from bff.infrastructure.observability import (
    REQUEST_ID_HEADER,
    bind_request_id,
    setup_logging,
)
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache

logger = logging.getLogger(__name__)

SERVICE_NAME = "BFF Gateway - Property Tokenization Platform"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.orchestrator_client = OrchestratorClient(
        settings.orchestrator_url, settings.orchestrator_timeout_seconds,
    )
    app.state.offchain_client = OffchainClient(
        settings.offchain_api_url,
        settings.offchain_api_timeout_seconds,
        country_code=settings.identity_country_code,
    )
    app.state.response_cache = ResponseCache(settings.cache_ttl_seconds)
    logger.info(
        f"BFF Gateway started (orchestrator={settings.orchestrator_url}, "
        f"offchain={settings.offchain_api_url}, environment={settings.environment})",
    )
    yield
    await app.state.orchestrator_client.aclose()
    await app.state.offchain_client.aclose()
    logger.info("BFF Gateway shutting down")


app = FastAPI(title="BFF Gateway", version=SERVICE_VERSION, lifespan=lifespan)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        _log_request(request, 500, started)
        raise
    _log_request(request, response.status_code, started)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _log_request(request: Request, status_code: int, started: float) -> None:
    logger.info(
        f"{request.method} {request.url.path} {status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )


# Routes
app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(transfers.router)
app.include_router(health.router)

register_error_handlers(app)


@app.get("/")
async def root():
    """Service descriptor."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "environment": settings.environment,
        "endpoints": {
            "auth": "/auth",
            "properties": "/properties",
            "transfers": "/transfers",
            "health": "/health",
        },
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run("bff.main:app", host=settings.host, port=settings.port)
