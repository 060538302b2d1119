"""FastAPI application for the LucidAd fact-checking service."""

import contextlib
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..domain.errors import LucidAdError
from ..domain.models.analysis_request import ErrorResponse
from ..domain.services.error_mapping import map_error
from ..infrastructure.dependencies import get_service_container
from .cors import ALLOW_HEADERS, ALLOW_METHODS, ALLOW_ORIGINS
from .endpoints import analyze, health

# Configure logging
logging.basicConfig(
    level=os.getenv("LUCIDAD_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service container at startup and release it on shutdown.

    A missing API key aborts startup instead of failing individual requests.
    """
    container = get_service_container()
    logging.getLogger().setLevel(container.settings.log_level.upper())
    app.state.container = container
    await container.get_fact_checking_service()
    logger.info("🚀 LucidAd API ready")

    yield  # Application runs here

    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="LucidAd API",
    description="Advertisement claim fact-checking with a vision language model",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=ALLOW_METHODS,
    allow_headers=ALLOW_HEADERS,
)


@app.exception_handler(LucidAdError)
async def lucidad_error_handler(request: Request, exc: LucidAdError) -> JSONResponse:
    """Render pipeline errors raised outside the analysis endpoint."""
    status_code, body = map_error(exc)
    return JSONResponse(status_code=status_code, content=body.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other failure as a generic error."""
    status_code, body = map_error(exc)
    return JSONResponse(status_code=status_code, content=body.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors (404, 405, ...) in the common error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).to_dict(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request parsing errors as bad input."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request").to_dict(),
    )


# Include routers
app.include_router(health.router)
app.include_router(analyze.router)
