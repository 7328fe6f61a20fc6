"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rsvp_engine import __version__
from rsvp_engine.api.routes import health, tokenize
from rsvp_engine.config import get_settings
from rsvp_engine.logging_config import setup_logging
from rsvp_engine.schemas import ErrorResponse
from rsvp_engine.services.tokenizer import TokenizationError

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    setup_logging(
        log_level="DEBUG" if settings.debug else settings.log_level,
        json_output=settings.log_json,
    )
    logger.info("%s %s starting", settings.app_name, __version__)
    yield


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="RSVP tokenizer and playback engine",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TokenizationError)
async def tokenization_error_handler(request: Request, exc: TokenizationError) -> JSONResponse:
    """Translate tokenizer failures into a 422 error body."""
    logger.warning("Tokenization rejected: %s (%s)", exc.message, exc.code.value)
    body = ErrorResponse(code=exc.code, message=exc.message, recoverable=exc.recoverable)
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))


# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(tokenize.router, prefix="/api", tags=["tokenize"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": "RSVP Engine API",
        "version": __version__,
        "docs": "/docs" if settings.debug else None,
    }
