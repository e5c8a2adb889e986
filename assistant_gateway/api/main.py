"""FastAPI application for the assistant gateway."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..exceptions import AssistantGatewayError
from ..utils.config import ensure_runtime_configuration, get_settings
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "FastAPI"})

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type", "x-api-key"]


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore
    """Application lifespan context manager for startup/shutdown."""
    # Startup
    ensure_runtime_configuration(get_settings())
    logger.info("Assistant gateway API starting up...")
    yield
    # Shutdown
    logger.info("Assistant gateway API shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Assistant Gateway API",
    description="Persona chat assistants with file extraction, translation and document downloads",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=CORS_ALLOW_HEADERS,
)


# Global exception handler
@app.exception_handler(AssistantGatewayError)
async def gateway_exception_handler(request: Request, exc: AssistantGatewayError) -> JSONResponse:
    """Handle uncaught assistant gateway exceptions."""
    logger.error(
        "AssistantGatewayError: %s",
        exc,
        extra={"status": "error"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": str(exc), "error_type": exc.__class__.__name__},
    )


# Import routers
from .routes import chat, documents, files, health, metrics  # noqa: E402

app.include_router(health.router, tags=["health"])
app.include_router(chat.router, prefix="/api/v1", tags=["chat"])
app.include_router(files.router, prefix="/api/v1", tags=["files"])
app.include_router(documents.router, prefix="/api/v1", tags=["documents"])
app.include_router(metrics.router, tags=["monitoring"])
