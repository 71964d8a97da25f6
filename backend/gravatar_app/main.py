"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from gravatar_app.core.config import get_settings
from gravatar_app.core.logging import setup_logging

# Setup logging
logger = setup_logging("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Register the Gravatar service at startup."""
    settings = get_settings()
    try:
        from gravatar_app.services.gravatar import GravatarService

        app.state.gravatar = GravatarService.from_settings(settings)
        logger.info("Gravatar service initialized with %d presets", len(app.state.gravatar.presets()))
    except Exception as exc:
        logger.error(
            "Service initialization failed, running in degraded mode",
            exc_info=True,
            extra={"service": "main", "error_type": type(exc).__name__},
        )
        # Continue without the service; endpoints return 503 until fixed

    yield


# Create FastAPI app
app = FastAPI(
    title="Gravatar",
    description="Gravatar avatar URLs with configurable presets",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[f"http://localhost:{settings.frontend_port}"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
from gravatar_app.api.gravatar import router as gravatar_router  # noqa: E402

app.include_router(gravatar_router)


@app.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint.

    Always returns HTTP 200; check `services.gravatar` for actual status.
    """
    svc = getattr(request.app.state, "gravatar", None)

    logger.info("Health check requested")
    return {
        "status": "ok",
        "version": app.version,
        "services": {
            "gravatar": "ok" if svc is not None else "unavailable",
        },
    }
