from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend import RoomRegistry
from constants import CORS_ORIGINS, LOG_FILE, LOG_LEVEL
from logging_config import get_logger, setup_logging
from relay import ConnectionLifecycle, SignalRouter
from routers.rooms import rooms_router
from routers.signaling import signaling_router
from schemas.rooms import HealthResponse

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Signal relay starting up")
    yield
    logger.info("Shutting down server...")
    logger.info("Server closed")


def create_app(registry: Optional[RoomRegistry] = None) -> FastAPI:
    """Build a relay app that owns ``registry`` (a fresh one if not given)."""
    app = FastAPI(title="Signal Relay", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    registry = registry if registry is not None else RoomRegistry()
    app.state.registry = registry
    app.state.signal_router = SignalRouter(registry)
    app.state.lifecycle = ConnectionLifecycle(registry)

    app.include_router(signaling_router)
    app.include_router(rooms_router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        return HealthResponse(status="healthy", rooms=len(request.app.state.registry))

    logger.info("FastAPI application initialized")
    return app


app = create_app()
