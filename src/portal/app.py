"""
Byte Portal Application

FastAPI application exposing posts, calendar and notifications.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Config
from .services.engine_service import get_engine_service, init_engine_service
from .routes import (
    health_router,
    posts_router,
    calendar_router,
    notifications_router,
)

logger = logging.getLogger("byte.app")


def configure_logging(level: str = Config.LOG_LEVEL) -> None:
    """Root logging setup shared by the app and the runner"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    for noisy in ("asyncpg", "aiosmtplib", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect storages on startup, drain emails and disconnect on shutdown"""
    logger.info("Starting Byte Portal...")
    await init_engine_service()
    logger.info("Byte Portal started")

    yield

    logger.info("Shutting down Byte Portal...")
    try:
        await get_engine_service().close()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
    else:
        logger.info("Byte Portal shutdown complete")


configure_logging()

app = FastAPI(
    title="Byte Portal API",
    description="Student organization portal: posts, calendar and notifications",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (health_router, posts_router, calendar_router, notifications_router):
    app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"service": "Byte Portal", "version": __version__}
