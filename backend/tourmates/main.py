"""
Tourmates API

FastAPI application for group ride tours and nearby tour notifications.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourmates.config import settings
from tourmates.db.session import init_db, AsyncSessionLocal
from tourmates.api.v1.router import api_router
from tourmates.features.notifications import NearbyTourDispatcher


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting Tourmates API...")
    await init_db()
    logger.info("Database initialized")

    app.state.nearby_dispatcher = NearbyTourDispatcher(AsyncSessionLocal)

    yield

    # Shutdown
    pending = app.state.nearby_dispatcher.pending_count
    if pending:
        logger.info(f"Waiting for {pending} nearby scans to finish")
    await app.state.nearby_dispatcher.drain()
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Tourmates API",
    description="Group ride tours with nearby tour notifications",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}
