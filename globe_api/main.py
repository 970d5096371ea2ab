"""
Living Globe Trends API — Application entry point.

Bootstraps FastAPI, wires up middleware and registers route groups.

Extension points:
  - Add new route groups with app.include_router() below
  - Add new middleware in the middleware block
  - Change startup behaviour in the lifespan context manager

Run locally:
    uvicorn globe_api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from globe_api.core.config import settings
from globe_api.routes.health import router as health_router
from globe_api.routes.trends import router as trends_router
from globe_api.services.locations import location_registry

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Code before `yield` runs on startup; code after runs on shutdown."""
    logger.info(
        "Starting Living Globe Trends API (env: %s, %d locations)",
        settings.environment,
        len(location_registry),
    )
    yield
    logger.info("Shutting down Living Globe Trends API")


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Living Globe Trends API",
    description=(
        "Trend hotspot engine for the living globe: red hotspots by tweet "
        "volume, blue zones by emerging-trend velocity."
    ),
    version="0.1.0",
    lifespan=lifespan,
    # Disable docs in production to reduce attack surface
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Middleware ─────────────────────────────────────────────────────────────────
# CORS: allow the globe frontend to call the API.
# In production, restrict allow_origins to your actual domain.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(trends_router)


@app.get("/", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "Living Globe Trends API",
        "version": "0.1.0",
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
