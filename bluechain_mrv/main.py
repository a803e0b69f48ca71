"""Main FastAPI application entry point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from bluechain_mrv.api.auth import router as auth_router
from bluechain_mrv.api.errors import register_exception_handlers
from bluechain_mrv.api.health import router as health_router
from bluechain_mrv.api.media import router as media_router
from bluechain_mrv.api.profiles import router as profiles_router
from bluechain_mrv.api.projects import router as projects_router
from bluechain_mrv.api.sensor_data import router as sensor_data_router
from bluechain_mrv.api.wallet import router as wallet_router
from bluechain_mrv.api.websocket_routes import router as websocket_router
from bluechain_mrv.config import settings
from bluechain_mrv.database import init_db
from bluechain_mrv.services.redis_service import RedisService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Local sqlite databases are created on startup; Postgres uses alembic
    if settings.is_sqlite and settings.environment == "development":
        await init_db()
        logger.info("Created sqlite schema for local development")
    yield
    await RedisService.close()


app = FastAPI(
    title="BlueChain MRV API",
    description="Blue carbon project registry with validator workflow, sensor data and carbon credit wallets",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey"],
    max_age=3600,
)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(profiles_router)
app.include_router(projects_router)
app.include_router(sensor_data_router)
app.include_router(wallet_router)
app.include_router(media_router)
app.include_router(websocket_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "BlueChain MRV API",
        "version": "1.0.0",
        "status": "running",
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus scrape endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
