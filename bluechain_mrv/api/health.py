"""Health check endpoints"""

from datetime import datetime

from fastapi import APIRouter, status
from sqlalchemy import text

from bluechain_mrv.config import settings
from bluechain_mrv.database import AsyncSessionLocal
from bluechain_mrv.services.media_storage_service import MediaStorageService
from bluechain_mrv.services.redis_service import RedisService

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint (no authentication required)

    Returns simple health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }


@router.get("/api/v1/health", status_code=status.HTTP_200_OK)
async def detailed_health_check():
    """
    Detailed health check with service dependency status (no authentication required)

    Checks connectivity to:
    - Database
    - Redis
    - S3 media buckets

    Returns overall status and individual service statuses
    """
    services = {}
    overall_status = "healthy"

    try:
        async with AsyncSessionLocal() as db:
            result = await db.execute(text("SELECT 1"))
            result.scalar_one()
        services["database"] = "connected"
    except Exception as e:
        services["database"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    try:
        client = await RedisService.get_client()
        await client.ping()
        services["redis"] = "connected"
    except Exception as e:
        services["redis"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    try:
        storage = MediaStorageService()
        for name, bucket in (
            ("s3_photos", settings.photo_bucket),
            ("s3_videos", settings.video_bucket),
            ("s3_documents", settings.document_bucket),
        ):
            services[name] = storage.check_bucket(bucket)
            if services[name] != "connected":
                overall_status = "degraded"
    except Exception as e:
        services["s3"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    return {
        "status": overall_status,
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "services": services
    }
