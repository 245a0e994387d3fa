from fastapi import APIRouter, Depends
from redis.exceptions import RedisError

from app.core.config import Settings, get_settings
from app.dependencies import get_rate_limiter
from app.services.rate_limiter import RateLimiter

router = APIRouter(tags=["health"])

@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check"""
    return {"status": "healthy", "service": settings.APP_NAME}

@router.get("/health/cache")
async def cache_health(limiter: RateLimiter = Depends(get_rate_limiter)):
    """Check the rate limit store"""
    if not limiter.enabled:
        return {"status": "healthy", "cache": "disabled"}

    try:
        await limiter.ping()
        return {"status": "healthy", "cache": "connected"}
    except RedisError as e:
        return {
            "status": "unhealthy",
            "cache": "error",
            "error": str(e)
        }
