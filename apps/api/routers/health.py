"""Health check router — liveness + readiness.

Readiness pings Redis with a 2s timeout (a blocking Celery inspect could
hang for 30s+ without workers) and reports how old the rate snapshot is.
"""

import asyncio
import structlog
from fastapi import APIRouter, Request
from apps.api.core.config import settings

router = APIRouter(tags=["health"])
logger = structlog.get_logger()

REDIS_TIMEOUT_SECONDS = 2


@router.get("/health")
async def health_liveness():
    """Liveness probe — returns 200 if the API process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/health/ready")
async def health_readiness(request: Request):
    """Readiness probe — checks Redis connectivity and rate freshness."""
    status = {
        "status": "healthy",
        "services": {
            "api": "up",
            "redis": "unknown",
        },
        "rates": {
            "age_seconds": None,
            "stale_sources": [],
        },
    }

    provider = getattr(request.app.state, "rate_provider", None)
    if provider is not None:
        snapshot = provider.current()
        status["rates"]["age_seconds"] = provider.age_seconds()
        status["rates"]["stale_sources"] = sorted(snapshot.stale_sources)

    # Non-blocking Redis check with timeout
    try:
        import redis

        redis_url = settings.REDIS_URL if settings else "redis://localhost:6379/0"
        r = redis.from_url(redis_url, socket_connect_timeout=REDIS_TIMEOUT_SECONDS)

        loop = asyncio.get_running_loop()
        pong = await asyncio.wait_for(
            loop.run_in_executor(None, r.ping),
            timeout=REDIS_TIMEOUT_SECONDS,
        )

        if pong:
            status["services"]["redis"] = "up"
        else:
            status["services"]["redis"] = "down"
            status["status"] = "degraded"
    except asyncio.TimeoutError:
        status["services"]["redis"] = "timeout"
        status["status"] = "degraded"
        logger.warning("redis_health_timeout", timeout_s=REDIS_TIMEOUT_SECONDS)
    except Exception as e:
        status["services"]["redis"] = "down"
        status["status"] = "degraded"
        logger.warning("redis_health_failed", error=str(e))

    return status
