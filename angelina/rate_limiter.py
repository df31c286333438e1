"""
Redis fixed-window rate limiting for the public form endpoints
Fails open: when Redis is unreachable requests are allowed and a warning is logged
"""

import logging
import os
from typing import Optional

import redis
from fastapi import HTTPException, Request

from .config import FORM_RATE_LIMIT, FORM_RATE_WINDOW_SECONDS, RATE_LIMIT_ENABLED

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    REDIS_URL takes precedence over the individual REDIS_* settings
    """
    global redis_client

    if redis_client is None:
        redis_url = os.getenv("REDIS_URL")

        if redis_url:
            client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
        else:
            client = redis.Redis(
                host=os.getenv("REDIS_HOST", "localhost"),
                port=int(os.getenv("REDIS_PORT", "6379")),
                password=os.getenv("REDIS_PASSWORD", None),
                db=int(os.getenv("REDIS_DB", "0")),
                ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )

        client.ping()
        logger.info("Redis connected successfully")
        redis_client = client

    return redis_client


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: redis.Redis
) -> tuple[bool, int, int]:
    """Count one request against a fixed window.

    The first hit in a window sets the expiry, so the counter resets on its own.

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    current_count = client.incr(key)
    if current_count == 1:
        client.expire(key, window_seconds)

    ttl = client.ttl(key)
    if ttl is None or ttl < 0:
        # Counter survived without an expiry (e.g. crash between INCR and EXPIRE)
        client.expire(key, window_seconds)
        ttl = window_seconds

    return current_count <= limit, current_count, ttl


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_dependency(
    request: Request,
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
):
    """
    FastAPI dependency for per-IP rate limiting

    Args:
        request: FastAPI request object
        limit: Maximum requests allowed
        window_seconds: Time window in seconds
        key_prefix: Prefix for Redis key
    """
    if not RATE_LIMIT_ENABLED:
        return

    key = f"{key_prefix}:{client_ip(request)}"

    try:
        is_allowed, current_count, ttl = check_rate_limit(
            key, limit, window_seconds, get_redis_client()
        )
    except redis.RedisError as e:
        logger.warning(f"⚠️ Rate limiting unavailable, allowing request (fail-open mode): {e}")
        return

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise HTTPException(
            status_code=429,
            detail=f"Too many requests. Please try again in {ttl} seconds.",
            headers={"Retry-After": str(ttl)},
        )


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        rate_limit_contact = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="contact")

        @router.post("/api/contact")
        async def contact(data: ContactRequest, _: None = Depends(rate_limit_contact)):
            ...
    """

    async def rate_limiter(request: Request):
        return await rate_limit_dependency(request, limit, window_seconds, key_prefix)

    return rate_limiter


# Shared by the appointment, contact and newsletter forms
rate_limit_public_forms = create_rate_limiter(
    limit=FORM_RATE_LIMIT, window_seconds=FORM_RATE_WINDOW_SECONDS, key_prefix="public_form"
)
