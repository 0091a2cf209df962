## Fixed-window rate limiting on Redis, keyed by action and user
import logging

import redis
from fastapi import Depends

from goalpath.auth.deps import get_current_user
from goalpath.db.models.user import User
from goalpath.errors import RateLimited
from goalpath.settings import settings

logger = logging.getLogger(__name__)

_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    global _client
    if _client is None:
        _client = redis.Redis.from_url(settings.redis_url or "redis://localhost:6379/0", decode_responses=True)
    return _client


def hit(client, action: str, user_id: str, limit: int, window_seconds: int) -> bool:
    """Count one request; False once the window already holds `limit` requests."""
    key = f"ratelimit:{action}:{user_id}"
    # the window's TTL is set together with the first count, in one transaction
    pipe = client.pipeline()
    pipe.set(key, 0, ex=window_seconds, nx=True)
    pipe.incr(key)
    _, count = pipe.execute()
    return count <= limit


def rate_limit(action: str):
    """Route dependency: `Depends(rate_limit("create-goal"))`. No-op unless enabled."""

    def dependency(user: User = Depends(get_current_user)) -> None:
        if not settings.rate_limit_enabled:
            return
        allowed = hit(
            get_redis(), action, str(user.id),
            settings.rate_limit_requests, settings.rate_limit_window_seconds,
        )
        if not allowed:
            logger.warning("Rate limit hit: action=%s user=%s", action, user.id)
            raise RateLimited()

    return dependency
