from __future__ import annotations

import hashlib
import logging
import time

import redis
from fastapi import HTTPException, Request

from timeboard.config import settings
from timeboard.redis_client import redis_client

log = logging.getLogger(__name__)

def _hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()[:24]

def client_ip(request: Request) -> str:
    # first hop of X-Forwarded-For when running behind a proxy
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    return (request.client.host if request.client else "unknown").strip()

def window_key(name: str, ip: str, window_seconds: int, now: float | None = None) -> str:
    window = int((now if now is not None else time.time()) // window_seconds)
    return f"rl:{name}:{window}:{_hash(ip)}"

# fixed window: one counter per (route, ip, window), INCR then EXPIRE
def rate_limit(name: str, limit_per_window: int, window_seconds: int):
    async def _dep(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return

        key = window_key(name, client_ip(request), window_seconds)
        try:
            pipe = redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, window_seconds)
            count, _ = pipe.execute()
        except redis.RedisError as e:
            # fail open
            log.warning("rate limiter unavailable for %s: %s", name, e)
            return

        if int(count) > int(limit_per_window):
            log.info("rate limited %s (%s)", name, key)
            raise HTTPException(
                status_code=429,
                detail="rate_limited",
                headers={"Retry-After": str(window_seconds)},
            )

    return _dep
