import logging

import redis

from timeboard.config import settings

log = logging.getLogger(__name__)

# short timeouts: the limiter and readiness check must not hang on a dead redis
redis_client = redis.Redis.from_url(
    settings.redis_url,
    decode_responses=True,
    socket_connect_timeout=1,
    socket_timeout=1,
)

def redis_ping() -> bool:
    try:
        return bool(redis_client.ping())
    except redis.RedisError as e:
        log.warning("redis ping failed: %s", e)
        return False
