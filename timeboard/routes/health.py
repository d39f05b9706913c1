import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from timeboard.config import settings
from timeboard.db import db_ping
from timeboard.redis_client import redis_ping

log = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok", "env": settings.app_env}

@router.get("/ready")
def ready() -> JSONResponse:
    """Readiness: 200 once the database and redis answer, 503 otherwise."""
    checks: dict[str, bool] = {}
    latency_ms: dict[str, float] = {}

    for name, check in (("db", db_ping), ("redis", redis_ping)):
        started = time.perf_counter()
        checks[name] = check()
        latency_ms[name] = round((time.perf_counter() - started) * 1000, 1)

    ok = all(checks.values())
    if not ok:
        log.warning("not ready: %s", ", ".join(n for n, up in checks.items() if not up))

    body = {"status": "ok" if ok else "unready", "checks": checks, "latency_ms": latency_ms}
    return JSONResponse(status_code=200 if ok else 503, content=body)
