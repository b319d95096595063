from __future__ import annotations

import os
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

READ_LIMIT = "60/minute"
WRITE_LIMIT = "30/minute"

# In-process storage; limits are per worker
_storage = MemoryStorage()
_rate = MovingWindowRateLimiter(_storage)


def client_ip(request: Request) -> str:
    # first hop of X-Forwarded-For, then the ASGI peer
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


def _enabled() -> bool:
    if os.getenv("RATE_LIMIT_ENABLED") in {"1", "true", "TRUE"}:
        return True
    return not os.getenv("TESTING")


def limit_for_method(method: str) -> str | None:
    m = method.upper()
    if m in {"GET", "HEAD"}:
        return READ_LIMIT
    if m in {"POST", "PUT", "PATCH", "DELETE"}:
        return WRITE_LIMIT
    # OPTIONS (CORS preflight) is never limited
    return None


def reset() -> None:
    _storage.reset()


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    if not _enabled():
        return await call_next(request)

    limit_str = limit_for_method(request.method)
    if not limit_str:
        return await call_next(request)

    ip = client_ip(request)
    key = f"ip:{ip}|m:{request.method.upper()}"
    if not _rate.hit(parse_limit(limit_str), key):
        structlog.get_logger(__name__).warning(
            "rate_limited", method=request.method.upper(), ip=ip, limit=limit_str
        )
        return JSONResponse(
            status_code=429,
            content={"error": "Too Many Requests"},
            headers={"X-RateLimit-Limit": limit_str},
        )

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response
