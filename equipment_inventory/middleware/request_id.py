from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _duration_ms(start_ns: int) -> float:
    return round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one ``http_request`` access event.

    The id (inbound header or a fresh UUID4) is bound to structlog
    contextvars for the duration of the request, so service logs carry it.
    """
    logger = structlog.get_logger(__name__)
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    path = request.url.path
    client_ip = (request.client.host if request.client else None) or "-"

    structlog.contextvars.bind_contextvars(request_id=rid, path=path, method=request.method)
    sentry_sdk.set_tag("request_id", rid)
    sentry_sdk.set_tag("path", path)
    sentry_sdk.set_tag("method", request.method)

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "http_request",
            status=500,
            duration_ms=_duration_ms(start_ns),
            client_ip=client_ip,
            exc_info=True,
        )
        structlog.contextvars.clear_contextvars()
        raise

    logger.info(
        "http_request",
        status=response.status_code,
        duration_ms=_duration_ms(start_ns),
        client_ip=client_ip,
    )
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response
