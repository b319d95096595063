from __future__ import annotations

import logging
import os
from typing import Any

import structlog

SERVICE_NAME = "equipment-inventory"


def _get_log_level() -> int:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level, logging.INFO)


def _resolve_format() -> str:
    log_format = os.getenv("LOG_FORMAT")
    if log_format:
        return log_format.lower()
    return "console" if os.getenv("APP_ENV") == "dev" else "json"


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging() -> None:
    """Route structlog and stdlib logging through one JSON (or console) renderer.

    Context bound with ``structlog.contextvars`` (request_id, path, method)
    is merged into every event, including uvicorn's own records.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service,
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format() == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    logging.basicConfig(level=_get_log_level(), handlers=[handler], force=True)
    # request_id middleware already emits one access event per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
