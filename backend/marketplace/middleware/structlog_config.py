"""
Logging setup for the marketplace API.

structlog events and stdlib records (uvicorn, sqlite3) share one processor
chain and one stdout handler. LOG_FORMAT selects the renderer:

- json: one JSON object per line, tracebacks as structured dicts
- console: coloured key=value output for local development
- auto: console on a TTY, json otherwise

Top-level event keys that carry customer contact details are masked before
rendering, so services can log a filter dict without leaking PII.
"""
import logging
import sys
from typing import IO, Any, Optional

import structlog

from ..config.constants import SENSITIVE_QUERY_PARAMS

LOG_FORMATS = ("auto", "json", "console")

SERVICE_NAME = "marketplace-api"

HANDLER_NAME = "marketplace"

REDACTED = "[REDACTED]"


def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def mask_sensitive_keys(logger: Any, method_name: str, event_dict: dict) -> dict:
    for key in list(event_dict):
        if key.lower() in SENSITIVE_QUERY_PARAMS and event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def resolve_format(log_format: Optional[str], stream: IO) -> str:
    """Map a LOG_FORMAT value to "json" or "console". Unknown values act as auto."""
    chosen = (log_format or "auto").strip().lower()
    if chosen not in LOG_FORMATS or chosen == "auto":
        isatty = getattr(stream, "isatty", None)
        chosen = "console" if isatty is not None and isatty() else "json"
    return chosen


def build_renderers(log_format: str) -> list:
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer()]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure(log_level: str = "INFO", log_format: str = "auto", stream: Optional[IO] = None) -> str:
    """
    Install the structlog pipeline and the root stdout handler.

    Safe to call again: the handler installed by a previous call is replaced,
    other handlers on the root logger are left alone. Returns the renderer
    that was picked.
    """
    stream = stream or sys.stdout
    chosen = resolve_format(log_format, stream)

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        mask_sensitive_keys,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *build_renderers(chosen),
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    # request_completed already covers what uvicorn's access log prints
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return chosen
