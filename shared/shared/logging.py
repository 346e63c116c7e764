"""Process-wide structlog setup driven by service settings.

Every record, whether emitted through structlog or by a stdlib logger
(uvicorn, gunicorn, httpx), is rendered by one ``ProcessorFormatter`` on
stdout and stamped with the service name and version.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from shared.config import BaseServiceSettings

# Access lines and per-request client chatter duplicate the middleware's log.
_QUIET_LOGGERS = ("uvicorn.access", "gunicorn.access", "httpx", "httpcore")


def setup_logging(settings: BaseServiceSettings) -> None:
    """Route structlog and stdlib logging through a single stdout handler.

    The level comes from ``settings.log_level``; production settings switch
    the output to JSON lines with tracebacks rendered as dicts.
    """
    stamp = _stamp(service=settings.service_name, version=settings.version)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        stamp,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(settings.json_logs),
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _render_chain(json_logs: bool) -> list[structlog.types.Processor]:
    if json_logs:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def _stamp(**fields: str) -> structlog.types.Processor:
    """Return a processor adding ``fields`` unless the event already has them."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor
