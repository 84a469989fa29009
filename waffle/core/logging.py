from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any, TextIO

import structlog

SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]

# uvicorn access lines duplicate the middleware's http_request event.
_UVICORN_LEVEL_OVERRIDES = {"uvicorn.access": "WARNING"}


def _logging_dict(level: int, renderer: Any, stream: TextIO) -> dict[str, Any]:
    handler = {"handlers": ["default"], "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": SHARED_PROCESSORS,
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "stream": stream,
                "formatter": "structured",
            }
        },
        "root": {"handlers": ["default"], "level": level},
        "loggers": {
            name: {**handler, "level": _UVICORN_LEVEL_OVERRIDES.get(name, level)}
            for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
        },
    }


def configure_logging(log_level: str = "INFO", *, json_logs: bool = True) -> None:
    """Route stdlib and structlog output through one renderer.

    The API logs JSON lines to stdout; the CLI passes ``json_logs=False`` and
    gets a plain console renderer on stderr so printed boards stay clean.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if json_logs:
        renderer: Any = structlog.processors.JSONRenderer()
        stream = sys.stdout
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
        stream = sys.stderr

    logging.config.dictConfig(_logging_dict(level, renderer, stream))

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
