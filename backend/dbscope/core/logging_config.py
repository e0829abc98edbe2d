"""Structured logging for DBScope.

structlog sits on top of stdlib logging, so both ``structlog.stdlib.get_logger``
and plain ``logging.getLogger`` calls end up in the same handler. Per-request
context (request_id) travels through structlog.contextvars, and secret keys
such as a connection password are masked before any renderer sees them.
"""

import logging
import sys

import structlog

from dbscope.core.config import settings

REDACTED = "**********"

# Connection forms carry these; they must never reach a log line.
SECRET_KEYS = frozenset({"password", "passwd", "secret", "token"})


def _is_secret(key: object) -> bool:
    return isinstance(key, str) and key.lower() in SECRET_KEYS


def redact_secrets(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Mask secret-looking keys, including inside a logged connection dict."""
    for key, value in event_dict.items():
        if _is_secret(key) and value is not None:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if _is_secret(k) and v is not None else v
                for k, v in value.items()
            }
    return event_dict


SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    redact_secrets,
]


def _select_renderer(app_env: str) -> structlog.types.Processor:
    """Human-readable output in development, JSON lines everywhere else."""
    if app_env == "development":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(level: str | None = None) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Call once at app startup. ``level`` overrides ``settings.log_level``.
    """
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _select_renderer(settings.app_env),
        ],
        foreign_pre_chain=SHARED_PROCESSORS,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.log_level).upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
