from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, cast

import structlog

from resort_booking.config import LOG_LEVEL

# Type alias for structlog processor
Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

# Event keys whose values never reach the log output
REDACTED_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "password",
        "authorization",
        "api_secret",
        "bkash_number",
        "bkash_trx_id",
        "bank_ref",
        "email",
        "customer_email",
    }
)
REDACTED = "[redacted]"

QUIET_LOGGERS = (
    "urllib3",
    "requests",
    "cloudinary",
    "sqlalchemy.engine",
    "uvicorn.access",
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """
    Mask tokens, passwords, emails and guest payment identifiers, including inside
    one level of nested dicts (e.g. payment details).
    """
    for key, value in list(event_dict.items()):
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if str(k).lower() in REDACTED_KEYS else v for k, v in value.items()
            }
    return event_dict


def setup_logging() -> None:
    """
    Configure structlog and the standard library loggers.

    LOG_LEVEL=INFO renders JSON lines for log aggregation; any other level
    renders colored console output. Values bound with structlog.contextvars
    (the request id from RequestIDMiddleware) are merged into every event.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer = cast(
        Processor,
        (
            structlog.processors.JSONRenderer()
            if LOG_LEVEL == "INFO"
            else structlog.dev.ConsoleRenderer(colors=True)
        ),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_secrets,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
