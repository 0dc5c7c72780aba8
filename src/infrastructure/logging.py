"""
Structured logging for the relay.

Every event is a single JSON line on stdout, which Lambda ships to
CloudWatch Logs. The invocation request id travels in structlog's
context variables so per-message events carry it without threading it
through the relay.
"""

import logging
import sys

import structlog

# Bodies are logged for troubleshooting only; SQS allows up to 256 KiB
BODY_LOG_LIMIT = 256


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Route structlog through the standard library as JSON lines.

    Args:
        service_name: Value of the "service" field on every event
        level: Standard library level name; unknown names fall back to INFO
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    # Lambda pre-installs a root handler; replace it
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def bind_correlation_id(request_id: str | None) -> None:
    """Attach the invocation request id to all events logged in this context."""
    if request_id:
        structlog.contextvars.bind_contextvars(correlation_id=request_id)
    else:
        structlog.contextvars.unbind_contextvars("correlation_id")


def truncate_body(body: str, limit: int = BODY_LOG_LIMIT) -> str:
    """Cut a message body down to a loggable size, noting how much was dropped."""
    if len(body) <= limit:
        return body
    return f"{body[:limit]}... [{len(body) - limit} more chars]"
