"""Logging setup plus the error helpers used by services and exception handlers."""

import logging
import traceback
from os import getenv
from typing import Optional, Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Tracebacks are inlined into error messages only while debugging
DEBUG = getenv("APP_DEBUG", "false").lower() == "true"

logger = logging.getLogger("Pulse")


def configure_logging(debug: bool) -> None:
    """Set the root log level and format, and switch debug-only output on or off."""
    global DEBUG
    DEBUG = debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


def debug_log(message: str, *args, **kwargs) -> None:
    """Emit `message` on the Pulse logger, but only in debug mode."""
    if DEBUG:
        logger.log(kwargs.pop("level", logging.DEBUG), message, *args, **kwargs)


def error_log(
    message: str,
    exc: Optional[Exception] = None,
    context: Optional[dict] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log a failure as one line: message | Context: k=v, ... | Exception: Type: text.

    Args:
        message: What failed (e.g. "Failed to save feedback")
        exc: The exception that caused it, if any
        context: Identifiers that help find the record involved (attendee_id, feedback_id, path)
        level: WARNING for failures the caller tolerates, such as a dropped broadcast
    """
    parts = [message]

    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))

    if exc:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if DEBUG:
            parts.append(f"Traceback:\n{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}")

    full_message = " | ".join(parts)

    if exc and level >= logging.ERROR:
        logger.log(level, full_message, exc_info=exc)
    else:
        logger.log(level, full_message)


def log_request_error(request: Any, exc: Exception, message: Optional[str] = None) -> None:
    """Log an exception raised while handling `request`, tagged with its method and path."""
    context = {}

    method = getattr(request, "method", None)
    if method:
        context["method"] = method
    url = getattr(request, "url", None)
    if url is not None:
        context["path"] = getattr(url, "path", str(url))

    error_log(message or f"Unhandled exception: {type(exc).__name__}", exc=exc, context=context)
