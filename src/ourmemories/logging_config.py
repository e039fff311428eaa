"""
Structured logging for ourmemories.

Both entry points (the Streamlit app and the JSON API) call
configure_structured_logging() once at startup. Log records are
event names with keyword context, for example::

    logger.info("photo_saved", photo_id=photo.id, category=photo.category)

Development renders them for the console; any other environment emits one
JSON object per line on stderr.
"""

import inspect
import logging
import os
import sys
from typing import Any

import structlog

DEVELOPMENT_ENVIRONMENTS = ("development", "dev", "local")

_configured_component: str | None = None


def get_log_level() -> int:
    """Resolve LOG_LEVEL (default INFO). Unknown names fall back to INFO."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def is_development_environment() -> bool:
    return os.getenv("ENVIRONMENT", "development").lower() in DEVELOPMENT_ENVIRONMENTS


def _add_app_context(component: str):
    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("app", "ourmemories")
        event_dict.setdefault("component", component)
        return event_dict

    return processor


def configure_structured_logging(component: str = "ui", force: bool = False) -> None:
    """
    Configure structlog and the standard library root logger.

    Streamlit re-executes the entry script on every interaction, so calls
    after the first are ignored unless ``force`` is set.

    Args:
        component: Tag added to every record ("ui" or "api")
        force: Reconfigure even if logging is already set up
    """
    global _configured_component

    if _configured_component is not None and not force:
        return

    log_level = get_log_level()
    is_dev = is_development_environment()

    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stderr, force=force)
    logging.getLogger().setLevel(log_level)

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_app_context(component),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured_component = component

    structlog.get_logger("ourmemories.logging").info(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        renderer="console" if is_dev else "json",
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger named after ``name`` or, by default, the calling module."""
    if name is None:
        caller = inspect.currentframe()
        name = caller.f_back.f_globals.get("__name__", "ourmemories") if caller and caller.f_back else "ourmemories"
    return structlog.get_logger(name)


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """Record how long a store read or media upload took, in milliseconds."""
    get_logger("ourmemories.performance").info(
        "operation_timed", operation=operation, duration_ms=round(duration * 1000, 2), **context
    )


def log_action(action: str, **context: Any) -> None:
    """
    Record a change to the collection (photo_saved, photo_deleted).

    Args:
        action: Event name of the change
        **context: photo_id and any other identifying fields
    """
    get_logger("ourmemories.actions").info(action, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """Log an application error with its type, message and context."""
    get_logger("ourmemories.errors").error(
        "error_occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        **(context or {}),
    )
