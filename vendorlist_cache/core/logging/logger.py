#!/usr/bin/env python3
"""
Structured Logging Module using structlog

This module provides structured logging for the cache engine with:
- Resolution ID correlation across tiers and the origin fetch
- Stage numbering for the layered lookup
- JSON formatting for log aggregation
- Credential redaction (external tier tokens never reach the logs)

Architectural Decision: structlog for production logging
- Context-aware logging with automatic field injection
- JSON output for log aggregation
- Async-safe through context variables

Date: 2026-03-02
"""

import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from enum import Enum

import structlog
from structlog.types import EventDict, WrappedLogger

from vendorlist_cache.core.config.settings import get_settings

# Context variable for the current resolution (one per resolve() call)
resolution_id_ctx: ContextVar[str | None] = ContextVar("resolution_id", default=None)

_BEARER_PATTERN = re.compile(r"\bBearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE)
_TOKEN_PARAM_PATTERN = re.compile(r"\b(token|_token|access_token)=[^&\s]+", re.IGNORECASE)


def add_resolution_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add resolution ID to log event from context variable.

    STAGE-L.1: Resolution ID injection
    """
    resolution_id = resolution_id_ctx.get()
    if resolution_id:
        event_dict["resolution_id"] = resolution_id
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add ISO timestamp to log event.

    STAGE-L.2: Timestamp injection
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def redact_credentials(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Redact credentials from log messages.

    STAGE-L.3: Credential redaction

    Patterns redacted:
    - Authorization bearer tokens -> Bearer [REDACTED]
    - token=... query parameters -> token=[REDACTED]
    """
    for field in ("event", "error"):
        value = event_dict.get(field)
        if isinstance(value, str):
            value = _BEARER_PATTERN.sub("Bearer [REDACTED]", value)
            value = _TOKEN_PARAM_PATTERN.sub(r"\1=[REDACTED]", value)
            event_dict[field] = value

    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Upper-case the log level.

    STAGE-L.4: Log level injection
    """
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Setup structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    settings = get_settings()

    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_resolution_id,
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_credentials,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        BoundLogger: Structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value", stage="2.1_MEMORY_LOOKUP")
    """
    return structlog.get_logger(name)


def set_resolution_id(resolution_id: str) -> None:
    """Set the resolution ID for log correlation in the current context."""
    resolution_id_ctx.set(resolution_id)


def get_resolution_id() -> str | None:
    """Get the current resolution ID, if any."""
    return resolution_id_ctx.get()


def clear_resolution_id() -> None:
    """Clear the resolution ID from context."""
    resolution_id_ctx.set(None)


def log_stage(
    logger: structlog.stdlib.BoundLogger,
    stage: str | Enum,
    message: str,
    level: str = "info",
    **kwargs,
) -> None:
    """
    Log a message with stage information.

    Args:
        logger: Logger instance
        stage: Stage identifier (a ``Stage`` member or plain string)
        message: Log message
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional fields to log

    Usage:
        log_stage(logger, Stage.MEMORY_LOOKUP, "Memory cache hit", cache_key=key)
    """
    stage_value = stage.value if isinstance(stage, Enum) else stage
    log_func = getattr(logger, level.lower())
    log_func(message, stage=stage_value, **kwargs)
