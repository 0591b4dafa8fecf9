"""
Module: logger.py
Description: Structured logging configuration for the SQS client.

Configures structlog to emit one JSON object per event on stderr, so
diagnostics from the signing and transport pipeline can be read by any
log aggregator without extra parsing. Each event carries the module
that emitted it.

Key Components:
- _add_timestamp / _add_log_level processors
- configure_logging(): installs the processor chain
- get_logger() helper function

Dependencies: structlog, datetime
"""

import sys

import structlog
from datetime import datetime, timezone


def _add_timestamp(logger, method_name, event_dict):
    """
    Add a UTC ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(stream=None) -> None:
    """
    Install the JSON processor chain.

    Args:
        stream: File object to write to, stderr by default
    """
    structlog.configure(
        processors=[
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(file=stream or sys.stderr),
        wrapper_class=structlog.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structlog logger bound to a module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger whose events include logger=<name>

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Message sent", path="/123456789012/orders", message_id="c5c2a6d4")
        {"logger": "sqs_queue.queue", "path": "/123456789012/orders", "message_id": "c5c2a6d4", "event": "Message sent", "timestamp": "...", "level": "INFO"}
    """
    return structlog.get_logger(name).bind(logger=name)
