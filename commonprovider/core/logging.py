"""
Logging for commonprovider.

Provider loads run inside a load context (loader, section and, while a
descriptor is being built, provider). LoadContextFilter copies that context
onto every record, and LoadJsonFormatter writes it out as top-level JSON keys
so a configuration error in the logs can be traced back to the entry that
caused it.
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple, Union

# Context keys written as top-level fields, in this order
LOAD_CONTEXT_KEYS: Tuple[str, ...] = ("loader", "section", "provider")

_local = threading.local()


def get_load_context() -> Dict[str, Any]:
    """Get a copy of the load context of the current thread."""
    return dict(getattr(_local, "context", {}))


@contextmanager
def load_context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Add values to the load context for the duration of the block.

    Nested blocks see the outer values; each block restores the context it
    found on exit, also when the block raises.

    Args:
        **values: Context values, typically loader, section or provider
    """
    previous = getattr(_local, "context", {})
    _local.context = {**previous, **values}
    try:
        yield _local.context
    finally:
        _local.context = previous


class LoadContextFilter(logging.Filter):
    """Attaches the current load context to records as ``load_context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "load_context"):
            record.load_context = get_load_context()
        return True


class LoadJsonFormatter(logging.Formatter):
    """Formats records as JSON with the load context as top-level fields.

    Known context keys (loader, section, provider) become fields of their own;
    any other context values are grouped under "context".
    """

    def __init__(self, include_extra_context: bool = True):
        super().__init__()
        self.include_extra_context = include_extra_context

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = dict(getattr(record, "load_context", {}))
        for key in LOAD_CONTEXT_KEYS:
            if key in context:
                data[key] = context.pop(key)
        if context and self.include_extra_context:
            data["context"] = context

        if record.exc_info:
            error = record.exc_info[1]
            data["error"] = {
                "type": type(error).__name__,
                "message": str(error),
            }
            # Configuration errors carry the offending type string
            raw_type = getattr(error, "raw_type", None)
            if raw_type is not None:
                data["error"]["raw_type"] = raw_type

        return json.dumps(data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger whose records carry the load context."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, LoadContextFilter) for f in logger.filters):
        logger.addFilter(LoadContextFilter())
    return logger


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    stream=None,
    log_file: Optional[str] = None
) -> logging.Handler:
    """Send commonprovider records to a stream, for applications and scripts.

    Only the "commonprovider" logger is configured; the root logger and any
    handlers the application installed are left alone. Calling this again
    replaces the handler from the previous call.

    Args:
        level: The logging level
        json_format: Whether to use LoadJsonFormatter
        stream: The stream to write to, sys.stdout by default
        log_file: Write to this file instead of a stream

    Returns:
        The installed handler
    """
    package_logger = logging.getLogger("commonprovider")

    for handler in list(package_logger.handlers):
        if getattr(handler, "_commonprovider", False):
            package_logger.removeHandler(handler)
            handler.close()

    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler._commonprovider = True

    if json_format:
        handler.setFormatter(LoadJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    return handler
