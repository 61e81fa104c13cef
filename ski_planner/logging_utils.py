"""Logging setup and helpers for context-tagged, timed log output."""
import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure root logging to stdout and, optionally, a log file."""
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that appends key=value context tags to every message.

    Tags are also attached to the record as ``context`` so handlers that
    emit structured output can pick them up.
    """

    def process(self, msg, kwargs):
        context = dict(self.extra or {})
        extra = kwargs.setdefault("extra", {})
        extra["context"] = context
        if not context:
            return msg, kwargs
        tags = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{msg} [{tags}]", kwargs

    def bind(self, **context: Any) -> "ContextLogger":
        """Return a child adapter carrying this adapter's tags plus ``context``."""
        merged = dict(self.extra or {})
        merged.update(context)
        return ContextLogger(self.logger, merged)


def get_context_logger(name: str, context: Optional[Dict[str, Any]] = None) -> ContextLogger:
    return ContextLogger(logging.getLogger(name), dict(context or {}))


@contextmanager
def log_duration(label: str, log: logging.LoggerAdapter) -> Iterator[None]:
    """Log the start, completion and failure of a block with its duration in ms."""
    start = time.perf_counter()
    log.debug(f"Starting: {label}")
    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.error(f"Failed: {label} ({elapsed_ms:.0f}ms): {e}")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    log.info(f"Completed: {label} ({elapsed_ms:.0f}ms)")
