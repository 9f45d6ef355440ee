"""Logging utilities for the address finder."""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Optional


_ROOT_LOGGER_NAME = "address_finder"
_CONSOLE_FILTER_FLAG = "to_console"
_queue_listener: Optional[QueueListener] = None
_queue_handler: Optional[QueueHandler] = None


class _ConsoleFilter(logging.Filter):
    """Allow only records flagged for console emission."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - simple predicate
        return bool(getattr(record, _CONSOLE_FILTER_FLAG, False))


def configure_logging(
    *,
    log_to_file: bool,
    log_file: Optional[Path],
    log_to_console: bool,
    verbose: bool = False,
) -> None:
    """Configure logging sinks for this run."""

    global _queue_listener, _queue_handler
    shutdown_logging()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    if log_to_file and log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    finder_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    finder_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    finder_logger.propagate = True

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        if not verbose:
            console_handler.addFilter(_ConsoleFilter())
        handlers.append(console_handler)

    if not handlers:
        # Fall back to warnings on stderr when every sink is disabled.
        fallback_handler = logging.StreamHandler()
        fallback_handler.setLevel(logging.WARNING)
        fallback_handler.setFormatter(formatter)
        handlers.append(fallback_handler)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    _queue_handler = QueueHandler(log_queue)
    root_logger.addHandler(_queue_handler)
    _queue_listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _queue_listener.start()


def shutdown_logging() -> None:
    """Flush and stop the background listener, if one is running."""

    global _queue_listener, _queue_handler
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None
    if _queue_listener is not None:
        _queue_listener.stop()
        _queue_listener = None


def console_kwargs() -> dict[str, bool]:
    """Helper to flag log records for console emission."""

    return {_CONSOLE_FILTER_FLAG: True}
