"""
Logging configuration for lambda-relay.

Provides:
- Console logging with rich formatting (stderr, so stdout stays clean for results)
- Optional file logging
- Context-prefixed logger for per-invocation fields (request_id, function_name)
"""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    rich_tracebacks: bool = True,
    show_time: bool = True,
) -> logging.Logger:
    """
    Set up logging for lambda-relay.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        rich_tracebacks: Enable rich exception formatting
        show_time: Show timestamps in console logs

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        show_time=show_time,
        show_path=False,
        show_level=True,
        markup=False,
    )
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%Y-%m-%d %H:%M:%S]"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Request/response dumps come from our own logger
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


class StructuredLogger:
    """
    Logger that prefixes messages with context fields.

    Usage:
        logger = StructuredLogger("lambda_relay.lambda_function", request_id="abc")
        logger.info("Forwarding event")
        # Output: [request_id=abc] Forwarding event
    """

    def __init__(self, name: str, **context: Any):
        self.logger = logging.getLogger(name)
        self.context = {k: v for k, v in context.items() if v is not None}

    def _format_message(self, msg: str) -> str:
        if not self.context:
            return msg

        context_str = " ".join(f"{k}={v}" for k, v in self.context.items())
        return f"[{context_str}] {msg}"

    def debug(self, msg: str, **kwargs: Any) -> None:
        self.logger.debug(self._format_message(msg), **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self.logger.info(self._format_message(msg), **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self.logger.error(self._format_message(msg), **kwargs)
