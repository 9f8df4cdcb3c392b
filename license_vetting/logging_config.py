"""Logging configuration for license-vetting."""

import logging
import sys
from typing import Any, Dict

LOGGER_NAME = "license_vetting"


def setup_logging(level: str = "INFO", structured: bool = False, use_rich: bool = False) -> logging.Logger:
    """
    Set up logging for the package logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging
        use_rich: Whether to render log records through Rich

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    # Avoid duplicate handlers; a reconfiguration may switch format
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if use_rich and not structured:
        from rich.console import Console
        from rich.logging import RichHandler

        from .console import custom_theme

        # stderr keeps stdout free for summaries written to "-"
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True, theme=custom_theme), show_path=False, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        if structured:
            handler.setFormatter(StructuredFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
            )

    handler.setLevel(getattr(logging, level.upper()))
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Global logger instance
logger = setup_logging()
