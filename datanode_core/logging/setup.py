"""
Logging setup for datanode services.

Provides colored console output, rotating file handler, and an optional
out-of-frame logger that records readings filed outside their time frame.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

OUT_OF_FRAME_LOGGER = "datanode_core.out_of_frame"


class ColoredFormatter(logging.Formatter):
    """Log formatter with ANSI colors based on log level."""

    COLORS = {
        logging.DEBUG: "",
        logging.INFO: "\033[96m",      # Cyan
        logging.WARNING: "\033[93m",   # Yellow
        logging.ERROR: "\033[91m",     # Red
        logging.CRITICAL: "\033[91m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelno, "")
        if color:
            return f"{color}{formatted}{self.RESET}"
        return formatted


def setup_logging(
    name: str,
    log_dir: str = "logs",
    level: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    enable_out_of_frame_log: bool = False,
) -> logging.Logger:
    """
    Set up logging with colored console output and rotating file handler.

    Args:
        name: Logger name (typically the service name).
        log_dir: Directory for log files.
        level: Log level string (DEBUG, INFO, etc.). Defaults to LOG_LEVEL
               env var, then DEBUG.
        max_bytes: Max size per log file before rotation.
        backup_count: Number of rotated log files to keep.
        enable_out_of_frame_log: If True, readings appended outside their
            DataRecord's time frame are also written to out_of_frame.log.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "DEBUG").upper()

    log_level = getattr(logging, level, logging.DEBUG)

    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Repeated calls must not stack handlers
    if logger.handlers:
        return logger

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, f"{name}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(ColoredFormatter(fmt))
    logger.addHandler(console_handler)

    oof_logger = logging.getLogger(OUT_OF_FRAME_LOGGER)
    # Process-wide logger; the first service to enable it owns the file
    if enable_out_of_frame_log and not oof_logger.handlers:
        oof_logger.setLevel(logging.WARNING)
        oof_handler = RotatingFileHandler(
            os.path.join(log_dir, "out_of_frame.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        oof_handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s"))
        oof_logger.addHandler(oof_handler)

    return logger
