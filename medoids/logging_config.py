# medoids/logging_config.py
"""
Logging configuration for Medoid Lab.

All loggers live under the 'medoids' namespace (see get_logger). Console output
is colored on a TTY; clustering milestones (SEED, CONVERGED, FAILED, timer
START/DONE lines) get their own color so a run can be followed at a glance.

Developer Mode:
    Set environment variable: MEDOIDS_DEV_MODE=1
    This forces DEBUG level (per-iteration cost lines) and a wider format.
"""
import logging
import sys
import os
from typing import Optional, Union

RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",      # Cyan
    logging.INFO: "\033[32m",       # Green
    logging.WARNING: "\033[33m",    # Yellow
    logging.ERROR: "\033[31m",      # Red
    logging.CRITICAL: "\033[35m",   # Magenta
}

# First matching marker wins
MARKER_COLORS = (
    (("START:", "DONE:"), "\033[35m"),      # Timer lines
    (("CONVERGED",), "\033[1;32m"),
    (("FAILED",), "\033[1;31m"),
    (("SEED:",), "\033[1;34m"),
)

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
DEV_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)-30s | %(message)s'


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring level names and clustering milestones (TTY only)."""

    def __init__(self, *args, use_colors: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        original = (record.levelname, record.msg, record.args)
        color = LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{record.levelname}{RESET}"

        message = record.getMessage()
        for markers, marker_color in MARKER_COLORS:
            if any(m in message for m in markers):
                record.msg, record.args = f"{marker_color}{message}{RESET}", ()
                break

        try:
            return super().format(record)
        finally:
            record.levelname, record.msg, record.args = original


def is_dev_mode() -> bool:
    """True if MEDOIDS_DEV_MODE is set to 1, yes, true or on."""
    return os.getenv('MEDOIDS_DEV_MODE', '').lower() in ('1', 'yes', 'true', 'on')


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Turn a level name ("debug", "WARNING") or number into a logging level.

    Developer mode always resolves to DEBUG; None means INFO.

    Raises:
        ValueError: For an unknown level name
    """
    if is_dev_mode():
        return logging.DEBUG
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level

    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_colors: bool = True
) -> logging.Logger:
    """
    Configure the 'medoids' logger.

    Args:
        level: Level number or name (default: INFO, DEBUG in dev mode)
        log_file: Optional file path for log output (never colored)
        format_string: Custom format string for console messages
        use_colors: Whether to color console output

    Returns:
        Configured logger instance
    """
    dev_mode = is_dev_mode()
    level = resolve_level(level)
    if format_string is None:
        format_string = DEV_FORMAT if dev_mode else DEFAULT_FORMAT

    logger = logging.getLogger('medoids')
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(format_string, datefmt='%H:%M:%S'))
    else:
        console_handler.setFormatter(logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if dev_mode:
        logger.info("Developer mode: DEBUG logging with per-iteration costs")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the 'medoids.<name>' logger."""
    return logging.getLogger(f'medoids.{name}')


def log_section(logger: logging.Logger, title: str, width: int = 80) -> None:
    """Log a title between two separator lines."""
    separator = "=" * width
    logger.info(separator)
    logger.info(f"  {title}")
    logger.info(separator)
