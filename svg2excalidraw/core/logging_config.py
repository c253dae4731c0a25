"""Structured logging configuration for svg2excalidraw."""

import logging
import logging.handlers
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Optional


class SceneFormatter(logging.Formatter):
    """Formatter with padded levels, component names and operation context."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: Optional[bool] = None):
        super().__init__()
        if use_color is None:
            use_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
        self.use_color = use_color

    def format(self, record):
        operation = getattr(record, "operation", "general")
        component = f"[{getattr(record, 'component', record.name.split('.')[-1])}]"

        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        if self.use_color:
            color = self.COLORS.get(record.levelname, "")
            level_str = f"{color}{record.levelname:8}{self.RESET}"
        else:
            level_str = f"{record.levelname:8}"

        operation_str = f" ({operation})" if operation != "general" else ""

        formatted = (
            f"{timestamp} {level_str} {component:15} "
            f"{record.getMessage()}{operation_str}"
        )
        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"
        return formatted


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Setup structured logging for svg2excalidraw.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        console: Whether to log to console
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(SceneFormatter())
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        # Plain formatter for files (no colors)
        file_handler.setFormatter(SceneFormatter(use_color=False))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug(
        f"Logging initialized: level={level}, console={console}, file={log_file}"
    )


class LogContext:
    """Context manager for operation-specific logging."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        """Initialize log context.

        Args:
            operation: Operation name attached to every record
            logger: Logger to use (default: root logger)
        """
        self.operation = operation
        self.logger = logger or logging.getLogger()
        self.old_factory = None

    def __enter__(self):
        self.old_factory = logging.getLogRecordFactory()
        old_factory = self.old_factory
        operation = self.operation

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.operation = operation
            return record

        logging.setLogRecordFactory(record_factory)
        self.logger.debug(f"Started operation: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.logger.debug(f"Operation failed: {self.operation}: {exc_val}")
        else:
            self.logger.debug(f"Completed operation: {self.operation}")

        if self.old_factory:
            logging.setLogRecordFactory(self.old_factory)


def log_performance(func):
    """Decorator to log function performance."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        start_time = time.time()

        logger.debug(f"Starting {func.__name__}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.time() - start_time
            logger.debug(f"Failed {func.__name__} after {duration:.3f}s: {e}")
            raise
        duration = time.time() - start_time
        logger.info(f"Completed {func.__name__} in {duration:.3f}s")
        return result

    return wrapper
