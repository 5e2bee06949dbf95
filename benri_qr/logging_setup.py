"""
BenriQR - Logging System
==========================
Structured logging for the conversion pipeline.

Features:
- JSON or colored text output
- Console handler on stderr (stdout is reserved for generated documents)
- Optional rotating log file
- Performance tracking
"""

import logging
import logging.handlers
import json
import sys
import time
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import traceback


ROOT_LOGGER_NAME = "benriqr"


# ============================================================================
# JSON FORMATTER
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    Formatter for JSON log lines.

    Output structure:
    {
        "timestamp": "2026-10-19T10:00:00.000000Z",
        "level": "INFO",
        "logger": "benriqr.html.composer",
        "message": "Document composed",
        "extra_data": {...},
        "exception": {...}
    }
    """

    def __init__(
        self,
        include_extra: bool = True,
        include_stack: bool = True
    ):
        super().__init__()
        self.include_extra = include_extra
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if self.include_extra and hasattr(record, 'extra_data'):
            log_data["extra_data"] = record.extra_data

        if record.exc_info and self.include_stack:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        return json.dumps(log_data, default=str)


# ============================================================================
# TEXT FORMATTER (Human-Readable)
# ============================================================================

class ColoredTextFormatter(logging.Formatter):
    """
    Colored formatter for the console.

    Colors:
    - DEBUG: Gray
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Bold Red
    """

    COLORS = {
        'DEBUG': '\033[90m',
        'INFO': '\033[92m',
        'WARNING': '\033[93m',
        'ERROR': '\033[91m',
        'CRITICAL': '\033[1;91m',
        'RESET': '\033[0m'
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if self.use_colors and levelname in self.COLORS:
            levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        timestamp = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).strftime('%Y-%m-%d %H:%M:%S')

        message = f"{timestamp} [{levelname}] {record.name}: {record.getMessage()}"

        if getattr(record, 'extra_data', None):
            message += f" | {record.extra_data}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


# ============================================================================
# LOGGER CLASS
# ============================================================================

class BenriQRLogger:
    """
    Logger wrapper for structured fields.

    Every call accepts an optional ``extra_data`` dict attached to the
    record.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(
        self,
        level: int,
        message: str,
        extra_data: Optional[Dict[str, Any]] = None,
        exc_info=None
    ):
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={"extra_data": extra_data} if extra_data else {}
        )

    def debug(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.DEBUG, message, extra_data)

    def info(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.INFO, message, extra_data)

    def warning(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.WARNING, message, extra_data)

    def error(self, message: str, extra_data: Optional[Dict] = None, exc_info=None):
        self._log(logging.ERROR, message, extra_data, exc_info)


# ============================================================================
# SETUP FUNCTION
# ============================================================================

def setup_logging(
    log_level: str = "WARNING",
    log_to_file: bool = False,
    log_dir: Path = Path("./logs"),
    log_format: str = "text",
    log_rotation_mb: int = 10,
    log_retention: int = 5,
    enable_console: bool = True,
) -> BenriQRLogger:
    """
    Configure the ``benriqr`` logger hierarchy.

    Args:
        log_level: Level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Also write to ``log_dir/benriqr.log``
        log_dir: Directory for log files
        log_format: Format for the file handler (json, text)
        log_rotation_mb: MB before rotation
        log_retention: Number of rotated files kept
        enable_console: Log to stderr

    Returns:
        BenriQRLogger: Configured root logger

    Example:
        >>> logger = setup_logging(log_level="DEBUG", log_format="json")
        >>> logger.info("Batch loaded", extra_data={"records": 3})
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, log_level.upper()))

    root_logger.handlers.clear()

    # ========================================================================
    # FILE HANDLER (with rotation)
    # ========================================================================

    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "benriqr.log",
            maxBytes=log_rotation_mb * 1024 * 1024,
            backupCount=log_retention,
            encoding='utf-8'
        )

        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                )
            )

        root_logger.addHandler(file_handler)

    # ========================================================================
    # CONSOLE HANDLER
    # ========================================================================

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)

        if log_format == "json":
            console_handler.setFormatter(JSONFormatter())
        else:
            console_handler.setFormatter(
                ColoredTextFormatter(use_colors=sys.stderr.isatty())
            )

        root_logger.addHandler(console_handler)

    # Keep records out of the Python root logger
    root_logger.propagate = False

    return BenriQRLogger(root_logger)


# ============================================================================
# CATEGORY LOGGERS
# ============================================================================

def get_logger(category: str) -> BenriQRLogger:
    """
    Get the logger for a category.

    Args:
        category: Category (qr.generator, html.composer, io.loaders, ...)

    Returns:
        BenriQRLogger: Logger ``benriqr.<category>``
    """
    return BenriQRLogger(logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}"))


# ============================================================================
# PERFORMANCE TRACKING
# ============================================================================

class PerformanceLogger:
    """
    Context manager timing an operation.

    Example:
        >>> logger = get_logger("pipeline")
        >>> with PerformanceLogger(logger, "compose_html"):
        ...     compose(...)
        # Logs: "compose_html completed in 12.30ms"
    """

    def __init__(
        self,
        logger: BenriQRLogger,
        operation: str,
        threshold_ms: Optional[int] = None
    ):
        self.logger = logger
        self.operation = operation
        self.threshold_ms = threshold_ms
        self.start_time: Optional[float] = None
        self.elapsed_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        extra = {
            "operation": self.operation,
            "duration_ms": round(self.elapsed_ms, 2),
        }

        if exc_type is not None:
            self.logger.debug(
                f"{self.operation} failed after {self.elapsed_ms:.2f}ms",
                extra_data=extra
            )
        elif self.threshold_ms and self.elapsed_ms > self.threshold_ms:
            self.logger.warning(
                f"{self.operation} took {self.elapsed_ms:.2f}ms (threshold: {self.threshold_ms}ms)",
                extra_data=extra
            )
        else:
            self.logger.debug(
                f"{self.operation} completed in {self.elapsed_ms:.2f}ms",
                extra_data=extra
            )
        return False


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "setup_logging",
    "get_logger",
    "BenriQRLogger",
    "PerformanceLogger",
    "JSONFormatter",
    "ColoredTextFormatter",
    "ROOT_LOGGER_NAME",
]
