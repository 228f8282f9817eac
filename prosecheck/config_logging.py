"""
ProseCheck Logging & Errors Module
==================================
Structured logging and the error hierarchy shared by every component.

Logging settings come from the ``logging`` section of prosecheck.config.
"""

import sys
import json
import logging
import uuid
import time
import functools
import threading
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Callable
from pathlib import Path
from contextlib import contextmanager

from .config import get_config, LoggingConfig

__version__ = "1.0.0"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                  # Number of log backup files to keep

_RESERVED_ATTRS = (
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
    'message', 'taskName',
)


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured JSON logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[LoggingConfig] = None):
        self.name = name
        self.config = config or get_config().logging
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.level.upper(), logging.WARNING))
        self.logger.handlers.clear()
        self.logger.propagate = False

        if self.config.format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.config.log_to_file and self.config.log_dir:
            from logging.handlers import RotatingFileHandler
            log_dir = Path(self.config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / f"{self.name.lower()}.log",
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        correlation_id = getattr(cls._local, 'correlation_id', None)
        if correlation_id is None:
            correlation_id = cls.new_correlation_id()
        return correlation_id

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _emit(self, level: int, message: str, exc_info: bool = False, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        if self.config.format == 'json':
            record = self._build_log_record(logging.getLevelName(level), message, **kwargs)
            if exc_info:
                import traceback
                record['traceback'] = traceback.format_exc()
            self.logger.log(level, json.dumps(record, default=str))
        else:
            suffix = ' '.join(f"{k}={v}" for k, v in kwargs.items())
            self.logger.log(level, f"{message} {suffix}".rstrip(), exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._emit(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._emit(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._emit(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self._emit(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._emit(logging.CRITICAL, message, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.debug(f"{operation} completed", operation=operation, status='completed',
                       duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        # StructuredLogger already serialized the record
        if message.startswith('{') and not record.exc_info:
            return message

        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': message,
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance (one per name)."""
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = StructuredLogger(name)
            _loggers[name] = logger
        return logger


def reset_loggers():
    """Drop cached loggers so the next get_logger() picks up new config."""
    with _loggers_lock:
        _loggers.clear()


# =============================================================================
# ERROR HANDLING UTILITIES
# =============================================================================

class ProseCheckError(Exception):
    """Base exception for ProseCheck."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(ProseCheckError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR",
                         details={'field': field, **kwargs})


class RuleDefinitionError(ProseCheckError):
    """A rule table entry is malformed."""
    def __init__(self, message: str, rule_id: Optional[str] = None, **kwargs):
        super().__init__(f"Rule '{rule_id}': {message}", code="RULE_DEFINITION_ERROR",
                         details={'rule_id': rule_id, **kwargs})
        self.rule_id = rule_id


class DictionaryError(ProseCheckError):
    """Word list could not be loaded."""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, code="DICTIONARY_ERROR",
                         details={'path': path, **kwargs})


class ProcessingError(ProseCheckError):
    """A pipeline stage failed."""
    def __init__(self, message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(message, code="PROCESSING_ERROR",
                         details={'stage': stage, **kwargs})


_RAISE = object()


def handle_errors(logger: Optional[StructuredLogger] = None, default: Any = _RAISE):
    """
    Decorator for standardized error handling.

    Our own errors propagate untouched. Anything else is logged; the
    wrapper then returns ``default()`` (or ``default`` when it is not
    callable) if one was given, otherwise raises ProcessingError.
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            try:
                return func(*args, **kwargs)
            except ProseCheckError:
                raise
            except Exception as e:
                _logger.exception(f"Unexpected error in {func.__name__}: {e}",
                                  function=func.__name__)
                if default is _RAISE:
                    raise ProcessingError(
                        f"An unexpected error occurred: {type(e).__name__}",
                        stage=func.__name__
                    ) from e
                return default() if callable(default) else default
        return wrapper
    return decorator
