# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a smart logging system that records what happens in PetVally in a structured way,
# making it easy to follow one request or one user through the logs.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), request and principal context
# from contextvars, request performance logging and audit helpers for business events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (setup), RequestLoggingMiddleware (request context, timing),
# role policy dependency (principal id), domain services (business events)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

from app.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

# Global logging configuration
_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}

SERVICE_NAME = 'petvally-api'


class ContextFilter(logging.Filter):
    """
    Adds request ID, user ID and host information to every log record.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME

        if hasattr(record, 'extra_fields') and record.extra_fields:
            for key, value in record.extra_fields.items():
                setattr(record, key, value)
        return True


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent structure for
    log aggregation and analysis tools.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record.pop('extra_fields', None)
        for key in ('request_id', 'user_id'):
            if not log_record.get(key):
                log_record.pop(key, None)


class StructuredLogger:
    """
    Logger with structured logging helpers.

    Extra keyword arguments become fields of the emitted record.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Optional[Dict] = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Optional[Dict] = None, **kwargs):
        extra_fields = dict(extra or {})
        for key, value in kwargs.items():
            if key not in ['exc_info', 'stack_info', 'stacklevel']:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items()
                        if k in ['exc_info', 'stack_info', 'stacklevel']}
        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float):
        """Log HTTP request performance."""
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self._log(
            level,
            f"HTTP {method} {path} - {status_code} - {duration_ms:.2f}ms",
            event_type='http_request',
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )

    def log_user_action(self, action: str, user_id: str, resource: Optional[str] = None, **fields):
        """Log user action for audit trail."""
        self.info(
            f"User {user_id} performed {action}" + (f" on {resource}" if resource else ""),
            event_type='user_action',
            action=action,
            actor_id=user_id,
            resource=resource,
            **fields,
        )

    def log_business_event(self, event_type: str, description: str, entity_id: Optional[str] = None, **fields):
        """Log business events for analytics."""
        self.info(
            description,
            event_type='business_event',
            business_event_type=event_type,
            entity_id=entity_id,
            **fields,
        )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Installs a JSON or text formatter on the root logger, adds the request
    context filter and quiets noisy third-party loggers. Safe to call twice.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = JSONFormatter('%(message)s %(name)s %(levelname)s')
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    context_filter = ContextFilter()
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.ERROR)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = StructuredLogger(name)
    return _loggers_cache[name]


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier (generated when omitted)
        user_id: Principal identifier
    """
    request_id = request_id or str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
