"""
Logging Configuration and Utilities

Structured logging built on structlog, rendered through the standard
library so that JSON output comes from python-json-logger and the usual
handler configuration keeps working.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from app.config.settings import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)


class RequestContextProcessor:
    """Add request context to log records"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['service'] = 'hostel-ledger'
        event_dict['environment'] = settings.ENVIRONMENT
        return event_dict


class SecurityLogProcessor:
    """Mask sensitive values before they reach a handler"""

    SENSITIVE_KEYS = ('password', 'token', 'secret', 'authorization', 'cookie')

    def __call__(self, logger, method_name, event_dict):
        self._sanitize_event_dict(event_dict)
        return event_dict

    def _sanitize_event_dict(self, event_dict: Dict[str, Any]):
        for key in list(event_dict.keys()):
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                event_dict[key] = '[REDACTED]'
            elif isinstance(event_dict[key], dict):
                self._sanitize_event_dict(event_dict[key])


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Route structlog events into stdlib logging as msg + extra"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                RequestContextProcessor(),
                SecurityLogProcessor(),
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                structlog.stdlib.render_to_log_kwargs,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure the root handler and formatter"""
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)

        if settings.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        """Reduce noise from external libraries"""
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

        if settings.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class LoggerAdapter:
    """Logger adapter accepting stdlib-style extra= and exc_info="""

    def __init__(self, logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        fields = dict(kwargs.pop('extra', None) or {})
        if kwargs.pop('exc_info', False):
            fields['exc_info'] = True
        self.logger.log(level, message, *args, **fields)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the application root logger)

    Returns:
        Enhanced logger adapter
    """
    return LoggerAdapter(structlog.get_logger(name or 'app'))


def setup_logging():
    """Initialize logging configuration"""
    LoggingConfig.configure_structured_logging()
    LoggingConfig.configure_standard_logging()

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
    })


# Initialize logging when module is imported
setup_logging()

__all__ = [
    'get_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'user_id'
]
