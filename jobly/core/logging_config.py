"""
Structured logging configuration for the application.

Every record carries the id of the request it was emitted under (``-``
outside a request), so the lines produced by one call can be grouped.
JSON output is meant for production; development gets a plain line format.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Copy the current request id onto the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter adding timestamp, level, origin and request id to each record.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['request_id'] = getattr(record, 'request_id', '-')
        log_record['function'] = record.funcName

        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines when True, human-readable lines otherwise
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(RequestIdFilter())

    if json_logs:
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # SQL echo and bcrypt backend chatter
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
