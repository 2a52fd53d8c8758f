"""
Structured Logging Configuration for the SDK

Every HTTP exchange runs under its own trace ID, sent to the server as
``X-Request-Id`` and attached to each log line written while the exchange is
in flight. Exchanges are timed by :class:`RequestTimer`, which logs the
method, path, status, size and duration of the call.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from enum import Enum
from logging import LogRecord
from typing import Any, Optional, TextIO, Union

import requests

# Trace ID of the HTTP exchange currently in flight
trace_id_var: ContextVar[Optional[str]] = ContextVar('trace_id', default=None)
request_start_var: ContextVar[Optional[float]] = ContextVar('request_start', default=None)

# Exchanges slower than these are logged at INFO and WARNING
NOTABLE_REQUEST_MS = 1000
SLOW_REQUEST_MS = 5000


class LogLevel(str, Enum):
    """
    How much of each HTTP exchange is written to the ``tsdb_sdk.http`` logger.

    NONE: nothing
    BASIC: request line, response status and duration
    HEADERS: BASIC plus request and response headers
    BODY: HEADERS plus request and response bodies
    """
    NONE = 'NONE'
    BASIC = 'BASIC'
    HEADERS = 'HEADERS'
    BODY = 'BODY'

    @classmethod
    def parse(cls, value: Union[str, 'LogLevel']) -> 'LogLevel':
        if isinstance(value, LogLevel):
            return value
        return cls(str(value).upper())


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line.

    Records logged by :func:`log_exchange` carry an ``http`` object with the
    exchange details; lines written from a streaming worker name its thread.
    """

    def format(self, record: LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'source': f"{record.module}:{record.lineno}",
        }

        trace_id = trace_id_var.get()
        if trace_id:
            log_entry['trace_id'] = trace_id

        if record.threadName != 'MainThread':
            log_entry['thread'] = record.threadName

        exchange = getattr(record, 'http', None)
        if exchange:
            log_entry['http'] = exchange

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Single line per record, colored by level when writing to a terminal.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: LogRecord) -> str:
        trace_id = trace_id_var.get()
        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S.%f')[:-3]

        parts = [timestamp, f"{record.levelname:<8}", record.name]
        if trace_id:
            parts.append(f"[{trace_id[-8:]}]")
        parts.append(record.getMessage())
        line = ' '.join(parts)

        if self.use_color and record.levelname in self.COLORS:
            line = f"{self.COLORS[record.levelname]}{line}{self.RESET}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def generate_trace_id() -> str:
    """Trace ID sent as ``X-Request-Id`` and attached to log records."""
    return f"tsdb-{uuid.uuid4().hex}"


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """
    Set a trace ID in the context.

    Args:
        trace_id: Optional trace ID to set. If None, generates a new one.

    Returns:
        The trace ID that was set
    """
    if trace_id is None:
        trace_id = generate_trace_id()
    trace_id_var.set(trace_id)
    return trace_id


def get_trace_id() -> Optional[str]:
    return trace_id_var.get()


def get_request_duration() -> Optional[float]:
    """Milliseconds since the current exchange started, None outside of one."""
    request_start = request_start_var.get()
    if request_start:
        return (time.time() - request_start) * 1000
    return None


def configure_logging(
    level: Union[str, int] = "INFO",
    format_type: str = "human",
    output: str = "stdout"
) -> None:
    """
    Route the ``tsdb_sdk`` loggers to one handler.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ('json' or 'human')
        output: Output destination ('stdout', 'stderr', or file path)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    stream: Optional[TextIO] = {'stdout': sys.stdout, 'stderr': sys.stderr}.get(output)
    if stream is not None:
        handler = logging.StreamHandler(stream)
    else:
        handler = logging.FileHandler(output)

    if format_type == 'json':
        handler.setFormatter(StructuredFormatter())
    else:
        use_color = stream is not None and hasattr(stream, 'isatty') and stream.isatty()
        handler.setFormatter(HumanReadableFormatter(use_color=use_color))

    sdk_logger = logging.getLogger('tsdb_sdk')
    sdk_logger.setLevel(level)
    sdk_logger.handlers = [handler]

    # requests logs every new connection through urllib3
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    logging.getLogger('tsdb_sdk.config.logging').debug(
        f"Logging configured: level={logging.getLevelName(level)}, format={format_type}, output={output}"
    )


def log_exchange(logger: logging.Logger, method: str, path: str, duration_ms: float,
                 status: Optional[int] = None, size: Optional[int] = None,
                 error: Optional[str] = None) -> None:
    """
    Log the outcome of one HTTP exchange.

    Failed exchanges (transport error or 5xx) and exchanges slower than
    ``SLOW_REQUEST_MS`` are logged at WARNING, slower than
    ``NOTABLE_REQUEST_MS`` at INFO, everything else at DEBUG.
    """
    exchange = {
        'method': method,
        'path': path,
        'status': status,
        'duration_ms': round(duration_ms, 2),
    }
    if size is not None:
        exchange['bytes'] = size
    if error is not None:
        exchange['error'] = error

    outcome = error or status
    message = f"{method} {path} -> {outcome} in {duration_ms:.1f}ms"

    if error is not None or (status is not None and status >= 500):
        level = logging.WARNING
    elif duration_ms > SLOW_REQUEST_MS:
        level = logging.WARNING
        message = f"Slow request: {message}"
    elif duration_ms > NOTABLE_REQUEST_MS:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger.log(level, message, extra={'http': exchange})


class RequestTimer:
    """
    Times one HTTP exchange and logs it on exit.

    Usage:
        with RequestTimer(logger, 'GET', '/api/v2/dashboards') as timer:
            response = session.request(...)
            timer.record(response)
    """

    def __init__(self, logger: logging.Logger, method: str, path: str):
        self.logger = logger
        self.method = method
        self.path = path
        self.status: Optional[int] = None
        self.size: Optional[int] = None
        self.duration_ms: Optional[float] = None
        self._start: Optional[float] = None

    def record(self, response: requests.Response) -> None:
        """Take status and announced body size from the response (the body is not read)."""
        self.status = response.status_code
        length = response.headers.get('Content-Length')
        self.size = int(length) if length and length.isdigit() else None

    def __enter__(self) -> 'RequestTimer':
        self._start = time.time()
        request_start_var.set(self._start)
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        self.duration_ms = (time.time() - self._start) * 1000
        error = exc_type.__name__ if exc_type is not None else None
        log_exchange(self.logger, self.method, self.path, self.duration_ms,
                     status=self.status, size=self.size, error=error)
