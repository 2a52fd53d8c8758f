"""
Client for Flux, the data scripting language centered on querying and
manipulating time series data.

Synchronous calls map the whole response before returning:

    >>> tables = client.query('from(bucket: "telegraf") |> range(start: -1h)')

Streaming calls return immediately and deliver every record from a worker
thread. The first argument of each callback can stop the stream:

    >>> def on_next(cancellable, record):
    ...     print(record.get_time(), record.get_value())
    ...     if record.get_value() > 100:
    ...         cancellable.cancel()
    >>> handle = client.query_stream(query, on_next, on_complete=lambda: print("done"))
    >>> handle.join()
"""

import logging
import threading
from contextlib import closing
from typing import Callable, Iterator, List, Optional

import requests

from tsdb_sdk.arguments import check_non_empty, check_not_none
from tsdb_sdk.config.logging_config import LogLevel, get_trace_id
from tsdb_sdk.config.settings import Settings, get_settings
from tsdb_sdk.exceptions import ConnectionException, TsdbException
from tsdb_sdk.internal.rest import RestClient
from tsdb_sdk.service import QueryService

from .cancellable import Cancellable
from .consumers import FluxRecordCallback, FluxTableCollector
from .csv_parser import FluxCsvParser
from .domain import FluxRecord, FluxTable
from .options import FluxConnectionOptions

logger = logging.getLogger(__name__)

OnComplete = Callable[[], None]
OnError = Callable[[Exception], None]


def _log_error(error: Exception) -> None:
    logger.error(f"Unexpected error while streaming query result: {error}", exc_info=error)


def _noop() -> None:
    pass


def _call_guarded(callback: Callable, *args) -> None:
    # Nothing above the worker thread could handle it
    try:
        callback(*args)
    except Exception as e:
        name = getattr(callback, '__name__', repr(callback))
        logger.error(f"Streaming callback {name} failed: {e}", exc_info=e)


class FluxClient:
    """Runs Flux queries and maps the annotated CSV result to :class:`FluxTable`."""

    def __init__(self, options: FluxConnectionOptions, rest: Optional[RestClient] = None):
        """
        Args:
            options: Connection options
            rest: Shared HTTP client; when omitted the client owns one built from ``options``
        """
        check_not_none(options, "options")

        self.options = options
        self._owns_rest = rest is None
        self.rest = rest or RestClient(
            options.url,
            token=options.token,
            username=options.username,
            password=options.password,
            connect_timeout=options.connect_timeout,
            read_timeout=options.read_timeout,
            verify_ssl=options.verify_ssl,
            log_level=options.log_level,
        )
        self.service = QueryService(self.rest)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'FluxClient':
        """Build a standalone client from :class:`Settings` (environment variables by default)."""
        settings = settings or get_settings()
        return cls(FluxConnectionOptions.from_connection_config(settings.connection))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._owns_rest:
            self.rest.close()

    # Table results

    def query(self, query: str) -> List[FluxTable]:
        """
        Execute a query and synchronously map the whole response to tables.

        Raises:
            ApiException: The server rejected the query
            FluxQueryException: The query failed while producing results
        """
        check_non_empty(query, "query")

        collector = FluxTableCollector()
        response = self._post(query, stream=True)
        with closing(response):
            FluxCsvParser(_csv_lines(response), collector).parse()

        return collector.tables

    def query_stream(
        self,
        query: str,
        on_next: Callable[[Cancellable, FluxRecord], None],
        on_complete: Optional[OnComplete] = None,
        on_error: Optional[OnError] = None
    ) -> Cancellable:
        """
        Execute a query and stream every record to ``on_next`` from a worker thread.

        Args:
            query: Flux query
            on_next: Called with the cancellable handle and each record
            on_complete: Called once the whole result was consumed (not after a cancel)
            on_error: Called with any error; the default logs it

        Returns:
            Handle to cancel the query or wait for it
        """
        check_non_empty(query, "query")
        check_not_none(on_next, "on_next")

        consumer = FluxRecordCallback(on_next)

        def read(response: requests.Response, cancellable: Cancellable) -> None:
            FluxCsvParser(_csv_lines(response), consumer, cancellable).parse()

        return self._stream(query, read, on_complete, on_error)

    # Raw results

    def raw(self, query: str) -> str:
        """Execute a query and return the response body unparsed."""
        check_non_empty(query, "query")

        response = self._post(query, stream=False)
        with closing(response):
            response.encoding = body_encoding(response)
            return response.text

    def raw_stream(
        self,
        query: str,
        on_response: Callable[[Cancellable, str], None],
        on_complete: Optional[OnComplete] = None,
        on_error: Optional[OnError] = None
    ) -> Cancellable:
        """
        Execute a query and stream the response line by line to ``on_response``.

        Line terminators are stripped; empty lines (table separators) are passed on.
        """
        check_non_empty(query, "query")
        check_not_none(on_response, "on_response")

        def read(response: requests.Response, cancellable: Cancellable) -> None:
            for line in iter_lines(response):
                if not cancellable.run_if_active(on_response, cancellable, line):
                    return

        return self._stream(query, read, on_complete, on_error)

    # Server status

    def ping(self) -> bool:
        """Return True if the server answers the ping endpoint."""
        try:
            self.service.get_ping().close()
            return True
        except TsdbException as e:
            logger.error(f"Ping failed: {e.message}")
            return False

    def version(self) -> str:
        """Version reported by the server, ``"unknown"`` if it does not say."""
        response = self.service.get_ping()
        response.close()
        return response.headers.get('X-Influxdb-Version', 'unknown')

    def get_log_level(self) -> LogLevel:
        return self.rest.log_level

    def set_log_level(self, log_level: LogLevel) -> 'FluxClient':
        check_not_none(log_level, "log_level")
        self.rest.log_level = LogLevel.parse(log_level)
        return self

    def _post(self, query: str, stream: bool) -> requests.Response:
        body = {'query': query, 'type': 'flux', 'dialect': self.options.dialect}
        return self.service.post_query(body, org=self.options.org, stream=stream)

    def _stream(self, query: str, read, on_complete: Optional[OnComplete],
                on_error: Optional[OnError]) -> Cancellable:
        on_complete = on_complete or _noop
        on_error = on_error or _log_error
        cancellable = Cancellable()

        def run() -> None:
            try:
                response = self._post(query, stream=True)
                cancellable.attach(response)
                with closing(response):
                    read(response, cancellable)
            except Exception as e:
                if not cancellable.run_if_active(_call_guarded, on_error, e):
                    logger.debug(f"Ignoring error of cancelled query: {e}")
                return

            cancellable.run_if_active(_call_guarded, on_complete)

        cancellable.start(threading.Thread(target=run, name='flux-query', daemon=True))
        return cancellable


def iter_lines(response: requests.Response, chunk_size: int = 8192) -> Iterator[str]:
    """
    Decode the response body and yield it line by line without terminators.

    Handles ``\\r\\n`` split across chunks, which ``Response.iter_lines`` does not.

    Raises:
        ConnectionException: The connection broke while reading the body
    """
    response.encoding = body_encoding(response)
    pending = ''
    chunks = response.iter_content(chunk_size=chunk_size, decode_unicode=True)

    while True:
        try:
            chunk = next(chunks, None)
        except requests.RequestException as e:
            raise ConnectionException(response.url, e, trace_id=get_trace_id()) from e
        if chunk is None:
            break

        pending += chunk
        lines = pending.split('\n')
        pending = lines.pop()
        for line in lines:
            yield line[:-1] if line.endswith('\r') else line

    if pending:
        yield pending[:-1] if pending.endswith('\r') else pending


def body_encoding(response: requests.Response) -> str:
    """Charset named by the Content-Type header, UTF-8 when there is none."""
    content_type = response.headers.get('Content-Type', '')
    if 'charset=' in content_type.lower() and response.encoding:
        return response.encoding
    return 'utf-8'


def _csv_lines(response: requests.Response) -> Iterator[str]:
    # csv.reader needs the terminator to keep newlines inside quoted values
    return (line + '\n' for line in iter_lines(response))
