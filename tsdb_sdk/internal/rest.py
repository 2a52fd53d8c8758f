"""HTTP plumbing shared by every service: session, auth, wire logging, error mapping."""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import urljoin

import requests
from pydantic import BaseModel

from tsdb_sdk import __version__
from tsdb_sdk.config.logging_config import (
    LogLevel,
    RequestTimer,
    get_request_duration,
    set_trace_id,
)
from tsdb_sdk.exceptions import ApiException, ConnectionException

logger = logging.getLogger('tsdb_sdk.rest')
http_logger = logging.getLogger('tsdb_sdk.http')

T = TypeVar('T', bound=BaseModel)

_MASKED_HEADERS = {'authorization', 'cookie', 'set-cookie'}


class RestClient:
    """
    Wraps one ``requests.Session`` bound to a server base URL.

    Authentication is either a token (``Authorization: Token ...``) or a
    username/password pair exchanged for a session cookie on the first call.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        connect_timeout: float = 10.0,
        read_timeout: float = 60.0,
        verify_ssl: bool = True,
        log_level: LogLevel = LogLevel.NONE,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = (connect_timeout, read_timeout)
        self.log_level = LogLevel.parse(log_level)
        self.session = session or requests.Session()
        self.session.verify = verify_ssl
        self.session.headers['User-Agent'] = f"tsdb-sdk/{__version__}"

        self._username = username
        self._password = password
        self._signed_in = False

        if token:
            self.session.headers['Authorization'] = f"Token {token}"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def uses_session_auth(self) -> bool:
        return 'Authorization' not in self.session.headers and bool(self._username)

    def close(self) -> None:
        """Sign out (session auth only) and release pooled connections."""
        if self._signed_in:
            try:
                self._send('POST', 'api/v2/signout')
            except (ApiException, ConnectionException) as e:
                logger.warning(f"Signout failed: {e.message}")
            self._signed_in = False
        self.session.close()

    def url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip('/'))

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        stream: bool = False
    ) -> requests.Response:
        """
        Send a request and return the response if its status is 2xx.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters, ``None`` values are dropped
            json: JSON request body
            data: Raw request body
            headers: Extra request headers
            stream: Do not read the response body up front

        Raises:
            ApiException: The server answered with a non-2xx status
            ConnectionException: The server could not be reached
        """
        if self.uses_session_auth and not self._signed_in:
            self.signin()

        return self._send(method, path, params=params, json=json, data=data, headers=headers, stream=stream)

    def execute(self, method: str, path: str, response_type: Optional[Type[T]] = None, **kwargs) -> Optional[T]:
        """Send a request and map the JSON body to ``response_type``."""
        response = self.request(method, path, **kwargs)

        if response_type is None or response.status_code == 204 or not response.content:
            return None

        return response_type.model_validate(response.json())

    def signin(self) -> None:
        """Exchange username/password for a session cookie."""
        self._send('POST', 'api/v2/signin', auth=(self._username, self._password or ''))
        self._signed_in = True
        logger.debug(f"Signed in as {self._username}")

    def _send(self, method: str, path: str, params=None, stream: bool = False, **kwargs) -> requests.Response:
        trace_id = set_trace_id()

        url = self.url(path)
        if params:
            params = {key: _param_value(value) for key, value in params.items() if value is not None}

        headers = dict(kwargs.pop('headers', None) or {})
        headers['X-Request-Id'] = trace_id

        self._log_request(method, url, params, headers, kwargs)

        try:
            with RequestTimer(logger, method, f"/{path.lstrip('/')}") as timer:
                response = self.session.request(
                    method,
                    url,
                    params=params or None,
                    headers=headers,
                    timeout=self.timeout,
                    stream=stream,
                    **kwargs
                )
                timer.record(response)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ConnectionException(url, e, trace_id=trace_id) from e

        self._log_response(response, stream)

        if not 200 <= response.status_code < 300:
            try:
                error = ApiException.from_response(response, trace_id=trace_id)
            except requests.RequestException as e:
                response.close()
                raise ConnectionException(url, e, trace_id=trace_id) from e
            logger.debug(f"{method} {url} returned {response.status_code}: {error.message}")
            response.close()
            raise error

        return response

    def _log_request(self, method: str, url: str, params, headers, kwargs) -> None:
        if self.log_level == LogLevel.NONE:
            return

        query = f" params={params}" if params else ""
        http_logger.info(f"--> {method} {url}{query}")

        if self.log_level in (LogLevel.HEADERS, LogLevel.BODY):
            merged = {**self.session.headers, **headers}
            for name, value in merged.items():
                http_logger.info(f"{name}: {_mask(name, value)}")

        if self.log_level == LogLevel.BODY:
            body = kwargs.get('json')
            if body is not None:
                http_logger.info(json.dumps(body, default=str))
            elif kwargs.get('data') is not None:
                http_logger.info(str(kwargs['data']))
        http_logger.info(f"--> END {method}")

    def _log_response(self, response: requests.Response, stream: bool) -> None:
        if self.log_level == LogLevel.NONE:
            return

        duration = get_request_duration()
        took = f" ({duration:.0f}ms)" if duration is not None else ""
        http_logger.info(f"<-- {response.status_code} {response.url}{took}")

        if self.log_level in (LogLevel.HEADERS, LogLevel.BODY):
            for name, value in response.headers.items():
                http_logger.info(f"{name}: {_mask(name, value)}")

        if self.log_level == LogLevel.BODY and not stream:
            http_logger.info(response.text)
        http_logger.info("<-- END HTTP")


def _mask(name: str, value: str) -> str:
    return '***' if name.lower() in _MASKED_HEADERS else value


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return value
