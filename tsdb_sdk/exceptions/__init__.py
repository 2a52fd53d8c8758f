"""
SDK Exception Hierarchy
Provides specific exception types for argument validation, HTTP errors
returned by the server and failures while reading Flux results.
"""

import time
from typing import Any, Optional

import requests


class TsdbException(Exception):
    """
    Base exception class for all SDK-specific exceptions.
    Provides context and trace ID tracking.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        trace_id: Optional[str] = None
    ):
        """
        Initialize an SDK exception with context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for categorization
            context: Additional context about the error
            trace_id: Request trace ID for correlation
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.trace_id = trace_id
        self.timestamp = time.time()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary.

        Returns:
            Dictionary representation of the exception
        """
        result = {
            'error': self.error_code,
            'message': self.message,
            'type': self.__class__.__name__
        }

        if self.context:
            result['context'] = self.context

        if self.trace_id:
            result['trace_id'] = self.trace_id

        return result

    def __str__(self) -> str:
        parts = [f"{self.error_code}: {self.message}"]

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.trace_id:
            parts.append(f"Trace ID: {self.trace_id}")

        return " | ".join(parts)


# Validation and Configuration Errors

class ValidationError(TsdbException, ValueError):
    """Raised when an argument passed to an API method is invalid"""

    def __init__(
        self,
        field_name: str,
        field_value: Any,
        validation_rule: str,
        message: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ):
        if message is None:
            message = f"Expecting {validation_rule} for '{field_name}'"

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            context={
                "field_name": field_name,
                "field_value": field_value,
                "validation_rule": validation_rule,
                **(context or {})
            }
        )
        self.field_name = field_name
        self.field_value = field_value
        self.validation_rule = validation_rule


class ConfigurationError(TsdbException):
    """Raised when client configuration is invalid"""

    def __init__(
        self,
        config_key: str,
        config_value: Any,
        message: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ):
        if message is None:
            message = f"Invalid configuration for '{config_key}': {config_value}"

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            context={
                "config_key": config_key,
                "config_value": config_value,
                **(context or {})
            }
        )
        self.config_key = config_key
        self.config_value = config_value


# Transport Errors

class ConnectionException(TsdbException):
    """Raised when the server cannot be reached or the exchange times out"""

    def __init__(self, url: str, cause: Exception, **kwargs):
        super().__init__(
            message=f"Unable to communicate with {url}: {cause}",
            error_code="CONNECTION_ERROR",
            context={"url": url, "cause": type(cause).__name__},
            **kwargs
        )
        self.url = url


# HTTP Errors

class ApiException(TsdbException):
    """
    Raised for every HTTP response outside of the 2xx range.

    The concrete subclass is picked from the status code by
    :meth:`from_response`.
    """

    status: Optional[int] = None

    def __init__(
        self,
        status: int,
        message: str,
        reference: Optional[int] = None,
        response: Optional[requests.Response] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context['status'] = status
        if reference is not None:
            context['reference'] = reference

        super().__init__(
            message=message,
            error_code=f"HTTP_{status}",
            context=context,
            **kwargs
        )
        self.status = status
        self.reference = reference
        self.response = response

    @staticmethod
    def error_message(response: requests.Response) -> str:
        """Extract the most specific error message the server sent."""
        for header in ('X-Platform-Error-Code', 'X-Influx-Error'):
            value = response.headers.get(header)
            if value:
                return value

        body = _json_body(response)
        if isinstance(body, dict):
            for key in ('message', 'error'):
                if body.get(key):
                    return str(body[key])

        text = _text_body(response)
        if text:
            return text

        return response.reason or f"HTTP {response.status_code}"

    @staticmethod
    def error_reference(response: requests.Response) -> Optional[int]:
        value = response.headers.get('X-Influx-Reference')
        if value is None:
            body = _json_body(response)
            if isinstance(body, dict):
                value = body.get('reference')
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_response(cls, response: requests.Response, trace_id: Optional[str] = None) -> 'ApiException':
        """Build the exception matching ``response.status_code``."""
        status = response.status_code
        exception_type = _STATUS_EXCEPTIONS.get(status, ApiException)
        return exception_type(
            status=status,
            message=cls.error_message(response),
            reference=cls.error_reference(response),
            response=response,
            trace_id=trace_id
        )


class BadRequestException(ApiException):
    status = 400


class UnauthorizedException(ApiException):
    status = 401


class ForbiddenException(ApiException):
    status = 403


class NotFoundException(ApiException):
    status = 404


class MethodNotAllowedException(ApiException):
    status = 405


class RequestEntityTooLargeException(ApiException):
    status = 413


class UnprocessableEntityException(ApiException):
    status = 422


class TooManyRequestsException(ApiException):
    status = 429

    @property
    def retry_after(self) -> Optional[float]:
        """Seconds the server asked to wait, from the ``Retry-After`` header."""
        if self.response is None:
            return None
        value = self.response.headers.get('Retry-After')
        try:
            return float(value) if value is not None else None
        except ValueError:
            return None


class InternalServerErrorException(ApiException):
    status = 500


class ServiceUnavailableException(ApiException):
    status = 503


_STATUS_EXCEPTIONS = {
    exception_type.status: exception_type
    for exception_type in (
        BadRequestException,
        UnauthorizedException,
        ForbiddenException,
        NotFoundException,
        MethodNotAllowedException,
        RequestEntityTooLargeException,
        UnprocessableEntityException,
        TooManyRequestsException,
        InternalServerErrorException,
        ServiceUnavailableException,
    )
}


# Flux Result Errors

class FluxQueryException(TsdbException):
    """Raised when the server reports a query failure inside the result stream"""

    def __init__(self, message: str, reference: Optional[int] = None, **kwargs):
        context = kwargs.pop('context', {})
        if reference is not None:
            context['reference'] = reference

        super().__init__(
            message=message,
            error_code="FLUX_QUERY_ERROR",
            context=context,
            **kwargs
        )
        self.reference = reference


class FluxCsvParserException(TsdbException):
    """Raised when the annotated CSV result cannot be parsed"""

    def __init__(self, message: str, row: Optional[list[str]] = None, **kwargs):
        context = kwargs.pop('context', {})
        if row is not None:
            context['row'] = ",".join(row)[:500]

        super().__init__(
            message=message,
            error_code="FLUX_CSV_PARSER_ERROR",
            context=context,
            **kwargs
        )


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _text_body(response: requests.Response) -> Optional[str]:
    try:
        text = response.text
    except (requests.RequestException, RuntimeError):
        return None
    return text.strip() or None
