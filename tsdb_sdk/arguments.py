"""Argument checks shared by the API classes."""

from typing import Any

from tsdb_sdk.exceptions import ValidationError


def check_not_none(value: Any, name: str) -> Any:
    if value is None:
        raise ValidationError(name, value, "a non-null reference")
    return value


def check_non_empty(value: Any, name: str) -> str:
    """The value has to be a string with at least one character."""
    if not isinstance(value, str) or not value:
        raise ValidationError(name, value, "a non-empty string")
    return value


def check_positive_number(value: Any, name: str) -> Any:
    if value is None or value <= 0:
        raise ValidationError(name, value, "a positive number")
    return value


def check_not_negative_number(value: Any, name: str) -> Any:
    if value is None or value < 0:
        raise ValidationError(name, value, "a non-negative number")
    return value
