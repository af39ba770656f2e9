from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_not_blank(value: Any, field_name: str) -> str:
    """Like require_non_empty but returns the value untouched."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value


def require_int_between(value: Any, field_name: str, low: int, high: int) -> int:
    # bool is an int subclass and floats would be truncated by int().
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    if isinstance(value, (float, Decimal)):
        try:
            integral = value == int(value)
        except (ValueError, OverflowError):
            integral = False
        if not integral:
            raise ValidationError(f"{field_name} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_decimal_between(value: Any, field_name: str, low: Decimal, high: Decimal) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite() or number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    local, _, domain = email.partition("@")
    if not local or not domain:
        raise ValidationError(f"{field_name} is not a valid address")
    return email
