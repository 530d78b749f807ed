from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value, field_name: str, *, error=ValidationError) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise error(f"{field_name} must be a number")
    if math.isnan(number) or math.isinf(number):
        raise error(f"{field_name} must be a finite number")
    if number < 0:
        raise error(f"{field_name} must not be negative")
    return number
