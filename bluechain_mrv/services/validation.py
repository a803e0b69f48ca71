"""Input checks shared by the workflow and ledger services"""

import math
from numbers import Real
from typing import Any, Optional
from uuid import UUID

from bluechain_mrv.exceptions import ValidationError


def require_text(value: Any, field: str) -> str:
    """Return the stripped string or raise if it is missing or blank"""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value.strip()


def optional_number(value: Any, field: str) -> Optional[float]:
    """Return a finite float, or None when the value is absent"""
    if value is None:
        return None
    # bool is a Real subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{field} must be a number", field=field)
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return value


def require_number(value: Any, field: str) -> float:
    number = optional_number(value, field)
    if number is None:
        raise ValidationError(f"{field} is required", field=field)
    return number


def parse_uuid(value: Any, field: str) -> UUID:
    """Accept a UUID or its string form; empty values count as missing"""
    if isinstance(value, UUID):
        return value
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"{field} must be a valid UUID", field=field)
