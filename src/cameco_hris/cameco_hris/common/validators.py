from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.exceptions import ValidationError

_PHONE_RE = re.compile(r"^[0-9+\-\s()]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must not exceed {max_len} characters")
    return value


def require_choice(value: Any, field_name: str, choices: Sequence[str]) -> str:
    v = str(value or "").strip()
    if v not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return v


def require_int_range(value: Any, field_name: str, low: int, high: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if v < low or v > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return v


def require_iso_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_phone(value: Optional[str], field_name: str) -> str:
    v = require_non_empty(value, field_name)
    if not _PHONE_RE.match(v):
        raise ValidationError(f"Invalid {field_name.lower()} format")
    return v


def optional_email(value: Optional[str], field_name: str) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    if not _EMAIL_RE.match(v):
        raise ValidationError(f"{field_name} must be a valid email address")
    return v
