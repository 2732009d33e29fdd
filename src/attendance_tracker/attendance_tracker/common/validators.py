from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def require_iso_date(value: str, field_name: str) -> date:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD, got {value!r}") from None


def require_clock(value: str, field_name: str) -> time:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a time."""
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValidationError(f"{field_name} must be HH:MM, got {value!r}")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) == 3 else 0
        return time(hour=hours, minute=minutes, second=seconds)
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM, got {value!r}") from None


def require_year(value: str | None, field_name: str) -> int:
    try:
        year = int(value or "")
    except ValueError:
        raise ValidationError(f"{field_name} must be a year, got {value!r}") from None
    if year < 1 or year > 9999:
        raise ValidationError(f"{field_name} out of range: {year}")
    return year
