from __future__ import annotations

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .datetime_utils import format_iso_date, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value.strip()


def require_iso_date(value: str, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a yyyy-MM-dd date")
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a yyyy-MM-dd date") from None
    # strptime also takes unpadded parts; stored dates must compare as strings
    if format_iso_date(parsed) != value:
        raise ValidationError(f"{field_name} must be a yyyy-MM-dd date")
    return value


def require_string_list(value, field_name: str) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be a list of names")
    return tuple(value)


def require_status(value, field_name: str = "Status") -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None
