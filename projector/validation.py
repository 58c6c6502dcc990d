# projector/validation.py
from datetime import datetime

from .errors import UnknownInterval, ValidationError
from .recurrence import DATE_FORMAT, INTERVALS

MAX_NAME_LENGTH = 255


def validate_date(value: str | None, field: str = "date") -> str:
    """Return the date normalised to YYYY-MM-DD, or "" when not given."""
    if not value:
        return ""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).strftime(DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"invalid {field} format: {value}. Expected format: YYYY-MM-DD") from None


def _validate_name(kind: str, name: str) -> None:
    if not name or not name.strip():
        raise ValidationError(f"{kind} name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"{kind} name is too long (max {MAX_NAME_LENGTH} characters)")


def validate_occurrence_input(
    name: str,
    due_date: str = "",
    repeat_count: int = 0,
    repeat_interval: str | None = None,
    repeat_until: str = "",
) -> None:
    _validate_name("occurrence", name)
    if repeat_count < 0:
        raise ValidationError("repeat_count must not be negative")
    if repeat_interval and repeat_interval not in INTERVALS:
        raise UnknownInterval(repeat_interval)
    validate_date(due_date, "due_date")
    validate_date(repeat_until, "repeat_until")


def validate_project_input(name: str, due_date: str = "") -> None:
    _validate_name("project", name)
    validate_date(due_date, "due_date")
