# projector/timeparse.py
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dateparser

from .config import Config
from .errors import ValidationError
from .recurrence import format_date
from .validation import validate_date


def parse_due_text(text: str | None, tz: str | None = None, base: datetime | None = None) -> str:
    """
    Turn user input into a YYYY-MM-DD due date. Accepts ISO dates as-is and
    falls back to natural language such as:
      - "tomorrow"
      - "next friday"
      - "in 2 weeks"
    Returns "" for empty input.
    """
    if not text or not text.strip():
        return ""
    text = text.strip()

    try:
        return validate_date(text)
    except ValidationError:
        pass

    tz = tz or Config.TIMEZONE
    try:
        zone = ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"unknown timezone: {tz!r}") from e
    base = base or datetime.now(tz=zone)

    settings = {
        "RETURN_AS_TIMEZONE_AWARE": True,
        "TIMEZONE": tz,
        "TO_TIMEZONE": tz,
        "RELATIVE_BASE": base,
        # "friday" means the coming friday, not the last one
        "PREFER_DATES_FROM": "future",
    }

    dt = dateparser.parse(text, settings=settings)
    if dt is None:
        raise ValidationError(f"could not understand due date: {text!r}")

    return format_date(dt.astimezone(zone))
