# projector/pattern.py
from __future__ import annotations

import logging
from types import MappingProxyType

LOGGER = logging.getLogger(__name__)

# Sunday = 0 ... Saturday = 6. Single-letter "t" is Tuesday and "r" is Thursday.
WEEKDAYS = MappingProxyType({
    "sunday": 0, "sun": 0, "su": 0, "u": 0,
    "monday": 1, "mon": 1, "m": 1,
    "tuesday": 2, "tue": 2, "tu": 2, "t": 2,
    "wednesday": 3, "wed": 3, "w": 3,
    "thursday": 4, "thu": 4, "th": 4, "r": 4,
    "friday": 5, "fri": 5, "f": 5,
    "saturday": 6, "sat": 6, "sa": 6, "s": 6,
})

WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


def parse_weekly_pattern(pattern: str | None) -> tuple[int, ...]:
    """
    Parse a pattern like "mon,wed,fri" or "Tuesday, Thursday" into sorted weekday
    indices (Sunday = 0). Tokens that are not day names are dropped.
    """
    if not pattern:
        return ()

    days = set()
    for part in pattern.split(","):
        token = part.strip().lower()
        if not token:
            continue
        day = WEEKDAYS.get(token)
        if day is None:
            # TODO: surface ignored tokens to the caller once the API can return warnings
            LOGGER.debug("Ignoring unknown weekday %r in pattern %r", token, pattern)
            continue
        days.add(day)

    return tuple(sorted(days))
