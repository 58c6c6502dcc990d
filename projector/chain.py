# projector/chain.py
from __future__ import annotations

from datetime import datetime

from .errors import UnconfiguredRecurrence, ValidationError
from .models import NewOccurrenceRequest, Occurrence, Termination
from .recurrence import DATE_FORMAT, format_date, next_due_for

RECURRENCE_EXHAUSTED = "recurrence_exhausted"


def _parse_until(until: str) -> datetime:
    try:
        return datetime.strptime(until, DATE_FORMAT)
    except ValueError as e:
        raise ValidationError(f"invalid repeat_until {until!r}: {e}") from e


def advance(occurrence: Occurrence) -> NewOccurrenceRequest | Termination:
    """
    Decide whether `occurrence` gets a successor and with which values.

    Raises UnconfiguredRecurrence when the count is spent or no interval is set;
    InvalidAnchor and UnknownInterval from the calculator propagate unchanged.
    A next date strictly after repeat_until ends the chain; landing on it is allowed.
    Nothing is written; the caller hands the request to the store.
    """
    if occurrence.repeat_count <= 0 or not occurrence.repeat_interval:
        raise UnconfiguredRecurrence(occurrence.id)

    next_due = next_due_for(
        occurrence.due_date,
        occurrence.repeat_interval,
        occurrence.repeat_pattern,
    )

    if occurrence.repeat_until:
        until = _parse_until(occurrence.repeat_until)
        if next_due > until:
            return Termination(
                reason=RECURRENCE_EXHAUSTED,
                next_due=format_date(next_due),
                until=occurrence.repeat_until,
            )

    return NewOccurrenceRequest(
        name=occurrence.name,
        note=occurrence.note,
        project_id=occurrence.project_id,
        due_date=format_date(next_due),
        repeat_count=occurrence.repeat_count - 1,
        repeat_interval=occurrence.repeat_interval,
        repeat_pattern=occurrence.repeat_pattern,
        repeat_until=occurrence.repeat_until,
        parent_id=occurrence.id,
    )
