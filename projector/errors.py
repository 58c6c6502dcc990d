from __future__ import annotations


class ProjectorError(Exception):
    """Base class for everything the recurrence engine and store raise."""


class ValidationError(ProjectorError):
    """Malformed or out-of-range input, e.g. a date that is not YYYY-MM-DD."""


class UnknownInterval(ValidationError):
    def __init__(self, interval: str) -> None:
        super().__init__(f"invalid interval: {interval}")
        self.interval = interval


class UnconfiguredRecurrence(ProjectorError):
    def __init__(self, occurrence_id: int | None = None) -> None:
        super().__init__("occurrence is not configured for repetition")
        self.occurrence_id = occurrence_id


class InvalidAnchor(ProjectorError):
    """The due date used as the recurrence anchor is missing or unparseable."""


class RecurrenceExhausted(ProjectorError):
    def __init__(self, next_due: str, until: str) -> None:
        super().__init__(f"repetition limit reached: {next_due} is after {until}")
        self.next_due = next_due
        self.until = until


class NotFound(ProjectorError):
    def __init__(self, kind: str, ident: int) -> None:
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident
