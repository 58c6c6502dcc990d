# projector/models.py
from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass

from .errors import RecurrenceExhausted

PENDING = "pending"
DONE = "done"
STATUSES = (PENDING, DONE)


@dataclass(frozen=True)
class Occurrence:
    id: int
    name: str
    note: str = ""
    project_id: int | None = None
    due_date: str = ""
    status: str = PENDING
    repeat_count: int = 0
    repeat_interval: str | None = None
    repeat_pattern: str = ""
    repeat_until: str = ""
    parent_id: int | None = None

    @property
    def is_recurring(self) -> bool:
        return self.repeat_count > 0 and bool(self.repeat_interval)

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Occurrence:
        return cls(
            id=int(row["id"]),
            name=row["name"],
            note=row["note"] or "",
            project_id=row["project_id"],
            due_date=row["due_date"] or "",
            status=row["status"],
            repeat_count=int(row["repeat_count"] or 0),
            repeat_interval=row["repeat_interval"] or None,
            repeat_pattern=row["repeat_pattern"] or "",
            repeat_until=row["repeat_until"] or "",
            parent_id=row["parent_id"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class NewOccurrenceRequest:
    """Values for the successor the chain controller wants the store to insert."""
    name: str
    note: str
    project_id: int | None
    due_date: str
    repeat_count: int
    repeat_interval: str | None
    repeat_pattern: str
    repeat_until: str
    parent_id: int | None
    status: str = PENDING

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Termination:
    reason: str
    next_due: str
    until: str

    def to_error(self) -> RecurrenceExhausted:
        return RecurrenceExhausted(self.next_due, self.until)


@dataclass(frozen=True)
class Project:
    id: int
    name: str
    due_date: str = ""

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Project:
        return cls(id=int(row["id"]), name=row["name"], due_date=row["due_date"] or "")

    def to_dict(self) -> dict:
        return asdict(self)
