import logging
from pathlib import Path

from .db import connect
from .errors import NotFound, ValidationError
from .models import STATUSES, NewOccurrenceRequest, Occurrence, Project
from .validation import validate_date, validate_occurrence_input, validate_project_input

LOGGER = logging.getLogger(__name__)

_COLUMNS = (
    "id, project_id, name, note, due_date, status, repeat_count, "
    "repeat_interval, repeat_pattern, repeat_until, parent_id"
)


class TaskStore:
    """
    SQLite-backed persistence for occurrences and projects.
    Every call opens its own connection, so nothing spans two calls in one transaction.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self.db_path = db_path

    def _conn(self):
        return connect(self.db_path)

    # -----------------------------
    # Occurrences
    # -----------------------------
    def create_occurrence(
        self,
        name: str,
        note: str = "",
        project_id: int | None = None,
        due_date: str = "",
        repeat_count: int = 0,
        repeat_interval: str | None = None,
        repeat_pattern: str = "",
        repeat_until: str = "",
    ) -> int:
        validate_occurrence_input(name, due_date, repeat_count, repeat_interval, repeat_until)
        if project_id is not None:
            self.get_project(project_id)
        request = NewOccurrenceRequest(
            name=name.strip(),
            note=(note or "").strip(),
            project_id=project_id,
            due_date=validate_date(due_date),
            repeat_count=repeat_count,
            repeat_interval=repeat_interval or None,
            repeat_pattern=(repeat_pattern or "").strip(),
            repeat_until=validate_date(repeat_until),
            parent_id=None,
        )
        return self.insert_occurrence(request)

    def insert_occurrence(self, request: NewOccurrenceRequest) -> int:
        with self._conn() as conn:
            cur = conn.execute(
                "INSERT INTO occurrences (name, note, project_id, due_date, status, repeat_count, "
                "repeat_interval, repeat_pattern, repeat_until, parent_id) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    request.name,
                    request.note,
                    request.project_id,
                    request.due_date,
                    request.status,
                    request.repeat_count,
                    request.repeat_interval,
                    request.repeat_pattern,
                    request.repeat_until,
                    request.parent_id,
                ),
            )
            conn.commit()
            new_id = int(cur.lastrowid)
        LOGGER.debug("Inserted occurrence %s (parent=%s)", new_id, request.parent_id)
        return new_id

    def get_occurrence(self, occurrence_id: int) -> Occurrence | None:
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM occurrences WHERE id=?",
                (occurrence_id,),
            ).fetchone()
        return Occurrence.from_row(row) if row else None

    def list_occurrences(self, status: str | None = None) -> list[Occurrence]:
        query = f"SELECT {_COLUMNS} FROM occurrences"
        params: tuple = ()
        if status:
            if status not in STATUSES:
                raise ValidationError(f"unknown status: {status}")
            query += " WHERE status = ?"
            params = (status,)
        query += " ORDER BY (due_date = ''), due_date, id"
        with self._conn() as conn:
            rows = conn.execute(query, params).fetchall()
        return [Occurrence.from_row(r) for r in rows]

    def update_status(self, occurrence_id: int, status: str) -> bool:
        """False when the row is missing or already has `status`."""
        if status not in STATUSES:
            raise ValidationError(f"unknown status: {status}")
        with self._conn() as conn:
            cur = conn.execute(
                "UPDATE occurrences SET status=? WHERE id=? AND status != ?",
                (status, occurrence_id, status),
            )
            conn.commit()
            return cur.rowcount > 0

    def delete_occurrence(self, occurrence_id: int) -> None:
        with self._conn() as conn:
            cur = conn.execute("DELETE FROM occurrences WHERE id=?", (occurrence_id,))
            conn.commit()
            if cur.rowcount == 0:
                raise NotFound("occurrence", occurrence_id)

    def get_chain(self, occurrence_id: int) -> list[Occurrence]:
        """
        Follow parent ids from `occurrence_id` back to the first occurrence.
        Returns oldest first; a deleted ancestor ends the walk.
        """
        current = self.get_occurrence(occurrence_id)
        if current is None:
            raise NotFound("occurrence", occurrence_id)

        chain = [current]
        seen = {current.id}
        while current.parent_id is not None and current.parent_id not in seen:
            parent = self.get_occurrence(current.parent_id)
            if parent is None:
                break
            chain.append(parent)
            seen.add(parent.id)
            current = parent
        chain.reverse()
        return chain

    # -----------------------------
    # Projects
    # -----------------------------
    def create_project(self, name: str, due_date: str = "") -> int:
        validate_project_input(name, due_date)
        with self._conn() as conn:
            cur = conn.execute(
                "INSERT INTO projects (name, due_date) VALUES (?, ?)",
                (name.strip(), validate_date(due_date)),
            )
            conn.commit()
            return int(cur.lastrowid)

    def get_project(self, project_id: int) -> Project:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT id, name, due_date FROM projects WHERE id=?",
                (project_id,),
            ).fetchone()
        if not row:
            raise NotFound("project", project_id)
        return Project.from_row(row)

    def list_projects(self) -> list[Project]:
        with self._conn() as conn:
            rows = conn.execute("SELECT id, name, due_date FROM projects ORDER BY id").fetchall()
        return [Project.from_row(r) for r in rows]

    def delete_project(self, project_id: int) -> None:
        """Occurrences of the project are kept; their project_id is cleared."""
        with self._conn() as conn:
            cur = conn.execute("DELETE FROM projects WHERE id=?", (project_id,))
            conn.commit()
            if cur.rowcount == 0:
                raise NotFound("project", project_id)
