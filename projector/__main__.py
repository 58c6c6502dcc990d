"""
Summary:
CLI entrypoint so you can run:
  python -m projector add "Water plants" --due "next monday" --repeat 10 --every week --on mon,wed,fri
  python -m projector done 3
Prints occurrences and the result of completing them.
"""

from __future__ import annotations

import argparse
import json
import sys

from .completion import complete_occurrence
from .config import Config, configure_logging
from .db import init_db
from .errors import NotFound, ProjectorError
from .models import Occurrence
from .recurrence import INTERVALS
from .tasks import TaskStore
from .timeparse import parse_due_text
from .trace import build_completion_trace, format_trace


def _describe(o: Occurrence) -> str:
    due_txt = f" (due {o.due_date})" if o.due_date else ""
    repeat_txt = ""
    if o.is_recurring:
        repeat_txt = f" [every {o.repeat_interval}"
        if o.repeat_pattern:
            repeat_txt += f" on {o.repeat_pattern}"
        repeat_txt += f", {o.repeat_count} left"
        if o.repeat_until:
            repeat_txt += f", until {o.repeat_until}"
        repeat_txt += "]"
    return f"#{o.id} [{o.status}] {o.name}{due_txt}{repeat_txt}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="projector", description="Recurring tasks on a local SQLite database.")
    parser.add_argument("--db", type=str, default=None, help=f"Database path (default: {Config.DB_PATH}).")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (overrides PROJECTOR_LOG_LEVEL).")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create the database tables.")

    add = sub.add_parser("add", help="Create an occurrence.")
    add.add_argument("name", type=str)
    add.add_argument("--note", type=str, default="")
    add.add_argument("--project", type=int, default=None, help="Project id.")
    add.add_argument("--due", type=str, default="", help="YYYY-MM-DD or text like 'next friday'.")
    add.add_argument("--repeat", type=int, default=0, help="How many more times it repeats.")
    add.add_argument("--every", type=str, default=None, choices=INTERVALS, help="Repeat interval.")
    add.add_argument("--on", type=str, default="", help="Weekly pattern, e.g. mon,wed,fri.")
    add.add_argument("--until", type=str, default="", help="Last allowed due date.")

    lst = sub.add_parser("list", help="List occurrences.")
    lst.add_argument("--status", type=str, default=None, choices=("pending", "done"))

    for name, help_text in (
        ("show", "Show one occurrence as JSON."),
        ("done", "Mark an occurrence done and create the next one."),
        ("delete", "Delete an occurrence."),
        ("chain", "Show the occurrences an occurrence was generated from."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("id", type=int)

    project = sub.add_parser("project", help="Create a project.")
    project.add_argument("name", type=str)
    project.add_argument("--due", type=str, default="")

    sub.add_parser("projects", help="List projects.")

    delete_project = sub.add_parser("delete-project", help="Delete a project; its occurrences are kept.")
    delete_project.add_argument("id", type=int)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", type=str, default=Config.HOST)
    serve.add_argument("--port", type=int, default=Config.PORT)

    return parser


def run(args: argparse.Namespace) -> int:
    if args.command == "serve":
        import uvicorn

        from .web import create_app

        uvicorn.run(create_app(args.db), host=args.host, port=args.port)
        return 0

    init_db(args.db)
    store = TaskStore(args.db)

    if args.command == "init":
        print(f"Database ready at {args.db or Config.DB_PATH}")

    elif args.command == "add":
        occurrence_id = store.create_occurrence(
            name=args.name,
            note=args.note,
            project_id=args.project,
            due_date=parse_due_text(args.due),
            repeat_count=args.repeat,
            repeat_interval=args.every,
            repeat_pattern=args.on,
            repeat_until=parse_due_text(args.until),
        )
        print(f"Created (id={occurrence_id})")

    elif args.command == "list":
        rows = store.list_occurrences(status=args.status)
        if not rows:
            print("No occurrences")
        for o in rows:
            print(_describe(o))

    elif args.command == "show":
        occurrence = store.get_occurrence(args.id)
        if occurrence is None:
            raise NotFound("occurrence", args.id)
        print(json.dumps(occurrence.to_dict(), indent=2))

    elif args.command == "done":
        result = complete_occurrence(store, args.id)
        print(format_trace(build_completion_trace(result)))

    elif args.command == "delete":
        store.delete_occurrence(args.id)
        print(f"Deleted (id={args.id})")

    elif args.command == "chain":
        for o in store.get_chain(args.id):
            print(_describe(o))

    elif args.command == "project":
        project_id = store.create_project(args.name, parse_due_text(args.due))
        print(f"Created project (id={project_id})")

    elif args.command == "projects":
        for p in store.list_projects():
            due_txt = f" (due {p.due_date})" if p.due_date else ""
            print(f"#{p.id} {p.name}{due_txt}")

    elif args.command == "delete-project":
        store.delete_project(args.id)
        print(f"Deleted project (id={args.id})")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return run(args)
    except ProjectorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
