"""
Summary:
FastAPI app over the occurrence store:
- /api/occurrences CRUD plus PUT {"action": "done"} to complete one
- /api/occurrences/{id}/chain walks the parent links
- /api/projects
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .completion import complete_occurrence
from .config import configure_logging
from .db import init_db
from .errors import NotFound, ValidationError
from .tasks import TaskStore
from .trace import build_completion_trace

LOGGER = logging.getLogger(__name__)


class OccurrenceRequest(BaseModel):
    name: str
    note: str = ""
    project_id: int | None = None
    due_date: str = ""
    repeat_count: int = 0
    repeat_interval: str | None = None
    repeat_pattern: str = ""
    repeat_until: str = ""


class OccurrenceAction(BaseModel):
    action: str


class ProjectRequest(BaseModel):
    name: str
    due_date: str = ""


def create_app(db_path: str | Path | None = None) -> FastAPI:
    store = TaskStore(db_path)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        configure_logging()
        init_db(db_path)
        LOGGER.info("Projector API ready (db=%s)", db_path or "default")
        yield

    app = FastAPI(title="Projector API", lifespan=lifespan)
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFound)
    async def _not_found(_request: Request, exc: NotFound) -> JSONResponse:
        return JSONResponse({"success": False, "error": str(exc)}, status_code=404)

    @app.exception_handler(ValidationError)
    async def _invalid(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse({"success": False, "error": str(exc)}, status_code=400)

    @app.get("/health")
    def health() -> dict:
        return {"status": "healthy", "message": "Projector API is running"}

    @app.get("/api/occurrences")
    def api_list_occurrences(status: str | None = None) -> dict:
        occurrences = [o.to_dict() for o in store.list_occurrences(status=status)]
        return {"success": True, "count": len(occurrences), "occurrences": occurrences}

    @app.post("/api/occurrences", status_code=201)
    def api_create_occurrence(req: OccurrenceRequest) -> dict:
        occurrence_id = store.create_occurrence(**req.model_dump())
        return {
            "success": True,
            "occurrence_id": occurrence_id,
            "occurrence": store.get_occurrence(occurrence_id).to_dict(),
        }

    @app.get("/api/occurrences/{occurrence_id}")
    def api_get_occurrence(occurrence_id: int) -> dict:
        occurrence = store.get_occurrence(occurrence_id)
        if occurrence is None:
            raise NotFound("occurrence", occurrence_id)
        return {"success": True, "occurrence": occurrence.to_dict()}

    @app.delete("/api/occurrences/{occurrence_id}")
    def api_delete_occurrence(occurrence_id: int) -> dict:
        store.delete_occurrence(occurrence_id)
        return {"success": True, "occurrence_id": occurrence_id}

    @app.put("/api/occurrences/{occurrence_id}")
    def api_occurrence_action(occurrence_id: int, req: OccurrenceAction) -> JSONResponse:
        if req.action != "done":
            return JSONResponse({"success": False, "error": f"Unknown action: {req.action}"}, status_code=400)
        result = complete_occurrence(store, occurrence_id)
        trace = build_completion_trace(result)
        return JSONResponse({"success": True, "occurrence_id": occurrence_id, "trace": trace})

    @app.get("/api/occurrences/{occurrence_id}/chain")
    def api_chain(occurrence_id: int) -> dict:
        chain = [o.to_dict() for o in store.get_chain(occurrence_id)]
        return {"success": True, "count": len(chain), "chain": chain}

    @app.get("/api/projects")
    def api_list_projects() -> dict:
        projects = [p.to_dict() for p in store.list_projects()]
        return {"success": True, "count": len(projects), "projects": projects}

    @app.post("/api/projects", status_code=201)
    def api_create_project(req: ProjectRequest) -> dict:
        project_id = store.create_project(req.name, req.due_date)
        return {"success": True, "project_id": project_id, "project": store.get_project(project_id).to_dict()}

    @app.get("/api/projects/{project_id}")
    def api_get_project(project_id: int) -> dict:
        return {"success": True, "project": store.get_project(project_id).to_dict()}

    @app.delete("/api/projects/{project_id}")
    def api_delete_project(project_id: int) -> dict:
        store.delete_project(project_id)
        return {"success": True, "project_id": project_id}

    return app


app = create_app()
