"""
FastAPI Backend — Org Chart API v1.

Holds a single in-memory OrgChartApp, bootstrapped from a JSON seed file.
Nothing is persisted; POST /reset rebuilds the chart from the seed.

Endpoints:
  GET  /tree              — nested hierarchy + state hash
  GET  /employees/{id}    — one employee's adjacency + supervisor chain
  POST /move              — reparent an employee
  POST /undo, POST /redo  — walk the history cursor
  GET  /snapshot          — flat adjacency mapping + state hash
  GET  /history           — labels + cursor
  GET  /diagnostics       — tree / history summary
  POST /reset             — rebuild from the seed file
"""
from __future__ import annotations

import json
import logging
import threading
from typing import List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from org_chart import (
    InvalidMoveError,
    InvalidTopologyError,
    NotFoundError,
    OrgChartApp,
    bootstrap,
    canonical_hash,
    compare_snapshots,
    snapshot_to_dict,
)

from backend.config import load_settings

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="OrgChart API",
    version="1.0.0",
    description="Employee hierarchy with move / undo / redo",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
        "http://localhost:3001",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class SeedFile(BaseModel):
    root: str
    employees: List[str] = []
    edges: List[Tuple[str, str]] = []


class MoveRequest(BaseModel):
    employee_id: int
    supervisor_id: int


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------

# Guards _org. A move writes both the tree and the history.
_lock = threading.Lock()


def load_seed(path: str) -> SeedFile:
    with open(path, "r", encoding="utf-8") as f:
        return SeedFile(**json.load(f))


def build_org(seed: SeedFile) -> OrgChartApp:
    return bootstrap(
        seed.root,
        seed.employees,
        seed.edges,
        max_history=settings.max_history,
    )


_org: OrgChartApp = build_org(load_seed(settings.seed_file))


def _project(org: OrgChartApp) -> dict:
    """Tree + history cursor, returned by every state-changing endpoint."""
    return {
        "tree": org.current_tree().to_dict(),
        "state_hash": org.state_hash(),
        "cursor": org.history.cursor,
        "can_undo": org.history.can_undo,
        "can_redo": org.history.can_redo,
    }


def _drift_payload(before: dict, after: dict) -> dict:
    diff = compare_snapshots(before, after)
    return {
        "moved": {
            str(eid): {"from": old, "to": new}
            for eid, (old, new) in diff["moved"].items()
        },
        "reordered": diff["reordered"],
        "changed_count": diff["changed_count"],
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/tree")
def get_tree():
    with _lock:
        return _project(_org)


@app.get("/employees/{employee_id}")
def get_employee(employee_id: int):
    with _lock:
        try:
            employee = _org.registry.resolve(employee_id)
            entry = _org.store.adjacency_of(employee_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        return {
            "id": employee.id,
            "name": employee.name,
            "supervisor_id": entry.supervisor_id,
            "subordinate_ids": entry.subordinate_ids,
            "supervisor_chain": _org.store.supervisor_chain(employee_id),
        }


@app.post("/move")
def move(req: MoveRequest):
    with _lock:
        try:
            record = _org.move(req.employee_id, req.supervisor_id)
        except InvalidMoveError as exc:
            raise HTTPException(
                status_code=400,
                detail={"reason": exc.reason, "message": str(exc)},
            )
        except InvalidTopologyError as exc:
            logger.error("Move %s produced an invalid tree: %s", req, exc)
            raise HTTPException(status_code=409, detail=str(exc))
        return {"action": record.to_dict(), **_project(_org)}


@app.post("/undo")
def undo():
    with _lock:
        before = _org.snapshot()
        changed = _org.undo()
        return {
            "changed": changed,
            "drift": _drift_payload(before, _org.snapshot()),
            **_project(_org),
        }


@app.post("/redo")
def redo():
    with _lock:
        before = _org.snapshot()
        changed = _org.redo()
        return {
            "changed": changed,
            "drift": _drift_payload(before, _org.snapshot()),
            **_project(_org),
        }


@app.get("/snapshot")
def get_snapshot():
    with _lock:
        return {
            "state_hash": _org.state_hash(),
            "adjacency": snapshot_to_dict(_org.snapshot()),
        }


@app.get("/history")
def get_history():
    with _lock:
        entries = _org.history.entries()
        return {
            "cursor": _org.history.cursor,
            "entries": [
                {
                    "index": i,
                    "label": e.label,
                    "state_hash": canonical_hash(e.snapshot),
                }
                for i, e in enumerate(entries)
            ],
        }


@app.get("/diagnostics")
def get_diagnostics():
    with _lock:
        return _org.get_diagnostics()


@app.post("/reset")
def reset():
    """Discard all moves and history; rebuild from the seed file."""
    global _org
    with _lock:
        try:
            _org = build_org(load_seed(settings.seed_file))
        except (OSError, ValueError) as exc:
            raise HTTPException(status_code=500, detail=f"Seed load failed: {exc}")
        except InvalidTopologyError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return _project(_org)


@app.get("/health")
def health():
    return {"status": "ok", "version": "1.0.0"}
