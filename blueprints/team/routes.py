# blueprints/team/routes.py
from __future__ import annotations
import logging
from typing import Any

from flask import Blueprint, jsonify, request, url_for
from flask_login import login_required

from .schemas import BulkDeleteIn, TeamMemberIn, TeamMemberOut
from .services import DuplicateName, TeamDirectory

log = logging.getLogger(__name__)

api_bp = Blueprint("team_api", __name__)

DUPLICATE_MSG = "This name already exists in the team members list"
BULK_FAILED_MSG = "Failed to delete team members"

# ----------------------- Helpers -----------------------
def ok(data: Any, status: int = 200):
    return jsonify(data), status

def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp

def error(msg: str, status: int = 400, code: str | None = None, field: str | None = None, **extra):
    payload = {"error": msg}
    if code: payload["code"] = code
    if field: payload["field"] = field
    payload.update(extra)
    return jsonify(payload), status

def _out(m) -> dict:
    return TeamMemberOut.model_validate(m.to_dict()).model_dump(mode="json")

# ----------------------- JSON API -----------------------
@api_bp.get("/team")
@login_required
def team_list():
    q = (request.args.get("q") or "").strip().lower()
    members = TeamDirectory().list()
    if q:
        # подсказки: имя должно начинаться с набранного
        members = [m for m in members if m.name.lower().startswith(q)]
    return ok({"items": [_out(m) for m in members]})

@api_bp.post("/team")
@login_required
def team_create():
    parsed = TeamMemberIn.model_validate(request.get_json(silent=True) or {})
    directory = TeamDirectory()
    try:
        m = directory.create(parsed.name)
    except DuplicateName:
        return error(DUPLICATE_MSG, status=409, code="DUPLICATE_NAME", field="name")
    except ValueError:
        return error("Name is required", status=400, code="EMPTY_NAME", field="name")
    return created(url_for("team_api.team_list"), _out(m))

@api_bp.delete("/team/<member_id>")
@login_required
def team_delete(member_id: str):
    TeamDirectory().delete(member_id)
    return "", 204

@api_bp.post("/team/delete")
@login_required
def team_bulk_delete():
    parsed = BulkDeleteIn.model_validate(request.get_json(silent=True) or {})
    result = TeamDirectory().delete_many(parsed.ids)
    members = [_out(m) for m in result.members]
    if not result.ok:
        return error(BULK_FAILED_MSG, status=207, code="PARTIAL_FAILURE",
                     deleted=result.deleted, failed=result.failed, items=members)
    return ok({"ok": True, "deleted": result.deleted, "items": members})
