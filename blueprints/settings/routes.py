# blueprints/settings/routes.py
from __future__ import annotations
import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required
from pydantic import BaseModel, Field

from blueprints.auth.routes import admin_required
from .services import DEFAULT_KEY_LOCATION, KEY_LOCATION, SECRET_KEYS, TEAM_PASSCODE, SettingsStore

log = logging.getLogger(__name__)

api_bp = Blueprint("settings_api", __name__)

class SettingValueIn(BaseModel):
    value: str = Field(max_length=2000)

class PasscodeIn(BaseModel):
    passcode: str = Field(max_length=200)

def _mask(key: str, value: str) -> str:
    if key in SECRET_KEYS and value:
        return "*" * len(value)
    return value

@api_bp.get("/settings")
@admin_required
def settings_list():
    rows = SettingsStore().list()
    return jsonify({"items": [{"key": r.key, "value": _mask(r.key, r.value)} for r in rows]})

@api_bp.get("/settings/key-location")
@login_required
def key_location_get():
    return jsonify({"key_location": SettingsStore().get(KEY_LOCATION) or DEFAULT_KEY_LOCATION})

@api_bp.put("/settings/key-location")
@admin_required
def key_location_set():
    parsed = SettingValueIn.model_validate(request.get_json(silent=True) or {})
    value = parsed.value.strip()
    if not value:
        return jsonify({"error": "Key location cannot be empty"}), 400
    SettingsStore().set(KEY_LOCATION, value)
    log.info("key location updated", extra={"event": "key_location_updated"})
    return jsonify({"ok": True, "key_location": value})

@api_bp.put("/settings/team-passcode")
@admin_required
def team_passcode_set():
    parsed = PasscodeIn.model_validate(request.get_json(silent=True) or {})
    code = parsed.passcode.strip()
    if not code:
        return jsonify({"error": "Team passcode cannot be empty"}), 400
    SettingsStore().set(TEAM_PASSCODE, code)
    log.info("team passcode updated", extra={"event": "team_passcode_updated"})
    return jsonify({"ok": True})
