# blueprints/auth/routes.py
from __future__ import annotations
import logging
from functools import wraps
from typing import Callable, Optional

from flask import Blueprint, request, jsonify, abort
from flask_login import login_user, logout_user, login_required, current_user

from extensions import login_manager
from blueprints.store import StoreError
from .session import AccessSession, open_session, restore_session

log = logging.getLogger(__name__)

api_bp = Blueprint("auth_api", __name__)

@login_manager.user_loader
def load_session(session_id: str) -> Optional[AccessSession]:
    try:
        return restore_session(session_id)
    except StoreError:
        return None

# ---------- декораторы ролей ----------
def admin_required(fn: Callable):
    @wraps(fn)
    @login_required
    def wrapper(*args, **kwargs):
        if not getattr(current_user, "is_admin", False):
            abort(403)
        return fn(*args, **kwargs)
    return wrapper

# ---------- обработчики 401/403 ----------
@login_manager.unauthorized_handler
def _unauth():
    return jsonify({"error": "unauthorized"}), 401

@api_bp.app_errorhandler(403)
def _forbidden(e):
    return jsonify({"error": "forbidden"}), 403

# ---------- API ----------
@api_bp.post("/auth/login")
def api_login():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        # не-объект в JSON трактуем как пустые учётные данные
        payload = request.form or {}
    name = str(payload.get("name") or "").strip()
    passcode = str(payload.get("passcode") or "").strip()
    remember = bool(payload.get("remember", True))

    if not name or not passcode:
        return jsonify({"error": "missing_credentials"}), 400

    try:
        sess = open_session(passcode, name)
    except StoreError:
        return jsonify({"error": "Failed to verify passcode. Please try again."}), 503
    if sess is None:
        log.info("passcode rejected", extra={"event": "login_rejected"})
        return jsonify({"error": "invalid_passcode"}), 401

    login_user(sess, remember=remember)
    log.info("access granted", extra={"event": "login"})
    return jsonify({"ok": True, "session": sess.to_dict()})

@api_bp.post("/auth/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})

@api_bp.get("/auth/me")
@login_required
def api_me():
    return jsonify(current_user.to_dict())
