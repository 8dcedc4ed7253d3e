from __future__ import annotations
import json, logging
from datetime import datetime, UTC

from flask import g, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers.response import Response

from flask_wtf.csrf import CSRFError, generate_csrf
from extensions import csrf
from blueprints.store import StoreError, RecordNotFound

from . import bp                 # используем bp из __init__.py
from . import api_bp

STORE_UNAVAILABLE = "The data store is unavailable. Please try again."

class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in ("event","path","method","status","duration_ms"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _setup_structured_logging(app):
    logger = app.logger
    has_json = any(
        isinstance(h, logging.StreamHandler)
        and isinstance(getattr(h, "formatter", None), JSONFormatter)
        for h in logger.handlers
    )
    if not has_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        # логгеры blueprints.* пишут тем же форматом
        pkg = logging.getLogger("blueprints")
        pkg.addHandler(handler)
        pkg.setLevel(logging.INFO)
        pkg.propagate = False

def pydantic_errors_safe(ve: ValidationError):
    errs = ve.errors(include_url=False)
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs

@api_bp.get("/csrf")
@csrf.exempt          # токен выдаём без проверки
def get_csrf():
    token = generate_csrf()
    resp = jsonify({"csrf": token})
    resp.set_cookie("csrf_token", token, samesite="Lax")
    return resp

@bp.before_app_request
def _start_timer():
    g._req_start = datetime.now(UTC)

@bp.after_app_request
def _log_request(response: Response):
    try:
        duration_ms = int((datetime.now(UTC) - g._req_start).total_seconds() * 1000)
    except AttributeError:
        duration_ms = None
    extra = {
        "event":"http_request",
        "path":request.path,
        "method":request.method,
        "status":response.status_code,
        "duration_ms":duration_ms,
    }
    logging.getLogger("blueprints.http").info("request handled", extra=extra)
    return response

# ---------- ошибки → JSON ----------
@bp.app_errorhandler(ValidationError)
def _bad_payload(ve: ValidationError):
    return jsonify({"error": "invalid_payload", "details": pydantic_errors_safe(ve)}), 400

@bp.app_errorhandler(RecordNotFound)
def _not_found_record(ex: RecordNotFound):
    return jsonify({"error": "not_found"}), 404

@bp.app_errorhandler(StoreError)
def _store_error(ex: StoreError):
    # подробности уже в логе хранилища, наружу отдаём общий текст
    return jsonify({"error": STORE_UNAVAILABLE}), 503

@bp.app_errorhandler(CSRFError)
def _csrf_error(ex: CSRFError):
    return jsonify({"error": "csrf", "details": ex.description}), 400

@bp.app_errorhandler(HTTPException)
def _http_error(ex: HTTPException):
    return jsonify({"error": ex.name.lower().replace(" ", "_"), "details": ex.description}), ex.code

@bp.record_once
def _on_register(state):
    _setup_structured_logging(state.app)

@bp.get("/health")
def health():
    return jsonify({
        "status":"ok",
        "ts": datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z"),
    })
