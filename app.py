from __future__ import annotations
import os
from importlib import import_module
from flask import Flask
from config import config_map
from extensions import db, migrate, login_manager, csrf
from sqlalchemy import inspect

def _seed_from_config(app):
    if not app.config.get("SEED_TEST_DATA"):
        return
    with app.app_context():
        # таблицы может ещё не быть (alembic upgrade и т.п.)
        if not inspect(db.engine).has_table("team_members"):
            return

        from models import AppSetting, TeamMember  # локальный импорт, чтобы избежать циклов
        created = 0
        for name in app.config.get("DEFAULT_TEAM", []):
            if TeamMember.query.filter_by(name_key=name.strip().lower()).first():
                continue
            db.session.add(TeamMember(name=name.strip(), name_key=name.strip().lower()))
            created += 1
        if not db.session.get(AppSetting, "team_passcode"):
            db.session.add(AppSetting(key="team_passcode", value=app.config["DEFAULT_TEAM_PASSCODE"]))
            created += 1
        if created:
            db.session.commit()

def register_blueprints(app: Flask) -> None:
    # core импортируем модулем, чтобы маршруты зарегистрировались до взятия bp
    import_module("blueprints.core.routes")
    from blueprints.core import bp as core_bp, api_bp as core_api_bp
    from blueprints.auth.routes import api_bp as auth_api_bp
    from blueprints.bookings.routes import api_bp as bookings_api_bp
    from blueprints.team.routes import api_bp as team_api_bp
    from blueprints.settings.routes import api_bp as settings_api_bp
    from blueprints.car.routes import api_bp as car_api_bp
    from blueprints.stats.routes import api_bp as stats_api_bp

    # core без префикса → '/health' в корне
    app.register_blueprint(core_bp)
    app.register_blueprint(core_api_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_api_bp, url_prefix="/api/v1")
    app.register_blueprint(bookings_api_bp, url_prefix="/api/v1")
    app.register_blueprint(team_api_bp, url_prefix="/api/v1")
    app.register_blueprint(settings_api_bp, url_prefix="/api/v1")
    app.register_blueprint(car_api_bp, url_prefix="/api/v1")
    app.register_blueprint(stats_api_bp, url_prefix="/api/v1")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    app.config.setdefault("WTF_CSRF_TIME_LIMIT", None)
    app.config.setdefault("WTF_CSRF_HEADERS", ["X-CSRF-Token", "X-CSRFToken"])

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    register_blueprints(app)
    _seed_from_config(app)
    return app
