import logging
from logging.config import fileConfig
import os
import sys

from alembic import context

# корень репозитория в sys.path, чтобы работал `from app import create_app`
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)
log = logging.getLogger("alembic.env")

from flask import current_app  # noqa: E402
from extensions import db       # noqa: E402

# `flask db ...` уже поднял приложение; при прямом запуске alembic создаём своё
if current_app:
    app = current_app._get_current_object()
else:  # pragma: no cover
    from app import create_app
    app = create_app()
    app.app_context().push()

engine_url = str(db.engine.url).replace("%", "%%")
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", engine_url)

import models  # noqa: E402,F401  регистрируем таблицы в metadata

target_metadata = db.metadata

def run_migrations_offline():
    """Offline-режим: генерим SQL без подключения."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,  # SQLite не умеет ALTER
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    """Online-режим: применяем миграции к реальной БД."""
    with db.engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
    log.info("migrations applied to %s", db.engine.url.render_as_string(hide_password=True))

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
