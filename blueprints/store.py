# blueprints/store.py
from __future__ import annotations
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from extensions import db

log = logging.getLogger(__name__)


class StoreError(Exception):
    """Сбой хранилища. Подробности пишутся только в лог."""

    def __init__(self, operation: str, message: str = "Store operation failed"):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class RecordNotFound(StoreError):
    def __init__(self, operation: str, record_id: str):
        super().__init__(operation, f"record {record_id!r} not found")
        self.record_id = record_id


class RecordStore:
    """Общая основа для хранилищ: каждая операция в своей транзакции."""

    table: str = ""

    def __init__(self, session=None):
        self.session = session or db.session

    @contextmanager
    def _guard(self, operation: str):
        name = f"{self.table}.{operation}"
        try:
            yield
        except StoreError:
            self.session.rollback()
            raise
        except SQLAlchemyError as ex:
            self.session.rollback()
            log.exception("store operation failed", extra={"event": "store_error", "path": name})
            raise StoreError(name) from ex
