# blueprints/auth/session.py
from __future__ import annotations
import hashlib
import hmac
from enum import Enum
from typing import Optional

from flask import current_app
from flask_login import UserMixin

from blueprints.settings.services import SettingsStore, TEAM_PASSCODE


class AccessLevel(str, Enum):
    TEAM = "team"
    ADMIN = "admin"


def _stamp(passcode: str) -> str:
    # короткий отпечаток кода: смена кода делает старые сессии недействительными
    return hashlib.sha256(passcode.encode("utf-8")).hexdigest()[:16]

def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class AccessSession(UserMixin):
    """Явная сессия: уровень доступа + имя. Создаётся при входе, снимается при выходе."""

    def __init__(self, level: AccessLevel, user_name: str, stamp: str):
        self.level = AccessLevel(level)
        self.user_name = user_name
        self.stamp = stamp

    @property
    def is_admin(self) -> bool:
        return self.level is AccessLevel.ADMIN

    def get_id(self) -> str:
        return f"{self.level.value}|{self.stamp}|{self.user_name}"

    def to_dict(self) -> dict:
        return {"access_level": self.level.value, "user_name": self.user_name}

    def __repr__(self):
        return f"<AccessSession {self.level.value} {self.user_name}>"


def team_passcode(settings: Optional[SettingsStore] = None) -> str:
    store = settings or SettingsStore()
    return store.get(TEAM_PASSCODE) or current_app.config["DEFAULT_TEAM_PASSCODE"]


def resolve_level(passcode: str, settings: Optional[SettingsStore] = None) -> Optional[AccessLevel]:
    """Какой доступ даёт код: админский сверяем первым."""
    if not passcode:
        return None
    if _same(passcode, current_app.config["ADMIN_PASSCODE"]):
        return AccessLevel.ADMIN
    if _same(passcode, team_passcode(settings)):
        return AccessLevel.TEAM
    return None


def open_session(passcode: str, user_name: str, settings: Optional[SettingsStore] = None) -> Optional[AccessSession]:
    level = resolve_level(passcode, settings)
    if level is None:
        return None
    return AccessSession(level, user_name.strip(), _stamp(passcode))


def restore_session(session_id: str, settings: Optional[SettingsStore] = None) -> Optional[AccessSession]:
    """Восстановление при загрузке: отпечаток должен совпасть с текущим кодом."""
    try:
        level_raw, stamp, user_name = session_id.split("|", 2)
        level = AccessLevel(level_raw)
    except ValueError:
        return None
    if level is AccessLevel.ADMIN:
        expected = current_app.config["ADMIN_PASSCODE"]
    else:
        expected = team_passcode(settings)
    if not _same(stamp, _stamp(expected)):
        return None
    return AccessSession(level, user_name, stamp)
