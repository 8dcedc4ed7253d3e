from __future__ import annotations
import os
from datetime import time
from pathlib import Path

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    BASE_DIR = Path(__file__).resolve().parent
    # SQLite file in project directory
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'car_booking.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # доступ по общему коду: админский задаётся окружением, командный хранится в app_settings
    ADMIN_PASSCODE = os.getenv("ADMIN_PASSCODE", "ADMIN2025")
    DEFAULT_TEAM_PASSCODE = os.getenv("DEFAULT_TEAM_PASSCODE", "TEAM2025")
    REMEMBER_COOKIE_SAMESITE = "Lax"

    # черновик брони по умолчанию: рабочий день
    BOOKING_DEFAULT_START = time(9, 0)
    BOOKING_DEFAULT_END = time(17, 0)

    # статистика: 0=Mon .. 6=Sun
    STATS_WEEK_STARTS_ON = 6
    STATS_TOP_USERS = 5
    STATS_RECENT_ACTIVITY = 5

    SEED_TEST_DATA = False
    DEFAULT_TEAM: list[str] = []

class DevConfig(BaseConfig):
    DEBUG = True
    SEED_TEST_DATA = True
    DEFAULT_TEAM = ["Alice", "Bob"]

class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    ADMIN_PASSCODE = "ADMIN-TEST"
    DEFAULT_TEAM_PASSCODE = "TEAM-TEST"

class ProdConfig(BaseConfig):
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True

config_map = {
    "dev": DevConfig,
    "test": TestConfig,
    "prod": ProdConfig,
    "default": DevConfig,
}
