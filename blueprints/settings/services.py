# blueprints/settings/services.py
from __future__ import annotations
from typing import List, Optional

from models import AppSetting
from blueprints.store import RecordStore

KEY_LOCATION = "key_location"
# пока ключ не задан, показываем место по умолчанию
DEFAULT_KEY_LOCATION = "Front desk reception"
TEAM_PASSCODE = "team_passcode"

CAR_FIELDS = {
    # поле API -> ключ в app_settings
    "model": "car_model",
    "year": "car_year",
    "color": "car_color",
    "license_plate": "car_license_plate",
    "fuel_type": "car_fuel_type",
    "next_service_date": "car_next_service_date",
}

SECRET_KEYS = {TEAM_PASSCODE}


class SettingsStore(RecordStore):
    table = "app_settings"

    def get(self, key: str) -> Optional[str]:
        with self._guard("get"):
            row = self.session.get(AppSetting, key)
            # пустое значение считаем отсутствующим
            return row.value if row and row.value else None

    def set(self, key: str, value: str) -> AppSetting:
        with self._guard("set"):
            row = self.session.get(AppSetting, key)
            if row is None:
                row = AppSetting(key=key, value=value)
                self.session.add(row)
            else:
                row.value = value
            self.session.commit()
            return row

    def list(self) -> List[AppSetting]:
        with self._guard("list"):
            return list(self.session.query(AppSetting).order_by(AppSetting.key.asc()).all())

    def many(self, keys) -> dict[str, Optional[str]]:
        with self._guard("many"):
            rows = self.session.query(AppSetting).filter(AppSetting.key.in_(list(keys))).all()
            found = {r.key: (r.value or None) for r in rows}
        return {k: found.get(k) for k in keys}
