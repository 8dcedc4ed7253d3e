# blueprints/car/services.py
from __future__ import annotations
from typing import Optional

from flask_login import current_user

from models import CarLocation
from blueprints.store import RecordStore
from blueprints.settings.services import CAR_FIELDS, SettingsStore
from .schemas import CarDetailsIn


def car_details(settings: Optional[SettingsStore] = None) -> dict:
    store = settings or SettingsStore()
    values = store.many(CAR_FIELDS.values())
    return {field: values[key] for field, key in CAR_FIELDS.items()}


def update_car_details(data: CarDetailsIn, settings: Optional[SettingsStore] = None) -> dict:
    """Пишет только переданные поля; дата ТО хранится как YYYY-MM-DD."""
    store = settings or SettingsStore()
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            value = ""
        elif field == "next_service_date":
            value = value.isoformat()
        store.set(CAR_FIELDS[field], str(value).strip())
    return car_details(store)


class CarLocationStore(RecordStore):
    table = "car_locations"

    def latest(self) -> Optional[CarLocation]:
        with self._guard("latest"):
            return (self.session.query(CarLocation)
                    .order_by(CarLocation.created_at.desc())
                    .first())

    def save(self, latitude: float, longitude: float,
             description: Optional[str] = None, saved_by: Optional[str] = None) -> CarLocation:
        by = saved_by or getattr(current_user, "user_name", None) or "User"
        with self._guard("save"):
            loc = CarLocation(
                latitude=latitude,
                longitude=longitude,
                description=(description or "").strip() or None,
                saved_by=by,
            )
            self.session.add(loc)
            self.session.commit()
            return loc
