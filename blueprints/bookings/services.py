# blueprints/bookings/services.py
from __future__ import annotations
import logging
from typing import List

from models import Booking
from blueprints.store import RecordStore, RecordNotFound
from .timewindow import TimeWindow
from .wallclock import to_storage

log = logging.getLogger(__name__)

_UPDATABLE = {"user_name", "start_time", "end_time", "purpose", "notes"}


class BookingStore(RecordStore):
    table = "car_schedules"

    def list(self) -> List[Booking]:
        with self._guard("list"):
            return list(
                self.session.query(Booking)
                .order_by(Booking.start_time.asc(), Booking.created_at.asc())
                .all()
            )

    def get(self, booking_id: str) -> Booking:
        with self._guard("get"):
            b = self.session.get(Booking, booking_id)
            if b is None:
                raise RecordNotFound(f"{self.table}.get", booking_id)
            return b

    def create(self, window: TimeWindow) -> Booking:
        # пересечения не проверяем: несколько броней на одно время допустимы
        with self._guard("create"):
            b = Booking(
                user_name=window.user_name.strip(),
                start_time=to_storage(window.start_time),
                end_time=to_storage(window.end_time),
                purpose=window.purpose.strip(),
                notes=(window.notes or "").strip() or None,
            )
            self.session.add(b)
            self.session.commit()
            log.info("booking created", extra={"event": "booking_created"})
            return b

    def update(self, booking_id: str, **changes) -> Booking:
        with self._guard("update"):
            b = self.session.get(Booking, booking_id)
            if b is None:
                raise RecordNotFound(f"{self.table}.update", booking_id)
            for field, value in changes.items():
                if field not in _UPDATABLE:
                    raise KeyError(field)
                if field in ("start_time", "end_time") and value:
                    value = to_storage(value)
                setattr(b, field, value)
            self.session.commit()
            return b

    def delete(self, booking_id: str) -> None:
        with self._guard("delete"):
            b = self.session.get(Booking, booking_id)
            if b is None:
                raise RecordNotFound(f"{self.table}.delete", booking_id)
            self.session.delete(b)
            self.session.commit()
            log.info("booking deleted", extra={"event": "booking_deleted"})
