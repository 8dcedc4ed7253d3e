# blueprints/bookings/form.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Callable, Optional

from blueprints.store import StoreError
from blueprints.settings.services import DEFAULT_KEY_LOCATION, KEY_LOCATION
from .timewindow import FIELDS, TimeWindow, validate_time_window
from .wallclock import default_window

log = logging.getLogger(__name__)

SUBMIT_FAILED = "Failed to create booking. Please try again."


class FormState(str, Enum):
    CLOSED = "closed"
    DRAFTING = "drafting"
    SUBMITTING = "submitting"


@dataclass
class Confirmation:
    booking: object
    key_location: Optional[str]


class BookingForm:
    """
    Жизненный цикл одного черновика брони: open → edit → submit → closed.

    Ошибки проверки остаются в форме и в хранилище не уходят.
    Ошибка хранилища не стирает черновик, пользователь может нажать ещё раз.
    """

    def __init__(self, bookings, team, settings,
                 on_saved: Optional[Callable[[], object]] = None,
                 day_start: time = time(9, 0), day_end: time = time(17, 0)):
        self.bookings = bookings
        self.team = team
        self.settings = settings
        self.on_saved = on_saved
        self.day_start = day_start
        self.day_end = day_end
        self._reset()

    def _reset(self):
        self.state = FormState.CLOSED
        self.draft: Optional[TimeWindow] = None
        self.errors: dict[str, str] = {}
        self.banner: Optional[str] = None
        self.confirmation: Optional[Confirmation] = None

    def _require_open(self):
        if self.state is not FormState.DRAFTING:
            raise RuntimeError(f"booking form is {self.state.value}")

    # ---------- переходы ----------
    def open(self, day: date) -> TimeWindow:
        start, end = default_window(day, self.day_start, self.day_end)
        self._reset()
        self.draft = TimeWindow(start_time=start, end_time=end)
        self.state = FormState.DRAFTING
        return self.draft

    def load(self, window: TimeWindow) -> TimeWindow:
        self._reset()
        self.draft = window.model_copy()
        self.state = FormState.DRAFTING
        return self.draft

    def edit(self, field: str, value: str) -> None:
        self._require_open()
        if field not in FIELDS:
            raise KeyError(field)
        setattr(self.draft, field, value)
        self.errors.pop(field, None)

    def cancel(self) -> None:
        self._reset()

    def submit(self):
        self._require_open()
        self.banner = None
        try:
            members = self.team.names()
        except StoreError:
            self.banner = SUBMIT_FAILED
            return None

        self.errors = validate_time_window(self.draft, members)
        if self.errors:
            return None

        self.state = FormState.SUBMITTING
        try:
            booking = self.bookings.create(self.draft)
        except StoreError:
            log.warning("booking submit failed", extra={"event": "booking_submit_failed"})
            self.state = FormState.DRAFTING
            self.banner = SUBMIT_FAILED
            return None

        key_location = None
        try:
            key_location = self.settings.get(KEY_LOCATION) or DEFAULT_KEY_LOCATION
        except StoreError:
            log.warning("key location unavailable for confirmation", extra={"event": "key_location_failed"})

        self.state = FormState.CLOSED
        self.draft = None
        self.errors = {}
        self.confirmation = Confirmation(booking=booking, key_location=key_location)
        if self.on_saved is not None:
            try:
                self.on_saved()
            except StoreError:
                # бронь уже сохранена; список перечитается при следующей загрузке
                log.warning("booking list reload failed", extra={"event": "booking_reload_failed"})
        return booking
