from __future__ import annotations
from datetime import date, time
from types import SimpleNamespace

import pytest

from blueprints.store import StoreError
from blueprints.bookings.form import BookingForm, FormState, SUBMIT_FAILED
from blueprints.bookings.timewindow import TimeWindow


class FakeBookings:
    def __init__(self, fail=False):
        self.fail = fail
        self.rows = []
        self.calls = 0

    def create(self, window):
        self.calls += 1
        if self.fail:
            raise StoreError("car_schedules.create")
        row = SimpleNamespace(id=str(len(self.rows) + 1), **window.model_dump())
        self.rows.append(row)
        return row

    def list(self):
        return list(self.rows)


class FakeTeam:
    def __init__(self, names=("Alice", "Bob")):
        self._names = list(names)

    def names(self):
        return list(self._names)


class FakeSettings:
    def __init__(self, values=None):
        self.values = values or {}

    def get(self, key):
        return self.values.get(key)


@pytest.fixture()
def stores():
    return FakeBookings(), FakeTeam(), FakeSettings({"key_location": "Front desk"})


def _fill(form, **kw):
    data = dict(user_name="Alice", purpose="Client visit")
    data.update(kw)
    for k, v in data.items():
        form.edit(k, v)


def test_open_defaults_to_working_day(stores):
    form = BookingForm(*stores)
    draft = form.open(date(2025, 3, 10))
    assert form.state is FormState.DRAFTING
    assert draft.start_time == "2025-03-10T09:00"
    assert draft.end_time == "2025-03-10T17:00"
    assert draft.user_name == "" and draft.purpose == "" and draft.notes == ""

def test_open_uses_configured_hours(stores):
    form = BookingForm(*stores, day_start=time(7, 30), day_end=time(12, 0))
    draft = form.open(date(2025, 3, 10))
    assert (draft.start_time, draft.end_time) == ("2025-03-10T07:30", "2025-03-10T12:00")

def test_validation_failure_makes_no_store_call(stores):
    bookings = stores[0]
    form = BookingForm(*stores)
    form.open(date(2025, 3, 10))
    assert form.submit() is None
    assert form.state is FormState.DRAFTING
    assert form.errors == {"user_name": "Name is required", "purpose": "Purpose is required"}
    assert bookings.calls == 0

def test_edit_clears_only_that_fields_error(stores):
    form = BookingForm(*stores)
    form.open(date(2025, 3, 10))
    form.submit()
    form.edit("user_name", "Bob")
    assert "user_name" not in form.errors
    assert form.errors == {"purpose": "Purpose is required"}

def test_successful_submit_closes_and_confirms(stores):
    bookings = stores[0]
    reloads = []
    form = BookingForm(*stores, on_saved=lambda: reloads.append(bookings.list()))
    form.open(date(2025, 3, 10))
    _fill(form)
    booking = form.submit()
    assert booking is not None and booking.user_name == "Alice"
    assert form.state is FormState.CLOSED
    assert form.draft is None
    assert form.confirmation.key_location == "Front desk"
    assert form.confirmation.booking is booking
    # после успеха список перечитан
    assert reloads == [[booking]]

def test_confirmation_falls_back_to_default_key_location():
    form = BookingForm(FakeBookings(), FakeTeam(), FakeSettings())
    form.open(date(2025, 3, 10))
    _fill(form)
    form.submit()
    assert form.confirmation.key_location == "Front desk reception"

def test_store_failure_keeps_draft(stores):
    _, team, settings = stores
    failing = FakeBookings(fail=True)
    form = BookingForm(failing, team, settings)
    form.open(date(2025, 3, 10))
    _fill(form, notes="back by 6")
    assert form.submit() is None
    assert form.state is FormState.DRAFTING
    assert form.banner == SUBMIT_FAILED
    assert form.errors == {}
    assert form.draft.user_name == "Alice" and form.draft.notes == "back by 6"
    # повтор снова идёт в хранилище
    failing.fail = False
    assert form.submit() is not None
    assert failing.calls == 2
    assert form.banner is None

def test_reload_failure_does_not_undo_success(stores):
    def broken_reload():
        raise StoreError("car_schedules.list")
    form = BookingForm(*stores, on_saved=broken_reload)
    form.open(date(2025, 3, 10))
    _fill(form)
    assert form.submit() is not None
    assert form.state is FormState.CLOSED

def test_identical_overlapping_bookings_both_succeed(stores):
    bookings = stores[0]
    form = BookingForm(*stores)
    for _ in range(2):
        form.open(date(2025, 3, 10))
        _fill(form)
        assert form.submit() is not None
    assert len(bookings.rows) == 2

def test_equal_start_and_end_rejected(stores):
    form = BookingForm(*stores)
    form.open(date(2025, 3, 10))
    _fill(form, end_time="2025-03-10T09:00")
    assert form.submit() is None
    assert form.errors == {"end_time": "End time must be after start time"}

def test_cancel_discards_draft(stores):
    form = BookingForm(*stores)
    form.open(date(2025, 3, 10))
    _fill(form)
    form.cancel()
    assert form.state is FormState.CLOSED
    assert form.draft is None
    with pytest.raises(RuntimeError):
        form.edit("purpose", "x")
    with pytest.raises(RuntimeError):
        form.submit()

def test_unknown_field_rejected(stores):
    form = BookingForm(*stores)
    form.open(date(2025, 3, 10))
    with pytest.raises(KeyError):
        form.edit("id", "123")

def test_load_accepts_typed_window(stores):
    form = BookingForm(*stores)
    window = TimeWindow(user_name="bob", start_time="2025-03-10T10:00",
                        end_time="2025-03-10T11:00", purpose="Post office")
    form.load(window)
    assert form.submit() is not None
    # исходный объект не меняется
    assert window.user_name == "bob"
