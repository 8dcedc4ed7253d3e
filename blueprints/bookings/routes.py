# blueprints/bookings/routes.py
from __future__ import annotations
from datetime import date

from flask import Blueprint, abort, current_app, jsonify, request
from flask_login import login_required

from blueprints.auth.routes import admin_required
from blueprints.settings.services import SettingsStore
from blueprints.team.services import TeamDirectory
from .calendar import BookingCalendar
from .form import BookingForm
from .services import BookingStore
from .timewindow import TimeWindow
from .wallclock import date_part, format_day, format_time_range

api_bp = Blueprint("bookings_api", __name__)

def _parse_day(raw: str | None) -> date:
    try:
        return date.fromisoformat(raw) if raw else date.today()
    except ValueError:
        abort(400, description="Bad date")

def _booking_json(b) -> dict:
    data = b.to_dict()
    data["time_range"] = format_time_range(b.start_time, b.end_time)
    return data

def _form(store: BookingStore, on_saved=None) -> BookingForm:
    return BookingForm(
        store, TeamDirectory(), SettingsStore(), on_saved=on_saved,
        day_start=current_app.config["BOOKING_DEFAULT_START"],
        day_end=current_app.config["BOOKING_DEFAULT_END"],
    )

@api_bp.get("/bookings")
@login_required
def list_bookings():
    items = BookingStore().list()
    return jsonify({"items": [_booking_json(b) for b in items]})

@api_bp.get("/bookings/calendar")
@login_required
def booking_calendar():
    today = date.today()
    try:
        year = int(request.args.get("year", today.year))
        month = int(request.args.get("month", today.month))
    except ValueError:
        abort(400, description="Bad year/month")
    if not 1 <= month <= 12:
        abort(400, description="Bad month")
    cal = BookingCalendar(BookingStore().list())
    days = cal.booked_days(year, month)
    return jsonify({
        "year": year,
        "month": month,
        "booked_days": [d.isoformat() for d in days],
    })

@api_bp.get("/bookings/day/<day>")
@login_required
def bookings_for_day(day: str):
    d = _parse_day(day)
    cal = BookingCalendar(BookingStore().list())
    items = cal.schedules_for_date(d)
    return jsonify({
        "date": d.isoformat(),
        "label": format_day(d),
        "is_booked": cal.is_day_booked(d),
        "items": [_booking_json(b) for b in items],
    })

@api_bp.get("/bookings/draft")
@login_required
def booking_draft():
    d = _parse_day(request.args.get("date"))
    draft = _form(BookingStore()).open(d)
    return jsonify(draft.model_dump())

@api_bp.post("/bookings")
@login_required
def create_booking():
    window = TimeWindow.model_validate(request.get_json(silent=True) or {})
    store = BookingStore()
    # после сохранения перечитываем весь список, а не латаем локально
    reloaded: list = []
    form = _form(store, on_saved=lambda: reloaded.extend(store.list()))
    form.load(window)
    booking = form.submit()
    if form.errors:
        return jsonify({"ok": False, "errors": form.errors}), 422
    if booking is None:
        return jsonify({"ok": False, "error": form.banner, "draft": form.draft.model_dump()}), 503
    day = BookingCalendar(reloaded).schedules_for_date(date_part(booking.start_time))
    return jsonify({
        "ok": True,
        "booking": _booking_json(booking),
        "key_location": form.confirmation.key_location,
        "day": [_booking_json(b) for b in day],
    }), 201

@api_bp.delete("/bookings/<booking_id>")
@admin_required
def delete_booking(booking_id: str):
    BookingStore().delete(booking_id)
    return jsonify({"ok": True})
