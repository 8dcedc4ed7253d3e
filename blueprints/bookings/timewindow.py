# blueprints/bookings/timewindow.py
from __future__ import annotations
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .wallclock import parse_wall_clock

NAME_REQUIRED = "Name is required"
NAME_NOT_IN_TEAM = "Please select a name from the list"
START_REQUIRED = "Start time is required"
END_REQUIRED = "End time is required"
PURPOSE_REQUIRED = "Purpose is required"
END_BEFORE_START = "End time must be after start time"
START_INVALID = "Invalid start time"
END_INVALID = "Invalid end time"

FIELDS = ("user_name", "start_time", "end_time", "purpose", "notes")


class TimeWindow(BaseModel):
    """Черновик брони. Все поля строковые; даты разбираются только при проверке."""
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    user_name: str = ""
    start_time: str = ""
    end_time: str = ""
    purpose: str = ""
    notes: Optional[str] = ""


def validate_time_window(window: TimeWindow, member_names: Iterable[str]) -> dict[str, str]:
    """
    Проверяет черновик целиком и возвращает {поле: сообщение}.
    Пустой словарь: можно отправлять. Ошибки не обрываются на первой.
    """
    errors: dict[str, str] = {}
    known = {n.lower() for n in member_names}

    name = window.user_name.strip()
    if not name:
        errors["user_name"] = NAME_REQUIRED
    elif name.lower() not in known:
        errors["user_name"] = NAME_NOT_IN_TEAM

    if not window.start_time:
        errors["start_time"] = START_REQUIRED
    if not window.end_time:
        errors["end_time"] = END_REQUIRED

    if not window.purpose.strip():
        errors["purpose"] = PURPOSE_REQUIRED

    if window.start_time and window.end_time:
        start = parse_wall_clock(window.start_time)
        end = parse_wall_clock(window.end_time)
        if start is None:
            errors["start_time"] = START_INVALID
        if end is None:
            errors["end_time"] = END_INVALID
        elif start is not None and end <= start:
            errors["end_time"] = END_BEFORE_START

    return errors
