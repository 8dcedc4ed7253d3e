# blueprints/bookings/wallclock.py
"""
Работа с «настенным» временем броней.

Время хранится строкой ``YYYY-MM-DDTHH:mm[:ss]`` ровно так, как его ввели,
и никогда не пересчитывается между поясами: дата и часы берутся из самой строки.
"""
from __future__ import annotations
import re
from datetime import date, datetime, time

_WALL_CLOCK_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<hm>\d{2}:\d{2})(?::(?P<s>\d{2}))?(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?$"
)

def date_part(value: str | None) -> date | None:
    """Дата брони: всё до первого 'T'. None, если строка не похожа на дату."""
    if not value:
        return None
    head = value.split("T", 1)[0]
    try:
        return date.fromisoformat(head)
    except ValueError:
        return None

def parse_wall_clock(value: str | None) -> datetime | None:
    """Наивный datetime из строки; смещение/Z (если пришло из хранилища) отбрасывается."""
    if not value:
        return None
    m = _WALL_CLOCK_RE.match(value.strip())
    if not m:
        return None
    try:
        return datetime.fromisoformat(f"{m['date']}T{m['hm']}:{m['s'] or '00'}")
    except ValueError:
        return None

def to_storage(value: str) -> str:
    """Каноничная строка YYYY-MM-DDTHH:mm:ss: пробелы, доли секунды и смещение отбрасываются."""
    dt = parse_wall_clock(value)
    if dt is None:
        return value.strip()
    return dt.strftime("%Y-%m-%dT%H:%M:%S")

def to_input(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M")

def time_part(value: str) -> str:
    """HH:mm из строки без разбора пояса."""
    parts = value.split("T", 1)
    if len(parts) < 2:
        return value
    t = parts[1].split("+")[0].split("Z")[0]
    return t[:5]

def format_time_range(start: str, end: str) -> str:
    return f"{time_part(start)} - {time_part(end)}"

def format_day(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"

def default_window(day: date, start: time = time(9, 0), end: time = time(17, 0)) -> tuple[str, str]:
    return (to_input(datetime.combine(day, start)), to_input(datetime.combine(day, end)))

def duration_hours(start: str, end: str) -> float | None:
    s, e = parse_wall_clock(start), parse_wall_clock(end)
    if s is None or e is None:
        return None
    return (e - s).total_seconds() / 3600.0
