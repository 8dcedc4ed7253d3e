# blueprints/bookings/calendar.py
from __future__ import annotations
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from .wallclock import date_part

log = logging.getLogger(__name__)


class BookingCalendar:
    """
    Раскладывает брони по календарным дням.

    День брони: префикс ``start_time`` до 'T'; никакого разбора с поясом,
    поэтому бронь на 00:30 не «съезжает» на соседний день.
    Внутри дня сохраняется порядок, в котором брони пришли из хранилища.
    """

    def __init__(self, bookings: Iterable):
        self._by_day: Dict[date, List] = {}
        self.skipped: List = []
        for b in bookings:
            day = date_part(getattr(b, "start_time", None))
            if day is None:
                log.warning("booking without a usable start date",
                            extra={"event": "calendar_skip"})
                self.skipped.append(b)
                continue
            self._by_day.setdefault(day, []).append(b)

    def is_day_booked(self, day: date) -> bool:
        return day in self._by_day

    def schedules_for_date(self, day: Optional[date]) -> List:
        if day is None:
            return []
        return list(self._by_day.get(day, []))

    def booked_days(self, year: int | None = None, month: int | None = None) -> List[date]:
        days = sorted(self._by_day)
        if year is not None:
            days = [d for d in days if d.year == year]
        if month is not None:
            days = [d for d in days if d.month == month]
        return days

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_day.values())
