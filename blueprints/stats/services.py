# blueprints/stats/services.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from blueprints.bookings.wallclock import duration_hours, parse_wall_clock

log = logging.getLogger(__name__)


@dataclass
class UsageStats:
    total_bookings: int = 0
    this_month_bookings: int = 0
    this_week_bookings: int = 0
    total_hours: float = 0.0
    average_booking_duration: float = 0.0
    top_users: List[Dict] = field(default_factory=list)
    recent_activity: List = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalBookings": self.total_bookings,
            "thisMonthBookings": self.this_month_bookings,
            "thisWeekBookings": self.this_week_bookings,
            "totalHours": self.total_hours,
            "averageBookingDuration": self.average_booking_duration,
            "topUsers": list(self.top_users),
            "recentActivity": [
                b.to_dict() if hasattr(b, "to_dict") else b for b in self.recent_activity
            ],
        }


def _round1(x: float) -> float:
    # половинки вверх, как на клиенте
    return math.floor(x * 10 + 0.5) / 10

def _month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        nxt = datetime(now.year + 1, 1, 1)
    else:
        nxt = datetime(now.year, now.month + 1, 1)
    return start, nxt

def _week_bounds(now: datetime, week_starts_on: int) -> Tuple[datetime, datetime]:
    """[начало недели, начало следующей); week_starts_on: 0=Mon .. 6=Sun"""
    back = (now.weekday() - week_starts_on) % 7
    start = datetime(now.year, now.month, now.day) - timedelta(days=back)
    return start, start + timedelta(days=7)

def _top_users(bookings: Iterable, limit: int) -> List[Dict]:
    counts: Dict[str, int] = {}
    for b in bookings:
        counts[b.user_name] = counts.get(b.user_name, 0) + 1
    # sorted стабилен: при равенстве остаётся порядок первого появления
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return [{"name": name, "count": cnt} for name, cnt in ranked[:limit]]

def compute_usage_stats(bookings: Iterable, now: Optional[datetime] = None, *,
                        week_starts_on: int = 6, top_n: int = 5, recent_n: int = 5) -> UsageStats:
    """
    Сводка по списку броней. Ничего не кэширует и не хранит.

    Время броней локальное, «настенное», поэтому ``now`` тоже наивный
    локальный datetime (по умолчанию ``datetime.now()``).
    """
    items = list(bookings)
    now = now or datetime.now()
    m_start, m_end = _month_bounds(now)
    w_start, w_end = _week_bounds(now, week_starts_on)

    month_cnt = week_cnt = 0
    total = 0.0
    for b in items:
        start = parse_wall_clock(b.start_time)
        if start is None:
            log.warning("booking with unparseable start_time skipped", extra={"event": "stats_skip"})
            continue
        if m_start <= start < m_end:
            month_cnt += 1
        if w_start <= start < w_end:
            week_cnt += 1
        hours = duration_hours(b.start_time, b.end_time)
        if hours is not None:
            total += hours

    avg = total / len(items) if items else 0.0
    recent = sorted(items, key=lambda b: b.created_at, reverse=True)[:recent_n]

    return UsageStats(
        total_bookings=len(items),
        this_month_bookings=month_cnt,
        this_week_bookings=week_cnt,
        total_hours=_round1(total),
        average_booking_duration=_round1(avg),
        top_users=_top_users(items, top_n),
        recent_activity=recent,
    )
