from __future__ import annotations
from datetime import datetime, timedelta
from types import SimpleNamespace

from blueprints.stats.services import compute_usage_stats, _round1, _week_bounds

NOW = datetime(2025, 3, 12, 15, 0)  # среда

def _b(user, start, hours=1.0, created=None):
    s = datetime.fromisoformat(start)
    e = s + timedelta(hours=hours)
    return SimpleNamespace(
        user_name=user,
        start_time=s.strftime("%Y-%m-%dT%H:%M:%S"),
        end_time=e.strftime("%Y-%m-%dT%H:%M:%S"),
        created_at=created or s,
    )

def test_empty_list_gives_zeros():
    st = compute_usage_stats([], now=NOW)
    assert st.total_bookings == 0
    assert st.total_hours == 0
    assert st.average_booking_duration == 0
    assert st.top_users == [] and st.recent_activity == []

def test_top_users_ranked_by_count():
    items = [_b("Alice", "2025-03-03T09:00")] * 7 + [_b("Bob", "2025-03-04T09:00")] * 3
    st = compute_usage_stats(items, now=NOW)
    assert st.top_users == [{"name": "Alice", "count": 7}, {"name": "Bob", "count": 3}]

def test_top_users_limited_and_ties_keep_first_seen_order():
    names = ["U1", "U2", "U3", "U4", "U5", "U6", "U7"]
    items = [_b(n, "2025-03-03T09:00") for n in names]
    st = compute_usage_stats(items, now=NOW)
    assert [u["name"] for u in st.top_users] == names[:5]

def test_hours_and_average():
    items = [_b("A", "2025-03-03T09:00", 8), _b("B", "2025-03-04T09:00", 2.5), _b("C", "2025-03-05T09:00", 0.25)]
    st = compute_usage_stats(items, now=NOW)
    assert st.total_hours == 10.8  # 10.75 -> 10.8
    assert st.average_booking_duration == 3.6  # 10.75 / 3 = 3.583...

def test_average_matches_total_over_count():
    items = [_b("A", "2025-03-03T09:00", h) for h in (1, 2, 3, 4)]
    st = compute_usage_stats(items, now=NOW)
    assert st.average_booking_duration == _round1(10 / 4)

def test_round_half_up():
    assert _round1(2.25) == 2.3
    assert _round1(0.05) == 0.1
    assert _round1(3.0) == 3.0

def test_month_and_week_counts():
    items = [
        _b("A", "2025-03-09T10:00"),   # воскресенье, начало недели
        _b("A", "2025-03-12T08:00"),
        _b("A", "2025-03-15T23:00"),   # суббота, ещё эта неделя
        _b("A", "2025-03-16T00:30"),   # следующая неделя
        _b("A", "2025-03-01T10:00"),   # этот месяц, прошлая неделя
        _b("A", "2025-02-28T10:00"),   # прошлый месяц
        _b("A", "2025-04-01T10:00"),   # будущий месяц
    ]
    st = compute_usage_stats(items, now=NOW)
    assert st.total_bookings == 7
    assert st.this_month_bookings == 5
    assert st.this_week_bookings == 3

def test_week_start_is_configurable():
    items = [_b("A", "2025-03-09T10:00"), _b("A", "2025-03-10T10:00")]
    st = compute_usage_stats(items, now=NOW, week_starts_on=0)
    # неделя с понедельника 10 марта
    assert st.this_week_bookings == 1

def test_week_bounds_on_start_day():
    start, end = _week_bounds(datetime(2025, 3, 9, 0, 0), 6)
    assert start == datetime(2025, 3, 9)
    assert end == datetime(2025, 3, 16)

def test_december_month_rollover():
    items = [_b("A", "2025-12-31T22:00"), _b("A", "2026-01-01T08:00")]
    st = compute_usage_stats(items, now=datetime(2025, 12, 20, 12, 0))
    assert st.this_month_bookings == 1

def test_recent_activity_by_created_at():
    items = [
        _b("A", "2025-03-20T09:00", created=datetime(2025, 3, 1, 8)),
        _b("B", "2025-03-02T09:00", created=datetime(2025, 3, 5, 8)),
        _b("C", "2025-03-10T09:00", created=datetime(2025, 3, 3, 8)),
    ]
    st = compute_usage_stats(items, now=NOW, recent_n=2)
    assert [b.user_name for b in st.recent_activity] == ["B", "C"]

def test_to_dict_keys():
    d = compute_usage_stats([_b("A", "2025-03-03T09:00", 2)], now=NOW).to_dict()
    assert set(d) == {"totalBookings", "thisMonthBookings", "thisWeekBookings", "totalHours",
                      "averageBookingDuration", "topUsers", "recentActivity"}
    assert d["totalHours"] == 2.0
