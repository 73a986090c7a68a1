"""
progress_engine.py — Streaks & completion rates
Pure date arithmetic over habit/entry snapshots. Nothing here touches the
database or reads the clock: "now" is always passed in by the caller.

Records can be ORM rows or plain dicts; dates can be date, datetime or an
ISO string. Time-of-day is always discarded.
"""

from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Iterable


def _field(record: Any, name: str, default=None):
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def as_day(value) -> date:
    """Day granularity for a date, datetime or ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def window_start(reference, days: int) -> date:
    """First day of a `days`-long window ending on the reference day (inclusive)."""
    return as_day(reference) - timedelta(days=max(days, 1) - 1)


def _completed_days(entries: Iterable, until: date | None = None) -> list[date]:
    """Distinct completed days, most recent first."""
    days = {as_day(_field(e, "date")) for e in entries if _field(e, "completed")}
    if until is not None:
        days = {d for d in days if d <= until}
    return sorted(days, reverse=True)


def compute_daily_completion(habits: Iterable, day) -> dict:
    """Count how many habits have a completed entry on `day`."""
    target = as_day(day)
    habits = list(habits)
    completed = 0
    for habit in habits:
        entries = _field(habit, "entries") or []
        if any(_field(e, "completed") and as_day(_field(e, "date")) == target for e in entries):
            completed += 1
    return {"total_habits": len(habits), "completed_habits": completed}


def compute_completion_rate(completed_count: int, total_count: int) -> int:
    """Integer percentage, rounded half-up. 0 when there is nothing to complete."""
    if total_count == 0:
        return 0
    # floor(c * 100 / t + 0.5) without going through floats
    return (completed_count * 200 + total_count) // (2 * total_count)


def compute_window_completion(entries: Iterable, total_days: int) -> int:
    """Share of `total_days` on which the entries record a completion."""
    return compute_completion_rate(len(_completed_days(entries)), total_days)


def compute_streak(entries: Iterable, reference, allow_open_day: bool = True) -> int:
    """
    Consecutive completed days ending at the reference day.

    The walk starts with a cursor on the reference day and accepts each
    completed day that sits exactly one day behind the cursor (the cursor day
    itself for the first link), rolling the cursor back to it. The first gap
    ends the streak.

    With `allow_open_day` the reference day is treated as still in progress:
    if nothing is completed on it yet, counting starts from the day before,
    so yesterday's streak survives until the day is over. Entries dated after
    the reference day are ignored.
    """
    anchor = as_day(reference)
    days = _completed_days(entries, until=anchor)
    if not days:
        return 0

    cursor = anchor
    if allow_open_day and days[0] < anchor:
        cursor = anchor - timedelta(days=1)

    streak = 0
    for day in days:
        gap = (cursor - day).days
        if gap != (0 if streak == 0 else 1):
            break
        streak += 1
        cursor = day
    return streak


def compute_best_streak(entries: Iterable) -> int:
    """Longest run of consecutive completed days anywhere in the history."""
    days = sorted(_completed_days(entries))
    best = run = 0
    previous = None
    for day in days:
        run = run + 1 if previous is not None and (day - previous).days == 1 else 1
        best = max(best, run)
        previous = day
    return best
