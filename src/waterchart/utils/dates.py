from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo


def coerce_calendar_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Calendar date must be an ISO date or datetime string")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise ValueError(f"Unparseable calendar date: {value!r}") from exc


def at_hour(day: date, hour: int) -> datetime:
    return datetime.combine(day, time(hour=hour))


def today_in(tz: ZoneInfo) -> date:
    return datetime.now(tz).date()
