from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from waterchart.services.pipeline.constants import month_names
from waterchart.utils.dates import at_hour


@dataclass(frozen=True)
class TimeKey:
    """One x-axis position: the rendered key plus the instant it stands for.

    Keys are ordered by ``instant``; ``text`` only breaks ties, so "08:00"
    never sorts against "10:00" lexically.
    """

    text: str
    instant: datetime

    def sort_key(self) -> tuple[datetime, str]:
        return (self.instant, self.text)


def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def hourly_key(hour: int, reference_date: date) -> TimeKey:
    return TimeKey(text=format_hour(hour), instant=at_hour(reference_date, hour))


def period_key(day: date, hour: int, locale: str) -> TimeKey:
    month = month_names(locale, "full")[day.month - 1]
    text = f"{day.day:02d} {month} {day.year} {format_hour(hour)}"
    return TimeKey(text=text, instant=at_hour(day, hour))


def monthly_key(month: int, reference_year: int, locale: str) -> TimeKey:
    text = month_names(locale, "short")[month - 1]
    return TimeKey(text=text, instant=datetime(reference_year, month, 1))
