from __future__ import annotations

from zoneinfo import ZoneInfo

from waterchart.core.config import (
    DEFAULT_MAX_SPACING,
    DEFAULT_MAX_VALUE_PADDING,
    DEFAULT_MIN_SPACING,
    DEFAULT_TIMEZONE_NAME,
    FORECAST_POINT_LIMIT,
    MAX_FORECAST_HOURS,
)

# Fallback for callers that pass no reference date; ChartService always passes one
# derived from Settings.timezone.
DEFAULT_TIMEZONE = ZoneInfo(DEFAULT_TIMEZONE_NAME)

FORECAST_SORT_OFFSET = 1000

ACTUAL_LABEL_SHIFT_Y = -40
FORECAST_LABEL_SHIFT_Y = -50

DEFAULT_MAX_VALUE = 5
AXIS_LABEL_MARGIN = 120.0
VIEWPORT_MARGIN = 40.0
AXIS_PADDING = 100.0

MONTH_NAMES: dict[str, dict[str, tuple[str, ...]]] = {
    "en": {
        "full": (
            "January",
            "February",
            "March",
            "April",
            "May",
            "June",
            "July",
            "August",
            "September",
            "October",
            "November",
            "December",
        ),
        "short": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    },
    "id": {
        "full": (
            "Januari",
            "Februari",
            "Maret",
            "April",
            "Mei",
            "Juni",
            "Juli",
            "Agustus",
            "September",
            "Oktober",
            "November",
            "Desember",
        ),
        "short": ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"),
    },
}
DEFAULT_LOCALE = "en"


def month_names(locale: str, style: str = "short") -> tuple[str, ...]:
    table = MONTH_NAMES.get(locale) or MONTH_NAMES[DEFAULT_LOCALE]
    return table[style]
