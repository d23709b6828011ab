"""Continuation of an actual series with forecast points.

Forecast entries are kept only when they fall strictly after the last actual
instant. Hourly actual points carry no date of their own and are anchored on
``today``; points that do carry a date (period charts) are compared on their
full timestamp, so multi-day actual data trims correctly.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from waterchart.core.exceptions import AppValidationError
from waterchart.core.tracing import PipelineTracer, resolve_tracer
from waterchart.models import ChartMethod, ChartPoint, ForecastReading
from waterchart.services.pipeline.constants import (
    DEFAULT_LOCALE,
    DEFAULT_TIMEZONE,
    FORECAST_LABEL_SHIFT_Y,
    FORECAST_POINT_LIMIT,
    FORECAST_SORT_OFFSET,
    MAX_FORECAST_HOURS,
    month_names,
)
from waterchart.services.pipeline.normalizer import validate_record
from waterchart.services.pipeline.points import period_label
from waterchart.services.pipeline.timekeys import format_hour
from waterchart.utils.dates import at_hour, today_in


def validate_forecast(raw_forecast: list[Any] | None, tracer: PipelineTracer | None = None) -> list[ForecastReading]:
    tracer = resolve_tracer(tracer)
    readings: list[ForecastReading] = []
    for index, item in enumerate(raw_forecast or []):
        reading = validate_record(
            ForecastReading,
            item,
            method=ChartMethod.HOURLY,
            position=f"forecast.{index}",
            tracer=tracer,
        )
        if reading is not None:
            readings.append(reading)
    return readings


def trim_forecast_window(
    raw_forecast: list[Any] | None,
    hours: int = MAX_FORECAST_HOURS,
    tracer: PipelineTracer | None = None,
) -> list[ForecastReading]:
    """Keep the first ``hours`` valid forecast entries in (date, hour) order."""
    if hours < 1 or hours > MAX_FORECAST_HOURS:
        raise AppValidationError(f"Forecast hours must be between 1 and {MAX_FORECAST_HOURS}")
    readings = validate_forecast(raw_forecast, tracer)
    readings.sort(key=lambda reading: (reading.calendar_date, reading.hour))
    return readings[:hours]


def _last_actual_instant(actual_points: list[ChartPoint], today: date) -> datetime | None:
    instants = [
        at_hour(point.calendar_date or today, point.hour)
        for point in actual_points
        if point.is_actual and point.hour is not None
    ]
    return max(instants, default=None)


def _forecast_point(
    reading: ForecastReading,
    sort_order: int,
    today: date,
    chart_type: ChartMethod,
    locale: str,
) -> ChartPoint:
    time_text = format_hour(reading.hour)
    day = reading.calendar_date
    label = time_text
    period_date = None
    if chart_type == ChartMethod.PERIOD:
        month_name = month_names(locale, "full")[day.month - 1]
        label = period_label(f"{day.day:02d}", month_name, time_text)
        period_date = f"{day.day:02d} {month_name} {day.year}"
    return ChartPoint(
        value=reading.value,
        label=label,
        isForecast=True,
        sortOrder=sort_order,
        chartType=chart_type,
        hour=reading.hour,
        date=day,
        displayDate=day.strftime("%d/%m"),
        isNextDay=day != today,
        periodDate=period_date,
        periodTime=time_text if period_date else None,
        labelShiftY=FORECAST_LABEL_SHIFT_Y,
        stripHeight=reading.value,
    )


def merge_forecast(
    actual_points: list[ChartPoint],
    raw_forecast: list[Any] | None,
    *,
    today: date | None = None,
    limit: int = FORECAST_POINT_LIMIT,
    locale: str = DEFAULT_LOCALE,
    tracer: PipelineTracer | None = None,
) -> list[ChartPoint]:
    if limit < 1:
        raise AppValidationError("Forecast point limit must be at least 1")
    limit = min(limit, FORECAST_POINT_LIMIT)
    tracer = resolve_tracer(tracer)
    if not actual_points:
        tracer.emit("forecast.skipped", reason="no_actual_points")
        return []

    today = today or today_in(DEFAULT_TIMEZONE)
    last_instant = _last_actual_instant(actual_points, today)
    if last_instant is None:
        tracer.emit("forecast.skipped", reason="actual_points_without_hour")
        return sorted(actual_points, key=lambda point: point.sort_order)

    readings = validate_forecast(raw_forecast, tracer)
    following = [reading for reading in readings if reading.instant > last_instant]
    following.sort(key=lambda reading: (reading.calendar_date, reading.hour))

    selected: list[ForecastReading] = []
    seen: set[datetime] = set()
    for reading in following:
        if reading.instant in seen:
            continue
        seen.add(reading.instant)
        selected.append(reading)
        if len(selected) == limit:
            break

    offset = max(FORECAST_SORT_OFFSET, max(point.sort_order for point in actual_points) + 1)
    chart_type = actual_points[0].chart_type
    forecast_points = [
        _forecast_point(reading, offset + index, today, chart_type, locale)
        for index, reading in enumerate(selected)
    ]
    tracer.emit(
        "forecast.merged",
        last_actual=last_instant.isoformat(),
        supplied=len(raw_forecast or []),
        valid=len(readings),
        following=len(following),
        kept=len(forecast_points),
    )
    return sorted([*actual_points, *forecast_points], key=lambda point: point.sort_order)
