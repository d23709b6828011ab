from __future__ import annotations

from datetime import date
from typing import Any

from waterchart.core.tracing import PipelineTracer, resolve_tracer
from waterchart.models import ChartMethod, ChartPoint
from waterchart.services.pipeline.aggregation import aggregate_by_key
from waterchart.services.pipeline.constants import DEFAULT_LOCALE, DEFAULT_TIMEZONE, FORECAST_POINT_LIMIT
from waterchart.services.pipeline.forecast import merge_forecast
from waterchart.services.pipeline.normalizer import normalize_records, resolve_method
from waterchart.services.pipeline.points import build_points
from waterchart.utils.dates import today_in


def generate_chart_data(
    raw: list[Any] | None,
    method: ChartMethod | str | int,
    *,
    reference_date: date | None = None,
    locale: str = DEFAULT_LOCALE,
    tracer: PipelineTracer | None = None,
) -> list[ChartPoint]:
    """Run one raw array through normalize, aggregate and build.

    Without ``reference_date`` hourly keys anchor on today in ``DEFAULT_TIMEZONE``;
    pass one to honor a configured timezone.
    """
    resolved = resolve_method(method)
    tracer = resolve_tracer(tracer)
    pairs = normalize_records(raw, resolved, reference_date=reference_date, locale=locale, tracer=tracer)
    return build_points(aggregate_by_key(pairs, tracer), resolved, tracer)


def generate_chart_with_forecast(
    actual_raw: list[Any] | None,
    forecast_raw: list[Any] | None,
    *,
    today: date | None = None,
    limit: int = FORECAST_POINT_LIMIT,
    locale: str = DEFAULT_LOCALE,
    tracer: PipelineTracer | None = None,
) -> list[ChartPoint]:
    """Hourly actual points followed by up to ``limit`` forecast points."""
    today = today or today_in(DEFAULT_TIMEZONE)
    actual_points = generate_chart_data(
        actual_raw,
        ChartMethod.HOURLY,
        reference_date=today,
        locale=locale,
        tracer=tracer,
    )
    if not forecast_raw:
        return actual_points
    return merge_forecast(actual_points, forecast_raw, today=today, limit=limit, locale=locale, tracer=tracer)
