from __future__ import annotations

from waterchart.core.tracing import PipelineTracer, resolve_tracer
from waterchart.models import ChartMethod, ChartPoint
from waterchart.services.pipeline.constants import ACTUAL_LABEL_SHIFT_Y
from waterchart.services.pipeline.normalizer import resolve_method
from waterchart.services.pipeline.timekeys import TimeKey


def period_label(day: str, month_name: str, time_text: str) -> str:
    return f"{day} {month_name[:3]}\n{time_text}"


def _hourly_point(key: TimeKey, value: float, index: int) -> ChartPoint:
    return ChartPoint(
        value=value,
        label=key.text,
        isActual=True,
        sortOrder=index,
        chartType=ChartMethod.HOURLY,
        hour=key.instant.hour,
        labelShiftY=ACTUAL_LABEL_SHIFT_Y,
        stripHeight=value,
    )


def _period_point(key: TimeKey, value: float, index: int) -> ChartPoint:
    # "27 August 2025 00:00" -> day, month, year, time
    day, month_name, year, time_text = key.text.split(" ", 3)
    return ChartPoint(
        value=value,
        label=period_label(day, month_name, time_text),
        isActual=True,
        sortOrder=index,
        chartType=ChartMethod.PERIOD,
        hour=key.instant.hour,
        date=key.instant.date(),
        periodDate=f"{day} {month_name} {year}",
        periodTime=time_text,
        labelShiftY=ACTUAL_LABEL_SHIFT_Y,
        stripHeight=value,
    )


def _monthly_point(key: TimeKey, value: float, index: int) -> ChartPoint:
    return ChartPoint(
        value=value,
        label=key.text,
        isActual=True,
        sortOrder=index,
        chartType=ChartMethod.MONTHLY,
        labelShiftY=ACTUAL_LABEL_SHIFT_Y,
        stripHeight=value,
    )


_BUILDERS = {
    ChartMethod.HOURLY: _hourly_point,
    ChartMethod.PERIOD: _period_point,
    ChartMethod.MONTHLY: _monthly_point,
}


def build_points(
    pairs: list[tuple[TimeKey, float]],
    method: ChartMethod | str | int,
    tracer: PipelineTracer | None = None,
) -> list[ChartPoint]:
    resolved = resolve_method(method)
    builder = _BUILDERS[resolved]
    points = [builder(key, value, index) for index, (key, value) in enumerate(pairs)]
    resolve_tracer(tracer).emit("points.built", method=resolved.value, points=len(points))
    return points
