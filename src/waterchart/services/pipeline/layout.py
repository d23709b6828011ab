from __future__ import annotations

from collections.abc import Mapping, Sequence
from math import ceil
from typing import Any

from waterchart.models import ChartLayout, ChartPoint, SegmentClass
from waterchart.services.pipeline.constants import (
    AXIS_LABEL_MARGIN,
    AXIS_PADDING,
    DEFAULT_MAX_SPACING,
    DEFAULT_MAX_VALUE,
    DEFAULT_MAX_VALUE_PADDING,
    DEFAULT_MIN_SPACING,
    VIEWPORT_MARGIN,
)


def _value_of(item: ChartPoint | Mapping[str, Any]) -> float:
    raw = item.get("value") if isinstance(item, Mapping) else getattr(item, "value", None)
    if raw is None:
        return 0.0
    return float(raw)


def _is_forecast(item: ChartPoint) -> bool:
    return bool(item.is_forecast)


def point_classes(points: Sequence[ChartPoint]) -> list[SegmentClass]:
    return [SegmentClass.FORECAST if _is_forecast(point) else SegmentClass.ACTUAL for point in points]


def segment_classes(points: Sequence[ChartPoint]) -> list[SegmentClass]:
    """Classify the segment between each adjacent pair of points.

    An actual-to-forecast segment already belongs to the forecast series; a
    forecast-to-actual segment falls back to actual.
    """
    segments: list[SegmentClass] = []
    for current, following in zip(points, points[1:]):
        if current.is_actual and following.is_actual:
            segments.append(SegmentClass.ACTUAL)
        elif following.is_forecast:
            segments.append(SegmentClass.FORECAST)
        else:
            segments.append(SegmentClass.ACTUAL)
    return segments


def calculate_max_value(
    points: Sequence[ChartPoint | Mapping[str, Any]] | None,
    padding: float = DEFAULT_MAX_VALUE_PADDING,
) -> int:
    if not points:
        return DEFAULT_MAX_VALUE
    max_value = max(_value_of(point) for point in points)
    # round() keeps 10 * 1.1 (11.000000000000002) from ceiling to 12
    return ceil(round(max_value * (1 + padding), 9))


def calculate_dynamic_spacing(
    point_count: int,
    viewport_width: float,
    min_spacing: float = DEFAULT_MIN_SPACING,
    max_spacing: float = DEFAULT_MAX_SPACING,
) -> float:
    if point_count <= 0:
        return min_spacing
    available_width = viewport_width - AXIS_LABEL_MARGIN
    return max(min_spacing, min(max_spacing, available_width / point_count))


def calculate_chart_width(point_count: int, viewport_width: float, spacing: float = 60.0) -> float:
    return max(viewport_width - VIEWPORT_MARGIN, point_count * spacing + AXIS_PADDING)


def dominant_fill(points: Sequence[ChartPoint]) -> SegmentClass:
    forecast_count = sum(1 for point in points if _is_forecast(point))
    actual_count = len(points) - forecast_count
    return SegmentClass.ACTUAL if actual_count >= forecast_count else SegmentClass.FORECAST


def mixed_fill(points: Sequence[ChartPoint]) -> tuple[SegmentClass, SegmentClass]:
    if not points:
        return (SegmentClass.ACTUAL, SegmentClass.FORECAST)
    forecast_count = sum(1 for point in points if _is_forecast(point))
    actual_count = len(points) - forecast_count
    if actual_count and forecast_count:
        return (SegmentClass.ACTUAL, SegmentClass.FORECAST)
    if actual_count:
        return (SegmentClass.ACTUAL, SegmentClass.ACTUAL)
    return (SegmentClass.FORECAST, SegmentClass.FORECAST)


def format_hour_display(hour: int) -> str:
    if hour == 0:
        return "12:00 AM"
    if hour == 12:
        return "12:00 PM"
    if hour < 12:
        return f"{hour}:00 AM"
    return f"{hour - 12}:00 PM"


def build_layout(
    points: Sequence[ChartPoint],
    viewport_width: float,
    *,
    padding: float = DEFAULT_MAX_VALUE_PADDING,
    min_spacing: float = DEFAULT_MIN_SPACING,
    max_spacing: float = DEFAULT_MAX_SPACING,
) -> ChartLayout:
    spacing = calculate_dynamic_spacing(len(points), viewport_width, min_spacing, max_spacing)
    gradient_start, gradient_end = mixed_fill(points)
    return ChartLayout(
        maxValue=calculate_max_value(points, padding),
        spacing=spacing,
        width=calculate_chart_width(len(points), viewport_width, spacing),
        segments=segment_classes(points),
        areaFill=dominant_fill(points),
        gradientStart=gradient_start,
        gradientEnd=gradient_end,
    )
