from waterchart.services.pipeline.aggregation import aggregate_by_key
from waterchart.services.pipeline.forecast import merge_forecast, trim_forecast_window, validate_forecast
from waterchart.services.pipeline.generate import generate_chart_data, generate_chart_with_forecast
from waterchart.services.pipeline.layout import (
    build_layout,
    calculate_chart_width,
    calculate_dynamic_spacing,
    calculate_max_value,
    dominant_fill,
    format_hour_display,
    mixed_fill,
    point_classes,
    segment_classes,
)
from waterchart.services.pipeline.normalizer import normalize_records, resolve_method
from waterchart.services.pipeline.points import build_points
from waterchart.services.pipeline.timekeys import TimeKey

__all__ = [
    "aggregate_by_key",
    "merge_forecast",
    "trim_forecast_window",
    "validate_forecast",
    "generate_chart_data",
    "generate_chart_with_forecast",
    "build_layout",
    "calculate_chart_width",
    "calculate_dynamic_spacing",
    "calculate_max_value",
    "dominant_fill",
    "format_hour_display",
    "mixed_fill",
    "point_classes",
    "segment_classes",
    "normalize_records",
    "resolve_method",
    "build_points",
    "TimeKey",
]
