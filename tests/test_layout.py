from datetime import date, timedelta

import pytest

from waterchart.models import ChartMethod, SegmentClass
from waterchart.services.pipeline import (
    build_layout,
    calculate_chart_width,
    calculate_dynamic_spacing,
    calculate_max_value,
    dominant_fill,
    format_hour_display,
    generate_chart_data,
    merge_forecast,
    mixed_fill,
    point_classes,
    segment_classes,
)

TODAY = date(2025, 8, 27)


def _merged(actual_hours, forecast_hours):
    actual = generate_chart_data(
        [{"Jam": hour, "Surface": 1.0} for hour in actual_hours],
        ChartMethod.HOURLY,
        reference_date=TODAY,
    )
    forecast = [
        {"Tanggal": (TODAY + timedelta(days=1)).isoformat(), "Jam": hour, "Surface": 2.0}
        for hour in forecast_hours
    ]
    return merge_forecast(actual, forecast, today=TODAY)


def test_segment_classes_for_actual_then_forecast():
    points = _merged([20, 21], [0, 1])

    assert segment_classes(points) == [
        SegmentClass.ACTUAL,
        SegmentClass.FORECAST,
        SegmentClass.FORECAST,
    ]
    assert point_classes(points) == [
        SegmentClass.ACTUAL,
        SegmentClass.ACTUAL,
        SegmentClass.FORECAST,
        SegmentClass.FORECAST,
    ]


def test_forecast_to_actual_falls_back_to_actual():
    points = _merged([20], [0])
    reversed_points = list(reversed(points))

    assert segment_classes(reversed_points) == [SegmentClass.ACTUAL]


def test_segment_classes_short_sequences():
    assert segment_classes([]) == []
    assert segment_classes(_merged([4], [])) == []


def test_calculate_max_value_default_padding():
    assert calculate_max_value([{"value": 4}]) == 5


def test_calculate_max_value_empty_and_missing_values():
    assert calculate_max_value([]) == 5
    assert calculate_max_value(None) == 5
    assert calculate_max_value([{"value": None}, {"value": 2.5}]) == 3


def test_calculate_max_value_avoids_float_noise():
    assert calculate_max_value([{"value": 5}]) == 6
    assert calculate_max_value([{"value": 10}], padding=0.1) == 11


def test_calculate_max_value_accepts_chart_points():
    points = _merged([1], [])

    assert calculate_max_value(points, padding=0.5) == 2


def test_dynamic_spacing_is_clamped():
    assert calculate_dynamic_spacing(0, 390) == 40
    assert calculate_dynamic_spacing(2, 390) == 80
    assert calculate_dynamic_spacing(5, 390) == pytest.approx(54.0)
    assert calculate_dynamic_spacing(100, 390) == 40


def test_chart_width_grows_for_scrolling():
    assert calculate_chart_width(2, 390, spacing=60) == 350
    assert calculate_chart_width(24, 390, spacing=40) == 1060


def test_fill_classes():
    actual_only = _merged([1, 2, 3], [])
    mostly_forecast = _merged([23], [0, 1, 2])

    assert dominant_fill(actual_only) == SegmentClass.ACTUAL
    assert dominant_fill(mostly_forecast) == SegmentClass.FORECAST
    assert dominant_fill([]) == SegmentClass.ACTUAL
    assert mixed_fill(actual_only) == (SegmentClass.ACTUAL, SegmentClass.ACTUAL)
    assert mixed_fill(mostly_forecast) == (SegmentClass.ACTUAL, SegmentClass.FORECAST)
    assert mixed_fill([]) == (SegmentClass.ACTUAL, SegmentClass.FORECAST)
    assert mixed_fill(mostly_forecast[1:]) == (SegmentClass.FORECAST, SegmentClass.FORECAST)


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "12:00 AM"), (7, "7:00 AM"), (12, "12:00 PM"), (23, "11:00 PM")],
)
def test_format_hour_display(hour, expected):
    assert format_hour_display(hour) == expected


def test_build_layout_bundles_metadata():
    points = _merged([21, 22, 23], [0, 1])

    layout = build_layout(points, 390)

    assert layout.max_value == 3
    assert layout.spacing == 54.0
    assert layout.width == 370
    assert len(layout.segments) == 4
    assert layout.area_fill == SegmentClass.ACTUAL
    assert (layout.gradient_start, layout.gradient_end) == (SegmentClass.ACTUAL, SegmentClass.FORECAST)
