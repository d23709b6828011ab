from datetime import date, timedelta

import pytest

from waterchart.core.exceptions import AppValidationError
from waterchart.core.tracing import RecordingTracer
from waterchart.models import ChartMethod
from waterchart.services.pipeline import (
    generate_chart_data,
    generate_chart_with_forecast,
    merge_forecast,
    trim_forecast_window,
)

TODAY = date(2025, 8, 27)
TOMORROW = TODAY + timedelta(days=1)


def _forecast(day, hour, value=1.0):
    return {"Tanggal": f"{day.isoformat()}T00:00:00", "Jam": hour, "Surface": value}


def _actual_points(hours):
    raw = [{"Jam": hour, "Surface": 1.0 + hour / 100} for hour in hours]
    return generate_chart_data(raw, ChartMethod.HOURLY, reference_date=TODAY)


def test_midnight_rollover_continues_after_last_actual_hour():
    forecast = [_forecast(TOMORROW, hour, 0.1 * hour) for hour in range(10, -1, -1)]
    forecast += [_forecast(TODAY, hour) for hour in range(18, 24)]

    merged = generate_chart_with_forecast([{"Jam": 22, "Surface": 3.0}], forecast, today=TODAY)

    assert merged[0].is_actual and merged[0].label == "22:00"
    tail = merged[1:]
    assert len(tail) == 12
    assert all(point.is_forecast for point in tail)
    assert [point.hour for point in tail] == [23, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    assert tail[0].is_next_day is False
    assert all(point.is_next_day for point in tail[1:])
    assert tail[1].display_date == "28/08"
    assert tail[1].calendar_date == TOMORROW


def test_forecast_points_sort_after_actual_points():
    actual = _actual_points([6, 7, 8])
    forecast = [_forecast(TODAY, hour) for hour in range(9, 14)]

    merged = merge_forecast(actual, forecast, today=TODAY)

    actual_orders = [point.sort_order for point in merged if point.is_actual]
    forecast_orders = [point.sort_order for point in merged if point.is_forecast]
    assert max(actual_orders) < min(forecast_orders)
    assert forecast_orders == [1000, 1001, 1002, 1003, 1004]
    orders = [point.sort_order for point in merged]
    assert orders == sorted(orders)


def test_forecast_cap_is_twelve_even_when_more_requested():
    forecast = [_forecast(TOMORROW, hour) for hour in range(24)]

    merged = merge_forecast(_actual_points([5]), forecast, today=TODAY, limit=50)

    assert sum(1 for point in merged if point.is_forecast) == 12


def test_same_day_entries_at_or_before_last_actual_hour_are_dropped():
    forecast = [_forecast(TODAY, 8), _forecast(TODAY, 10), _forecast(TODAY, 11), _forecast(TOMORROW, 1)]

    merged = merge_forecast(_actual_points([9, 10]), forecast, today=TODAY)

    assert [(p.hour, p.is_forecast) for p in merged] == [(9, False), (10, False), (11, True), (1, True)]


def test_stale_forecast_dates_are_dropped():
    yesterday = TODAY - timedelta(days=1)
    forecast = [_forecast(yesterday, 23), _forecast(TODAY, 12)]

    merged = merge_forecast(_actual_points([10]), forecast, today=TODAY)

    assert [p.hour for p in merged if p.is_forecast] == [12]


def test_duplicate_forecast_instants_keep_first_entry():
    forecast = [_forecast(TODAY, 12, 1.0), _forecast(TODAY, 12, 9.0), _forecast(TODAY, 13, 2.0)]

    merged = merge_forecast(_actual_points([11]), forecast, today=TODAY)

    assert [(p.hour, p.value) for p in merged if p.is_forecast] == [(12, 1.0), (13, 2.0)]


def test_malformed_forecast_entries_are_excluded_with_diagnostics():
    tracer = RecordingTracer()
    forecast = [
        {"Tanggal": "2025-08-27", "Jam": "13", "Surface": 1.0},
        {"Tanggal": "2025-08-27", "Jam": 14, "Surface": None},
        {"Tanggal": "garbage", "Jam": 15, "Surface": 1.0},
        {"Jam": 16, "Surface": 1.0},
        {"Tanggal": "2025-08-27", "Jam": 17, "Surface": 2.5},
    ]

    merged = merge_forecast(_actual_points([12]), forecast, today=TODAY, tracer=tracer)

    assert [(p.hour, p.value) for p in merged if p.is_forecast] == [(17, 2.5)]
    assert len(tracer.diagnostics()) == 4



def test_whole_number_float_forecast_hour_is_kept():
    tracer = RecordingTracer()
    forecast = [
        {"Tanggal": "2025-08-27", "Jam": 11.0, "Surface": 2},
        {"Tanggal": "2025-08-27", "Jam": 12.5, "Surface": 3},
        {"Tanggal": "2025-08-27", "Jam": True, "Surface": 4},
    ]

    merged = merge_forecast(_actual_points([10]), forecast, today=TODAY, tracer=tracer)

    assert [(p.hour, p.value) for p in merged if p.is_forecast] == [(11, 2.0)]
    assert [event.fields["position"] for event in tracer.named("record.dropped")] == ["forecast.1", "forecast.2"]

def test_empty_actual_returns_empty_list():
    assert merge_forecast([], [_forecast(TODAY, 1)], today=TODAY) == []
    assert generate_chart_with_forecast([], [_forecast(TODAY, 1)], today=TODAY) == []


def test_without_forecast_returns_actual_points_only():
    merged = generate_chart_with_forecast([{"Jam": 3, "Surface": 1.0}], [], today=TODAY)

    assert [(p.label, p.is_actual) for p in merged] == [("03:00", True)]


def test_every_point_is_exactly_one_series():
    forecast = [_forecast(TOMORROW, hour) for hour in range(6)]

    merged = merge_forecast(_actual_points([20, 21, 22, 23]), forecast, today=TODAY)

    assert all(point.is_actual != point.is_forecast for point in merged)


def test_sort_offset_grows_past_large_actual_series():
    actual = _actual_points([10])
    shifted = [point.model_copy(update={"sort_order": 1500}) for point in actual]

    merged = merge_forecast(shifted, [_forecast(TODAY, 11)], today=TODAY)

    assert [p.sort_order for p in merged] == [1500, 1501]


def test_period_actuals_compare_full_timestamps():
    raw = [
        {
            "Data": [
                {"Tanggal": "2025-08-26", "Jam": 23, "Rata_Rata_Surface": 1.0},
                {"Tanggal": "2025-08-27", "Jam": 2, "Rata_Rata_Surface": 1.0},
            ]
        }
    ]
    actual = generate_chart_data(raw, ChartMethod.PERIOD)
    forecast = [_forecast(TODAY, 1), _forecast(TODAY, 3)]

    merged = merge_forecast(actual, forecast, today=TODAY)

    forecast_points = [p for p in merged if p.is_forecast]
    assert [p.hour for p in forecast_points] == [3]
    assert forecast_points[0].label == "27 Aug\n03:00"
    assert forecast_points[0].period_date == "27 August 2025"


def test_merge_is_deterministic():
    forecast = [_forecast(TOMORROW, hour) for hour in range(5, 0, -1)]
    actual = _actual_points([21, 22])

    first = merge_forecast(actual, forecast, today=TODAY)
    second = merge_forecast(actual, forecast, today=TODAY)

    assert [p.model_dump(by_alias=True) for p in first] == [p.model_dump(by_alias=True) for p in second]


def test_invalid_limit_rejected():
    with pytest.raises(AppValidationError):
        merge_forecast(_actual_points([1]), [], today=TODAY, limit=0)


def test_trim_forecast_window_orders_and_caps():
    forecast = [_forecast(TOMORROW, 1), _forecast(TODAY, 23), _forecast(TOMORROW, 0)]

    window = trim_forecast_window(forecast, hours=2)

    assert [(item.calendar_date, item.hour) for item in window] == [(TODAY, 23), (TOMORROW, 0)]


@pytest.mark.parametrize("hours", [0, 49])
def test_trim_forecast_window_rejects_out_of_range_hours(hours):
    with pytest.raises(AppValidationError):
        trim_forecast_window([], hours=hours)
