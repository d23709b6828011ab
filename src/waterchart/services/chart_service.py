from __future__ import annotations

import logging
from datetime import date
from typing import Any

from waterchart.core.config import Settings
from waterchart.core.exceptions import AppValidationError, UpstreamServiceError
from waterchart.core.tracing import PIPELINE_LOGGER_NAME, LoggingTracer, PipelineTracer, RecordingTracer
from waterchart.models import ChartMethod, ChartPoint, ChartResponse
from waterchart.services.pipeline import (
    build_layout,
    generate_chart_data,
    merge_forecast,
    trim_forecast_window,
)
from waterchart.utils.dates import today_in

logger = logging.getLogger(__name__)


def _require_list(raw: Any, name: str) -> None:
    if raw is not None and not isinstance(raw, list):
        raise UpstreamServiceError(f"{name} payload must be a list, got {type(raw).__name__}")


class ChartService:
    def __init__(self, settings: Settings, tracer: PipelineTracer | None = None) -> None:
        self.settings = settings
        self.tracer = tracer or LoggingTracer(logging.getLogger(PIPELINE_LOGGER_NAME))

    def hourly_chart(
        self,
        readings: list[Any] | None,
        forecast: list[Any] | None = None,
        *,
        reference_date: date | None = None,
        viewport_width: float | None = None,
    ) -> ChartResponse:
        _require_list(readings, "readings")
        _require_list(forecast, "forecast")
        today = reference_date or today_in(self.settings.timezone)
        recorder = RecordingTracer(forward_to=self.tracer)
        points = generate_chart_data(
            readings,
            ChartMethod.HOURLY,
            reference_date=today,
            locale=self.settings.locale,
            tracer=recorder,
        )
        if forecast:
            window = trim_forecast_window(forecast, self.settings.forecast_hours, recorder)
            points = merge_forecast(
                points,
                window,
                today=today,
                limit=self.settings.forecast_point_limit,
                locale=self.settings.locale,
                tracer=recorder,
            )
        return self._respond(ChartMethod.HOURLY, today, points, recorder, viewport_width)

    def period_chart(
        self,
        buckets: list[Any] | None,
        *,
        reference_date: date | None = None,
        viewport_width: float | None = None,
    ) -> ChartResponse:
        return self._simple_chart(ChartMethod.PERIOD, buckets, reference_date, viewport_width)

    def monthly_chart(
        self,
        readings: list[Any] | None,
        *,
        reference_date: date | None = None,
        viewport_width: float | None = None,
    ) -> ChartResponse:
        return self._simple_chart(ChartMethod.MONTHLY, readings, reference_date, viewport_width)

    def _simple_chart(
        self,
        method: ChartMethod,
        raw: list[Any] | None,
        reference_date: date | None,
        viewport_width: float | None,
    ) -> ChartResponse:
        _require_list(raw, method.value)
        today = reference_date or today_in(self.settings.timezone)
        recorder = RecordingTracer(forward_to=self.tracer)
        points = generate_chart_data(
            raw,
            method,
            reference_date=today,
            locale=self.settings.locale,
            tracer=recorder,
        )
        return self._respond(method, today, points, recorder, viewport_width)

    def _respond(
        self,
        method: ChartMethod,
        today: date,
        points: list[ChartPoint],
        recorder: RecordingTracer,
        viewport_width: float | None,
    ) -> ChartResponse:
        width = self.settings.viewport_width if viewport_width is None else viewport_width
        if width <= 0:
            raise AppValidationError("Viewport width must be greater than zero")
        layout = build_layout(
            points,
            width,
            padding=self.settings.max_value_padding,
            min_spacing=self.settings.min_spacing,
            max_spacing=self.settings.max_spacing,
        )
        diagnostics = recorder.diagnostics()
        forecast_count = sum(1 for point in points if point.is_forecast)
        logger.info(
            "Chart built method=%s reference_date=%s actual=%d forecast=%d dropped=%d",
            method.value,
            today.isoformat(),
            len(points) - forecast_count,
            forecast_count,
            len(diagnostics),
        )
        return ChartResponse(
            method=method,
            referenceDate=today,
            actualPoints=len(points) - forecast_count,
            forecastPoints=forecast_count,
            points=points,
            layout=layout,
            diagnostics=diagnostics,
        )
