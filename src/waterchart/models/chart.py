from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class ChartMethod(str, Enum):
    HOURLY = "hourly"
    PERIOD = "period"
    MONTHLY = "monthly"


LEGACY_METHOD_CODES = {
    1: ChartMethod.HOURLY,
    2: ChartMethod.PERIOD,
    3: ChartMethod.MONTHLY,
}


class SegmentClass(str, Enum):
    ACTUAL = "actual"
    FORECAST = "forecast"


class ChartPoint(BaseModel):
    value: float
    label: str
    is_actual: bool = Field(default=False, alias="isActual")
    is_forecast: bool = Field(default=False, alias="isForecast")
    sort_order: int = Field(alias="sortOrder")
    chart_type: ChartMethod = Field(alias="chartType")
    hour: int | None = None
    calendar_date: date | None = Field(default=None, alias="date")
    display_date: str | None = Field(default=None, alias="displayDate")
    is_next_day: bool = Field(default=False, alias="isNextDay")
    period_date: str | None = Field(default=None, alias="periodDate")
    period_time: str | None = Field(default=None, alias="periodTime")
    label_shift_y: int = Field(alias="labelShiftY")
    strip_height: float = Field(alias="stripHeight")

    @model_validator(mode="after")
    def _exactly_one_series(self) -> "ChartPoint":
        if self.is_actual == self.is_forecast:
            raise ValueError("A chart point must be either actual or forecast")
        return self


class ChartLayout(BaseModel):
    max_value: int = Field(alias="maxValue")
    spacing: float
    width: float
    segments: list[SegmentClass]
    area_fill: SegmentClass = Field(alias="areaFill")
    gradient_start: SegmentClass = Field(alias="gradientStart")
    gradient_end: SegmentClass = Field(alias="gradientEnd")


class ChartResponse(BaseModel):
    method: ChartMethod
    reference_date: date = Field(alias="referenceDate")
    actual_points: int = Field(alias="actualPoints")
    forecast_points: int = Field(alias="forecastPoints")
    points: list[ChartPoint]
    layout: ChartLayout
    diagnostics: list[str] = Field(default_factory=list)


class HourlyChartRequest(BaseModel):
    readings: list[Any] = Field(default_factory=list)
    forecast: list[Any] | None = None


class PeriodChartRequest(BaseModel):
    buckets: list[Any] = Field(default_factory=list)


class MonthlyChartRequest(BaseModel):
    readings: list[Any] = Field(default_factory=list)
