from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from waterchart.utils.dates import at_hour, coerce_calendar_date


class HourlyReading(BaseModel):
    hour: int = Field(alias="Jam", ge=0, le=23)
    surface: float | None = Field(default=None, alias="Surface", allow_inf_nan=False)
    average_surface: float | None = Field(default=None, alias="Rata_Rata_Surface", allow_inf_nan=False)

    @property
    def value(self) -> float:
        if self.surface is not None:
            return self.surface
        if self.average_surface is not None:
            return self.average_surface
        return 0.0


class PeriodReading(BaseModel):
    calendar_date: date = Field(alias="Tanggal")
    hour: int = Field(alias="Jam", ge=0, le=23)
    average_surface: float | None = Field(default=None, alias="Rata_Rata_Surface", allow_inf_nan=False)
    surface: float | None = Field(default=None, alias="Surface", allow_inf_nan=False)

    @field_validator("calendar_date", mode="before")
    @classmethod
    def _parse_calendar_date(cls, value: Any) -> date:
        return coerce_calendar_date(value)

    @property
    def value(self) -> float:
        if self.average_surface is not None:
            return self.average_surface
        if self.surface is not None:
            return self.surface
        return 0.0


class PeriodBucket(BaseModel):
    """One day of period data; nested records are validated individually downstream."""

    records: list[Any] = Field(alias="Data")

    @field_validator("records", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class MonthlyReading(BaseModel):
    month: int = Field(alias="Bln", ge=1, le=12)
    month_total: float | None = Field(default=None, alias="MonthTrans", allow_inf_nan=False)

    @property
    def value(self) -> float:
        return self.month_total if self.month_total is not None else 0.0


class ForecastReading(BaseModel):
    calendar_date: date = Field(alias="Tanggal")
    hour: int = Field(alias="Jam", ge=0, le=23)
    value: float = Field(alias="Surface", strict=True, allow_inf_nan=False)

    @field_validator("hour", mode="before")
    @classmethod
    def _numeric_hour(cls, value: Any) -> Any:
        # 11.0 is accepted as 11; numeric strings and bools are not.
        if isinstance(value, (str, bytes, bool)):
            raise ValueError("forecast hour must be a number")
        return value

    @field_validator("calendar_date", mode="before")
    @classmethod
    def _parse_calendar_date(cls, value: Any) -> date:
        return coerce_calendar_date(value)

    @property
    def instant(self) -> datetime:
        return at_hour(self.calendar_date, self.hour)
