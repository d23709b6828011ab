from waterchart.models.chart import (
    LEGACY_METHOD_CODES,
    ChartLayout,
    ChartMethod,
    ChartPoint,
    ChartResponse,
    HourlyChartRequest,
    MonthlyChartRequest,
    PeriodChartRequest,
    SegmentClass,
)
from waterchart.models.readings import (
    ForecastReading,
    HourlyReading,
    MonthlyReading,
    PeriodBucket,
    PeriodReading,
)

__all__ = [
    "LEGACY_METHOD_CODES",
    "ChartLayout",
    "ChartMethod",
    "ChartPoint",
    "ChartResponse",
    "HourlyChartRequest",
    "MonthlyChartRequest",
    "PeriodChartRequest",
    "SegmentClass",
    "ForecastReading",
    "HourlyReading",
    "MonthlyReading",
    "PeriodBucket",
    "PeriodReading",
]
