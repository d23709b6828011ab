import logging

from fastapi import APIRouter, Depends, Query

from waterchart.api.dependencies import get_service
from waterchart.api.route_utils import SERVICE_ERROR_RESPONSES, call_service_or_http, parse_reference_date_or_400
from waterchart.models import ChartResponse, HourlyChartRequest, MonthlyChartRequest, PeriodChartRequest
from waterchart.services import ChartService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/charts", tags=["Charts"])


@router.post(
    "/hourly",
    response_model=ChartResponse,
    summary="Build the hourly chart, optionally continued with forecast points",
    description=(
        "Aggregates today's hourly readings per HH:00 key. When a forecast array is supplied, up to 12 forecast "
        "points that follow the last actual hour are appended, rolling over midnight into the next day."
    ),
    responses=SERVICE_ERROR_RESPONSES,
)
def hourly_chart(
    payload: HourlyChartRequest,
    viewport_width: float | None = Query(None, gt=0, description="Viewport width used for spacing and chart width."),
    reference_date: str | None = Query(None, description="Date treated as today, YYYY-MM-DD."),
    service: ChartService = Depends(get_service),
) -> ChartResponse:
    today = parse_reference_date_or_400(reference_date)
    logger.info(
        "Handling hourly chart request readings=%d forecast=%d",
        len(payload.readings),
        len(payload.forecast or []),
    )
    return call_service_or_http(
        lambda: service.hourly_chart(
            payload.readings,
            payload.forecast,
            reference_date=today,
            viewport_width=viewport_width,
        ),
        logger=logger,
        endpoint="charts/hourly",
        context={"readings": len(payload.readings)},
    )


@router.post(
    "/period",
    response_model=ChartResponse,
    summary="Build the multi-day period chart",
    description="Flattens day buckets, orders them by date and hour and labels each point with day, month and time.",
    responses=SERVICE_ERROR_RESPONSES,
)
def period_chart(
    payload: PeriodChartRequest,
    viewport_width: float | None = Query(None, gt=0, description="Viewport width used for spacing and chart width."),
    reference_date: str | None = Query(None, description="Date treated as today, YYYY-MM-DD."),
    service: ChartService = Depends(get_service),
) -> ChartResponse:
    today = parse_reference_date_or_400(reference_date)
    logger.info("Handling period chart request buckets=%d", len(payload.buckets))
    return call_service_or_http(
        lambda: service.period_chart(payload.buckets, reference_date=today, viewport_width=viewport_width),
        logger=logger,
        endpoint="charts/period",
        context={"buckets": len(payload.buckets)},
    )


@router.post(
    "/monthly",
    response_model=ChartResponse,
    summary="Build the monthly chart",
    description="Orders monthly totals by month number and labels each point with the short month name.",
    responses=SERVICE_ERROR_RESPONSES,
)
def monthly_chart(
    payload: MonthlyChartRequest,
    viewport_width: float | None = Query(None, gt=0, description="Viewport width used for spacing and chart width."),
    reference_date: str | None = Query(None, description="Date treated as today, YYYY-MM-DD."),
    service: ChartService = Depends(get_service),
) -> ChartResponse:
    today = parse_reference_date_or_400(reference_date)
    logger.info("Handling monthly chart request readings=%d", len(payload.readings))
    return call_service_or_http(
        lambda: service.monthly_chart(payload.readings, reference_date=today, viewport_width=viewport_width),
        logger=logger,
        endpoint="charts/monthly",
        context={"readings": len(payload.readings)},
    )
