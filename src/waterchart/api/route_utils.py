from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, TypeVar

from fastapi import HTTPException

from waterchart.utils.dates import coerce_calendar_date

T = TypeVar("T")

DATE_FORMAT_HINT = "YYYY-MM-DD"
SERVICE_ERROR_RESPONSES = {
    400: {"description": "Input validation or chart option violation."},
    502: {"description": "Upstream payload had an unusable shape, or the chart pipeline failed unexpectedly."},
}


def parse_reference_date_or_400(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return coerce_calendar_date(raw)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Reference date format must be {DATE_FORMAT_HINT}") from exc


def call_service_or_http(
    call: Callable[[], T],
    *,
    logger: logging.Logger,
    endpoint: str,
    context: dict[str, Any] | None = None,
) -> T:
    try:
        return call()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RuntimeError as exc:
        context_text = ""
        if context:
            context_text = " " + " ".join(f"{key}={value}" for key, value in context.items())
        logger.warning("Chart pipeline failure on %s endpoint%s: detail=%s", endpoint, context_text, str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc
