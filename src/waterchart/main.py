import logging
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI
from fastapi import Request

from waterchart.api import get_service, router
from waterchart.core.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Charts", "description": "Hourly, period and monthly water-level chart series with forecast continuation."},
]

app = FastAPI(
    title="Waterbender Chart Data API",
    version="1.0.0",
    description=(
        "Turns raw water-level sensor readings and forecast predictions into ordered, de-duplicated chart "
        "series with actual/forecast segment classes and axis layout hints."
    ),
    openapi_tags=OPENAPI_TAGS,
)
app.include_router(router)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid4().hex[:12]
    request.state.request_id = request_id
    started = perf_counter()
    logger.info(
        "request.start id=%s method=%s path=%s",
        request_id,
        request.method,
        request.url.path,
    )
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (perf_counter() - started) * 1000.0
        logger.exception(
            "request.error id=%s method=%s path=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            elapsed_ms,
        )
        raise
    elapsed_ms = (perf_counter() - started) * 1000.0
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request.end id=%s method=%s path=%s status=%s duration_ms=%.2f",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


__all__ = ["app", "get_service"]
