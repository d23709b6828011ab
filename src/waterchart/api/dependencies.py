from __future__ import annotations

from functools import lru_cache

from waterchart.core.config import Settings, get_settings
from waterchart.services import ChartService


@lru_cache(maxsize=1)
def _cached_service(settings: Settings) -> ChartService:
    return ChartService(settings=settings)


def get_service() -> ChartService:
    return _cached_service(get_settings())
