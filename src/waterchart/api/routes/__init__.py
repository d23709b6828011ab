from fastapi import APIRouter

from waterchart.api.routes.charts import router as charts_router
from waterchart.api.routes.health import router as health_router

router = APIRouter()
router.include_router(health_router)
router.include_router(charts_router)

__all__ = ["router"]
