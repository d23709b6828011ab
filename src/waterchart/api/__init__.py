from waterchart.api.dependencies import get_service
from waterchart.api.routes import router

__all__ = ["get_service", "router"]
