from waterchart.services.chart_service import ChartService

__all__ = ["ChartService"]
