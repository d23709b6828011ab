from waterchart.core.config import Settings, get_settings
from waterchart.core.exceptions import AppValidationError, UpstreamServiceError
from waterchart.core.logging import configure_logging
from waterchart.core.tracing import LoggingTracer, PipelineTracer, RecordingTracer

__all__ = [
    "Settings",
    "get_settings",
    "AppValidationError",
    "UpstreamServiceError",
    "configure_logging",
    "LoggingTracer",
    "PipelineTracer",
    "RecordingTracer",
]
