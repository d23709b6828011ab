import logging
import os

from waterchart.core.tracing import PIPELINE_LOGGER_NAME

_CONFIGURED = False
_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _resolve_log_level(env_key: str = "LOG_LEVEL", default: int = logging.INFO) -> int:
    raw = os.getenv(env_key, "").strip().upper()
    if raw in _LEVEL_NAMES:
        return getattr(logging, raw)
    return default


def configure_logging() -> None:
    """Set up root logging once per process.

    ``LOG_LEVEL`` drives the root and uvicorn loggers. ``PIPELINE_LOG_LEVEL``
    drives the chart pipeline trace logger, whose per-stage events are DEBUG
    and dropped-record events WARNING; it follows ``LOG_LEVEL`` when unset.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = _resolve_log_level()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger(PIPELINE_LOGGER_NAME).setLevel(_resolve_log_level("PIPELINE_LOG_LEVEL", level))
    _CONFIGURED = True
