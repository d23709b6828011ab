from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DEFAULT_LOCALE = "en"
DEFAULT_TIMEZONE_NAME = "Asia/Jakarta"
_SUPPORTED_LOCALES = frozenset({"en", "id"})
FORECAST_POINT_LIMIT = 12
MAX_FORECAST_HOURS = 48
DEFAULT_VIEWPORT_WIDTH = 390.0
DEFAULT_MAX_VALUE_PADDING = 0.2
DEFAULT_MIN_SPACING = 40.0
DEFAULT_MAX_SPACING = 80.0


@dataclass(frozen=True)
class Settings:
    timezone_name: str = DEFAULT_TIMEZONE_NAME
    locale: str = _DEFAULT_LOCALE
    forecast_point_limit: int = FORECAST_POINT_LIMIT
    forecast_hours: int = MAX_FORECAST_HOURS
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH
    max_value_padding: float = DEFAULT_MAX_VALUE_PADDING
    min_spacing: float = DEFAULT_MIN_SPACING
    max_spacing: float = DEFAULT_MAX_SPACING

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)


def _strip_wrapping_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_dotenv_if_present() -> None:
    env_paths = [
        Path.cwd() / ".env",
        Path(__file__).resolve().parents[3] / ".env",
    ]
    for env_path in env_paths:
        if not env_path.exists():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = _strip_wrapping_quotes(value.strip())
            if key:
                os.environ.setdefault(key, value)
        break


def _env_int(name: str, default: int, minimum: int, maximum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value < minimum or value > maximum:
        return default
    return value


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    if value < minimum:
        return default
    return value


def _env_timezone(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        return default
    return raw


def _env_locale(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    return raw if raw in _SUPPORTED_LOCALES else default


def get_settings() -> Settings:
    _load_dotenv_if_present()
    min_spacing = _env_float("CHART_MIN_SPACING", DEFAULT_MIN_SPACING)
    max_spacing = _env_float("CHART_MAX_SPACING", DEFAULT_MAX_SPACING)
    if max_spacing < min_spacing:
        min_spacing, max_spacing = DEFAULT_MIN_SPACING, DEFAULT_MAX_SPACING
    return Settings(
        timezone_name=_env_timezone("CHART_TIMEZONE", DEFAULT_TIMEZONE_NAME),
        locale=_env_locale("CHART_LOCALE", _DEFAULT_LOCALE),
        forecast_point_limit=_env_int("FORECAST_POINT_LIMIT", FORECAST_POINT_LIMIT, 1, FORECAST_POINT_LIMIT),
        forecast_hours=_env_int("FORECAST_HOURS", MAX_FORECAST_HOURS, 1, MAX_FORECAST_HOURS),
        viewport_width=_env_float("CHART_VIEWPORT_WIDTH", DEFAULT_VIEWPORT_WIDTH, minimum=1.0),
        max_value_padding=_env_float("CHART_MAX_VALUE_PADDING", DEFAULT_MAX_VALUE_PADDING),
        min_spacing=min_spacing,
        max_spacing=max_spacing,
    )


get_settings = lru_cache(maxsize=1)(get_settings)


def clear_settings_cache() -> None:
    get_settings.cache_clear()  # type: ignore[attr-defined]
