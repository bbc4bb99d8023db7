"""
Typed, range-checked view of the configuration.

Rendering code reads its defaults (canvas size, border, colors) from here
instead of poking at raw config keys.
"""

from typing import Any, Dict, Optional, Tuple

from .config import Config, get_config
from ..core.exceptions import InvalidConfigValueError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

MAX_CANVAS_SIZE = 16384


def _clamp(value, low, high):
    return max(low, min(value, high))


class Settings:
    """
    Settings backed by a Config (the global one unless given).

    Out-of-range numbers are clamped; values that are not numbers at all
    raise InvalidConfigValueError.
    """

    def __init__(self, config: Optional[Config] = None):
        self._config = config or get_config()

    def _number(self, key: str, default: Any, kind: type) -> Any:
        value = self._config.get(key, default)
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise InvalidConfigValueError(key, value, kind.__name__, cause=e) from e

    # app.*

    @property
    def debug_mode(self) -> bool:
        return bool(self._config.get("app.debug", False))

    @property
    def log_level(self) -> str:
        """One of LOG_LEVELS; unknown names fall back to INFO."""
        level = str(self._config.get("app.log_level", "INFO")).upper()
        return level if level in LOG_LEVELS else "INFO"

    @property
    def log_to_file(self) -> bool:
        """Also write JSON logs under ~/.autoviz/logs."""
        return bool(self._config.get("app.log_to_file", False))

    # rendering.*

    @property
    def canvas_width(self) -> int:
        """Canvas width [px] used when a render call does not give one."""
        return _clamp(self._number("rendering.canvas_width", 1000, int), 1, MAX_CANVAS_SIZE)

    @property
    def canvas_height(self) -> int:
        """Canvas height [px] used when a render call does not give one."""
        return _clamp(self._number("rendering.canvas_height", 600, int), 1, MAX_CANVAS_SIZE)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.canvas_width, self.canvas_height)

    @property
    def percent_border(self) -> float:
        """Fraction of the canvas width kept free by auto-fit, 0 to 0.9."""
        return _clamp(self._number("rendering.percent_border", 0.1, float), 0.0, 0.9)

    @property
    def background_color(self) -> Any:
        return self._config.get("rendering.background_color", "#272822")

    @property
    def antialias_enabled(self) -> bool:
        return bool(self._config.get("rendering.antialias", True))

    @property
    def placeholder_font_size(self) -> int:
        """Size [px] of the text drawn for an empty render model."""
        return _clamp(self._number("rendering.placeholder_font_size", 40, int), 6, 200)

    @property
    def font_name(self) -> Optional[str]:
        """Font file for raster text; None selects pygame's default font."""
        return self._config.get("rendering.font_name")

    def update_setting(self, key: str, value: Any) -> None:
        self._config.set(key, value)

    def reset_to_defaults(self) -> None:
        self._config.reset_to_defaults()

    def is_development_mode(self) -> bool:
        return self.debug_mode or self.log_level == "DEBUG"

    def get_rendering_info(self) -> Dict[str, Any]:
        return {
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "percent_border": self.percent_border,
            "background_color": self.background_color,
            "antialias": self.antialias_enabled,
        }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide Settings over the global Config."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings


def reset_settings() -> None:
    global _settings
    _settings = None
