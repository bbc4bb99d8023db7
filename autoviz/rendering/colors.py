"""
Color representation and normalization.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Color:
    """RGBA color representation, 8 bits per channel."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        """Clamp channel values."""
        for channel in ("r", "g", "b", "a"):
            value = int(round(getattr(self, channel)))
            object.__setattr__(self, channel, max(0, min(255, value)))

    def to_tuple(self) -> Tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_tuple_rgba(self) -> Tuple[int, int, int, int]:
        """Convert to RGBA tuple."""
        return (self.r, self.g, self.b, self.a)

    def to_unit_rgba(self) -> Tuple[float, float, float, float]:
        """Channels scaled to the 0-1 range."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def with_alpha(self, alpha: int) -> 'Color':
        """Create new color with different alpha."""
        return Color(self.r, self.g, self.b, alpha)

    @classmethod
    def from_hex(cls, hex_color: str) -> 'Color':
        """Create color from hex string."""
        hex_color = hex_color.lstrip('#')
        if len(hex_color) not in (6, 8):
            raise ValueError(f"Invalid hex color: {hex_color}")
        channels = [int(hex_color[i:i + 2], 16) for i in range(0, len(hex_color), 2)]
        return cls(*channels)


class StandardColors:
    """Collection of standard color constants."""

    BLACK = Color(0, 0, 0)
    WHITE = Color(255, 255, 255)
    RED = Color(255, 0, 0)
    GREEN = Color(0, 255, 0)
    BLUE = Color(0, 0, 255)
    YELLOW = Color(255, 255, 0)
    CYAN = Color(0, 255, 255)
    MAGENTA = Color(255, 0, 255)
    GRAY = Color(128, 128, 128)
    DARK_GRAY = Color(64, 64, 64)
    LIGHT_GRAY = Color(192, 192, 192)
    ORANGE = Color(255, 165, 0)
    PURPLE = Color(128, 0, 128)
    TRANSPARENT = Color(0, 0, 0, 0)


# Monokai
COLOR_THEME: Dict[str, Color] = {
    "background": Color(39, 40, 34),
    "foreground": Color(248, 248, 242),
    "text": Color(248, 248, 242),
    "road": Color(61, 61, 61),
    "lane_markings": Color(248, 248, 242),
    "car_ego": Color(166, 226, 46),
    "car_other": Color(102, 217, 239),
    "warning": Color(253, 151, 31),
    "error": Color(249, 38, 114),
}


def to_color(value: Any) -> Color:
    """
    Normalize a color specification to a Color.

    Accepts a Color, a hex string, a theme or standard color name, or an
    RGB(A) sequence of ints in 0-255 or floats in 0-1.
    """
    if isinstance(value, Color):
        return value

    if isinstance(value, str):
        if value.startswith('#'):
            return Color.from_hex(value)
        key = value.lower()
        if key in COLOR_THEME:
            return COLOR_THEME[key]
        standard = getattr(StandardColors, value.upper(), None)
        if isinstance(standard, Color):
            return standard
        return Color.from_hex(value)

    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        if any(isinstance(c, float) for c in value) and all(0.0 <= c <= 1.0 for c in value):
            return Color(*(c * 255.0 for c in value))
        return Color(*value)

    raise ValueError(f"Cannot interpret {value!r} as a color")
