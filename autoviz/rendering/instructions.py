"""
Drawing operations that can be queued in a RenderModel.

Each kind is a small dataclass carrying its own arguments; ``draw`` replays
it against a DrawingContext under whatever transform is active.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from .canvas import DrawingContext
from .colors import COLOR_THEME, StandardColors


@dataclass
class Circle:
    x: float
    y: float
    radius: float
    color: Any = StandardColors.WHITE
    fill: bool = True
    line_width: float = 1.0

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_circle(self.x, self.y, self.radius, self.color, self.fill, self.line_width)


@dataclass
class RoundRect:
    """Rectangle centered on (x, y)."""
    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0
    color: Any = StandardColors.WHITE
    fill: bool = True
    line_width: float = 1.0

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_round_rect(self.x, self.y, self.width, self.height, self.corner_radius,
                            self.color, self.fill, self.line_width)


@dataclass
class Text:
    text: str
    x: float
    y: float
    font_size: float = 15
    color: Any = field(default_factory=lambda: COLOR_THEME["text"])
    align_center: bool = False

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_text(self.text, self.x, self.y, self.font_size, self.color, self.align_center)


@dataclass
class Line:
    points: Any
    color: Any = StandardColors.WHITE
    line_width: float = 1.0

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_line(self.points, self.color, self.line_width)


@dataclass
class DashedLine:
    points: Any
    color: Any = StandardColors.WHITE
    line_width: float = 1.0
    dash_length: float = 1.0
    gap_length: float = 1.0

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_dashed_line(self.points, self.color, self.line_width,
                             self.dash_length, self.gap_length)


@dataclass
class PointTrail:
    points: Any
    color: Any = StandardColors.WHITE
    radius: float = 0.25

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_point_trail(self.points, self.color, self.radius)


@dataclass
class FillRegion:
    points: Any
    color: Any = StandardColors.WHITE

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_fill_region(self.points, self.color)


@dataclass
class VehicleShape:
    """Vehicle footprint: center, heading [rad], length and width [m]."""
    x: float
    y: float
    heading: float
    length: float
    width: float
    color: Any = field(default_factory=lambda: COLOR_THEME["car_other"])

    def draw(self, ctx: DrawingContext) -> None:
        ctx.draw_vehicle(self.x, self.y, self.heading, self.length, self.width, self.color)


DrawOp = Union[Circle, RoundRect, Text, Line, DashedLine, PointTrail, FillRegion, VehicleShape]

DRAW_OP_TYPES = (Circle, RoundRect, Text, Line, DashedLine, PointTrail, FillRegion, VehicleShape)
