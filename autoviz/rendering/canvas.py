"""
Drawing surface abstraction.

A DrawingContext keeps a cairo-style affine transform stack and offers the
primitive drawing operations used by render instructions. Primitives take
user-space coordinates, map them through the current matrix and hand device
coordinates to a small set of backend hooks implemented by each surface type.
"""

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .colors import Color, to_color
from ..core.exceptions import RenderingError
from ..core.logging import get_logger


class SurfaceKind(Enum):
    """Types of drawing surfaces."""
    IMAGE = "png"
    SVG = "svg"
    PDF = "pdf"


def as_point_array(points: Any) -> np.ndarray:
    """
    Normalize a vertex set to an (N, 2) float array.

    Accepts a dense numpy array laid out as 2xN (row 0 holds x, row 1 holds
    y, one column per point), or a sequence of 2D points (objects with
    ``x``/``y`` attributes or 2-sequences). Pass Nx2 data as a sequence or
    transpose it first.
    """
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=float)
        if arr.ndim != 2 or arr.shape[0] != 2:
            raise ValueError(f"Expected a 2xN point array, got shape {arr.shape}")
        return arr.T.copy()

    coords = []
    for p in points:
        if hasattr(p, "x") and hasattr(p, "y"):
            coords.append((float(p.x), float(p.y)))
        else:
            coords.append((float(p[0]), float(p[1])))
    if not coords:
        return np.zeros((0, 2))
    return np.array(coords, dtype=float)


def _translation(tx: float, ty: float) -> np.ndarray:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def _scaling(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def _rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def rounded_rect_outline(x: float, y: float, width: float, height: float,
                         corner_radius: float, segments: int = 6) -> np.ndarray:
    """Vertices of a rectangle centered on (x, y) with rounded corners."""
    hw, hh = width / 2.0, height / 2.0
    r = max(0.0, min(corner_radius, hw, hh))
    if r == 0.0:
        return np.array([(x - hw, y - hh), (x + hw, y - hh), (x + hw, y + hh), (x - hw, y + hh)])

    corners = [
        (x + hw - r, y - hh + r, -math.pi / 2),
        (x + hw - r, y + hh - r, 0.0),
        (x - hw + r, y + hh - r, math.pi / 2),
        (x - hw + r, y - hh + r, math.pi),
    ]
    outline = []
    for cx, cy, start in corners:
        for i in range(segments + 1):
            a = start + (math.pi / 2) * i / segments
            outline.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return np.array(outline)


def dash_segments(points: np.ndarray, dash_length: float, gap_length: float) -> List[np.ndarray]:
    """Split a polyline into the visible pieces of a dash pattern."""
    if dash_length <= 0:
        raise ValueError("dash_length must be positive")
    gap_length = max(0.0, gap_length)

    pieces: List[np.ndarray] = []
    current: List[Tuple[float, float]] = []
    drawing = True
    remaining = dash_length

    for start, end in zip(points[:-1], points[1:]):
        seg = end - start
        seg_len = float(np.hypot(seg[0], seg[1]))
        travelled = 0.0
        if drawing and not current:
            current.append(tuple(start))
        while seg_len - travelled > remaining:
            travelled += remaining
            cut = start + seg * (travelled / seg_len)
            if drawing:
                current.append(tuple(cut))
                pieces.append(np.array(current))
                current = []
                drawing, remaining = False, gap_length
            else:
                current = [tuple(cut)]
                drawing, remaining = True, dash_length
        remaining -= seg_len - travelled
        if drawing:
            current.append(tuple(end))

    if drawing and len(current) > 1:
        pieces.append(np.array(current))
    return pieces


class DrawingContext(ABC):
    """
    Abstract base class for drawing surfaces.

    Subclasses implement the device-space hooks (``_fill``, ``_circle``,
    ``_polygon``, ``_polyline``, ``_text``) and, for stream surfaces,
    ``finish``.
    """

    kind: SurfaceKind = SurfaceKind.IMAGE

    def __init__(self, width: int, height: int):
        """
        Initialize the drawing context.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.logger = get_logger("canvas")
        self.width = int(width)
        self.height = int(height)
        self._matrix = np.identity(3)
        self._saved: List[np.ndarray] = []
        self._finished = False

    # Transform stack

    def save(self) -> None:
        """Push the current transform."""
        self._saved.append(self._matrix.copy())

    def restore(self) -> None:
        """Pop the transform pushed by the matching save()."""
        if not self._saved:
            raise RenderingError("restore() called without a matching save()")
        self._matrix = self._saved.pop()

    def reset_transform(self) -> None:
        """Reset the current transform to identity (device pixels)."""
        self._matrix = np.identity(3)

    def translate(self, tx: float, ty: float) -> None:
        self._matrix = self._matrix @ _translation(tx, ty)

    def scale(self, sx: float, sy: float) -> None:
        self._matrix = self._matrix @ _scaling(sx, sy)

    def rotate(self, angle: float) -> None:
        """Rotate user space by ``angle`` radians."""
        self._matrix = self._matrix @ _rotation(angle)

    def get_matrix(self) -> np.ndarray:
        """Current user-to-device matrix as a 3x3 array."""
        return self._matrix.copy()

    def set_matrix(self, matrix: np.ndarray) -> None:
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != (3, 3):
            raise ValueError(f"Expected a 3x3 matrix, got shape {matrix.shape}")
        self._matrix = matrix.copy()

    def user_to_device(self, x: float, y: float) -> Tuple[float, float]:
        """Map a user-space point to device pixels."""
        dx, dy, _ = self._matrix @ np.array([x, y, 1.0])
        return float(dx), float(dy)

    def user_to_device_distance(self, length: float) -> float:
        """Map a user-space length to pixels (isotropic part of the transform)."""
        return abs(length) * math.sqrt(abs(np.linalg.det(self._matrix[:2, :2])))

    def _points_to_device(self, points: np.ndarray) -> np.ndarray:
        if len(points) == 0:
            return points
        homogeneous = np.hstack([points, np.ones((len(points), 1))])
        return (self._matrix @ homogeneous.T).T[:, :2]

    def _check_active(self) -> None:
        if self._finished:
            raise RenderingError("Cannot draw on a finished surface")

    # Fill and primitives

    def paint(self, color: Any) -> None:
        """Fill the whole canvas with ``color``, ignoring the transform."""
        self._check_active()
        self._fill(to_color(color))

    def draw_circle(self, x: float, y: float, radius: float, color: Any,
                    fill: bool = True, line_width: float = 1.0) -> None:
        self._check_active()
        center = self.user_to_device(x, y)
        stroke = None if fill else self.user_to_device_distance(line_width)
        self._circle(center, self.user_to_device_distance(radius), to_color(color), stroke)

    def draw_round_rect(self, x: float, y: float, width: float, height: float,
                        corner_radius: float, color: Any,
                        fill: bool = True, line_width: float = 1.0) -> None:
        """Draw a rounded rectangle centered on (x, y)."""
        self._check_active()
        outline = rounded_rect_outline(x, y, width, height, corner_radius)
        stroke = None if fill else self.user_to_device_distance(line_width)
        self._polygon(self._points_to_device(outline), to_color(color), stroke)

    def draw_text(self, text: str, x: float, y: float, font_size: float, color: Any,
                  align_center: bool = False) -> None:
        """
        Draw text anchored at (x, y).

        Only the anchor goes through the transform; glyphs are always drawn
        upright at ``font_size`` pixels.
        """
        self._check_active()
        self._text(text, self.user_to_device(x, y), font_size, to_color(color), align_center)

    def draw_line(self, points: Any, color: Any, line_width: float = 1.0) -> None:
        self._check_active()
        pts = as_point_array(points)
        if len(pts) < 2:
            return
        self._polyline(self._points_to_device(pts), to_color(color),
                       self.user_to_device_distance(line_width))

    def draw_dashed_line(self, points: Any, color: Any, line_width: float = 1.0,
                         dash_length: float = 1.0, gap_length: float = 1.0) -> None:
        self._check_active()
        pts = as_point_array(points)
        if len(pts) < 2:
            return
        color = to_color(color)
        width = self.user_to_device_distance(line_width)
        for piece in dash_segments(pts, dash_length, gap_length):
            self._polyline(self._points_to_device(piece), color, width)

    def draw_point_trail(self, points: Any, color: Any, radius: float = 0.25) -> None:
        self._check_active()
        color = to_color(color)
        device_radius = self.user_to_device_distance(radius)
        for px, py in self._points_to_device(as_point_array(points)):
            self._circle((float(px), float(py)), device_radius, color, None)

    def draw_fill_region(self, points: Any, color: Any) -> None:
        self._check_active()
        pts = as_point_array(points)
        if len(pts) < 3:
            return
        self._polygon(self._points_to_device(pts), to_color(color), None)

    def draw_vehicle(self, x: float, y: float, heading: float, length: float,
                     width: float, color: Any) -> None:
        """Draw a vehicle footprint centered on (x, y) facing ``heading``."""
        self._check_active()
        c, s = math.cos(heading), math.sin(heading)
        hl, hw = length / 2.0, width / 2.0
        local = [(hl, hw), (-hl, hw), (-hl, -hw), (hl, -hw)]
        body = np.array([(x + c * u - s * v, y + s * u + c * v) for u, v in local])
        color = to_color(color)
        self._polygon(self._points_to_device(body), color, None)

        # heading marker from the center to the front bumper
        nose = np.array([(x, y), (x + c * hl, y + s * hl)])
        marker = Color(color.r // 2, color.g // 2, color.b // 2, color.a)
        self._polyline(self._points_to_device(nose), marker,
                       self.user_to_device_distance(min(width, length) * 0.1))

    def finish(self) -> None:
        """Finalize the surface. Further drawing is rejected."""
        self._finished = True

    @property
    def finished(self) -> bool:
        return self._finished

    # Backend hooks, all in device pixels

    @abstractmethod
    def _fill(self, color: Color) -> None:
        pass

    @abstractmethod
    def _circle(self, center: Tuple[float, float], radius: float, color: Color,
                line_width: Optional[float]) -> None:
        """Fill (``line_width`` None) or stroke a circle."""
        pass

    @abstractmethod
    def _polygon(self, points: np.ndarray, color: Color, line_width: Optional[float]) -> None:
        """Fill (``line_width`` None) or stroke a closed polygon."""
        pass

    @abstractmethod
    def _polyline(self, points: np.ndarray, color: Color, line_width: float) -> None:
        pass

    @abstractmethod
    def _text(self, text: str, position: Tuple[float, float], font_size: float,
              color: Color, align_center: bool) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.width}x{self.height})"


def device_points(points: Sequence[Tuple[float, float]]) -> List[Tuple[int, int]]:
    """Round device coordinates to integer pixels."""
    return [(int(round(x)), int(round(y))) for x, y in points]
