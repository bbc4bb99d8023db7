"""
Vector drawing surfaces (SVG, PDF) backed by cairo streams.

The document is written into an in-memory stream that only holds complete
output after ``finish()``; ``getvalue()`` and ``write_stream()`` finish the
surface before reading it back.
"""

import io
import math
from abc import abstractmethod
from pathlib import Path
from typing import Optional, Tuple, Union

import cairocffi as cairo
import numpy as np

from .canvas import DrawingContext, SurfaceKind
from .colors import Color
from ..config import get_settings


class CairoStreamCanvas(DrawingContext):
    """Base class for cairo surfaces writing into a byte stream."""

    def __init__(self, width: int, height: int, font_family: Optional[str] = None):
        super().__init__(width, height)
        self.stream = io.BytesIO()
        self.surface = self._create_surface(self.stream, self.width, self.height)
        self._ctx = cairo.Context(self.surface)
        if not get_settings().antialias_enabled:
            self._ctx.set_antialias(cairo.ANTIALIAS_NONE)
        self._font_family = font_family or "sans-serif"

        self.logger.debug("Vector canvas created", extra={
            "kind": self.kind.value,
            "width": self.width,
            "height": self.height
        })

    @abstractmethod
    def _create_surface(self, stream: io.BytesIO, width: int, height: int) -> cairo.Surface:
        """Cairo surface of the concrete format writing into ``stream``."""

    def getvalue(self) -> bytes:
        """Finished document bytes."""
        self.finish()
        return self.stream.getvalue()

    def write_stream(self, path: Union[str, Path]) -> None:
        """Finish the surface and copy the stream to ``path``."""
        data = self.getvalue()
        with open(path, 'wb') as f:
            f.write(data)

    def finish(self) -> None:
        if not self._finished:
            self.surface.finish()
        super().finish()

    def _set_source(self, color: Color) -> None:
        self._ctx.set_source_rgba(*color.to_unit_rgba())

    def _paint_path(self, color: Color, line_width: Optional[float]) -> None:
        self._set_source(color)
        if line_width is None:
            self._ctx.fill()
        else:
            self._ctx.set_line_width(line_width)
            self._ctx.stroke()

    def _fill(self, color: Color) -> None:
        self._set_source(color)
        self._ctx.paint()

    def _circle(self, center: Tuple[float, float], radius: float, color: Color,
                line_width: Optional[float]) -> None:
        self._ctx.new_path()
        self._ctx.arc(center[0], center[1], radius, 0.0, 2 * math.pi)
        self._paint_path(color, line_width)

    def _trace(self, points: np.ndarray) -> None:
        self._ctx.new_path()
        self._ctx.move_to(float(points[0][0]), float(points[0][1]))
        for x, y in points[1:]:
            self._ctx.line_to(float(x), float(y))

    def _polygon(self, points: np.ndarray, color: Color, line_width: Optional[float]) -> None:
        if len(points) < 2:
            return
        self._trace(points)
        self._ctx.close_path()
        self._paint_path(color, line_width)

    def _polyline(self, points: np.ndarray, color: Color, line_width: float) -> None:
        if len(points) < 2:
            return
        self._trace(points)
        self._paint_path(color, line_width)

    def _text(self, text: str, position: Tuple[float, float], font_size: float,
              color: Color, align_center: bool) -> None:
        self._ctx.select_font_face(self._font_family)
        self._ctx.set_font_size(font_size)
        x, y = position
        if align_center:
            x_bearing, y_bearing, text_width, text_height = self._ctx.text_extents(text)[:4]
            x -= text_width / 2 + x_bearing
            y -= text_height / 2 + y_bearing
        self._set_source(color)
        self._ctx.move_to(x, y)
        self._ctx.show_text(text)


class SVGCanvas(CairoStreamCanvas):
    """SVG document canvas."""

    kind = SurfaceKind.SVG

    def _create_surface(self, stream, width, height):
        return cairo.SVGSurface(stream, width, height)


class PDFCanvas(CairoStreamCanvas):
    """Single page PDF canvas."""

    kind = SurfaceKind.PDF

    def _create_surface(self, stream, width, height):
        return cairo.PDFSurface(stream, width, height)
