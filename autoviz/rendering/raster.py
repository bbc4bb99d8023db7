"""
Raster drawing surface backed by an off-screen pygame Surface.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
import pygame
import pygame.gfxdraw

from .canvas import DrawingContext, SurfaceKind, device_points
from .colors import Color
from ..config import get_settings


class ImageCanvas(DrawingContext):
    """
    Off-screen raster canvas.

    No display is needed; the pixels live in a ``pygame.Surface`` with an
    alpha channel and can be saved as PNG.
    """

    kind = SurfaceKind.IMAGE

    def __init__(self,
                 width: int,
                 height: int,
                 antialias: Optional[bool] = None,
                 font_name: Optional[str] = None):
        """
        Initialize the raster canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            antialias: Smooth edges (settings value when None)
            font_name: Font file for text (settings value, then pygame default)
        """
        super().__init__(width, height)
        settings = get_settings()
        self.surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self._antialias = settings.antialias_enabled if antialias is None else antialias
        self._font_name = font_name or settings.font_name
        self._fonts: Dict[int, pygame.font.Font] = {}

        self.logger.debug("ImageCanvas created", extra={
            "width": self.width,
            "height": self.height,
            "antialias": self._antialias
        })

    def get_pixel(self, x: int, y: int) -> Color:
        """Color of the device pixel at (x, y)."""
        return Color(*self.surface.get_at((int(x), int(y))))

    def write_png(self, path: Union[str, Path]) -> None:
        pygame.image.save(self.surface, str(path))

    def _get_font(self, font_size: int) -> pygame.font.Font:
        """Get or create a font."""
        if not pygame.font.get_init():
            pygame.font.init()

        if font_size not in self._fonts:
            try:
                self._fonts[font_size] = pygame.font.Font(self._font_name, font_size)
            except (OSError, FileNotFoundError) as e:
                self.logger.warning("Failed to load font, using default", extra={
                    "font_name": self._font_name,
                    "font_size": font_size,
                    "error": str(e)
                })
                self._fonts[font_size] = pygame.font.Font(None, font_size)

        return self._fonts[font_size]

    def _fill(self, color: Color) -> None:
        self.surface.fill(color.to_tuple_rgba())

    def _circle(self, center: Tuple[float, float], radius: float, color: Color,
                line_width: Optional[float]) -> None:
        cx, cy = int(round(center[0])), int(round(center[1]))
        r = max(1, int(round(radius)))
        if line_width is None:
            if self._antialias:
                pygame.gfxdraw.aacircle(self.surface, cx, cy, r, color.to_tuple_rgba())
            pygame.draw.circle(self.surface, color.to_tuple_rgba(), (cx, cy), r)
        else:
            pygame.draw.circle(self.surface, color.to_tuple_rgba(), (cx, cy), r,
                               max(1, int(round(line_width))))

    def _polygon(self, points: np.ndarray, color: Color, line_width: Optional[float]) -> None:
        pts = device_points(points)
        if len(pts) < 3:
            if len(pts) == 2:
                self._polyline(points, color, line_width or 1.0)
            return
        if line_width is None:
            if self._antialias:
                pygame.gfxdraw.aapolygon(self.surface, pts, color.to_tuple_rgba())
            pygame.draw.polygon(self.surface, color.to_tuple_rgba(), pts)
        else:
            pygame.draw.polygon(self.surface, color.to_tuple_rgba(), pts,
                                max(1, int(round(line_width))))

    def _polyline(self, points: np.ndarray, color: Color, line_width: float) -> None:
        pts = device_points(points)
        if len(pts) < 2:
            return
        width = max(1, int(round(line_width)))
        if self._antialias and width == 1:
            pygame.draw.aalines(self.surface, color.to_tuple_rgba(), False, pts)
        else:
            pygame.draw.lines(self.surface, color.to_tuple_rgba(), False, pts, width)

    def _text(self, text: str, position: Tuple[float, float], font_size: float,
              color: Color, align_center: bool) -> None:
        font = self._get_font(max(1, int(round(font_size))))
        text_surface = font.render(text, self._antialias, color.to_tuple())
        rect = text_surface.get_rect()
        anchor = (int(round(position[0])), int(round(position[1])))
        if align_center:
            rect.center = anchor
        else:
            rect.bottomleft = anchor
        self.surface.blit(text_surface, rect)
