"""
Deferred list of rendering instructions.

A RenderModel is built fresh for each render call. Renderables append
instructions to it; the renderer replays them in insertion order, so later
instructions paint over earlier ones.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Union

from .colors import Color, to_color
from .instructions import DRAW_OP_TYPES, DrawOp
from ..config import get_settings
from ..core.exceptions import InvalidCoordinateSystemError


class CoordinateSystem(Enum):
    """
    Frame in which an instruction's coordinates are given.

    SCENE: world frame in meters, transformed by the camera.
    CAMERA_PIXELS: canvas pixels, camera ignored.
    CAMERA_RELATIVE: fractions 0-1 of the canvas, camera ignored.
    """
    SCENE = "scene"
    CAMERA_PIXELS = "camera_pixels"
    CAMERA_RELATIVE = "camera_relative"

    @classmethod
    def parse(cls, value: Union['CoordinateSystem', str]) -> 'CoordinateSystem':
        """Normalize a tag, rejecting anything outside the three systems."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidCoordinateSystemError(value)


@dataclass(frozen=True)
class Instruction:
    op: DrawOp
    coordinate_system: CoordinateSystem = CoordinateSystem.SCENE


class RenderModel:
    """Model to keep track of rendering instructions and background color."""

    def __init__(self, background_color: Optional[Any] = None):
        self._instructions: List[Instruction] = []
        self.background_color: Color = to_color(
            background_color if background_color is not None
            else get_settings().background_color
        )

    def add_instruction(self, op: DrawOp,
                        coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.SCENE
                        ) -> 'RenderModel':
        """
        Append a drawing operation.

        Args:
            op: one of the instruction kinds (Circle, Text, VehicleShape, ...)
            coordinate_system: 'scene' (meters, camera applies),
                'camera_pixels' (canvas pixels) or 'camera_relative'
                (0-1 fractions of the canvas)

        Returns:
            The model, for chaining

        Raises:
            InvalidCoordinateSystemError: unknown tag; nothing is stored
        """
        system = CoordinateSystem.parse(coordinate_system)
        if not isinstance(op, DRAW_OP_TYPES):
            raise TypeError(f"Unsupported drawing operation: {type(op).__name__}")
        self._instructions.append(Instruction(op, system))
        return self

    def set_background_color(self, color: Any) -> 'RenderModel':
        self.background_color = to_color(color)
        return self

    def reset_instructions(self) -> 'RenderModel':
        self._instructions.clear()
        return self

    @property
    def instructions(self) -> List[Instruction]:
        return list(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def is_empty(self) -> bool:
        return not self._instructions

    def __repr__(self) -> str:
        return (f"RenderModel({len(self._instructions)} instructions, "
                f"background={self.background_color.to_hex()})")
