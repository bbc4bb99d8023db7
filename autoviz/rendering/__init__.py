"""
Rendering system for AutoViz.

Render models collect drawing instructions in three coordinate systems,
cameras decide what part of the world is shown, and the renderer replays
the instructions on a drawing surface. Vector surfaces (SVG, PDF) live in
``autoviz.rendering.vector`` and need the cairo shared library.
"""

from .colors import Color, StandardColors, COLOR_THEME, to_color
from .canvas import DrawingContext, SurfaceKind, as_point_array
from .raster import ImageCanvas
from .instructions import (
    Circle,
    RoundRect,
    Text,
    Line,
    DashedLine,
    PointTrail,
    FillRegion,
    VehicleShape,
    DrawOp,
)
from .rendermodel import CoordinateSystem, Instruction, RenderModel
from .camera import (
    CameraState,
    Camera,
    StaticCamera,
    TargetFollowCamera,
    ZoomingCamera,
    SceneFollowCamera,
    ComposedCamera,
    update_camera,
)
from .fit import camera_fit_to_content, scene_bounds
from .renderables import add_renderable, render_object, render_vehicle
from .renderer import render, render_to_canvas, PLACEHOLDER_TEXT
from .output import write

__all__ = [
    # Colors
    "Color",
    "StandardColors",
    "COLOR_THEME",
    "to_color",

    # Surfaces
    "DrawingContext",
    "SurfaceKind",
    "ImageCanvas",
    "as_point_array",

    # Instructions and render model
    "Circle",
    "RoundRect",
    "Text",
    "Line",
    "DashedLine",
    "PointTrail",
    "FillRegion",
    "VehicleShape",
    "DrawOp",
    "CoordinateSystem",
    "Instruction",
    "RenderModel",

    # Cameras
    "CameraState",
    "Camera",
    "StaticCamera",
    "TargetFollowCamera",
    "ZoomingCamera",
    "SceneFollowCamera",
    "ComposedCamera",
    "update_camera",
    "camera_fit_to_content",
    "scene_bounds",

    # Rendering and output
    "add_renderable",
    "render_object",
    "render_vehicle",
    "render",
    "render_to_canvas",
    "PLACEHOLDER_TEXT",
    "write",
]
