"""
Auto-fit: pick a camera that frames all scene content on the canvas.
"""

import math
from typing import Callable, Dict, Iterable, Optional, Tuple

from .camera import CameraState
from .canvas import as_point_array
from .instructions import (
    Circle, DashedLine, FillRegion, Line, PointTrail, RoundRect, Text, VehicleShape
)
from .rendermodel import CoordinateSystem, RenderModel
from ..config import get_settings
from ..core.logging import get_logger
from ..scene import Vector2D

logger = get_logger("camera_fit")

Bounds = Tuple[float, float, float, float]  # xmin, xmax, ymin, ymax

_EMPTY_BOUNDS: Bounds = (math.inf, -math.inf, math.inf, -math.inf)


def _extend(bounds: Bounds, xs: Iterable[float], ys: Iterable[float]) -> Bounds:
    xmin, xmax, ymin, ymax = bounds
    xs = [float(v) for v in xs]
    ys = [float(v) for v in ys]
    if not xs:
        return bounds
    return (min(xmin, min(xs)), max(xmax, max(xs)), min(ymin, min(ys)), max(ymax, max(ys)))


def _anchor_bounds(op, bounds: Bounds) -> Bounds:
    return _extend(bounds, [op.x], [op.y])


def _vertex_bounds(op, bounds: Bounds) -> Bounds:
    pts = as_point_array(op.points)
    if len(pts) == 0:
        return bounds
    return _extend(bounds, pts[:, 0], pts[:, 1])


def _vehicle_bounds(op: VehicleShape, bounds: Bounds) -> Bounds:
    # circumscribing circle, so the box holds the footprint at any heading
    r = math.sqrt((op.width / 2) ** 2 + (op.length / 2) ** 2)
    return _extend(bounds, [op.x - r, op.x + r], [op.y - r, op.y + r])


_BOUNDS_EXTRACTORS: Dict[type, Callable] = {
    Circle: _anchor_bounds,
    RoundRect: _anchor_bounds,
    Text: _anchor_bounds,
    Line: _vertex_bounds,
    DashedLine: _vertex_bounds,
    PointTrail: _vertex_bounds,
    FillRegion: _vertex_bounds,
    VehicleShape: _vehicle_bounds,
}


def scene_bounds(rendermodel: RenderModel) -> Optional[Bounds]:
    """
    Bounding box of all scene-frame content, or None when nothing contributes.
    """
    bounds = _EMPTY_BOUNDS
    for instruction in rendermodel:
        if instruction.coordinate_system is not CoordinateSystem.SCENE:
            continue
        extractor = _BOUNDS_EXTRACTORS.get(type(instruction.op))
        if extractor is not None:
            bounds = extractor(instruction.op, bounds)

    if math.isinf(bounds[0]) or math.isinf(bounds[2]):
        return None
    return bounds


def camera_fit_to_content(rendermodel: RenderModel,
                          canvas_width: Optional[int] = None,
                          canvas_height: Optional[int] = None,
                          percent_border: Optional[float] = None) -> CameraState:
    """
    Determine camera parameters such that all rendered content fits on the canvas.

    The shorter side of the content box is grown symmetrically until the box
    has the canvas aspect ratio, so scaling stays isotropic. ``percent_border``
    is the fraction of the canvas width kept free around the content.

    Args:
        rendermodel: Model whose scene instructions are framed
        canvas_width: Canvas width in pixels (settings default when None)
        canvas_height: Canvas height in pixels (settings default when None)
        percent_border: Border fraction (settings default when None)

    Returns:
        A new CameraState. Without any scene content a state centered at
        (canvas_width/2, canvas_height/2) with zoom 1 is returned and a
        warning is logged.
    """
    settings = get_settings()
    canvas_width = settings.canvas_width if canvas_width is None else canvas_width
    canvas_height = settings.canvas_height if canvas_height is None else canvas_height
    percent_border = settings.percent_border if percent_border is None else percent_border

    bounds = scene_bounds(rendermodel)
    if bounds is None:
        logger.warning("No render instructions found", extra={
            "instructions": len(rendermodel),
            "canvas_width": canvas_width,
            "canvas_height": canvas_height
        })
        return CameraState(
            position=Vector2D(canvas_width / 2, canvas_height / 2),
            zoom=1.0,
            rotation=0.0,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
        )

    xmin, xmax, ymin, ymax = bounds
    # a zero extent grows by 1 m around its midpoint
    if xmax - xmin <= 0.0:
        xmin, xmax = xmin - 0.5, xmax + 0.5
    if ymax - ymin <= 0.0:
        ymin, ymax = ymin - 0.5, ymax + 0.5

    world_width = xmax - xmin
    world_height = ymax - ymin
    canvas_aspect = canvas_width / canvas_height
    world_aspect = world_width / world_height

    if world_aspect > canvas_aspect:
        # expand height to fit
        half_diff = (world_width / canvas_aspect - world_height) / 2
        world_height = world_width / canvas_aspect
        ymin -= half_diff
        ymax += half_diff
    else:
        # expand width to fit
        half_diff = (world_height * canvas_aspect - world_width) / 2
        world_width = world_height * canvas_aspect
        xmin -= half_diff
        xmax += half_diff

    state = CameraState(
        position=Vector2D(xmin + world_width / 2, ymin + world_height / 2),
        zoom=canvas_width * (1 - percent_border) / world_width,
        rotation=0.0,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
    )
    logger.debug("Camera fitted to content", extra={
        "bounds": (float(xmin), float(xmax), float(ymin), float(ymax)),
        "position": state.position.to_tuple(),
        "zoom": state.zoom
    })
    return state
