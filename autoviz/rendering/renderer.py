"""
Render executor: replays a RenderModel on a drawing surface under a camera.
"""

from typing import Any, Iterable, Optional, Union

from .camera import Camera, CameraState, camera_state_of
from .canvas import DrawingContext
from .colors import StandardColors
from .fit import camera_fit_to_content
from .instructions import Text
from .raster import ImageCanvas
from .renderables import add_renderable
from .rendermodel import CoordinateSystem, RenderModel
from ..config import get_settings
from ..core.exceptions import InvalidCoordinateSystemError, RenderingError
from ..core.logging import get_logger

logger = get_logger("renderer")

PLACEHOLDER_TEXT = "No rendering instructions found"


def _apply_camera_transform(ctx: DrawingContext, state: CameraState) -> None:
    # order matters: the final translation is in world units
    ctx.reset_transform()
    ctx.translate(state.canvas_width / 2, state.canvas_height / 2)
    ctx.scale(state.zoom, -state.zoom)  # [pix/m], negative y flips up and down
    ctx.rotate(state.rotation)
    ctx.translate(-state.position.x, -state.position.y)


def render_to_canvas(rendermodel: RenderModel,
                     camera: Union[Camera, CameraState],
                     ctx: DrawingContext) -> DrawingContext:
    """
    Replay all instructions of ``rendermodel`` on ``ctx``.

    An empty model only draws a placeholder text at the canvas center; the
    background and the camera transform are skipped in that case.

    Raises:
        RenderingError: the camera zoom is zero
        InvalidCoordinateSystemError: an instruction carries an unknown tag
    """
    state = camera_state_of(camera)
    w, h = state.canvas_width, state.canvas_height

    if rendermodel.is_empty():
        ctx.reset_transform()
        ctx.draw_text(PLACEHOLDER_TEXT, w / 2, h / 2,
                      get_settings().placeholder_font_size, StandardColors.RED, True)
        logger.debug("Rendered placeholder for empty render model")
        return ctx

    if state.zoom == 0:
        raise RenderingError("Camera zoom must be nonzero", context={"zoom": state.zoom})

    ctx.paint(rendermodel.background_color)
    _apply_camera_transform(ctx, state)

    for instruction in rendermodel:
        op, system = instruction.op, instruction.coordinate_system

        if system in (CoordinateSystem.CAMERA_PIXELS, CoordinateSystem.CAMERA_RELATIVE):
            ctx.save()
            ctx.reset_transform()
            if system is CoordinateSystem.CAMERA_RELATIVE:
                ctx.scale(w, h)
            op.draw(ctx)
            ctx.restore()
        elif system is CoordinateSystem.SCENE:
            if isinstance(op, Text):
                # position through the world transform, glyphs stay upright
                x, y = ctx.user_to_device(op.x, op.y)
                ctx.save()
                ctx.reset_transform()
                ctx.draw_text(op.text, x, y, op.font_size, op.color, op.align_center)
                ctx.restore()
            else:
                op.draw(ctx)
        else:
            raise InvalidCoordinateSystemError(system)

    logger.debug("Render model replayed", extra={
        "instructions": len(rendermodel),
        "position": state.position.to_tuple(),
        "zoom": state.zoom,
        "rotation": state.rotation
    })
    return ctx


def render(renderables: Iterable[Any],
           camera: Optional[Union[Camera, CameraState]] = None,
           canvas_width: Optional[int] = None,
           canvas_height: Optional[int] = None,
           surface: Optional[DrawingContext] = None,
           background_color: Optional[Any] = None) -> DrawingContext:
    """
    Draw all ``renderables`` to a surface of ``canvas_width`` x ``canvas_height``.

    Every renderable must be supported by ``add_renderable``. A given camera
    should already be updated with ``update_camera``; without one the camera
    is fitted to the content.

    Args:
        renderables: Objects to draw, in paint order
        camera: Camera policy or CameraState, None to auto-fit
        canvas_width: Canvas width (camera's, then settings default)
        canvas_height: Canvas height (camera's, then settings default)
        surface: Target surface, a new ImageCanvas when None
        background_color: Background override for this render

    Returns:
        The surface that was drawn on
    """
    settings = get_settings()
    state = camera_state_of(camera) if camera is not None else None
    if canvas_width is None:
        canvas_width = state.canvas_width if state else settings.canvas_width
    if canvas_height is None:
        canvas_height = state.canvas_height if state else settings.canvas_height
    if surface is None:
        surface = ImageCanvas(canvas_width, canvas_height)

    rendermodel = RenderModel(background_color)
    rendermodel.reset_instructions()
    for renderable in renderables:
        add_renderable(rendermodel, renderable)

    if state is None:
        state = camera_fit_to_content(rendermodel, canvas_width, canvas_height)

    render_to_canvas(rendermodel, state, surface)
    return surface
