"""
Adapters turning scene objects into render instructions.

``render_object`` is a single-dispatch function; register new entity types
with ``@render_object.register``. ``add_renderable`` is the model-first
entry point used by the renderer.
"""

import random
from functools import singledispatch
from typing import Any, Optional

from .colors import Color
from .instructions import DRAW_OP_TYPES, VehicleShape
from .rendermodel import Instruction, RenderModel
from ..scene import Entity, Frame, LaneVehicle


def _random_color() -> Color:
    return Color(random.randint(0, 255), random.randint(0, 255), random.randint(0, 255))


def render_vehicle(rendermodel: RenderModel, x: float, y: float, heading: float,
                   length: float, width: float, color: Optional[Any] = None) -> RenderModel:
    """Add one vehicle footprint in scene coordinates."""
    return rendermodel.add_instruction(
        VehicleShape(x, y, heading, length, width, color if color is not None else _random_color())
    )


@singledispatch
def render_object(obj: Any, rendermodel: RenderModel) -> RenderModel:
    # instruction kinds have no common base class, so they are checked here
    if isinstance(obj, DRAW_OP_TYPES):
        return rendermodel.add_instruction(obj)
    raise TypeError(f"Don't know how to render an object of type {type(obj).__name__}")


@render_object.register
def _(obj: Entity, rendermodel: RenderModel) -> RenderModel:
    pose = obj.state.posG
    return render_vehicle(rendermodel, pose.x, pose.y, pose.theta, obj.length, obj.width, obj.color)


@render_object.register
def _(obj: LaneVehicle, rendermodel: RenderModel) -> RenderModel:
    return render_vehicle(rendermodel, obj.s, 0.0, 0.0, obj.length, obj.width, obj.color)


@render_object.register
def _(obj: Frame, rendermodel: RenderModel) -> RenderModel:
    for entity in obj:
        render_object(entity, rendermodel)
    return rendermodel


@render_object.register
def _(obj: Instruction, rendermodel: RenderModel) -> RenderModel:
    return rendermodel.add_instruction(obj.op, obj.coordinate_system)


@render_object.register
def _(obj: tuple, rendermodel: RenderModel) -> RenderModel:
    # (op, coordinate_system) pair
    if len(obj) != 2:
        raise TypeError(f"Expected an (op, coordinate_system) pair, got {len(obj)} items")
    op, coordinate_system = obj
    return rendermodel.add_instruction(op, coordinate_system)


def add_renderable(rendermodel: RenderModel, obj: Any) -> RenderModel:
    """Add the instructions for ``obj`` to ``rendermodel``."""
    return render_object(obj, rendermodel)
