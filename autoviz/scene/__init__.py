"""
Scene model consumed by the renderer: geometry, vehicles and snapshots.
"""

from .geometry import Vector2D, Pose2D
from .entities import VehicleDef, VehicleState, Entity, LaneVehicle, Frame, find_entity
from .loader import SceneDescription, parse_scene, load_scene

__all__ = [
    "Vector2D",
    "Pose2D",
    "VehicleDef",
    "VehicleState",
    "Entity",
    "LaneVehicle",
    "Frame",
    "find_entity",
    "SceneDescription",
    "parse_scene",
    "load_scene",
]
