"""
JSON scene description loader.

Format::

    {
        "background": "#272822",
        "vehicles": [{"id": 1, "x": 0.0, "y": 0.0, "theta": 0.0,
                      "length": 4.0, "width": 1.8, "color": "red"}],
        "lane_vehicles": [{"id": 2, "s": 12.0}]
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .entities import Entity, Frame, LaneVehicle, VehicleDef, VehicleState
from .geometry import Pose2D
from ..core.exceptions import SceneLoadError
from ..core.logging import get_logger

logger = get_logger("scene_loader")


@dataclass
class SceneDescription:
    """A loaded scene: the entity snapshot and an optional background color."""
    frame: Frame
    background: Optional[Any] = None


def _vehicle_def(data: Dict[str, Any]) -> VehicleDef:
    defaults = VehicleDef()
    return VehicleDef(
        length=float(data.get("length", defaults.length)),
        width=float(data.get("width", defaults.width)),
    )


def parse_scene(data: Dict[str, Any], source: Optional[str] = None) -> SceneDescription:
    """Build a SceneDescription from already-decoded JSON data."""
    if not isinstance(data, dict):
        raise SceneLoadError("Scene description must be a JSON object", file_path=source)

    frame = Frame()
    try:
        for index, item in enumerate(data.get("vehicles", [])):
            pose = Pose2D(float(item["x"]), float(item["y"]), float(item.get("theta", 0.0)))
            frame.push(Entity(
                state=VehicleState(pose, float(item.get("v", 0.0))),
                definition=_vehicle_def(item),
                id=item.get("id", index),
                color=item.get("color"),
            ))
        for index, item in enumerate(data.get("lane_vehicles", [])):
            frame.push(LaneVehicle(
                s=float(item["s"]),
                v=float(item.get("v", 0.0)),
                definition=_vehicle_def(item),
                id=item.get("id", f"lane-{index}"),
                color=item.get("color"),
            ))
    except (KeyError, TypeError, ValueError) as e:
        raise SceneLoadError(f"Malformed vehicle entry: {e}", file_path=source, cause=e) from e

    logger.debug("Scene parsed", extra={"source": source, "entities": len(frame)})
    return SceneDescription(frame=frame, background=data.get("background"))


def load_scene(file_path: Union[str, Path]) -> SceneDescription:
    """
    Load a scene description from a JSON file.

    Raises:
        SceneLoadError: the file is missing, not JSON, or malformed
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise SceneLoadError(f"Could not read scene file: {e}", file_path=str(path), cause=e) from e
    except json.JSONDecodeError as e:
        raise SceneLoadError(f"Invalid JSON: {e}", file_path=str(path), cause=e) from e

    return parse_scene(data, source=str(path))
