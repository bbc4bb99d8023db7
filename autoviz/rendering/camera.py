"""
Camera state and camera update policies.

CameraState is the plain transform used for one render: world position of
the canvas center, zoom in pixels per meter (negative flips the axes),
rotation and canvas size. Camera policies are small dataclasses holding a
CameraState plus their own parameters; ``update_camera`` looks the policy up
in a dispatch table and mutates the state in place from a scene snapshot.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Union

from ..config import get_settings
from ..core.exceptions import CameraError, EmptySceneError
from ..core.logging import get_logger
from ..scene import Vector2D, find_entity

logger = get_logger("camera")


@dataclass
class CameraState:
    """
    Representation of camera parameters.

    - ``position``: world point shown at the canvas center [m]
    - ``zoom``: scale [pix/m]
    - ``rotation``: camera rotation [rad]
    - ``canvas_width``/``canvas_height``: canvas size [px]
    """
    position: Vector2D = field(default_factory=lambda: Vector2D(0.0, 0.0))
    zoom: float = 1.0
    rotation: float = 0.0
    canvas_width: int = field(default_factory=lambda: get_settings().canvas_width)
    canvas_height: int = field(default_factory=lambda: get_settings().canvas_height)

    def __post_init__(self):
        if not isinstance(self.position, Vector2D):
            x, y = self.position
            self.position = Vector2D(float(x), float(y))

    def move(self, dx: float, dy: float) -> 'CameraState':
        """Pan by (dx, dy) meters."""
        self.position = self.position + Vector2D(dx, dy)
        return self

    def move_pixels(self, dx: float, dy: float) -> 'CameraState':
        """Pan by (dx, dy) pixels at the current zoom."""
        if self.zoom == 0:
            raise CameraError("Cannot pan by pixels at zoom 0", context={"dx": dx, "dy": dy})
        self.position = self.position + Vector2D(dx / self.zoom, dy / self.zoom)
        return self

    def rotate_by(self, angle: float) -> 'CameraState':
        self.rotation += angle
        return self

    def zoom_by(self, factor: float) -> 'CameraState':
        self.zoom *= factor
        return self

    def set_camera(self,
                   x: Optional[float] = None,
                   y: Optional[float] = None,
                   zoom: Optional[float] = None,
                   rotation: Optional[float] = None) -> 'CameraState':
        """Overwrite the given fields, keeping the others."""
        self.position = Vector2D(
            self.position.x if x is None else float(x),
            self.position.y if y is None else float(y),
        )
        if zoom is not None:
            self.zoom = float(zoom)
        if rotation is not None:
            self.rotation = float(rotation)
        return self

    def reset(self) -> 'CameraState':
        """Back to the origin with zoom 1 and no rotation."""
        return self.set_camera(x=0.0, y=0.0, zoom=1.0, rotation=0.0)


@dataclass
class StaticCamera:
    """Camera that never moves."""
    state: CameraState = field(default_factory=CameraState)


@dataclass
class TargetFollowCamera:
    """
    Camera which follows the entity with id ``target_id``.

    Setting ``x`` or ``y`` pins that axis instead of tracking it.
    """
    target_id: Hashable
    x: Optional[float] = None
    y: Optional[float] = None
    state: CameraState = field(default_factory=CameraState)


@dataclass
class ZoomingCamera:
    """Camera which moves its zoom toward ``zoom_target`` by at most ``dz`` per update."""
    zoom_target: float = 20.0
    dz: float = 0.5
    state: CameraState = field(default_factory=CameraState)


@dataclass
class SceneFollowCamera:
    """
    Camera centered over all entities.

    With ``zoom`` unset the zoom is fitted to the bounding box of all
    positions (plus ``padding`` and at least ``min_width`` x ``min_height``
    meters) and the camera sits on the box center. With a fixed ``zoom`` the
    camera sits on the mean position instead. ``x``/``y`` pin an axis.
    """
    x: Optional[float] = None
    y: Optional[float] = None
    zoom: Optional[float] = None
    padding: float = 4.0
    min_width: float = 10.0
    min_height: float = 10.0
    state: CameraState = field(default_factory=CameraState)


@dataclass
class ComposedCamera:
    """
    Composition of several cameras.

    Child updates are applied in list order to the composed camera's state;
    the children's own states are ignored.

        cam = ComposedCamera([SceneFollowCamera(), ZoomingCamera()])
    """
    cameras: List[Any] = field(default_factory=list)
    state: CameraState = field(default_factory=CameraState)


Camera = Union[StaticCamera, TargetFollowCamera, ZoomingCamera, SceneFollowCamera, ComposedCamera]


def _update_static(camera: StaticCamera, state: CameraState, scene: Iterable[Any]) -> None:
    pass


def _update_target_follow(camera: TargetFollowCamera, state: CameraState,
                          scene: Iterable[Any]) -> None:
    target = find_entity(scene, camera.target_id)
    x, y = target.position.x, target.position.y
    state.set_camera(
        x=x if camera.x is None else camera.x,
        y=y if camera.y is None else camera.y,
    )


def _update_zooming(camera: ZoomingCamera, state: CameraState, scene: Iterable[Any]) -> None:
    target, current = camera.zoom_target, state.zoom
    if target < current:
        state.set_camera(zoom=max(target, current - camera.dz))
    elif target > current:
        state.set_camera(zoom=min(target, current + camera.dz))


def _update_scene_follow(camera: SceneFollowCamera, state: CameraState,
                         scene: Iterable[Any]) -> None:
    positions = [entity.position for entity in scene]
    if not positions:
        raise EmptySceneError(type(camera).__name__)

    if camera.zoom is None:
        xs = [p.x for p in positions]
        ys = [p.y for p in positions]
        p = camera.padding
        x_min, x_max = min(xs) - p, max(xs) + p
        y_min, y_max = min(ys) - p, max(ys) + p
        width = max(x_max - x_min, camera.min_width)
        height = max(y_max - y_min, camera.min_height)
        zoom = min(state.canvas_width / width, state.canvas_height / height)
        center_x, center_y = (x_min + x_max) / 2, (y_min + y_max) / 2
    else:
        # TODO: is the centroid the right anchor with a fixed zoom? The
        # auto-zoom branch above centers on the bounding box instead.
        zoom = camera.zoom
        center_x = math.fsum(p.x for p in positions) / len(positions)
        center_y = math.fsum(p.y for p in positions) / len(positions)

    state.set_camera(
        x=center_x if camera.x is None else camera.x,
        y=center_y if camera.y is None else camera.y,
        zoom=zoom,
    )


def _update_composed(camera: ComposedCamera, state: CameraState, scene: Iterable[Any]) -> None:
    if not hasattr(scene, "__len__"):
        # generators can only be walked once
        scene = list(scene)
    for child in camera.cameras:
        _apply_update(child, state, scene)


_UPDATERS: Dict[type, Callable[[Any, CameraState, Iterable[Any]], None]] = {
    StaticCamera: _update_static,
    TargetFollowCamera: _update_target_follow,
    ZoomingCamera: _update_zooming,
    SceneFollowCamera: _update_scene_follow,
    ComposedCamera: _update_composed,
}


def _apply_update(camera: Any, state: CameraState, scene: Iterable[Any]) -> None:
    for klass in type(camera).__mro__:
        updater = _UPDATERS.get(klass)
        if updater is not None:
            updater(camera, state, scene)
            return
    raise TypeError(f"Unsupported camera type: {type(camera).__name__}")


def update_camera(camera: Camera, scene: Iterable[Any]) -> Camera:
    """
    Update ``camera.state`` in place from a scene snapshot.

    Raises:
        TargetNotFoundError: a followed entity is not in the scene
        EmptySceneError: a scene-following camera got no entities
        TypeError: ``camera`` is not a known camera policy
    """
    _apply_update(camera, camera.state, scene)
    logger.debug("Camera updated", extra={
        "camera": type(camera).__name__,
        "position": camera.state.position.to_tuple(),
        "zoom": camera.state.zoom,
        "rotation": camera.state.rotation
    })
    return camera


def camera_state_of(camera: Union[Camera, CameraState]) -> CameraState:
    """The CameraState of a camera policy, or the state itself."""
    if isinstance(camera, CameraState):
        return camera
    state = getattr(camera, "state", None)
    if not isinstance(state, CameraState):
        raise TypeError(f"Expected a camera or CameraState, got {type(camera).__name__}")
    return state
