"""
Vehicle entities and scene snapshots.

These are the minimal scene-side types the renderer and cameras consume:
anything iterable whose items expose ``id``, ``position``, ``heading``,
``length`` and ``width`` can stand in for a Frame.
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Iterator, List, Optional

from .geometry import Pose2D, Vector2D
from ..core.exceptions import TargetNotFoundError


@dataclass(frozen=True)
class VehicleDef:
    """Vehicle footprint [m]."""
    length: float = 4.0
    width: float = 1.8


@dataclass
class VehicleState:
    """Global pose and speed of a vehicle."""
    posG: Pose2D
    v: float = 0.0


@dataclass
class Entity:
    """A vehicle in a 2D scene."""
    state: VehicleState
    definition: VehicleDef = field(default_factory=VehicleDef)
    id: Hashable = 0
    color: Optional[Any] = None

    @property
    def position(self) -> Vector2D:
        return self.state.posG.position

    @property
    def heading(self) -> float:
        return self.state.posG.theta

    @property
    def length(self) -> float:
        return self.definition.length

    @property
    def width(self) -> float:
        return self.definition.width


@dataclass
class LaneVehicle:
    """
    A vehicle constrained to a straight lane.

    ``s`` is the distance along the lane, which is drawn on the world x axis.
    """
    s: float
    v: float = 0.0
    definition: VehicleDef = field(default_factory=VehicleDef)
    id: Hashable = 0
    color: Optional[Any] = None

    @property
    def position(self) -> Vector2D:
        return Vector2D(self.s, 0.0)

    @property
    def heading(self) -> float:
        return 0.0

    @property
    def length(self) -> float:
        return self.definition.length

    @property
    def width(self) -> float:
        return self.definition.width


class Frame:
    """Snapshot of all entities in a scene at one instant."""

    def __init__(self, entities: Optional[Iterable[Any]] = None):
        self._entities: List[Any] = list(entities or [])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __getitem__(self, index: int) -> Any:
        return self._entities[index]

    def push(self, entity: Any) -> 'Frame':
        self._entities.append(entity)
        return self

    def get_by_id(self, entity_id: Hashable) -> Any:
        """
        Look up an entity by identifier.

        Raises:
            TargetNotFoundError: no entity carries ``entity_id``
        """
        for entity in self._entities:
            if entity.id == entity_id:
                return entity
        raise TargetNotFoundError(entity_id)

    def __repr__(self) -> str:
        return f"Frame({len(self._entities)} entities)"


def find_entity(scene: Iterable[Any], entity_id: Hashable) -> Any:
    """Look up ``entity_id`` in any scene snapshot, Frame or plain iterable."""
    if isinstance(scene, Frame):
        return scene.get_by_id(entity_id)
    for entity in scene:
        if entity.id == entity_id:
            return entity
    raise TargetNotFoundError(entity_id)
