"""
Scene model read by the cutlist pipeline.

A scene is a tree of groups and component instances. Instances share a
ComponentDefinition, so the same definition content may be reached through
many instances. Faces and edges are the raw geometry inside groups and
definitions. The pipeline only reads this model; adapters (see
trimesh_scene.py) build it from real scene files.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import ClassVar, List, Optional, Sequence, Tuple, Union

import numpy as np


class EntityKind(Enum):
    """Kinds of scene entities."""
    GROUP = "group"
    COMPONENT_INSTANCE = "component_instance"
    FACE = "face"
    EDGE = "edge"


@dataclass(frozen=True)
class Layer:
    """Display layer (tag) an entity is assigned to."""
    name: str = "Layer0"
    visible: bool = True


DEFAULT_LAYER = Layer()


@dataclass(frozen=True)
class Material:
    name: str


class BoundingBox:
    """Axis-aligned box accumulated from points or other boxes.

    A new box is empty; its extents are zero until something is added.
    """

    def __init__(self, min_corner=None, max_corner=None):
        if min_corner is None or max_corner is None:
            self.min = np.full(3, np.inf)
            self.max = np.full(3, -np.inf)
        else:
            self.min = np.asarray(min_corner, dtype=float).reshape(3)
            self.max = np.asarray(max_corner, dtype=float).reshape(3)

    @classmethod
    def from_points(cls, points) -> "BoundingBox":
        box = cls()
        box.add_points(points)
        return box

    @classmethod
    def from_extents(cls, extents, origin=(0.0, 0.0, 0.0)) -> "BoundingBox":
        """Box with one corner at ``origin`` spanning ``extents``."""
        lo = np.asarray(origin, dtype=float)
        return cls(lo, lo + np.asarray(extents, dtype=float))

    @property
    def is_empty(self) -> bool:
        return bool(np.any(self.min > self.max))

    def add(self, other: "BoundingBox") -> "BoundingBox":
        if not other.is_empty:
            self.min = np.minimum(self.min, other.min)
            self.max = np.maximum(self.max, other.max)
        return self

    def add_points(self, points) -> "BoundingBox":
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        if len(pts):
            self.min = np.minimum(self.min, pts.min(axis=0))
            self.max = np.maximum(self.max, pts.max(axis=0))
        return self

    @property
    def extents(self) -> np.ndarray:
        if self.is_empty:
            return np.zeros(3)
        return self.max - self.min

    @property
    def width(self) -> float:
        return float(self.extents[0])

    @property
    def height(self) -> float:
        return float(self.extents[1])

    @property
    def depth(self) -> float:
        return float(self.extents[2])

    def __repr__(self) -> str:
        if self.is_empty:
            return "BoundingBox(empty)"
        return f"BoundingBox({self.min.tolist()}, {self.max.tolist()})"


class _Displayable:
    visible: bool
    layer: Layer

    def is_displayed(self) -> bool:
        """Visible itself and on a visible layer."""
        return bool(self.visible and self.layer.visible)


@dataclass
class Face(_Displayable):
    """A surface of a definition or group; the only geometry that is measured."""
    bounds: BoundingBox
    visible: bool = True
    layer: Layer = DEFAULT_LAYER
    kind: ClassVar[EntityKind] = EntityKind.FACE

    def children(self) -> Tuple:
        return ()


@dataclass
class Edge(_Displayable):
    """Edges and construction geometry. Never measured, never recursed into."""
    bounds: BoundingBox = field(default_factory=BoundingBox)
    visible: bool = True
    layer: Layer = DEFAULT_LAYER
    kind: ClassVar[EntityKind] = EntityKind.EDGE

    def children(self) -> Tuple:
        return ()


@dataclass
class ComponentDefinition:
    """Shared content of component instances."""
    name: str
    entities: List["Entity"] = field(default_factory=list)

    def faces_bounds(self) -> BoundingBox:
        """Bounds of the direct Face entities only."""
        bounds = BoundingBox()
        for entity in self.entities:
            if entity.kind is EntityKind.FACE:
                bounds.add(entity.bounds)
        return bounds


@dataclass
class ComponentInstance(_Displayable):
    """A placed copy of a definition.

    ``bounds`` is the instance's box in its parent's frame and ``guid`` a
    unique handle back into the scene.
    """
    definition: ComponentDefinition
    guid: str
    bounds: BoundingBox
    material: Optional[Material] = None
    visible: bool = True
    layer: Layer = DEFAULT_LAYER
    kind: ClassVar[EntityKind] = EntityKind.COMPONENT_INSTANCE

    def children(self) -> List["Entity"]:
        return self.definition.entities

    @property
    def material_name(self) -> Optional[str]:
        return self.material.name if self.material is not None else None


@dataclass
class Group(_Displayable):
    """Unshared container of entities."""
    entities: List["Entity"] = field(default_factory=list)
    name: str = ""
    visible: bool = True
    layer: Layer = DEFAULT_LAYER
    kind: ClassVar[EntityKind] = EntityKind.GROUP

    def children(self) -> List["Entity"]:
        return self.entities


Entity = Union[Group, ComponentInstance, Face, Edge]


@dataclass
class SceneSnapshot:
    """Everything the pipeline needs to know about the active scene.

    ``entities`` are the top-level entities, ``selection`` the user's current
    selection (possibly empty) and ``warnings`` any problems met while
    reading the scene.
    """
    entities: Sequence[Entity]
    selection: Sequence[Entity] = ()
    path: str = ""
    length_unit: str = "mm"
    warnings: Sequence[str] = ()

    def roots(self) -> Tuple[List[Entity], bool]:
        """Entities to walk and whether they come from the selection."""
        if self.selection:
            return list(self.selection), True
        return list(self.entities), False

    @property
    def filename(self) -> str:
        return PurePath(self.path).name if self.path else ""
