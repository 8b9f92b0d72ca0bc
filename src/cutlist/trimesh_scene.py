"""
Build a SceneSnapshot from a trimesh scene graph.

Graph nodes carrying geometry become component instances, and nodes without
geometry become groups. Nodes sharing a geometry share one definition, named
after the geometry. Mesh geometry is a face of its definition and path
geometry an edge.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import trimesh
from trimesh.bounds import corners as bounds_corners
from trimesh.path import Path3D
from trimesh.transformations import transform_points

from cutlist.scene import (
    BoundingBox,
    ComponentDefinition,
    ComponentInstance,
    Edge,
    Entity,
    Face,
    Group,
    Material,
    SceneSnapshot,
)
from cutlist.units import normalize_unit

logger = logging.getLogger(__name__)

_SUPPORTED = (trimesh.Trimesh, Path3D)


def load_scene_snapshot(
    scene_path: Union[str, Path],
    *,
    length_unit: Optional[str] = None,
    selection: Iterable[str] = (),
    hidden: Iterable[str] = (),
) -> SceneSnapshot:
    """Load any trimesh-readable scene file (.glb/.gltf/.obj/.stl/...)."""
    scene_path = Path(scene_path)
    loaded = trimesh.load(str(scene_path), force="scene")
    if not loaded.geometry:
        raise ValueError(f"Scene contains no geometry: {scene_path}")
    logger.info(
        "Loaded scene %s: %d geometries, %d nodes",
        scene_path.name,
        len(loaded.geometry),
        len(loaded.graph.nodes),
    )
    return snapshot_from_trimesh(
        loaded,
        path=str(scene_path),
        length_unit=length_unit,
        selection=selection,
        hidden=hidden,
    )


def snapshot_from_trimesh(
    scene: trimesh.Scene,
    *,
    path: str = "",
    length_unit: Optional[str] = None,
    selection: Iterable[str] = (),
    hidden: Iterable[str] = (),
) -> SceneSnapshot:
    """Convert ``scene`` into the pipeline's scene model.

    Args:
        scene: Source scene graph.
        path: Scene file path shown in the report.
        length_unit: Unit of the scene coordinates; defaults to
            ``scene.units`` and then to millimetres.
        selection: Node names to treat as the user's selection.
        hidden: Node names to mark invisible.

    Raises:
        ValueError: On unknown node names or an unknown unit.
    """
    builder = _SnapshotBuilder(scene, hidden=set(hidden))
    roots = [builder.entity(node) for node in builder.children[builder.base]]

    selected: List[Entity] = []
    for name in selection:
        if name not in builder.local:
            raise ValueError(f"Selected node not in scene: {name!r}")
        selected.append(builder.entity(name))

    unknown_hidden = builder.hidden - set(builder.local)
    if unknown_hidden:
        raise ValueError(f"Hidden nodes not in scene: {sorted(unknown_hidden)}")

    unit = length_unit or getattr(scene, "units", None) or "mm"
    return SceneSnapshot(
        entities=roots,
        selection=selected,
        path=path,
        length_unit=normalize_unit(unit),
        warnings=list(builder.warnings),
    )


class _SnapshotBuilder:
    """Walks the scene graph once, memoizing entities per node."""

    def __init__(self, scene: trimesh.Scene, hidden: set):
        self.scene = scene
        self.hidden = hidden
        self.base = scene.graph.base_frame
        self.children: Dict[str, List[str]] = defaultdict(list)
        self.local: Dict[str, np.ndarray] = {}
        self.geometry_name: Dict[str, Optional[str]] = {}
        for parent, child, _ in scene.graph.to_edgelist():
            matrix, geometry_name = scene.graph.get(frame_to=child, frame_from=parent)
            self.children[parent].append(child)
            self.local[child] = np.asarray(matrix, dtype=float)
            self.geometry_name[child] = geometry_name
        self._entities: Dict[str, Entity] = {}
        self._definitions: Dict[str, ComponentDefinition] = {}
        self.warnings: List[str] = []

    def entity(self, node: str) -> Entity:
        if node not in self._entities:
            self._entities[node] = self._build(node)
        return self._entities[node]

    def _build(self, node: str) -> Entity:
        visible = node not in self.hidden
        geometry_name = self.geometry_name.get(node)
        child_entities = [self.entity(child) for child in self.children[node]]

        if geometry_name is None:
            return Group(entities=child_entities, name=node, visible=visible)

        geometry = self.scene.geometry[geometry_name]
        if child_entities:
            # Node-specific content: its own geometry plus its child nodes
            definition = ComponentDefinition(
                name=geometry_name,
                entities=self._entities_of(geometry_name) + child_entities,
            )
        else:
            definition = self._shared_definition(geometry_name)

        corners = transform_points(self._subtree_corners(node), self.local[node])
        return ComponentInstance(
            definition=definition,
            guid=node,
            bounds=BoundingBox.from_points(corners),
            material=_material_of(geometry),
            visible=visible,
        )

    def _shared_definition(self, geometry_name: str) -> ComponentDefinition:
        if geometry_name not in self._definitions:
            self._definitions[geometry_name] = ComponentDefinition(
                name=geometry_name, entities=self._entities_of(geometry_name)
            )
        return self._definitions[geometry_name]

    def _entities_of(self, geometry_name: str) -> List[Entity]:
        geometry = self.scene.geometry[geometry_name]
        entities = _geometry_entities(geometry)
        if entities is None:
            message = (
                f"Ignoring unsupported geometry {geometry_name!r} "
                f"({type(geometry).__name__})"
            )
            if message not in self.warnings:
                logger.warning("%s", message)
                self.warnings.append(message)
            return []
        return entities

    def _subtree_corners(self, node: str) -> np.ndarray:
        """Bounding corners of ``node`` and its descendants, in the node frame."""
        points = [np.zeros((0, 3))]
        geometry_name = self.geometry_name.get(node)
        if geometry_name is not None:
            geometry = self.scene.geometry[geometry_name]
            bounds = geometry.bounds if isinstance(geometry, _SUPPORTED) else None
            if bounds is not None:
                points.append(bounds_corners(bounds))
        for child in self.children[node]:
            child_corners = self._subtree_corners(child)
            if len(child_corners):
                points.append(transform_points(child_corners, self.local[child]))
        return np.vstack(points)


def _geometry_entities(geometry) -> Optional[List[Entity]]:
    """Entities for one geometry, or None when its type is not supported."""
    if not isinstance(geometry, _SUPPORTED):
        return None
    bounds = geometry.bounds
    if bounds is None:
        return []
    box = BoundingBox(bounds[0], bounds[1])
    if isinstance(geometry, trimesh.Trimesh):
        return [Face(bounds=box)]
    return [Edge(bounds=box)]


def _material_of(geometry) -> Optional[Material]:
    material = getattr(getattr(geometry, "visual", None), "material", None)
    name = getattr(material, "name", None)
    if not name:
        return None
    return Material(name=str(name))
