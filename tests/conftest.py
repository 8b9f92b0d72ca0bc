"""
Shared test fixtures for cutlist pipeline tests.
"""
import sys
from pathlib import Path

import numpy as np
import pytest
import trimesh

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cutlist.contracts import CutlistConfig
from cutlist.scene import (
    BoundingBox,
    ComponentDefinition,
    ComponentInstance,
    Edge,
    Face,
    Group,
    Material,
    SceneSnapshot,
)

WOOD = Material("wood")


def make_definition(name, extents, with_edges=False):
    """Definition made of one face spanning ``extents``."""
    entities = [Face(bounds=BoundingBox.from_extents(extents))]
    if with_edges:
        # Construction line sticking far out of the faces
        entities.append(Edge(bounds=BoundingBox.from_extents([1000.0, 1.0, 1.0])))
    return ComponentDefinition(name=name, entities=entities)


def make_instance(definition, guid, material=None, extents=None, **kwargs):
    """Instance whose bounds default to its definition's face bounds."""
    if extents is None:
        bounds = definition.faces_bounds()
    else:
        bounds = BoundingBox.from_extents(extents)
    return ComponentInstance(
        definition=definition,
        guid=guid,
        bounds=bounds,
        material=material,
        **kwargs,
    )


@pytest.fixture
def table_snapshot():
    """Two wooden legs (50x5x5 cm) and a wooden top (100x60x3 cm), in cm."""
    leg = make_definition("Leg", [5.0, 50.0, 5.0])
    top = make_definition("Top", [100.0, 3.0, 60.0])
    entities = [
        make_instance(leg, "leg-1", WOOD),
        make_instance(leg, "leg-2", WOOD),
        make_instance(top, "top-1", WOOD),
    ]
    return SceneSnapshot(entities=entities, path="/projects/table.skp", length_unit="cm")


@pytest.fixture
def cabinet_snapshot():
    """Nested assembly: a cabinet group with two identical drawer instances.

    Each drawer instance holds a front and two sides; the carcass holds a
    back panel. Units are mm.
    """
    front = make_definition("Front", [400.0, 150.0, 18.0])
    side = make_definition("Side", [350.0, 120.0, 12.0])
    back = make_definition("Back", [600.0, 800.0, 6.0])

    drawer = ComponentDefinition(
        name="Drawer",
        entities=[
            make_instance(front, "front", WOOD),
            make_instance(side, "side-l", WOOD),
            make_instance(side, "side-r", WOOD),
        ],
    )
    carcass = Group(
        name="carcass",
        entities=[
            make_instance(back, "back", Material("hardboard")),
            make_instance(drawer, "drawer-1", extents=[400.0, 150.0, 350.0]),
            make_instance(drawer, "drawer-2", extents=[400.0, 150.0, 350.0]),
        ],
    )
    return SceneSnapshot(entities=[carcass], path="cabinet.skp", length_unit="mm")


@pytest.fixture
def default_config():
    return CutlistConfig(std_thicknesses=(4.0, 6.0, 10.0))


@pytest.fixture
def table_scene():
    """trimesh scene: two leg nodes sharing one geometry, top under a group."""
    scene = trimesh.Scene()
    leg = trimesh.creation.box(extents=[500.0, 50.0, 50.0])
    scene.add_geometry(leg, geom_name="Leg", node_name="leg_1")

    shifted = np.eye(4)
    shifted[:3, 3] = [0.0, 200.0, 0.0]
    scene.graph.update(
        frame_to="leg_2",
        frame_from=scene.graph.base_frame,
        matrix=shifted,
        geometry="Leg",
    )

    scene.graph.update(
        frame_to="assembly", frame_from=scene.graph.base_frame, matrix=np.eye(4)
    )
    top = trimesh.creation.box(extents=[1000.0, 600.0, 30.0])
    scene.add_geometry(
        top, geom_name="Top", node_name="top", parent_node_name="assembly"
    )
    return scene


@pytest.fixture
def table_scene_file(table_scene, tmp_path):
    path = tmp_path / "table.glb"
    table_scene.export(str(path))
    return str(path)
