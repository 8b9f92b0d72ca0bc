"""Fold discovered leaves into material/thickness groups."""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from cutlist.catalog import ThicknessResolution, resolve_standard_thickness
from cutlist.contracts import (
    UNDEFINED_MATERIAL,
    Cutlist,
    CutlistConfig,
    GroupRecord,
    PartRecord,
    Size,
)
from cutlist.discovery import Leaf
from cutlist.scene import BoundingBox
from cutlist.units import length_tolerance, quantize_length

logger = logging.getLogger(__name__)

NO_PARTS_IN_SELECTION = "No component instance was found in your selection"
NO_PARTS_IN_SCENE = "No component instance was found in your scene"


def size_from_bounds(bounds: BoundingBox) -> Size:
    return Size.from_extents((bounds.width, bounds.height, bounds.depth))


def raw_size_for(
    size: Size, config: CutlistConfig, unit: str = "mm"
) -> Tuple[Size, ThicknessResolution]:
    """Apply stock margins, then round the thickness up to the catalog.

    Thicknesses match a catalog entry within the length tolerance of
    ``unit``. A thickness with no match is quantized to that tolerance so
    that float noise does not split one thickness into several groups.
    """
    std_thickness = resolve_standard_thickness(
        size.thickness + config.thickness_increase,
        config.std_thicknesses,
        tolerance=length_tolerance(unit),
    )
    if not std_thickness.available:
        std_thickness = ThicknessResolution(
            value=quantize_length(std_thickness.value, unit), available=False
        )
    raw_size = Size(
        size.length + config.length_increase,
        size.width + config.width_increase,
        std_thickness.value,
    )
    return raw_size, std_thickness


def add_leaf(cutlist: Cutlist, leaf: Leaf, config: CutlistConfig) -> PartRecord:
    """Count one leaf occurrence into its group and part."""
    component = leaf.instance
    definition = component.definition

    material_name = component.material_name or UNDEFINED_MATERIAL

    size = size_from_bounds(definition.faces_bounds())
    raw_size, std_thickness = raw_size_for(size, config, cutlist.length_unit)

    key = (material_name, raw_size.thickness)
    group_def = cutlist.get_group_def(key)
    if group_def is None:
        group_def = GroupRecord(
            material_name=material_name,
            raw_thickness=raw_size.thickness,
            raw_thickness_available=std_thickness.available,
        )
        cutlist.set_group_def(key, group_def)
        if not std_thickness.available:
            logger.debug(
                "No standard thickness for %s (%.3f)", material_name, raw_size.thickness
            )

    part_def = group_def.get_part_def(definition.name)
    if part_def is None:
        part_def = PartRecord(name=definition.name, size=size, raw_size=raw_size)
        group_def.set_part_def(definition.name, part_def)
    part_def.count += 1
    part_def.add_component_guid(leaf.occurrence_id)

    group_def.part_count += 1
    return part_def


def populate_cutlist(
    cutlist: Cutlist,
    leaves: Iterable[Leaf],
    config: CutlistConfig,
    *,
    use_selection: bool,
) -> Cutlist:
    leaves = list(leaves)
    if not leaves:
        cutlist.add_error(NO_PARTS_IN_SELECTION if use_selection else NO_PARTS_IN_SCENE)
    for leaf in leaves:
        add_leaf(cutlist, leaf, config)
    return cutlist
