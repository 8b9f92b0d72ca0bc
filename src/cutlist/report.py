"""Turn a populated Cutlist into the ordered, numbered report."""

from __future__ import annotations

from typing import List

from cutlist.contracts import (
    Cutlist,
    CutlistConfig,
    CutlistReport,
    GroupRecord,
    PartRecord,
    ReportGroup,
    ReportPart,
)
from cutlist.numbering import PartNumberSequence


def sorted_part_defs(group_def: GroupRecord) -> List[PartRecord]:
    """Thickest first, then longest, then widest."""
    return sorted(
        group_def.part_defs.values(),
        key=lambda p: (p.size.thickness, p.size.length, p.size.width),
        reverse=True,
    )


def build_report(cutlist: Cutlist, config: CutlistConfig) -> CutlistReport:
    """Number parts and total groups, thickest group first.

    Numbering follows raw thickness descending; the emitted groups are then
    reordered by material name and raw thickness without renumbering.
    """
    unit = cutlist.length_unit
    sequence = PartNumberSequence(letters=config.part_number_letter)

    groups: List[ReportGroup] = []
    group_defs = sorted(
        cutlist.group_defs.values(), key=lambda g: g.raw_thickness, reverse=True
    )
    for group_def in group_defs:
        if config.part_number_sequence_by_group:
            sequence.reset()

        raw_area_m2 = 0.0
        raw_volume_m3 = 0.0
        parts: List[ReportPart] = []
        for part_def in sorted_part_defs(group_def):
            raw_area_m2 += part_def.raw_size.area_m2(unit)
            raw_volume_m3 += part_def.raw_size.volume_m3(unit)
            parts.append(
                ReportPart(
                    name=part_def.name,
                    length=part_def.size.length,
                    width=part_def.size.width,
                    thickness=part_def.size.thickness,
                    count=part_def.count,
                    raw_length=part_def.raw_size.length,
                    raw_width=part_def.raw_size.width,
                    number=sequence.next(),
                    component_guids=tuple(part_def.component_guids),
                )
            )

        groups.append(
            ReportGroup(
                id=group_def.id,
                material_name=group_def.material_name,
                part_count=group_def.part_count,
                raw_thickness=group_def.raw_thickness,
                raw_thickness_available=group_def.raw_thickness_available,
                raw_area_m2=raw_area_m2,
                raw_volume_m3=raw_volume_m3,
                parts=tuple(parts),
            )
        )

    groups.sort(key=lambda g: (g.material_name, -g.raw_thickness))

    return CutlistReport(
        status=cutlist.status,
        errors=tuple(cutlist.errors),
        warnings=tuple(cutlist.warnings),
        filepath=cutlist.filepath,
        length_unit=cutlist.length_unit,
        groups=tuple(groups),
    )
