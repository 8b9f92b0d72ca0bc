"""Contracts for the cutlist pipeline: sizes, aggregates, config and report."""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from cutlist.catalog import parse_std_thicknesses
from cutlist.units import parse_length, to_m2, to_m3

STATUS_SUCCESS = "success"

UNDEFINED_MATERIAL = "[undefined material]"

GroupKey = Tuple[str, float]


@dataclass(frozen=True)
class Size:
    """Length, width and thickness of a part.

    Nominal sizes come from ``from_extents`` and satisfy
    length >= width >= thickness. Raw sizes carry margins and a rounded-up
    thickness, so the ordering is not re-checked for them.
    """

    length: float
    width: float
    thickness: float

    @classmethod
    def from_extents(cls, extents: Sequence[float]) -> "Size":
        if len(extents) != 3:
            raise ValueError(f"Expected three extents, got {len(extents)}")
        ordered = sorted((float(e) for e in extents), reverse=True)
        return cls(ordered[0], ordered[1], ordered[2])

    @property
    def area(self) -> float:
        return self.length * self.width

    @property
    def volume(self) -> float:
        return self.length * self.width * self.thickness

    def area_m2(self, unit: str) -> float:
        return to_m2(self.area, unit)

    def volume_m3(self, unit: str) -> float:
        return to_m3(self.volume, unit)


@dataclass
class PartRecord:
    """All instances of one definition inside a group."""

    name: str
    size: Size
    raw_size: Size
    count: int = 0
    component_guids: List[str] = field(default_factory=list)

    def add_component_guid(self, guid: str) -> None:
        self.component_guids.append(guid)


def group_id_for(key: GroupKey) -> str:
    material_name, raw_thickness = key
    digest = hashlib.sha256(f"{material_name}\0{raw_thickness!r}".encode("utf-8"))
    return digest.hexdigest()[:16]


@dataclass
class GroupRecord:
    """Parts sharing one material and one raw thickness."""

    material_name: str
    raw_thickness: float
    raw_thickness_available: bool
    part_count: int = 0
    part_defs: Dict[str, PartRecord] = field(default_factory=dict)

    @property
    def key(self) -> GroupKey:
        return (self.material_name, self.raw_thickness)

    @property
    def id(self) -> str:
        return group_id_for(self.key)

    def get_part_def(self, name: str) -> Optional[PartRecord]:
        return self.part_defs.get(name)

    def set_part_def(self, name: str, part_def: PartRecord) -> None:
        self.part_defs[name] = part_def


@dataclass
class Cutlist:
    """Aggregate root for one generation request."""

    status: str
    filepath: str
    length_unit: str
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    group_defs: Dict[GroupKey, GroupRecord] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def get_group_def(self, key: GroupKey) -> Optional[GroupRecord]:
        return self.group_defs.get(key)

    def set_group_def(self, key: GroupKey, group_def: GroupRecord) -> None:
        self.group_defs[key] = group_def


@dataclass(frozen=True)
class CutlistConfig:
    """User parameters for one cutlist generation.

    Margins and standard thicknesses are expressed in the scene's length unit.
    """

    length_increase: float = 0.0
    width_increase: float = 0.0
    thickness_increase: float = 0.0
    std_thicknesses: Tuple[float, ...] = ()
    part_number_letter: bool = False
    part_number_sequence_by_group: bool = False

    def validate(self) -> None:
        for name in ("length_increase", "width_increase", "thickness_increase"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"CutlistConfig.{name} must be a finite number")
        previous = 0.0
        for thickness in self.std_thicknesses:
            if not isinstance(thickness, (int, float)) or not math.isfinite(thickness):
                raise ValueError(f"Standard thickness must be a number: {thickness!r}")
            if thickness <= 0:
                raise ValueError(f"Standard thickness must be positive: {thickness}")
            if thickness < previous:
                raise ValueError(
                    "Standard thicknesses must be in ascending order, got "
                    f"{list(self.std_thicknesses)}"
                )
            previous = thickness

    @classmethod
    def from_params(cls, params: Mapping[str, Any], unit: str = "mm") -> "CutlistConfig":
        """Build a config from the dialog payload.

        Margins are numbers in ``unit`` or length strings with their own
        unit (``"10mm"``, ``"0.5in"``); ``std_thicknesses`` is the
        semicolon separated millimetre string (``"4;6;10"``).
        """
        std = params.get("std_thicknesses", "")
        if isinstance(std, str):
            std_thicknesses = parse_std_thicknesses(std, unit)
        else:
            std_thicknesses = tuple(float(t) for t in std)
        config = cls(
            length_increase=parse_length(params.get("length_increase", 0.0), unit),
            width_increase=parse_length(params.get("width_increase", 0.0), unit),
            thickness_increase=parse_length(
                params.get("thickness_increase", 0.0), unit
            ),
            std_thicknesses=std_thicknesses,
            part_number_letter=bool(params.get("part_number_letter", False)),
            part_number_sequence_by_group=bool(
                params.get("part_number_sequence_by_group", False)
            ),
        )
        config.validate()
        return config


# ─── Report values ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReportPart:
    name: str
    length: float
    width: float
    thickness: float
    count: int
    raw_length: float
    raw_width: float
    number: str
    component_guids: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "length": self.length,
            "width": self.width,
            "thickness": self.thickness,
            "count": self.count,
            "raw_length": self.raw_length,
            "raw_width": self.raw_width,
            "number": self.number,
            "component_guids": list(self.component_guids),
        }


@dataclass(frozen=True)
class ReportGroup:
    id: str
    material_name: str
    part_count: int
    raw_thickness: float
    raw_thickness_available: bool
    raw_area_m2: float
    raw_volume_m3: float
    parts: Tuple[ReportPart, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "material_name": self.material_name,
            "part_count": self.part_count,
            "raw_thickness": self.raw_thickness,
            "raw_thickness_available": self.raw_thickness_available,
            "raw_area_m2": self.raw_area_m2,
            "raw_volume_m3": self.raw_volume_m3,
            "parts": [part.to_dict() for part in self.parts],
        }


@dataclass(frozen=True)
class CutlistReport:
    """Ordered, numbered cutlist handed to the rendering layer."""

    status: str
    errors: Tuple[str, ...]
    warnings: Tuple[str, ...]
    filepath: str
    length_unit: str
    groups: Tuple[ReportGroup, ...]

    @property
    def part_count(self) -> int:
        return sum(group.part_count for group in self.groups)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "filepath": self.filepath,
            "length_unit": self.length_unit,
            "groups": [group.to_dict() for group in self.groups],
        }
