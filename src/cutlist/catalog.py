"""
Standard thickness catalogs.

A catalog is an ascending sequence of stocked thicknesses. Parts are rounded
up to the nearest stocked thickness; a part thicker than every entry keeps
its own thickness and is flagged as non-standard.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from cutlist.units import INCH_TO_MM, from_mm


@dataclass(frozen=True)
class ThicknessResolution:
    """Outcome of matching a thickness against a catalog."""

    value: float
    available: bool


def resolve_standard_thickness(
    thickness: float, std_thicknesses: Sequence[float], tolerance: float = 0.0
) -> ThicknessResolution:
    """Return the first catalog thickness >= ``thickness``.

    Never rounds down. A thickness within ``tolerance`` above a catalog entry
    matches that entry. When nothing qualifies (or the catalog is empty) the
    actual thickness is returned unchanged and marked unavailable.
    """
    for std_thickness in std_thicknesses:
        if thickness <= std_thickness + tolerance:
            return ThicknessResolution(value=float(std_thickness), available=True)
    return ThicknessResolution(value=float(thickness), available=False)


def parse_std_thicknesses(value: str, unit: str = "mm") -> Tuple[float, ...]:
    """Parse a ``"4;6;10"`` millimetre list into ``unit`` values.

    Blank tokens are ignored. Raises ValueError on anything non-numeric.
    """
    thicknesses: List[float] = []
    for token in str(value).split(";"):
        token = token.strip()
        if token.lower().endswith("mm"):
            token = token[:-2].strip()
        if not token:
            continue
        try:
            thickness_mm = float(token.replace(",", "."))
        except ValueError:
            raise ValueError(f"Invalid standard thickness: {token!r}") from None
        if not math.isfinite(thickness_mm) or thickness_mm <= 0:
            raise ValueError(f"Standard thickness must be positive: {token!r}")
        thicknesses.append(from_mm(thickness_mm, unit))
    return tuple(thicknesses)


@dataclass(frozen=True)
class StockCatalog:
    """Sheet stock with the thicknesses a supplier keeps on hand."""

    name: str
    thicknesses_inch: Tuple[float, ...]

    @property
    def thicknesses_mm(self) -> Tuple[float, ...]:
        return tuple(t * INCH_TO_MM for t in self.thicknesses_inch)

    def thicknesses_in(self, unit: str) -> Tuple[float, ...]:
        return tuple(from_mm(t, unit) for t in self.thicknesses_mm)


STOCK_CATALOGS: Dict[str, StockCatalog] = {
    "plywood_baltic_birch": StockCatalog(
        name="Baltic Birch Plywood",
        thicknesses_inch=(0.125, 0.187, 0.250, 0.375, 0.500, 0.750),
    ),
    "mdf": StockCatalog(
        name="MDF",
        thicknesses_inch=(0.125, 0.187, 0.250, 0.500, 0.750),
    ),
    "hardboard": StockCatalog(
        name="Hardboard",
        thicknesses_inch=(0.125, 0.250),
    ),
    # Nominal hardwood boards, surfaced thickness
    "hardwood_s2s": StockCatalog(
        name="Hardwood S2S",
        thicknesses_inch=(0.75, 1.0, 1.3125, 1.75),
    ),
    "acrylic_clear": StockCatalog(
        name="Acrylic Clear",
        thicknesses_inch=(0.060, 0.118, 0.177, 0.220, 0.354, 0.472),
    ),
}
