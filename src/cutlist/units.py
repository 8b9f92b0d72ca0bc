"""Linear units understood by the cutlist pipeline."""

from __future__ import annotations

import math
import re
from typing import Dict, Union

INCH_TO_MM = 25.4

# Millimetres per unit
UNIT_TO_MM: Dict[str, float] = {
    "mm": 1.0,
    "cm": 10.0,
    "m": 1000.0,
    "in": INCH_TO_MM,
    "ft": 12 * INCH_TO_MM,
}

_ALIASES = {
    "millimeter": "mm",
    "millimeters": "mm",
    "centimeter": "cm",
    "centimeters": "cm",
    "meter": "m",
    "meters": "m",
    "inch": "in",
    "inches": "in",
    "foot": "ft",
    "feet": "ft",
}


def normalize_unit(unit: str) -> str:
    key = str(unit).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in UNIT_TO_MM:
        raise ValueError(
            f"Unknown length unit {unit!r}, expected one of {sorted(UNIT_TO_MM)}"
        )
    return key


def mm_per_unit(unit: str) -> float:
    return UNIT_TO_MM[normalize_unit(unit)]


def from_mm(value_mm: float, unit: str) -> float:
    """Convert a millimetre value into ``unit``."""
    return float(value_mm) / mm_per_unit(unit)


def to_m2(area: float, unit: str) -> float:
    """Convert an area measured in ``unit``² into square metres."""
    meters = mm_per_unit(unit) / 1000.0
    return float(area) * meters * meters


def to_m3(volume: float, unit: str) -> float:
    """Convert a volume measured in ``unit``³ into cubic metres."""
    meters = mm_per_unit(unit) / 1000.0
    return float(volume) * meters * meters * meters


# Two lengths closer than this are the same length (0.001 inch)
LENGTH_TOLERANCE_MM = 0.001 * INCH_TO_MM


def length_tolerance(unit: str) -> float:
    return from_mm(LENGTH_TOLERANCE_MM, unit)


def quantize_length(value: float, unit: str) -> float:
    """Round ``value`` to the decimal place just below the length tolerance."""
    digits = math.ceil(-math.log10(length_tolerance(unit)))
    return round(float(value), digits)


_LENGTH_RE = re.compile(r"^\s*([-+]?[0-9]*[.,]?[0-9]+)\s*([a-z\"']*)\s*$", re.IGNORECASE)

_SUFFIXES = {"\"": "in", "'": "ft"}


def parse_length(value: Union[str, float, int], unit: str) -> float:
    """Parse a margin such as ``10``, ``"10"``, ``"10mm"`` or ``"0.5in"`` into ``unit``.

    Bare numbers are already in ``unit``.
    """
    if isinstance(value, (int, float)):
        return float(value)
    match = _LENGTH_RE.match(str(value))
    if match is None:
        raise ValueError(f"Invalid length: {value!r}")
    number = float(match.group(1).replace(",", "."))
    suffix = match.group(2)
    if not suffix:
        return number
    suffix = _SUFFIXES.get(suffix, suffix)
    return from_mm(number * mm_per_unit(suffix), unit)
