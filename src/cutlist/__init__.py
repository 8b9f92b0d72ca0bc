"""Public API for cutlist extraction from nested 3D scenes."""

from cutlist.contracts import CutlistConfig, CutlistReport, ReportGroup, ReportPart
from cutlist.pipeline import generate_cutlist
from cutlist.scene import SceneSnapshot

__all__ = [
    "CutlistConfig",
    "CutlistReport",
    "ReportGroup",
    "ReportPart",
    "SceneSnapshot",
    "generate_cutlist",
]
