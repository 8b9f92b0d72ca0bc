"""Scene snapshot -> cutlist report."""

from __future__ import annotations

import logging

from cutlist.aggregate import populate_cutlist
from cutlist.contracts import STATUS_SUCCESS, Cutlist, CutlistConfig, CutlistReport
from cutlist.discovery import collect_leaves
from cutlist.report import build_report
from cutlist.scene import SceneSnapshot
from cutlist.units import normalize_unit

logger = logging.getLogger(__name__)


def generate_cutlist(snapshot: SceneSnapshot, config: CutlistConfig) -> CutlistReport:
    """Extract, aggregate and number the leaf parts of ``snapshot``.

    Walks the selection when there is one, else every top-level entity.
    Finding no parts is reported as an error on the report, not raised.

    Raises:
        ValueError: If the config or the snapshot's length unit is invalid.
    """
    config.validate()
    length_unit = normalize_unit(snapshot.length_unit)

    roots, use_selection = snapshot.roots()
    leaves = collect_leaves(roots)
    logger.info(
        "Found %d leaf parts in %d %s entities",
        len(leaves),
        len(roots),
        "selected" if use_selection else "top-level",
    )

    cutlist = Cutlist(
        status=STATUS_SUCCESS,
        filepath=snapshot.filename,
        length_unit=length_unit,
    )
    for message in snapshot.warnings:
        cutlist.add_warning(message)
    populate_cutlist(cutlist, leaves, config, use_selection=use_selection)

    report = build_report(cutlist, config)
    logger.info(
        "Cutlist: %d groups, %d parts, %d errors",
        len(report.groups),
        report.part_count,
        len(report.errors),
    )
    return report
