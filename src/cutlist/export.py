"""Render a CutlistReport as JSON or a Markdown summary."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from cutlist.contracts import CutlistReport

SCHEMA_CUTLIST_V1 = "cutlist.report.v1"


def report_payload(report: CutlistReport) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"schema_version": SCHEMA_CUTLIST_V1}
    payload.update(report.to_dict())
    return payload


def _write(path: Union[str, Path], content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_report_json(path: Union[str, Path], report: CutlistReport) -> Path:
    """Write the report payload; parent directories are created."""
    return _write(path, json.dumps(report_payload(report), indent=2))


def write_summary(path: Union[str, Path], report: CutlistReport) -> Path:
    return _write(path, render_summary(report))


def _fmt(value: float) -> str:
    return f"{value:.1f}"


def render_summary(report: CutlistReport) -> str:
    """Markdown cutlist: one table per group, in report order."""
    unit = report.length_unit
    lines: List[str] = [
        f"# Cutlist {report.filepath or '(untitled)'}",
        "",
        f"- Status: **{report.status.upper()}**",
        f"- Length unit: {unit}",
        f"- Groups: {len(report.groups)}",
        f"- Parts: {report.part_count}",
        "",
    ]
    for message in report.errors:
        lines.append(f"> ERROR: {message}")
    for message in report.warnings:
        lines.append(f"> WARNING: {message}")
    if report.errors or report.warnings:
        lines.append("")

    for group in report.groups:
        thickness = f"{_fmt(group.raw_thickness)} {unit}"
        if not group.raw_thickness_available:
            thickness += " (non-standard)"
        lines.extend(
            [
                f"## {group.material_name} / {thickness}",
                "",
                f"{group.part_count} parts, "
                f"{group.raw_area_m2:.3f} m2, {group.raw_volume_m3:.4f} m3",
                "",
                "| # | Name | Count | Length | Width | Thickness | Raw length | Raw width |",
                "|---|------|------:|-------:|------:|----------:|-----------:|----------:|",
            ]
        )
        for part in group.parts:
            lines.append(
                f"| {part.number} | {part.name} | {part.count} | {_fmt(part.length)} "
                f"| {_fmt(part.width)} | {_fmt(part.thickness)} "
                f"| {_fmt(part.raw_length)} | {_fmt(part.raw_width)} |"
            )
        lines.append("")
    return "\n".join(lines)
