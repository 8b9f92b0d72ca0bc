"""Tests for report JSON and Markdown rendering."""
import json
from pathlib import Path

from cutlist import CutlistConfig, SceneSnapshot, generate_cutlist
from cutlist.export import (
    SCHEMA_CUTLIST_V1,
    render_summary,
    report_payload,
    write_report_json,
    write_summary,
)


def test_payload_carries_schema_version(table_snapshot):
    report = generate_cutlist(table_snapshot, CutlistConfig(std_thicknesses=(4.0, 6.0)))
    payload = report_payload(report)
    assert payload["schema_version"] == SCHEMA_CUTLIST_V1
    assert payload["groups"] == report.to_dict()["groups"]


def test_write_report_json_round_trips(table_snapshot, tmp_path: Path):
    report = generate_cutlist(table_snapshot, CutlistConfig(std_thicknesses=(4.0, 6.0)))
    path = write_report_json(tmp_path / "out" / "cutlist.json", report)
    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["filepath"] == "table.skp"
    assert [g["part_count"] for g in loaded["groups"]] == [2, 1]
    assert loaded["groups"][0]["parts"][0]["component_guids"] == ["leg-1", "leg-2"]


def test_summary_lists_groups_and_parts(table_snapshot):
    report = generate_cutlist(table_snapshot, CutlistConfig(std_thicknesses=(4.0,)))
    summary = render_summary(report)
    assert summary.startswith("# Cutlist table.skp")
    assert "- Parts: 3" in summary
    assert "## wood / 5.0 cm (non-standard)" in summary
    assert "## wood / 4.0 cm" in summary
    assert "| 1 | Leg | 2 |" in summary
    assert "| 2 | Top | 1 |" in summary


def test_summary_shows_errors():
    report = generate_cutlist(SceneSnapshot(entities=[]), CutlistConfig())
    summary = render_summary(report)
    assert "# Cutlist (untitled)" in summary
    assert "> ERROR: No component instance was found in your scene" in summary


def test_write_summary_creates_parent_dirs(table_snapshot, tmp_path: Path):
    report = generate_cutlist(table_snapshot, CutlistConfig(std_thicknesses=(4.0, 6.0)))
    path = write_summary(tmp_path / "out" / "cutlist.md", report)
    assert path.read_text(encoding="utf-8") == render_summary(report)


def test_summary_shows_warnings(table_snapshot):
    table_snapshot.warnings = ["Ignoring unsupported geometry 'Scan' (PointCloud)"]
    report = generate_cutlist(table_snapshot, CutlistConfig())
    summary = render_summary(report)
    assert "> WARNING: Ignoring unsupported geometry 'Scan' (PointCloud)" in summary
