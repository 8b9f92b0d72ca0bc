#!/usr/bin/env python3
"""Generate a cutlist from a 3D scene file (.glb/.gltf/.obj/...)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cutlist import CutlistConfig, generate_cutlist
from cutlist.catalog import STOCK_CATALOGS
from cutlist.export import write_report_json, write_summary
from cutlist.trimesh_scene import load_scene_snapshot
from cutlist.units import UNIT_TO_MM, from_mm


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract a cutlist (parts grouped by material and thickness) from a scene"
    )
    parser.add_argument("--scene", required=True, help="Path to input scene file")
    parser.add_argument(
        "--unit",
        choices=sorted(UNIT_TO_MM),
        default=None,
        help="Length unit of the scene coordinates (default: scene units, else mm)",
    )
    parser.add_argument(
        "--length-increase", type=float, default=0.0, help="Length margin in mm"
    )
    parser.add_argument(
        "--width-increase", type=float, default=0.0, help="Width margin in mm"
    )
    parser.add_argument(
        "--thickness-increase", type=float, default=0.0, help="Thickness margin in mm"
    )
    catalog = parser.add_mutually_exclusive_group()
    catalog.add_argument(
        "--std-thicknesses",
        default="",
        help='Standard thicknesses in mm, semicolon separated (e.g. "4;6;10;18")',
    )
    catalog.add_argument(
        "--stock",
        choices=sorted(STOCK_CATALOGS),
        default=None,
        help="Use the standard thicknesses of a stock preset",
    )
    parser.add_argument(
        "--letters", action="store_true", help="Number parts A, B, C instead of 1, 2, 3"
    )
    parser.add_argument(
        "--sequence-by-group",
        action="store_true",
        help="Restart part numbers in every group",
    )
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="NODE",
        help="Only list parts under this scene node (repeatable)",
    )
    parser.add_argument(
        "--hide",
        action="append",
        default=[],
        metavar="NODE",
        help="Treat this scene node as hidden (repeatable)",
    )
    parser.add_argument("--output", default=None, help="Write the report JSON here")
    parser.add_argument(
        "--summary", default=None, help="Write a Markdown summary here"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logs"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        snapshot = load_scene_snapshot(
            args.scene,
            length_unit=args.unit,
            selection=args.select,
            hidden=args.hide,
        )
        unit = snapshot.length_unit
        if args.stock:
            std_thicknesses = STOCK_CATALOGS[args.stock].thicknesses_in(unit)
        else:
            std_thicknesses = args.std_thicknesses
        config = CutlistConfig.from_params(
            {
                "length_increase": from_mm(args.length_increase, unit),
                "width_increase": from_mm(args.width_increase, unit),
                "thickness_increase": from_mm(args.thickness_increase, unit),
                "std_thicknesses": std_thicknesses,
                "part_number_letter": args.letters,
                "part_number_sequence_by_group": args.sequence_by_group,
            },
            unit,
        )
        report = generate_cutlist(snapshot, config)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.output:
        write_report_json(Path(args.output), report)
    if args.summary:
        write_summary(Path(args.summary), report)

    print(f"Status: {report.status.upper()}")
    print(f"Groups: {len(report.groups)}")
    print(f"Parts: {report.part_count}")
    for message in report.errors:
        print(f"Error: {message}")
    for message in report.warnings:
        print(f"Warning: {message}")
    if args.output:
        print(f"Report JSON: {args.output}")
    if args.summary:
        print(f"Summary: {args.summary}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
