"""Command line interface for theater seating."""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .csv_loader import load_all
from .models import Layout
from .solver import TheaterSeatingSolver, compute_row_stats, summarize_results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="theater-seating",
        description="Assign reservation parties to theater sections. "
                    "Without --layout/--requests the layout and the requests are read from "
                    "the input stream, each phase ended by a blank line.",
    )
    parser.add_argument("--input", type=Path,
                        help="Read the layout and requests from this file instead of stdin.")
    parser.add_argument("--layout", type=Path,
                        help="Path to layout.csv (row,capacity). Requires --requests.")
    parser.add_argument("--requests", type=Path,
                        help="Path to requests.csv (name,seats). Requires --layout.")
    parser.add_argument("--out-assignments", type=Path,
                        help="Write accepted reservations CSV: name,seats,row,section.")
    parser.add_argument("--out-map", type=Path,
                        help="Write an interactive HTML map of the final layout.")
    parser.add_argument("--report", action="store_true",
                        help="Print a per-row occupancy report after the seating output.")
    parser.add_argument("--verbose", action="store_true",
                        help="Warn on stderr about request lines that were skipped.")
    return parser


def write_assignments(layout: Layout, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["name", "seats", "row", "section"])
        for row, section, reservation in layout.assignments():
            w.writerow([reservation.name, reservation.seats, row, section])


def print_report(solver: TheaterSeatingSolver, out: TextIO) -> None:
    for s in compute_row_stats(solver.layout):
        print(f"[REPORT] row={s['row']} sections={s['sections']} capacity={s['capacity']} "
              f"remaining={s['remaining']} reserved={s['reserved']} parties={s['parties']} "
              f"occupancy={s['occupancy']:.2f}", file=out)
    counts = summarize_results(r for _, r in solver.allocator.history)
    print(f"[REPORT] placed={counts['placed']} rejected={counts['rejected']} "
          f"must_split={counts['must_split']}", file=out)


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> None:
    solver = TheaterSeatingSolver()

    if args.layout or args.requests:
        layout, requests = load_all(args.layout, args.requests)
        solver.load(layout)
        solver.print_data(stdout)
        solver.solve_requests(requests, stdout)
        solver.print_data(stdout)
    elif args.input:
        with args.input.open("r", encoding="utf-8") as f:
            solver.run(f, stdout)
    else:
        solver.run(stdin, stdout)

    if args.verbose:
        for number, text in solver.skipped:
            print(f"Warning: skipping request line {number}: {text!r}", file=sys.stderr)

    if args.out_assignments:
        write_assignments(solver.layout, args.out_assignments)

    if args.out_map:
        from .layout_map import generate_layout_map
        args.out_map.parent.mkdir(parents=True, exist_ok=True)
        args.out_map.write_text(generate_layout_map(solver.layout), encoding="utf-8")

    if args.report:
        print_report(solver, stdout)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``python -m theater_seating.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if bool(args.layout) != bool(args.requests):
        parser.error("--layout and --requests must be given together")
    if args.input and args.layout:
        parser.error("--input cannot be combined with --layout/--requests")

    try:
        run(args, sys.stdin, sys.stdout)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
