"""
Reverse declaration order seat allocator.

Rows and sections declared later in the input are treated as the better seats,
so the search walks rows from last to first and, inside a row, sections from
last to first. The first section that can hold the whole party wins:

    layout  3 5      request  Alice 3   ->  Alice Row 0 Section 1
            2

A party larger than the whole venue is rejected. A party that fits the venue
but no single section is sent back to be split by hand.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, TextIO, Tuple, Union

from .models import (
    Layout,
    Reservation,
    format_snapshot,
    parse_request_line,
    parse_row_line,
    InvalidLayoutError,
)


REJECTION_LINE = "\"Sorry, we can't handle your party \""
TOO_LARGE_REASON = "party too large for venue"


# ----------------------------- results -----------------------------
@dataclass(frozen=True)
class Placed:
    row: int
    section: int
    name: str

    @property
    def line(self) -> str:
        return f"{self.name} Row {self.row} Section {self.section}"


@dataclass(frozen=True)
class Rejected:
    name: str
    reason: str = TOO_LARGE_REASON

    @property
    def line(self) -> str:
        return REJECTION_LINE


@dataclass(frozen=True)
class MustSplit:
    name: str

    @property
    def line(self) -> str:
        return f"{self.name} Call to split party"


PlacementResult = Union[Placed, Rejected, MustSplit]


# ----------------------------- allocator -----------------------------
class SeatAllocator:
    """First fit over rows and sections in reverse declaration order."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.history: List[Tuple[Reservation, PlacementResult]] = []

    def _search(self, seats: int) -> Optional[Tuple[int, int]]:
        rows = self.layout.rows
        for r in range(len(rows) - 1, -1, -1):
            if self.layout.row_remaining(r) < seats:
                continue
            sections = rows[r].sections
            for s in range(len(sections) - 1, -1, -1):
                section = sections[s]
                if seats > section.capacity:
                    continue
                if seats > section.remaining:
                    continue
                return r, s
        return None

    def place(self, reservation: Reservation) -> PlacementResult:
        """Seat ``reservation`` or explain why it could not be seated."""
        # Total capacity, not total remaining: even an empty venue is too small.
        if reservation.seats > self.layout.total_capacity():
            result: PlacementResult = Rejected(reservation.name)
        else:
            found = self._search(reservation.seats)
            if found is None:
                result = MustSplit(reservation.name)
            else:
                r, s = found
                self.layout.reserve(r, s, reservation)
                result = Placed(r, s, reservation.name)
        self.history.append((reservation, result))
        return result

    def place_all(self, reservations: Iterable[Reservation]) -> List[PlacementResult]:
        return [self.place(r) for r in reservations]


# ----------------------------- reporting -----------------------------
def compute_row_stats(layout: Layout) -> List[Dict[str, int | float]]:
    """Per row capacity, remaining and reserved seats plus party count."""
    stats = []
    for index, row in enumerate(layout.rows):
        capacity = row.capacity
        remaining = row.remaining
        reserved = capacity - remaining
        parties = sum(len(s.reservations) for s in row.sections)
        stats.append({
            "row": index,
            "sections": len(row.sections),
            "capacity": capacity,
            "remaining": remaining,
            "reserved": reserved,
            "parties": parties,
            "occupancy": reserved / capacity if capacity else 0.0,
        })
    return stats


def summarize_results(results: Iterable[PlacementResult]) -> Dict[str, int]:
    counts = {"placed": 0, "rejected": 0, "must_split": 0}
    for result in results:
        if isinstance(result, Placed):
            counts["placed"] += 1
        elif isinstance(result, Rejected):
            counts["rejected"] += 1
        else:
            counts["must_split"] += 1
    return counts


# ----------------------------- stream driver -----------------------------
class SolverState(Enum):
    UNSOLVED = "unsolved"
    READING = "reading"
    SOLVING = "solving"
    SOLVED = "solved"


def _is_blank(line: str) -> bool:
    return not line or line.isspace()


class TheaterSeatingSolver:
    """Runs the two phase text protocol over streams.

    Phase one reads layout rows until a blank line or end of stream, phase two
    reads ``<name> <seats>`` requests the same way and answers each one
    immediately. ``print_data`` shows the remaining seats per section and is
    called before and after solving.
    """

    def __init__(self) -> None:
        self.layout = Layout()
        self.allocator = SeatAllocator(self.layout)
        self.state = SolverState.UNSOLVED
        self.skipped: List[Tuple[int, str]] = []

    @property
    def can_solve(self) -> bool:
        return self.state is SolverState.READING

    @property
    def is_solved(self) -> bool:
        return self.state is SolverState.SOLVED

    def read(self, stream: TextIO) -> Layout:
        """Read the layout. Raises :class:`InvalidLayoutError` on bad rows."""
        if self.state is not SolverState.UNSOLVED:
            raise RuntimeError(f"layout already read (state={self.state.value})")
        rows: List[List[int]] = []
        for number, line in enumerate(stream, start=1):
            if _is_blank(line):
                break
            try:
                rows.append(parse_row_line(line))
            except InvalidLayoutError as e:
                raise InvalidLayoutError(f"line {number}: {e}") from None
        self.load(Layout.build(rows))
        return self.layout

    def load(self, layout: Layout) -> None:
        """Use an already built layout, e.g. one loaded from CSV."""
        if self.state is not SolverState.UNSOLVED:
            raise RuntimeError(f"layout already read (state={self.state.value})")
        self.layout = layout
        self.allocator = SeatAllocator(layout)
        self.state = SolverState.READING

    def print_data(self, out: TextIO) -> None:
        for line in format_snapshot(self.layout.snapshot()):
            out.write(line + "\n")

    def answer(self, reservation: Reservation, out: TextIO) -> PlacementResult:
        result = self.allocator.place(reservation)
        out.write(result.line + "\n")
        return result

    def solve(self, stream: TextIO, out: TextIO) -> List[PlacementResult]:
        """Answer requests from ``stream`` until a blank line."""
        self._start_solving()
        results = []
        for number, line in enumerate(stream, start=1):
            if _is_blank(line):
                break
            reservation = parse_request_line(line)
            if reservation is None:
                self.skipped.append((number, line.rstrip("\r\n")))
                continue
            results.append(self.answer(reservation, out))
        self.state = SolverState.SOLVED
        return results

    def solve_requests(self, reservations: Iterable[Reservation], out: TextIO) -> List[PlacementResult]:
        """Answer already parsed requests, e.g. ones loaded from CSV."""
        self._start_solving()
        results = [self.answer(r, out) for r in reservations]
        self.state = SolverState.SOLVED
        return results

    def _start_solving(self) -> None:
        if not self.can_solve:
            raise RuntimeError(f"cannot solve in state {self.state.value}; read a layout first")
        self.state = SolverState.SOLVING

    def run(self, stream: TextIO, out: TextIO) -> List[PlacementResult]:
        """Read, print, solve and print again on one input stream."""
        self.read(stream)
        self.print_data(out)
        results = self.solve(stream, out)
        self.print_data(out)
        return results
