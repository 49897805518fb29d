"""Data models for theater seating: reservations, sections, rows and the layout."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


class InvalidLayoutError(ValueError):
    """Raised when a layout contains a malformed or non-positive capacity."""


def parse_capacity(value: object) -> int:
    """Parse a single section capacity.

    Accepts ints and integer strings. ``bool`` is refused even though it is an
    ``int`` subclass, and anything below one seat is refused.
    """
    if isinstance(value, bool):
        raise InvalidLayoutError(f"invalid section capacity: {value!r}")
    if isinstance(value, int):
        capacity = value
    else:
        try:
            capacity = int(str(value).strip())
        except ValueError:
            raise InvalidLayoutError(f"invalid section capacity: {value!r}") from None
    if capacity <= 0:
        raise InvalidLayoutError(f"section capacity must be positive, got {capacity}")
    return capacity


def parse_row_line(line: str) -> List[int]:
    """Split a layout line such as ``"3 5 2"`` into capacities."""
    return [parse_capacity(token) for token in line.split()]


def parse_request_line(line: str) -> Optional["Reservation"]:
    """Parse ``"<name> <seats>"``.

    Returns ``None`` for anything that is not a name followed by a positive
    integer. Tokens after the seat count are ignored.
    """
    parts = line.split()
    if len(parts) < 2:
        return None
    try:
        seats = int(parts[1])
    except ValueError:
        return None
    # A non-positive party would push remaining above capacity.
    if seats <= 0:
        return None
    return Reservation(name=parts[0], seats=seats)


@dataclass
class Reservation:
    """A named party asking for a number of seats."""

    name: str
    seats: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("reservation name must be non-empty")
        if isinstance(self.seats, bool) or not isinstance(self.seats, int) or self.seats <= 0:
            raise ValueError(f"reservation seats must be a positive integer, got {self.seats!r}")


@dataclass
class Section:
    """Subdivision of a row with a fixed capacity."""

    capacity: int
    remaining: int = -1
    reservations: List[Reservation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.capacity = parse_capacity(self.capacity)
        expected = self.capacity - sum(r.seats for r in self.reservations)
        if self.remaining == -1:
            self.remaining = expected
        if self.remaining != expected or expected < 0:
            raise ValueError(
                f"remaining ({self.remaining}) does not match capacity "
                f"{self.capacity} minus reserved seats"
            )

    @property
    def reserved(self) -> int:
        return sum(r.seats for r in self.reservations)

    def can_hold(self, seats: int) -> bool:
        return seats <= self.capacity and seats <= self.remaining

    def reserve(self, reservation: Reservation) -> None:
        """Attach ``reservation`` and take its seats from ``remaining``."""
        if not self.can_hold(reservation.seats):
            raise ValueError(
                f"section has {self.remaining} of {self.capacity} seats left, "
                f"cannot seat {reservation.name} ({reservation.seats})"
            )
        self.reservations.append(reservation)
        self.remaining -= reservation.seats


@dataclass
class Row:
    """Ordered group of sections."""

    sections: List[Section] = field(default_factory=list)

    def add_section(self, capacity: int) -> Section:
        section = Section(capacity)
        self.sections.append(section)
        return section

    @property
    def capacity(self) -> int:
        return sum(s.capacity for s in self.sections)

    @property
    def remaining(self) -> int:
        return sum(s.remaining for s in self.sections)


class Layout:
    """Rows of sections, fixed in shape once built.

    Only the occupancy of each section (``remaining`` and ``reservations``)
    changes after construction, and only through :meth:`reserve`.
    """

    def __init__(self, rows: Optional[List[Row]] = None) -> None:
        self.rows: List[Row] = rows if rows is not None else []

    @classmethod
    def build(cls, rows: Iterable[Iterable[object]]) -> "Layout":
        """Create a layout from nested capacities, e.g. ``[[3, 5], [2]]``."""
        built: List[Row] = []
        for index, capacities in enumerate(rows):
            row = Row()
            for value in capacities:
                try:
                    row.add_section(value)
                except InvalidLayoutError as e:
                    raise InvalidLayoutError(f"row {index}: {e}") from None
            built.append(row)
        return cls(built)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def section(self, row_index: int, section_index: int) -> Section:
        return self.rows[row_index].sections[section_index]

    def total_capacity(self) -> int:
        return sum(row.capacity for row in self.rows)

    def total_remaining(self) -> int:
        return sum(row.remaining for row in self.rows)

    def row_remaining(self, row_index: int) -> int:
        return self.rows[row_index].remaining

    def snapshot(self) -> List[List[int]]:
        """Remaining seats per section, one list per row."""
        return [[s.remaining for s in row.sections] for row in self.rows]

    def reserve(self, row_index: int, section_index: int, reservation: Reservation) -> Section:
        section = self.section(row_index, section_index)
        section.reserve(reservation)
        return section

    def assignments(self) -> List[Tuple[int, int, Reservation]]:
        """Every accepted reservation with its row and section index."""
        out: List[Tuple[int, int, Reservation]] = []
        for r, row in enumerate(self.rows):
            for s, section in enumerate(row.sections):
                for reservation in section.reservations:
                    out.append((r, s, reservation))
        return out

    def find(self, name: str) -> List[Tuple[int, int, Reservation]]:
        return [a for a in self.assignments() if a[2].name == name]


def format_snapshot(snapshot: Sequence[Sequence[int]]) -> List[str]:
    """Render a snapshot as output lines, e.g. ``["3 5", "2"]``."""
    return [" ".join(str(v) for v in row) for row in snapshot]
