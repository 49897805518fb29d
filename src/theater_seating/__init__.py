"""Theater seating package."""
from .models import InvalidLayoutError, Layout, Reservation, Row, Section
from .csv_loader import (
    load_layout,
    load_requests,
    load_all,
)
from .solver import (
    MustSplit,
    Placed,
    Rejected,
    SeatAllocator,
    SolverState,
    TheaterSeatingSolver,
)

__all__ = [
    "InvalidLayoutError",
    "Layout",
    "Reservation",
    "Row",
    "Section",
    "load_layout",
    "load_requests",
    "load_all",
    "MustSplit",
    "Placed",
    "Rejected",
    "SeatAllocator",
    "SolverState",
    "TheaterSeatingSolver",
]
