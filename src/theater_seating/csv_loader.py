"""CSV loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, List, Tuple

import pandas as pd

from .models import InvalidLayoutError, Layout, Reservation, parse_capacity


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label}: missing columns: {', '.join(missing)}")


def load_layout(path: Path | str | IO[Any]) -> Layout:
    """Load a layout from ``row,capacity`` records.

    Each record is one section. Sections keep file order within their row and
    rows are ordered by first appearance.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    _require_columns(df, ["row", "capacity"], "layout csv")
    rows: Dict[str, List[int]] = {}
    for index, record in df.iterrows():
        key = str(record["row"]).strip()
        if not key:
            raise InvalidLayoutError(f"layout csv line {index + 2}: missing row id")
        try:
            capacity = parse_capacity(record["capacity"])
        except InvalidLayoutError as e:
            raise InvalidLayoutError(f"layout csv line {index + 2}: {e}") from None
        rows.setdefault(key, []).append(capacity)
    return Layout.build(rows.values())


def load_requests(path: Path | str | IO[Any]) -> List[Reservation]:
    """Load ``name,seats`` requests, skipping rows that do not parse."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    _require_columns(df, ["name", "seats"], "requests csv")
    requests: List[Reservation] = []
    for _, record in df.iterrows():
        name = str(record["name"]).strip()
        if not name:
            continue
        try:
            seats = int(str(record["seats"]).strip())
        except ValueError:
            continue
        if seats <= 0:
            continue
        requests.append(Reservation(name=name, seats=seats))
    return requests


def load_all(layout_path: Path | str | IO[Any], requests_path: Path | str | IO[Any]) -> Tuple[Layout, List[Reservation]]:
    """Convenience wrapper returning the layout and the requests."""
    return load_layout(layout_path), load_requests(requests_path)
