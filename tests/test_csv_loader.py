import io
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from theater_seating import csv_loader
from theater_seating.models import InvalidLayoutError


def test_load_layout_groups_rows_in_order():
    buf = io.StringIO("row,capacity\nfront,3\nfront,5\nback,2\n")
    layout = csv_loader.load_layout(buf)
    assert layout.snapshot() == [[3, 5], [2]]


def test_load_layout_interleaved_rows():
    buf = io.StringIO("row,capacity\n0,1\n1,2\n0,3\n")
    layout = csv_loader.load_layout(buf)
    assert layout.snapshot() == [[1, 3], [2]]


@pytest.mark.parametrize("capacity", ["0", "-3", "many", ""])
def test_load_layout_bad_capacity(capacity):
    buf = io.StringIO(f"row,capacity\n0,4\n1,{capacity}\n")
    with pytest.raises(InvalidLayoutError, match="line 3"):
        csv_loader.load_layout(buf)


def test_load_layout_missing_columns():
    with pytest.raises(ValueError, match="capacity"):
        csv_loader.load_layout(io.StringIO("row,seats\n0,4\n"))


def test_load_requests_skips_bad_rows():
    buf = io.StringIO(
        "name,seats\n"
        "Alice,3\n"
        ",2\n"
        "Bob,lots\n"
        "Cy,0\n"
        "Dee Dee,4\n"
    )
    requests = csv_loader.load_requests(buf)
    assert [(r.name, r.seats) for r in requests] == [("Alice", 3), ("Dee Dee", 4)]


def test_load_requests_missing_columns():
    with pytest.raises(ValueError, match="seats"):
        csv_loader.load_requests(io.StringIO("name,size\nA,1\n"))


def test_load_all_from_files(tmp_path):
    layout_csv = tmp_path / "layout.csv"
    requests_csv = tmp_path / "requests.csv"
    layout_csv.write_text("row,capacity\n0,3\n0,5\n1,2\n")
    requests_csv.write_text("name,seats\nAlice,3\n")
    layout, requests = csv_loader.load_all(layout_csv, requests_csv)
    assert layout.total_capacity() == 10
    assert requests[0].name == "Alice"
