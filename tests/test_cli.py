import csv
import io
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from theater_seating import cli


def test_stream_mode_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3 5\n2\n\nAlice 3\n\n"))
    assert cli.main([]) == 0
    assert capsys.readouterr().out == "3 5\n2\nAlice Row 0 Section 1\n3 2\n2\n"


def test_input_file(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("2\n3\n\nAnn 2\n\n")
    assert cli.main(["--input", str(path)]) == 0
    assert capsys.readouterr().out == "2\n3\nAnn Row 1 Section 0\n2\n1\n"


def test_csv_mode_and_assignments(tmp_path, capsys):
    layout_csv = tmp_path / "layout.csv"
    requests_csv = tmp_path / "requests.csv"
    out_csv = tmp_path / "out" / "assignments.csv"
    layout_csv.write_text("row,capacity\n0,2\n1,2\n")
    requests_csv.write_text("name,seats\nAnn,2\nBob,2\nCy,1\nDee,9\n")

    code = cli.main([
        "--layout", str(layout_csv),
        "--requests", str(requests_csv),
        "--out-assignments", str(out_csv),
    ])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "2",
        "2",
        "Ann Row 1 Section 0",
        "Bob Row 0 Section 0",
        "Cy Call to split party",
        "\"Sorry, we can't handle your party \"",
        "0",
        "0",
    ]
    with out_csv.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows == [
        {"name": "Bob", "seats": "2", "row": "0", "section": "0"},
        {"name": "Ann", "seats": "2", "row": "1", "section": "0"},
    ]


def test_report_and_verbose(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("4\n\nAnn 3\nbroken\n\n"))
    assert cli.main(["--report", "--verbose"]) == 0
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[:3] == ["4", "Ann Row 0 Section 0", "1"]
    assert lines[3].startswith("[REPORT] row=0 sections=1 capacity=4 remaining=1 reserved=3 parties=1")
    assert lines[4] == "[REPORT] placed=1 rejected=0 must_split=0"
    assert "Warning: skipping request line 2: 'broken'" in captured.err


def test_invalid_layout_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3 -1\n\nAnn 1\n\n"))
    assert cli.main([]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: line 1")


def test_layout_requires_requests(tmp_path):
    with pytest.raises(SystemExit):
        cli.main(["--layout", str(tmp_path / "layout.csv")])


def test_out_map(monkeypatch, tmp_path, capsys):
    out_html = tmp_path / "map.html"
    monkeypatch.setattr(sys, "stdin", io.StringIO("3 5\n\nAlice 3\n\n"))
    assert cli.main(["--out-map", str(out_html)]) == 0
    html = out_html.read_text(encoding="utf-8")
    assert "Alice" in html
    assert "legend-box" in html


def test_missing_input_file_exit_code(tmp_path, capsys):
    assert cli.main(["--input", str(tmp_path / "missing.txt")]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error:")


def test_missing_layout_csv_exit_code(tmp_path, capsys):
    requests_csv = tmp_path / "requests.csv"
    requests_csv.write_text("name,seats\nAnn,2\n")
    code = cli.main([
        "--layout", str(tmp_path / "missing.csv"),
        "--requests", str(requests_csv),
    ])
    assert code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error:")


def test_layout_csv_missing_columns_exit_code(tmp_path, capsys):
    layout_csv = tmp_path / "layout.csv"
    requests_csv = tmp_path / "requests.csv"
    layout_csv.write_text("row,seats\n0,2\n")
    requests_csv.write_text("name,seats\nAnn,2\n")
    assert cli.main(["--layout", str(layout_csv), "--requests", str(requests_csv)]) == 2
    assert capsys.readouterr().err.startswith("Error: layout csv: missing columns")
