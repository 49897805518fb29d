"""Streamlit UI for theater seating with layout previews and validations."""
from __future__ import annotations

# Add src to sys.path so theater_seating can be found
import sys
import os
import io
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from theater_seating.csv_loader import load_layout, load_requests
from theater_seating.layout_map import generate_layout_map
from theater_seating.models import Layout
from theater_seating.solver import TheaterSeatingSolver

# -----------------------------
# Helpers
# -----------------------------

def snapshot_to_df(snapshot: list[list[int]]) -> pd.DataFrame:
    """One DataFrame row per theater row, one column per section."""
    width = max((len(r) for r in snapshot), default=0)
    return pd.DataFrame(
        [r + [None] * (width - len(r)) for r in snapshot],
        columns=[f"S{i}" for i in range(width)],
        index=[f"R{i}" for i in range(len(snapshot))],
    )


def solve_text(layout_text: str, requests_text: str):
    """Run the stream protocol on pasted text; returns solver, output lines, before snapshot."""
    solver = TheaterSeatingSolver()
    # A blank line inside the layout box would end the layout early.
    layout_lines = [line for line in layout_text.splitlines() if line.strip()]
    solver.read(io.StringIO("\n".join(layout_lines) + "\n\n"))
    before = solver.layout.snapshot()
    out = io.StringIO()
    solver.solve(io.StringIO(requests_text), out)
    return solver, out.getvalue().splitlines(), before


def solve_csv(layout_file, requests_file):
    solver = TheaterSeatingSolver()
    solver.load(load_layout(layout_file))
    before = solver.layout.snapshot()
    out = io.StringIO()
    solver.solve_requests(load_requests(requests_file), out)
    return solver, out.getvalue().splitlines(), before


def assignments_df(layout: Layout) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"name": r.name, "seats": r.seats, "row": row, "section": section}
            for row, section, r in layout.assignments()
        ],
        columns=["name", "seats", "row", "section"],
    )

# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Input")
mode = st.sidebar.radio(
    "Input format",
    ["Text", "CSV files"],
    help="Text uses the line format: capacities per row, then '<name> <seats>' per request.",
)
show_map = st.sidebar.checkbox("Show layout map", value=True)

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Theater Seating")

layout_text = requests_text = ""
_layout_file = _requests_file = None

if mode == "Text":
    layout_text = st.text_area("Layout (one row per line, section capacities separated by spaces)", "3 5\n2")
    requests_text = st.text_area("Requests (one '<name> <seats>' per line)", "Alice 3")
    run_disabled = not layout_text.strip()
else:
    _layout_file = st.file_uploader("Layout CSV (row,capacity)", type="csv")
    _requests_file = st.file_uploader("Requests CSV (name,seats)", type="csv")
    if _layout_file is not None:
        st.subheader("Layout preview")
        st.dataframe(pd.read_csv(_layout_file), use_container_width=True)
        _layout_file.seek(0)
    if _requests_file is not None:
        st.subheader("Requests preview")
        st.dataframe(pd.read_csv(_requests_file), use_container_width=True)
        _requests_file.seek(0)
    run_disabled = not (_layout_file and _requests_file)

run_clicked = st.button("Seat parties", disabled=run_disabled, key="run_solver_button")

# -----------------------------
# Solve
# -----------------------------

if run_clicked and not run_disabled:
    try:
        if mode == "Text":
            solver, lines, before = solve_text(layout_text, requests_text)
        else:
            solver, lines, before = solve_csv(_layout_file, _requests_file)

        st.subheader("Remaining seats before")
        st.dataframe(snapshot_to_df(before), use_container_width=True)

        st.subheader("Outcomes")
        st.code("\n".join(lines) if lines else "(no requests)")
        if solver.skipped:
            st.warning(f"Skipped {len(solver.skipped)} malformed request line(s).")

        st.subheader("Remaining seats after")
        st.dataframe(snapshot_to_df(solver.layout.snapshot()), use_container_width=True)

        result_df = assignments_df(solver.layout)
        st.subheader("Reservations")
        st.dataframe(result_df, use_container_width=True)
        st.download_button(
            "Download reservations as CSV",
            result_df.to_csv(index=False).encode("utf-8"),
            file_name="reservations.csv",
        )

        if show_map:
            st.subheader("Layout Map")
            components.html(generate_layout_map(solver.layout), height=600, scrolling=True)

    except ValueError as e:
        st.error(f"Input validation error: {e}")
        st.stop()
    except Exception as e:
        st.exception(e)
        st.stop()
