from __future__ import annotations

from typing import Dict, List, Tuple

import networkx as nx
from pyvis.network import Network

from .models import Layout, Section

SECTION_SPACING = 160
ROW_SPACING = 140
PARTY_OFFSET = 55

# ---------------------------
# Public API
# ---------------------------

def generate_layout_map(
    layout: Layout,
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> str:
    """
    Build an interactive seating map.

    Parameters:
      layout: the layout to draw, with whatever reservations it currently holds.
      canvas_size: width, height in pixels.

    Returns:
      HTML string with embedded network.
    """
    G = build_layout_graph(layout)

    width, height = canvas_size
    net = Network(height=f"{height}px", width=f"{width}px", bgcolor="#111111", font_color="#EEEEEE")
    net.toggle_physics(False)  # positions are fixed
    net.from_nx(G)

    return _inject_legend_html(net.generate_html())


def build_layout_graph(layout: Layout) -> nx.Graph:
    """
    Graph with one node per section and one per seated party.

    Sections of a row are chained left to right. Row 0 is drawn at the top,
    matching the order rows are declared in.
    """
    G = nx.Graph()
    positions = _compute_section_positions(layout)

    for r, row in enumerate(layout.rows):
        previous = None
        for s, section in enumerate(row.sections):
            node = section_node_id(r, s)
            x, y = positions[(r, s)]
            G.add_node(
                node,
                label=f"R{r} S{s}\n{section.remaining}/{section.capacity}",
                title=_section_tooltip(r, s, section),
                color=_occupancy_color(section),
                row=r,
                section=s,
                capacity=section.capacity,
                remaining=section.remaining,
                x=x,
                y=y,
                physics=False,
                shape="box",
            )
            if previous is not None:
                G.add_edge(previous, node, color="#555555", width=1)
            previous = node

            for k, reservation in enumerate(section.reservations):
                party = party_node_id(r, s, k)
                px, py = _party_position(x, y, k, len(section.reservations))
                G.add_node(
                    party,
                    label=reservation.name,
                    title=f"<b>{reservation.name}</b><br>Seats: {reservation.seats}",
                    color="#AEC6CF",
                    name=reservation.name,
                    seats=reservation.seats,
                    x=px,
                    y=py,
                    physics=False,
                    shape="dot",
                    size=8 + min(16, 2 * reservation.seats),
                )
                G.add_edge(node, party, color="#AEC6CF", width=1 + min(7, reservation.seats))
    return G


def section_node_id(row: int, section: int) -> str:
    return f"section-{row}-{section}"


def party_node_id(row: int, section: int, index: int) -> str:
    return f"party-{row}-{section}-{index}"

# ---------------------------
# Internals
# ---------------------------

def _compute_section_positions(layout: Layout) -> Dict[Tuple[int, int], Tuple[int, int]]:
    """Center every row horizontally and stack rows top to bottom."""
    positions: Dict[Tuple[int, int], Tuple[int, int]] = {}
    for r, row in enumerate(layout.rows):
        n = len(row.sections)
        start = -((n - 1) * SECTION_SPACING) // 2
        for s in range(n):
            positions[(r, s)] = (start + s * SECTION_SPACING, r * ROW_SPACING)
    return positions


def _party_position(x: int, y: int, index: int, count: int) -> Tuple[int, int]:
    # Fan parties out below their section.
    spread = 24
    offset = (index - (count - 1) / 2) * spread
    return int(x + offset), y + PARTY_OFFSET


def _occupancy_color(section: Section) -> str:
    if section.remaining == 0:
        return "#FF6B6B"  # full: red
    if section.remaining < section.capacity:
        return "#FFD700"  # partly taken: yellow
    return "#3CB371"      # empty: green


def _section_tooltip(row: int, section: int, sec: Section) -> str:
    parties: List[str] = [f"{r.name} ({r.seats})" for r in sec.reservations]
    return (
        f"<b>Row {row} Section {section}</b><br>"
        f"Capacity: {sec.capacity}<br>"
        f"Remaining: {sec.remaining}<br>"
        f"Parties: {', '.join(parties) if parties else 'none'}"
    )


def _inject_legend_html(page: str) -> str:
    css = """
    <style>
    .legend-box{
      position:absolute;right:12px;bottom:12px;
      background:#222;color:#eee;border:1px solid #444;border-radius:8px;
      padding:8px 12px;font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial;font-size:12px;
      z-index:10;
    }
    .legend-swatch{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;border:1px solid #444;}
    </style>
    """
    html = f"""
    {css}
    <div class="legend-box">
      <div><span class="legend-swatch" style="background:#3CB371"></span>empty section</div>
      <div><span class="legend-swatch" style="background:#FFD700"></span>partly reserved</div>
      <div><span class="legend-swatch" style="background:#FF6B6B"></span>full section</div>
      <div style="margin-top:6px;">dots: seated parties</div>
    </div>
    """
    if "</body>" in page:
        return page.replace("</body>", html + "</body>", 1)
    return page + html
