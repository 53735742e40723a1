"""
Draw solver snapshots with NetworkX + Matplotlib.

The renderer only reads :class:`~pathstep.solver.SolverView` objects; it never
touches a solver. Layout is delegated to NetworkX and computed once per graph
so vertices stay put while the run progresses.

Colours:
- current vertex: red
- vertex at the end of the edge under inspection: green
- vertices on the final path to ``target`` (once terminated): purple
- everything else: blue
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .exceptions import InvalidQueryError
from .graph import VertexId, sorted_ids
from .path import reconstruct_path
from .solver import Phase, SolverView

Position = Dict[VertexId, Tuple[float, float]]

CURRENT_COLOR = "tab:red"
NEIGHBOUR_COLOR = "tab:green"
PATH_COLOR = "tab:purple"
DEFAULT_COLOR = "tab:blue"
EDGE_COLOR = "tab:gray"


def to_networkx(view: SolverView) -> nx.DiGraph:
    """Build a ``DiGraph`` of the snapshot's graph with ``weight`` attributes."""
    G = nx.DiGraph()
    G.add_nodes_from(view.graph)
    for u, v, w in view.graph.edges():
        G.add_edge(u, v, weight=w)
    return G


def final_path(view: SolverView, target: Optional[VertexId]) -> List[VertexId]:
    """Vertices on the shortest path to ``target``, source included.

    Empty until the run has terminated, or when ``target`` is unset or
    unreachable.
    """
    if target is None or not view.is_done or target not in view.table:
        return []
    if not view.is_reachable(target):
        return []
    preds = {v: e.predecessor for v, e in view.table.items()}
    try:
        return reconstruct_path(preds, view.source, target)
    except InvalidQueryError:
        return []


def node_colors(view: SolverView, target: Optional[VertexId] = None) -> Dict[VertexId, str]:
    colors = {vid: DEFAULT_COLOR for vid in view.graph}
    for vid in final_path(view, target):
        colors[vid] = PATH_COLOR
    if view.current is not None:
        colors[view.current] = CURRENT_COLOR
    if view.current_edge is not None:
        colors[view.current_edge.target] = NEIGHBOUR_COLOR
    return colors


def highlighted_edge(view: SolverView) -> Optional[Tuple[VertexId, VertexId]]:
    if view.phase is not Phase.VISITING_EDGES or view.current_edge is None:
        return None
    return view.current, view.current_edge.target


def _fmt_distance(d: float) -> str:
    return "inf" if isinstance(d, float) and math.isinf(d) else str(d)


def status_lines(view: SolverView) -> List[str]:
    """Text panel: unvisited set, phase, then one ``id: distance prev`` row per vertex."""
    lines = [
        f"unvisited: {list(sorted_ids(view.unvisited))}",
        f"state: {view.phase}",
    ]
    for vid in sorted_ids(view.table):
        entry = view.table[vid]
        prev = "-" if entry.predecessor is None else entry.predecessor
        dist = "inf" if not view.is_reachable(vid) else _fmt_distance(entry.distance)
        lines.append(f"{vid}: {dist} {prev}")
    return lines


def layout(view: SolverView, kind: str = "spring", seed: int = 42) -> Position:
    """Compute vertex positions once for a graph.

    Raises:
        ValueError: On an unknown layout name.
    """
    G = to_networkx(view)
    if kind == "spring":
        return nx.spring_layout(G, seed=seed)
    if kind == "circular":
        return nx.circular_layout(G)
    if kind == "shell":
        return nx.shell_layout(G)
    raise ValueError(f"Unknown layout: {kind}")


def draw_frame(
    view: SolverView,
    ax: Optional[plt.Axes] = None,
    *,
    pos: Optional[Position] = None,
    target: Optional[VertexId] = None,
    show_weights: bool = True,
    show_status: bool = True,
    node_size: int = 600,
) -> Position:
    """Render one snapshot onto ``ax`` (the current axes by default).

    Returns:
        The positions used, to be passed back in for the next frame.
    """
    if ax is None:
        ax = plt.gca()
    if pos is None:
        pos = layout(view)
    ax.clear()

    G = to_networkx(view)
    colors = node_colors(view, target)
    active = highlighted_edge(view)

    nx.draw_networkx_edges(
        G,
        pos,
        ax=ax,
        edge_color=EDGE_COLOR,
        arrowstyle="->",
        arrowsize=12,
        width=1.2,
        alpha=0.6,
    )
    if active is not None:
        nx.draw_networkx_edges(
            G,
            pos,
            ax=ax,
            edgelist=[active],
            edge_color=NEIGHBOUR_COLOR,
            arrowstyle="->",
            arrowsize=16,
            width=3.0,
        )
    if show_weights:
        edge_labels = {(u, v): w for u, v, w in view.graph.edges()}
        nx.draw_networkx_edge_labels(G, pos, ax=ax, edge_labels=edge_labels, font_size=8)

    nodes = list(G.nodes)
    nx.draw_networkx_nodes(
        G,
        pos,
        ax=ax,
        nodelist=nodes,
        node_color=[colors[v] for v in nodes],
        node_size=node_size,
        alpha=0.9,
    )
    nx.draw_networkx_labels(G, pos, ax=ax, font_size=10, font_color="white")

    if show_status:
        ax.text(
            0.01,
            0.99,
            "\n".join(status_lines(view)),
            transform=ax.transAxes,
            va="top",
            ha="left",
            family="monospace",
            fontsize=8,
        )
    ax.set_axis_off()
    return pos


__all__ = [
    "draw_frame",
    "final_path",
    "highlighted_edge",
    "layout",
    "node_colors",
    "status_lines",
    "to_networkx",
]
