import math
from typing import Dict, Tuple

from api.clique_api.errors import EmptyGraphError
from api.clique_api.model import Graph

Position = Tuple[float, float]


def compute_positions(graph: Graph, center: Position, radius: float) -> Dict[int, Position]:
    """
    Place every vertex on a circle around ``center``.

    The vertex at order-index ``i`` of ``n`` sits at angle 2*pi*i/n, so index 0
    is at (cx + radius, cy). A single vertex sits at ``center``.
    """
    n_vertices = len(graph)
    if n_vertices == 0:
        raise EmptyGraphError("Cannot lay out a graph with no vertices.")

    cx, cy = center
    if n_vertices == 1:
        only = next(iter(graph))
        return {only.vertex_id: (float(cx), float(cy))}

    positions: Dict[int, Position] = {}
    for index, vertex in enumerate(graph):
        angle = 2 * math.pi * index / n_vertices
        positions[vertex.vertex_id] = (
            cx + radius * math.cos(angle),
            cy + radius * math.sin(angle),
        )
    return positions


class CircularLayout:
    """Positions computed once for a graph; read-only afterwards."""

    def __init__(self, graph: Graph, center: Position, radius: float):
        self.center = center
        self.radius = radius
        self._positions = compute_positions(graph, center, radius)

    @property
    def positions(self) -> Dict[int, Position]:
        return dict(self._positions)

    def position_of(self, vertex_id: int) -> Position:
        return self._positions[vertex_id]

    def __len__(self) -> int:
        return len(self._positions)
