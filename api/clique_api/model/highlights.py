from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from ..errors import PaletteOverflowError

EdgeKey = Tuple[int, int]


class VertexState(Enum):
    DEFAULT = "default"
    IN_CLIQUE = "in-active-clique"


class EdgeWeight(Enum):
    LIGHT = "light"
    HEAVY = "heavy"


class Highlights:
    """
    Highlight state for one selection.

    Every vertex of the graph has an entry in ``vertex_states`` and
    ``vertex_colors``; a fresh instance is built for every selection, so no
    state leaks between renders.
    """

    def __init__(
        self,
        vertex_states: Dict[int, VertexState],
        vertex_colors: Dict[int, str],
        heavy_edges: FrozenSet[EdgeKey],
        light_edges: FrozenSet[EdgeKey],
        palette_error: Optional[PaletteOverflowError] = None,
    ):
        self.vertex_states = vertex_states
        self.vertex_colors = vertex_colors
        self.heavy_edges = heavy_edges
        self.light_edges = light_edges
        self.palette_error = palette_error

    @property
    def highlighted_vertices(self) -> FrozenSet[int]:
        return frozenset(
            vid for vid, state in self.vertex_states.items() if state is VertexState.IN_CLIQUE
        )

    def state_of(self, vertex_id: int) -> VertexState:
        return self.vertex_states.get(vertex_id, VertexState.DEFAULT)

    def color_of(self, vertex_id: int) -> str:
        return self.vertex_colors[vertex_id]

    def edge_weight(self, source: int, target: int) -> EdgeWeight:
        if (source, target) in self.heavy_edges:
            return EdgeWeight.HEAVY
        return EdgeWeight.LIGHT

    def __eq__(self, other) -> bool:
        if not isinstance(other, Highlights):
            return NotImplemented
        return (
            self.vertex_states == other.vertex_states
            and self.vertex_colors == other.vertex_colors
            and self.heavy_edges == other.heavy_edges
            and self.light_edges == other.light_edges
        )

    __hash__ = None

    def to_dict(self) -> dict:
        return {
            "vertices": sorted(self.highlighted_vertices),
            "colors": {str(vid): color for vid, color in self.vertex_colors.items()},
            "heavy_edges": sorted([list(e) for e in self.heavy_edges]),
            "palette_error": str(self.palette_error) if self.palette_error else None,
        }
