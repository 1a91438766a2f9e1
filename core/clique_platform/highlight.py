import logging
from typing import Dict, Optional, Sequence, Set

from api.clique_api.errors import PaletteOverflowError
from api.clique_api.model import Clique, Graph, Highlights, VertexState
from api.clique_api.model.highlights import EdgeKey

from .config import DEFAULT_PALETTE

LOGGER = logging.getLogger(__name__)


class PaletteLookup:
    """Either a color or the overflow error explaining why there is none."""

    __slots__ = ("color", "error")

    def __init__(self, color: Optional[str] = None, error: Optional[PaletteOverflowError] = None):
        if (color is None) == (error is None):
            raise ValueError("PaletteLookup holds exactly one of color or error.")
        self.color = color
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def color_or(self, fallback: str) -> str:
        return self.color if self.color is not None else fallback


class Palette:
    """Fixed color sequence indexed directly by clique size."""

    def __init__(self, colors: Sequence[str] = DEFAULT_PALETTE):
        self._colors = tuple(colors)

    def __len__(self) -> int:
        return len(self._colors)

    def lookup(self, size: int) -> PaletteLookup:
        if 0 <= size < len(self._colors):
            return PaletteLookup(color=self._colors[size])
        return PaletteLookup(error=PaletteOverflowError(size, len(self._colors)))

    def color_for(self, size: int) -> str:
        result = self.lookup(size)
        if result.error is not None:
            raise result.error
        return result.color


class HighlightEngine:
    """
    Computes highlight state for a selected clique.

    A vertex is highlighted iff it belongs to the clique; an adjacency edge is
    heavy iff both of its endpoints do. Everything is recomputed from scratch
    on each call. When the clique is larger than the palette, members keep
    their highlight but take ``overflow_color`` and the error is attached to
    the result.
    """

    def __init__(
        self,
        palette: Optional[Palette] = None,
        default_color: str = "white",
        overflow_color: str = "Gray",
    ):
        self.palette = palette or Palette()
        self.default_color = default_color
        self.overflow_color = overflow_color
        self.computations = 0

    def compute_highlights(self, graph: Graph, clique: Clique) -> Highlights:
        self.computations += 1

        # Reset: every vertex starts from the default state.
        states: Dict[int, VertexState] = {vid: VertexState.DEFAULT for vid in graph.vertices}
        colors: Dict[int, str] = {vid: self.default_color for vid in graph.vertices}

        lookup = self.palette.lookup(clique.size)
        if not lookup.ok:
            LOGGER.warning("%s Falling back to '%s'.", lookup.error, self.overflow_color)
        member_color = lookup.color_or(self.overflow_color)

        for vid in clique:
            if vid in states:
                states[vid] = VertexState.IN_CLIQUE
                colors[vid] = member_color

        heavy: Set[EdgeKey] = set()
        light: Set[EdgeKey] = set()
        for source, target in graph.edges():
            if source in clique and target in clique:
                heavy.add((source, target))
            else:
                light.add((source, target))

        return Highlights(
            vertex_states=states,
            vertex_colors=colors,
            heavy_edges=frozenset(heavy),
            light_edges=frozenset(light),
            palette_error=lookup.error,
        )
