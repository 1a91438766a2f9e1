from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import MalformedGraphError
from .vertex import Vertex


def coerce_vertex_id(raw: Any) -> int:
    """Turn an int or integer-valued string into a vertex id."""
    if isinstance(raw, bool):
        raise MalformedGraphError(f"Vertex id {raw!r} is not an integer.")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise MalformedGraphError(f"Vertex id {raw!r} is not an integer.") from None


class Graph:
    """
    Ordered, read-only mapping from vertex id to Vertex.

    Iteration order is the insertion order of the data the graph was loaded
    from. The circular layout and the renderer both depend on it.
    """

    def __init__(self, vertices: Mapping[int, Vertex]):
        self._vertices: Dict[int, Vertex] = dict(vertices)
        self._view = MappingProxyType(self._vertices)

    # -----------------
    # LOADING
    # -----------------

    @classmethod
    def load(cls, adjacency_data: Mapping[Any, Any]) -> "Graph":
        if not isinstance(adjacency_data, Mapping):
            raise MalformedGraphError(
                f"Graph data must be a mapping of vertex id to neighbor list, got {type(adjacency_data).__name__}."
            )

        adjacency: Dict[int, List[int]] = {}
        for raw_id, raw_neighbors in adjacency_data.items():
            vertex_id = coerce_vertex_id(raw_id)
            if vertex_id in adjacency:
                raise MalformedGraphError(f"Vertex '{vertex_id}' is listed more than once.")
            if raw_neighbors is None:
                raw_neighbors = []
            if isinstance(raw_neighbors, (str, bytes)) or not hasattr(raw_neighbors, "__iter__"):
                raise MalformedGraphError(f"Neighbors of vertex '{vertex_id}' must be a list.")
            adjacency[vertex_id] = [coerce_vertex_id(n) for n in raw_neighbors]

        # Every neighbor must itself be a key.
        for vertex_id, neighbors in adjacency.items():
            for neighbor in neighbors:
                if neighbor not in adjacency:
                    raise MalformedGraphError(
                        f"Vertex '{vertex_id}' references unknown vertex '{neighbor}'."
                    )

        return cls({vid: Vertex(vid, neighbors) for vid, neighbors in adjacency.items()})

    # -----------------
    # VERTEX ACCESS
    # -----------------

    @property
    def vertices(self) -> Mapping[int, Vertex]:
        return self._view

    def get_vertex(self, vertex_id: int) -> Optional[Vertex]:
        return self._vertices.get(vertex_id)

    def vertex_ids(self) -> List[int]:
        return list(self._vertices)

    def __contains__(self, vertex_id) -> bool:
        return vertex_id in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def __len__(self) -> int:
        return len(self._vertices)

    # -----------------
    # EDGE ACCESS
    # -----------------

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield (from, to) for every adjacency entry, in graph order then adjacency order."""
        for vertex in self._vertices.values():
            for neighbor in vertex.adjacency:
                yield vertex.vertex_id, neighbor

    def edge_count(self) -> int:
        return sum(len(v.adjacency) for v in self._vertices.values())

    def to_dict(self) -> dict:
        return {
            "vertices": [vertex.to_dict() for vertex in self._vertices.values()],
            "edge_count": self.edge_count(),
        }
