from typing import Iterable, Tuple


class Vertex:
    __slots__ = ("_vertex_id", "_adjacency")

    def __init__(self, vertex_id: int, adjacency: Iterable[int] = ()):
        self._vertex_id = vertex_id
        self._adjacency: Tuple[int, ...] = tuple(adjacency)

    @property
    def vertex_id(self) -> int:
        return self._vertex_id

    @property
    def adjacency(self) -> Tuple[int, ...]:
        # Neighbor order is significant for edge drawing; duplicates are kept.
        return self._adjacency

    @property
    def label(self) -> str:
        return str(self._vertex_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self._vertex_id == other._vertex_id and self._adjacency == other._adjacency

    def __hash__(self) -> int:
        return hash((self._vertex_id, self._adjacency))

    def __repr__(self) -> str:
        return f"Vertex({self._vertex_id}, adjacency={list(self._adjacency)})"

    def to_dict(self) -> dict:
        return {
            "id": self._vertex_id,
            "label": self.label,
            "adjacency": list(self._adjacency),
        }
