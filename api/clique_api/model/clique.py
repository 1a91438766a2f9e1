from typing import Any, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import EmptyCatalogError, MalformedCliqueError, MalformedGraphError
from .graph import Graph, coerce_vertex_id


class Clique:
    """A set of vertex ids that keeps the order it was given in."""

    __slots__ = ("_members", "_ordered")

    def __init__(self, vertex_ids: Iterable[Any]):
        ordered: List[int] = []
        for raw in vertex_ids:
            try:
                vertex_id = coerce_vertex_id(raw)
            except MalformedGraphError as exc:
                raise MalformedCliqueError(str(exc)) from None
            if vertex_id in ordered:
                raise MalformedCliqueError(f"Vertex '{vertex_id}' appears twice in a clique.")
            ordered.append(vertex_id)
        self._ordered: Tuple[int, ...] = tuple(ordered)
        self._members: FrozenSet[int] = frozenset(ordered)

    @property
    def members(self) -> FrozenSet[int]:
        return self._members

    @property
    def size(self) -> int:
        return len(self._ordered)

    def __contains__(self, vertex_id) -> bool:
        return vertex_id in self._members

    def __iter__(self) -> Iterator[int]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Clique):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"Clique({list(self._ordered)})"

    def to_list(self) -> List[int]:
        return list(self._ordered)


class CliqueCatalog:
    """
    Immutable, indexable sequence of cliques.

    The selector addresses cliques by plain integer position, so the order
    produced by ``build`` decides what every slider position shows:
    size groups are concatenated in the iteration order of the input mapping
    (or in ``size_order`` when given), and cliques keep their list order
    inside a group. A flat list is treated as a single group.
    """

    def __init__(self, cliques: Sequence[Clique]):
        if not cliques:
            raise EmptyCatalogError("Clique catalog is empty; no selector range can be built.")
        self._cliques: Tuple[Clique, ...] = tuple(cliques)

    # -----------------
    # BUILDING
    # -----------------

    @classmethod
    def build(
        cls,
        raw_clique_groups: Any,
        size_order: Optional[Sequence[int]] = None,
    ) -> "CliqueCatalog":
        if raw_clique_groups is None:
            raise EmptyCatalogError("No clique data was supplied.")

        if not isinstance(raw_clique_groups, Mapping):
            if size_order is not None:
                raise ValueError("size_order only applies to size-grouped clique data.")
            return cls([Clique(c) for c in cls._as_clique_list(raw_clique_groups, None)])

        groups = {}
        for raw_size, raw_cliques in raw_clique_groups.items():
            try:
                size = coerce_vertex_id(raw_size)
            except MalformedGraphError:
                raise MalformedCliqueError(f"Clique size key {raw_size!r} is not an integer.") from None
            groups[size] = raw_cliques

        if size_order is None:
            order = list(groups)
        else:
            order = [int(s) for s in size_order]
            repeated = sorted({s for s in order if order.count(s) > 1})
            if repeated:
                raise ValueError(f"size_order repeats sizes {repeated}.")
            missing = set(groups) - set(order)
            if missing:
                raise ValueError(f"size_order does not mention sizes {sorted(missing)}.")

        cliques: List[Clique] = []
        for size in order:
            for raw_clique in cls._as_clique_list(groups.get(size, []), size):
                clique = Clique(raw_clique)
                if clique.size != size:
                    raise MalformedCliqueError(
                        f"Clique {clique.to_list()} has {clique.size} vertices but is listed under size {size}."
                    )
                cliques.append(clique)

        return cls(cliques)

    @staticmethod
    def _as_clique_list(raw: Any, size: Optional[int]) -> List[Any]:
        where = "clique data" if size is None else f"size group {size}"
        if isinstance(raw, (str, bytes, Mapping)) or not hasattr(raw, "__iter__"):
            raise MalformedCliqueError(f"Expected a list of cliques in {where}.")
        result = []
        for item in raw:
            if isinstance(item, (str, bytes)) or not hasattr(item, "__iter__"):
                raise MalformedCliqueError(f"Every entry of {where} must be a list of vertex ids.")
            result.append(item)
        return result

    # -----------------
    # VALIDATION
    # -----------------

    def validate_against(self, graph: Graph) -> None:
        for index, clique in enumerate(self._cliques):
            unknown = [vid for vid in clique if vid not in graph]
            if unknown:
                raise MalformedCliqueError(
                    f"Clique #{index} {clique.to_list()} references unknown vertices {unknown}."
                )

    # -----------------
    # SEQUENCE ACCESS
    # -----------------

    def __getitem__(self, index: int) -> Clique:
        return self._cliques[index]

    def __len__(self) -> int:
        return len(self._cliques)

    def __iter__(self) -> Iterator[Clique]:
        return iter(self._cliques)

    def sizes(self) -> List[int]:
        return [clique.size for clique in self._cliques]

    def to_dict(self) -> dict:
        return {
            "size": len(self._cliques),
            "cliques": [clique.to_list() for clique in self._cliques],
        }
