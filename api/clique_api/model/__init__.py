"""
Core clique viewer domain model (Vertex, Graph, Clique, CliqueCatalog, Highlights).
"""

from .vertex import Vertex
from .graph import Graph
from .clique import Clique, CliqueCatalog
from .highlights import EdgeWeight, Highlights, VertexState

__all__ = [
    "Vertex",
    "Graph",
    "Clique",
    "CliqueCatalog",
    "EdgeWeight",
    "Highlights",
    "VertexState",
]
