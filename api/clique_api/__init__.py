"""Public API exports for clique_api plugin contracts."""

from .errors import (
    CliqueViewerError,
    DataSourceFormatError,
    EmptyCatalogError,
    EmptyGraphError,
    MalformedCliqueError,
    MalformedGraphError,
    PaletteOverflowError,
)
from .model import Clique, CliqueCatalog, EdgeWeight, Graph, Highlights, Vertex, VertexState
from .services import DataSourcePlugin, VisualizerPlugin

__all__ = [
    "Vertex",
    "Graph",
    "Clique",
    "CliqueCatalog",
    "EdgeWeight",
    "Highlights",
    "VertexState",
    "DataSourcePlugin",
    "VisualizerPlugin",
    "CliqueViewerError",
    "DataSourceFormatError",
    "EmptyCatalogError",
    "EmptyGraphError",
    "MalformedCliqueError",
    "MalformedGraphError",
    "PaletteOverflowError",
]
