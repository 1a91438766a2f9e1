"""Visualizer plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Tuple
from ..model import Graph, Highlights

Position = Tuple[float, float]


class VisualizerPlugin(ABC):
    """Contract for plugins that draw a highlighted graph onto an output surface."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return a unique, stable plugin identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable plugin name for UI and logs."""

    def render_options_schema(self) -> dict[str, Any] | None:
        """Return an optional render options schema for UI/platform integration."""
        return None

    @abstractmethod
    def create_surface(self, width: int, height: int) -> Any:
        """Return a fresh output surface of the given size."""

    @abstractmethod
    def render(
        self,
        graph: "Graph",
        positions: Mapping[int, Position],
        highlights: "Highlights",
        surface: Any,
    ) -> None:
        """Draw the graph onto ``surface``, starting from a cleared surface."""

    @abstractmethod
    def render_page(self, surface: Any, **context: Any) -> str:
        """Return an HTML page that presents the surface's current frame."""
