"""Service-level plugin contracts for clique_api."""

from .datasource_plugin import DataSourcePlugin
from .visualizer_plugin import Position, VisualizerPlugin

__all__ = ["DataSourcePlugin", "Position", "VisualizerPlugin"]
