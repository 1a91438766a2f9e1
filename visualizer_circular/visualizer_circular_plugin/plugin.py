import os
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader

from api.clique_api.model import EdgeWeight, Graph, Highlights
from api.clique_api.services.visualizer_plugin import Position, VisualizerPlugin
from .surface import CanvasSurface

# Original sketch canvas and vertex size
WIDTH = 1200
HEIGHT = 800
VERTEX_SIZE = 5.0


class CircularVisualizer(VisualizerPlugin):
    """
    Draws every adjacency edge, then every vertex on top of the edges.

    Edges are visited in graph order and, per vertex, in adjacency order, so
    the frame depends only on the inputs and never on what was on the
    surface before.
    """

    def __init__(self, config: Optional[Any] = None):
        # Any object with the ViewerConfig attributes; None keeps the sketch defaults
        self.config = config

    @property
    def plugin_id(self) -> str:
        return "circular-visualizer"

    @property
    def display_name(self) -> str:
        return "Circular Clique View"

    def _opt(self, name: str, default: Any) -> Any:
        return getattr(self.config, name, default) if self.config is not None else default

    def create_surface(self, width: int = WIDTH, height: int = HEIGHT) -> CanvasSurface:
        return CanvasSurface(width, height, background=self._opt("background", "white"))

    def render(
        self,
        graph: Graph,
        positions: Mapping[int, Position],
        highlights: Highlights,
        surface: CanvasSurface,
    ) -> None:
        surface.clear()

        # --- Edges ---
        heavy_color = self._opt("heavy_edge_color", "rgb(10,10,10)")
        heavy_weight = self._opt("heavy_edge_weight", 3.0)
        light_color = self._opt("light_edge_color", "rgb(153,153,153)")
        light_weight = self._opt("light_edge_weight", 1.0)

        for source, target in graph.edges():
            x1, y1 = positions[source]
            x2, y2 = positions[target]
            if highlights.edge_weight(source, target) is EdgeWeight.HEAVY:
                surface.line(x1, y1, x2, y2, stroke=heavy_color, weight=heavy_weight)
            else:
                surface.line(x1, y1, x2, y2, stroke=light_color, weight=light_weight)

        # --- Vertices and labels ---
        size = self._opt("vertex_size", VERTEX_SIZE)
        stroke = self._opt("vertex_stroke", "black")
        stroke_weight = self._opt("vertex_stroke_weight", 5.0)
        label_color = self._opt("label_color", "black")
        dx, dy = 0.15 * size, 0.6 * size

        for vertex in graph:
            x, y = positions[vertex.vertex_id]
            surface.circle(x, y, size, fill=highlights.color_of(vertex.vertex_id), stroke=stroke, weight=stroke_weight)
            surface.text(x - dx, y - dy, vertex.label, color=label_color)

    def render_page(self, surface: CanvasSurface, **context: Any) -> str:
        # --- Template Rendering ---
        template_path = os.path.join(os.path.dirname(__file__), 'templates')
        env = Environment(loader=FileSystemLoader(template_path), autoescape=True)
        template = env.get_template('viewer.html')

        _, index = surface.frame()
        return template.render(
            frame_svg=surface.to_svg(),
            width=surface.width,
            height=surface.height,
            rendered_index=index,
            catalog_size=context.get("catalog_size", 1),
            selection=context.get("selection", index or 0),
            tick_rate=context.get("tick_rate", 4.0),
            selector_url=context.get("selector_url", "api/selector/"),
            frame_url=context.get("frame_url", "api/frame/"),
            title=context.get("title", "Clique Viewer"),
        )
