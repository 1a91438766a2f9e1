import logging
import threading
from typing import Any, Dict, Optional, Sequence

from api.clique_api.model import CliqueCatalog, Graph
from api.clique_api.services import DataSourcePlugin, Position, VisualizerPlugin

from .config import ViewerConfig
from .draw_loop import DrawLoop
from .highlight import HighlightEngine, Palette
from .layout import compute_positions
from .registry import PluginRegistry
from .selector import SelectorState

LOGGER = logging.getLogger(__name__)


class CliqueEngine:
    """
    High-level orchestration layer.

    Responsibilities:
    - Load graph and clique data (directly or through a datasource plugin)
    - Build the layout, selector state, highlight engine and draw loop once
    - Run the draw loop, in the caller's thread or a background thread
    """

    def __init__(
        self,
        visualizer: VisualizerPlugin,
        datasource: Optional[DataSourcePlugin] = None,
        config: Optional[ViewerConfig] = None,
    ):
        self.config = config or ViewerConfig()
        self.visualizer = visualizer
        self.datasource = datasource

        self.graph: Optional[Graph] = None
        self.catalog: Optional[CliqueCatalog] = None
        self.positions: Dict[int, Position] = {}
        self.selector_state: Optional[SelectorState] = None
        self.highlight_engine: Optional[HighlightEngine] = None
        self.surface: Any = None
        self.loop: Optional[DrawLoop] = None

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @classmethod
    def from_registry(
        cls,
        datasource_name: str = "json",
        visualizer_name: str = "circular",
        config: Optional[ViewerConfig] = None,
    ) -> "CliqueEngine":
        registry = PluginRegistry()
        datasource_cls = registry.get_datasource(datasource_name)
        visualizer_cls = registry.get_visualizer(visualizer_name)

        if not datasource_cls:
            raise ValueError(f"Datasource '{datasource_name}' not found.")

        if not visualizer_cls:
            raise ValueError(f"Visualizer '{visualizer_name}' not found.")

        config = config or ViewerConfig()
        return cls(visualizer=visualizer_cls(config), datasource=datasource_cls(), config=config)

    # ==========================================================
    # LOADING
    # ==========================================================

    def load(self, graph_data: Any, clique_data: Any, size_order: Optional[Sequence[int]] = None) -> None:
        """Build the session from raw mappings. Any data error is raised here, before the loop runs."""
        graph = Graph.load(graph_data)
        catalog = CliqueCatalog.build(clique_data, size_order=size_order)
        self._assemble(graph, catalog)

    def load_files(self, graph_path: str, cliques_path: str, **options: Any) -> None:
        if self.datasource is None:
            raise ValueError("No datasource plugin configured for file loading.")

        graph = self.datasource.load_graph(graph_path, **options)
        catalog = self.datasource.load_catalog(cliques_path, **options)
        self._assemble(graph, catalog)

    def _assemble(self, graph: Graph, catalog: CliqueCatalog) -> None:
        if self.running:
            raise RuntimeError("Stop the draw loop before loading new data.")

        positions = compute_positions(graph, self.config.center, self.config.radius)
        catalog.validate_against(graph)

        self.graph = graph
        self.catalog = catalog
        self.positions = positions
        self.selector_state = SelectorState(self.config.initial_selection)
        self.highlight_engine = HighlightEngine(
            palette=Palette(self.config.palette),
            default_color=self.config.default_vertex_color,
            overflow_color=self.config.overflow_color,
        )
        self.surface = self.visualizer.create_surface(self.config.width, self.config.height)
        self.loop = DrawLoop(
            graph=graph,
            positions=positions,
            catalog=catalog,
            selector_state=self.selector_state,
            highlight_engine=self.highlight_engine,
            renderer=self.visualizer,
            surface=self.surface,
            tick_rate=self.config.tick_rate,
        )

        LOGGER.info(
            "Loaded graph with %d vertices / %d edges and %d cliques.",
            len(graph), graph.edge_count(), len(catalog),
        )

    @property
    def is_loaded(self) -> bool:
        return self.loop is not None

    def _require_loaded(self) -> DrawLoop:
        if self.loop is None:
            raise RuntimeError("No graph loaded. Call load() or load_files() first.")
        return self.loop

    # ==========================================================
    # CONTROL SURFACE
    # ==========================================================

    def select(self, raw_value: int) -> int:
        """Record a new control value and return the catalog index it maps to."""
        loop = self._require_loaded()
        self.selector_state.set(raw_value)
        return loop.selector.clamp(raw_value)

    def current_index(self) -> int:
        loop = self._require_loaded()
        return loop.selector.clamp(self.selector_state.read())

    def tick(self) -> bool:
        return self._require_loaded().tick()

    # ==========================================================
    # OUTPUT
    # ==========================================================

    def frame_svg(self) -> str:
        self._require_loaded()
        return self.surface.to_svg()

    def rendered_index(self) -> Optional[int]:
        self._require_loaded()
        _, index = self.surface.frame()
        return index

    def render_selection(self, raw_value: int) -> str:
        """Select, run one tick and return the resulting frame."""
        if self.running:
            raise RuntimeError("The draw loop is running; use select() and frame_svg() instead.")
        self.select(raw_value)
        self.tick()
        return self.frame_svg()

    def page_html(self, **context: Any) -> str:
        loop = self._require_loaded()
        context.setdefault("catalog_size", len(self.catalog))
        context.setdefault("selection", loop.selector.clamp(self.selector_state.read()))
        context.setdefault("tick_rate", self.config.tick_rate)
        return self.visualizer.render_page(self.surface, **context)

    # ==========================================================
    # BACKGROUND LOOP
    # ==========================================================

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        loop = self._require_loaded()
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=loop.run,
            kwargs={"stop_event": self._stop_event},
            name="clique-draw-loop",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout)
        if self._thread.is_alive():
            LOGGER.warning("Draw loop did not stop within %.1fs.", timeout or 0)
        else:
            self._thread = None
