import logging
import threading
from enum import Enum
from typing import Any, Mapping, Optional

from api.clique_api.model import CliqueCatalog, Graph
from api.clique_api.services import Position, VisualizerPlugin

from .highlight import HighlightEngine
from .selector import Selector, SelectorState

LOGGER = logging.getLogger(__name__)


class LoopState(Enum):
    IDLE = "idle"
    DIRTY = "dirty"


class DrawLoop:
    """
    Fixed-rate cooperative redraw loop.

    Each tick polls the selector state once. If the clamped index differs
    from the last rendered one the loop goes DIRTY, redraws the whole frame
    and returns to IDLE; otherwise the tick does nothing. A tick that fails
    is logged and leaves ``last_rendered_index`` untouched, so the next tick
    tries the same selection again.
    """

    def __init__(
        self,
        graph: Graph,
        positions: Mapping[int, Position],
        catalog: CliqueCatalog,
        selector_state: SelectorState,
        highlight_engine: HighlightEngine,
        renderer: VisualizerPlugin,
        surface: Any,
        tick_rate: float = 4.0,
    ):
        if tick_rate <= 0:
            raise ValueError(f"Tick rate must be positive, got {tick_rate}.")
        self.graph = graph
        self.positions = positions
        self.catalog = catalog
        self.selector = Selector(len(catalog))
        self.selector_state = selector_state
        self.highlight_engine = highlight_engine
        self.renderer = renderer
        self.surface = surface
        self.tick_rate = tick_rate

        self.state = LoopState.IDLE
        self.last_highlights = None
        self.ticks = 0
        self.renders = 0
        self.failures = 0
        self._last_rendered_index: Optional[int] = None
        self._failed_index: Optional[int] = None
        self._tick_lock = threading.Lock()

    @property
    def last_rendered_index(self) -> Optional[int]:
        return self._last_rendered_index

    # ==========================================================
    # SINGLE TICK
    # ==========================================================

    def tick(self) -> bool:
        """
        Run one tick. Returns True when a new frame was presented.

        Ticks are serialized: a caller arriving while another tick is drawing
        waits for it and then sees the index that tick rendered.
        """
        with self._tick_lock:
            return self._tick()

    def _tick(self) -> bool:
        self.ticks += 1
        index = self.selector.clamp(self.selector_state.read())

        if index == self._last_rendered_index:
            self.state = LoopState.IDLE
            return False

        self.state = LoopState.DIRTY
        try:
            self._redraw(index)
        except Exception:
            self.failures += 1
            if self._failed_index != index:
                LOGGER.exception("Rendering clique #%d failed; keeping the previous frame.", index)
            else:
                LOGGER.debug("Rendering clique #%d failed again.", index)
            self._failed_index = index
            return False
        finally:
            self.state = LoopState.IDLE

        self._last_rendered_index = index
        self._failed_index = None
        self.renders += 1
        LOGGER.debug("Rendered clique #%d %s", index, self.catalog[index].to_list())
        return True

    def _redraw(self, index: int) -> None:
        highlights = self.highlight_engine.compute_highlights(self.graph, self.catalog[index])
        self.renderer.render(self.graph, self.positions, highlights, self.surface)
        self.surface.present(index)
        self.last_highlights = highlights

    # ==========================================================
    # RUNNING
    # ==========================================================

    def run(self, stop_event: Optional[threading.Event] = None, max_ticks: Optional[int] = None) -> int:
        """
        Tick at ``tick_rate`` until ``stop_event`` is set or ``max_ticks`` ticks ran.

        Returns the number of ticks executed.
        """
        stop_event = stop_event or threading.Event()
        interval = 1.0 / self.tick_rate
        executed = 0

        LOGGER.info("Draw loop started at %.2f ticks/s over %d cliques.", self.tick_rate, len(self.catalog))
        while not stop_event.is_set():
            self.tick()
            executed += 1
            if max_ticks is not None and executed >= max_ticks:
                break
            stop_event.wait(interval)

        LOGGER.info("Draw loop stopped after %d ticks (%d renders).", executed, self.renders)
        return executed
