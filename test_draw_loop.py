import threading
import time

import pytest

from api.clique_api.model import CliqueCatalog, Graph
from core.clique_platform.draw_loop import DrawLoop, LoopState
from core.clique_platform.highlight import HighlightEngine
from core.clique_platform.layout import compute_positions
from core.clique_platform.selector import SelectorState
from visualizer_circular.visualizer_circular_plugin.plugin import CircularVisualizer


class CountingRenderer(CircularVisualizer):

    def __init__(self, fail_on=()):
        super().__init__()
        self.calls = 0
        self.fail_on = list(fail_on)
        self.seen = []

    def render(self, graph, positions, highlights, surface):
        self.calls += 1
        self.seen.append(highlights)
        if sorted(highlights.highlighted_vertices) in [sorted(f) for f in self.fail_on]:
            raise RuntimeError("boom")
        super().render(graph, positions, highlights, surface)


def make_loop(graph_data, clique_data, initial=0, renderer=None):
    graph = Graph.load(graph_data)
    catalog = CliqueCatalog.build(clique_data)
    renderer = renderer or CountingRenderer()
    state = SelectorState(initial)
    engine = HighlightEngine()
    loop = DrawLoop(
        graph=graph,
        positions=compute_positions(graph, (600, 400), 35),
        catalog=catalog,
        selector_state=state,
        highlight_engine=engine,
        renderer=renderer,
        surface=renderer.create_surface(1200, 800),
    )
    return loop, state, engine, renderer


class TestDrawLoopTick:

    def test_first_tick_always_renders(self, path_graph_data):
        loop, _, _, renderer = make_loop(path_graph_data, [[0, 1]])
        assert loop.last_rendered_index is None
        assert loop.tick() is True
        assert loop.last_rendered_index == 0
        assert renderer.calls == 1
        assert loop.state is LoopState.IDLE

    def test_unchanged_selection_is_a_no_op(self, path_graph_data):
        loop, state, engine, renderer = make_loop(path_graph_data, [[0, 1], [1, 2]])
        loop.tick()

        state.set(0)
        assert loop.tick() is False
        assert loop.tick() is False

        assert loop.last_rendered_index == 0
        assert engine.computations == 1
        assert renderer.calls == 1
        assert loop.surface.frames_presented == 1

    def test_change_triggers_one_redraw(self, square_graph_data, square_clique_data):
        loop, state, engine, _ = make_loop(square_graph_data, square_clique_data)
        loop.tick()

        state.set(3)
        assert loop.tick() is True
        assert loop.last_rendered_index == 3
        assert loop.last_highlights.highlighted_vertices == {0, 1, 2, 3}
        assert engine.computations == 2

    def test_out_of_range_input_is_clamped(self, square_graph_data, square_clique_data):
        loop, state, _, _ = make_loop(square_graph_data, square_clique_data)
        state.set(100)
        loop.tick()
        assert loop.last_rendered_index == 3

        # -5 and 0 map to the same index
        state.set(-5)
        loop.tick()
        assert loop.last_rendered_index == 0
        state.set(0)
        assert loop.tick() is False

    def test_vertex_membership_matches_each_selection(self, square_graph_data, square_clique_data):
        loop, state, _, _ = make_loop(square_graph_data, square_clique_data)
        for i, clique in enumerate(loop.catalog):
            state.set(i)
            loop.tick()
            assert loop.last_highlights.highlighted_vertices == clique.members

    def test_redraw_clears_surface_once(self, path_graph_data):
        loop, _, _, _ = make_loop(path_graph_data, [[0, 1]])
        clears = []
        original_clear = loop.surface.clear
        loop.surface.clear = lambda: (clears.append(1), original_clear())

        loop.tick()
        assert len(clears) == 1

    def test_path_scenario_draws_heavy_and_light_edges(self, path_graph_data):
        loop, _, _, _ = make_loop(path_graph_data, [[0, 1]])
        loop.tick()

        primitives, index = loop.surface.frame()
        lines = [p for p in primitives if p.kind == "line"]
        assert index == 0
        assert [(l.stroke, l.weight) for l in lines] == [
            ("rgb(10,10,10)", 3.0),
            ("rgb(10,10,10)", 3.0),
            ("rgb(153,153,153)", 1.0),
            ("rgb(153,153,153)", 1.0),
        ]
        fills = [p.fill for p in primitives if p.kind == "circle"]
        assert fills == ["DarkGoldenRod", "DarkGoldenRod", "white"]


class SlowRenderer(CountingRenderer):

    def render(self, graph, positions, highlights, surface):
        time.sleep(0.2)
        super().render(graph, positions, highlights, surface)


class TestDrawLoopConcurrency:

    def test_concurrent_ticks_render_once(self, square_graph_data, square_clique_data):
        loop, _, engine, renderer = make_loop(square_graph_data, square_clique_data, renderer=SlowRenderer())
        results = []
        threads = [threading.Thread(target=lambda: results.append(loop.tick())) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5.0)

        assert sorted(results) == [False, True]
        assert renderer.calls == 1
        assert engine.computations == 1
        assert loop.surface.frames_presented == 1

    def test_presented_frame_is_not_interleaved(self, square_graph_data, square_clique_data):
        loop, state, _, _ = make_loop(square_graph_data, square_clique_data, renderer=SlowRenderer())
        threads = []
        for value in (1, 3):
            state.set(value)
            t = threading.Thread(target=loop.tick)
            t.start()
            threads.append(t)
        for t in threads:
            t.join(5.0)

        primitives, _ = loop.surface.frame()
        assert [p.kind for p in primitives].count("circle") == 4


class TestDrawLoopFailures:

    def test_failed_tick_keeps_last_rendered_index(self, square_graph_data, square_clique_data, caplog):
        renderer = CountingRenderer(fail_on=[[0, 1, 2]])
        loop, state, _, _ = make_loop(square_graph_data, square_clique_data, renderer=renderer)
        loop.tick()
        svg_before = loop.surface.to_svg()

        state.set(2)
        assert loop.tick() is False
        assert loop.last_rendered_index == 0
        assert loop.failures == 1
        assert loop.state is LoopState.IDLE
        assert loop.surface.to_svg() == svg_before
        assert "Rendering clique #2 failed" in caplog.text

    def test_failed_selection_is_retried_next_tick(self, square_graph_data, square_clique_data):
        renderer = CountingRenderer(fail_on=[[0, 1, 2]])
        loop, state, _, _ = make_loop(square_graph_data, square_clique_data, renderer=renderer)
        state.set(2)
        loop.tick()
        loop.tick()
        assert renderer.calls == 2
        assert loop.failures == 2

        state.set(3)
        assert loop.tick() is True
        assert loop.last_rendered_index == 3


class TestDrawLoopRun:

    def test_run_stops_after_max_ticks(self, path_graph_data):
        loop, _, _, _ = make_loop(path_graph_data, [[0, 1]])
        loop.tick_rate = 1000.0
        assert loop.run(max_ticks=3) == 3
        assert loop.ticks == 3
        assert loop.renders == 1

    def test_run_stops_when_event_set(self, path_graph_data):
        loop, _, _, _ = make_loop(path_graph_data, [[0, 1]])
        stop = threading.Event()
        stop.set()
        assert loop.run(stop_event=stop) == 0

    def test_tick_rate_must_be_positive(self, path_graph_data):
        graph = Graph.load(path_graph_data)
        with pytest.raises(ValueError):
            DrawLoop(graph, {}, CliqueCatalog.build([[0]]), SelectorState(), HighlightEngine(), None, None, tick_rate=0)
