import json

import pytest
from django.test import RequestFactory, override_settings

from clique_explorer.explorer import views
from core.clique_platform.config import ViewerConfig
from core.clique_platform.engine import CliqueEngine
from visualizer_circular.visualizer_circular_plugin.plugin import CircularVisualizer


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture
def engine(square_graph_data, square_clique_data):
    config = ViewerConfig(initial_selection=0)
    engine = CliqueEngine(visualizer=CircularVisualizer(config), config=config)
    engine.load(square_graph_data, square_clique_data)
    views.set_engine(engine)
    yield engine
    views.set_engine(None)


def post_json(rf, path, payload):
    body = payload if isinstance(payload, (bytes, str)) else json.dumps(payload)
    return rf.post(path, data=body, content_type="application/json")


class TestSelectorApi:

    def test_sets_selector_state(self, rf, engine):
        response = views.selector_api(post_json(rf, "/api/selector/", {"value": 2}))
        assert response.status_code == 200
        assert json.loads(response.content) == {"ok": True, "value": 2, "index": 2}
        assert engine.selector_state.read() == 2

    def test_clamps_index(self, rf, engine):
        response = views.selector_api(post_json(rf, "/api/selector/", {"value": 99}))
        assert json.loads(response.content)["index"] == 3

    def test_string_value(self, rf, engine):
        response = views.selector_api(post_json(rf, "/api/selector/", {"value": "1"}))
        assert json.loads(response.content)["index"] == 1

    def test_rejects_non_integer(self, rf, engine):
        response = views.selector_api(post_json(rf, "/api/selector/", {"value": "x"}))
        payload = json.loads(response.content)
        assert response.status_code == 400
        assert payload["ok"] is False
        assert payload["expected"] == {"value": "int"}

    def test_rejects_invalid_json(self, rf, engine):
        response = views.selector_api(post_json(rf, "/api/selector/", "{not json"))
        assert response.status_code == 400

    def test_rejects_get(self, rf, engine):
        response = views.selector_api(rf.get("/api/selector/"))
        assert response.status_code == 405


class TestFrameApi:

    def test_renders_on_demand_without_loop(self, rf, engine):
        engine.select(3)
        response = views.frame_api(rf.get("/api/frame/"))
        assert response.status_code == 200
        assert response["Content-Type"].startswith("image/svg+xml")
        assert response["X-Rendered-Index"] == "3"
        assert response.content.decode("utf-8").startswith("<svg")

    def test_same_selection_is_not_redrawn(self, rf, engine):
        views.frame_api(rf.get("/api/frame/"))
        views.frame_api(rf.get("/api/frame/"))
        assert engine.highlight_engine.computations == 1
        assert engine.loop.last_rendered_index == 0


class TestPages:

    def test_index_page(self, rf, engine):
        engine.tick()
        response = views.index(rf.get("/"))
        html = response.content.decode("utf-8")
        assert response.status_code == 200
        assert 'type="range"' in html
        assert 'max="3"' in html

    def test_catalog_api(self, rf, engine):
        response = views.catalog_api(rf.get("/api/catalog/"))
        payload = json.loads(response.content)
        assert payload["size"] == 4
        assert payload["cliques"][3] == [0, 1, 2, 3]


class TestEngineFromSettings:

    def test_missing_data_paths(self, rf):
        views.set_engine(None)
        response = views.catalog_api(rf.get("/api/catalog/"))
        assert response.status_code == 503
        assert "CLIQUE_VIEWER_GRAPH" in json.loads(response.content)["message"]

    def test_index_reports_missing_data(self, rf):
        views.set_engine(None)
        response = views.index(rf.get("/"))
        assert response.status_code == 500
        assert b"Clique Viewer Not Available" in response.content

    def test_builds_from_configured_files(self, rf, tmp_path):
        graph_path = tmp_path / "graph.js"
        graph_path.write_text("var graphdata = {0 : [1],\n1 : [0]};\n", encoding="utf-8")
        cliques_path = tmp_path / "sol.js"
        cliques_path.write_text("var cliques = [[ 0, 1]];\n", encoding="utf-8")

        with override_settings(
            CLIQUE_VIEWER_GRAPH=str(graph_path),
            CLIQUE_VIEWER_CLIQUES=str(cliques_path),
            CLIQUE_VIEWER_AUTOSTART=False,
        ):
            views.set_engine(None)
            try:
                response = views.catalog_api(rf.get("/api/catalog/"))
                assert json.loads(response.content)["cliques"] == [[0, 1]]
            finally:
                views.set_engine(None)
