import json
import logging
import threading
from html import escape as escape_html

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

from core.clique_platform.config import ViewerConfig
from core.clique_platform.engine import CliqueEngine
from core.clique_platform.selector import parse_selector_value
from datasource_json.datasource_json_plugin.plugin import JsonDatasourcePlugin
from visualizer_circular.visualizer_circular_plugin.plugin import CircularVisualizer

LOGGER = logging.getLogger(__name__)

_ENGINE: CliqueEngine | None = None
_ENGINE_LOCK = threading.Lock()


def json_error(
    status_code: int,
    error: str,
    message: str,
    expected: dict[str, object] | None = None,
    details: object | None = None,
) -> JsonResponse:
    payload: dict[str, object] = {
        "ok": False,
        "status": status_code,
        "error": error,
        "message": message,
    }
    if expected is not None:
        payload["expected"] = expected
    if details is not None:
        payload["details"] = details
    return JsonResponse(payload, status=status_code)


def _parse_json_body(request: HttpRequest) -> tuple[object | None, JsonResponse | None]:
    if not request.body:
        return None, json_error(400, "BadRequest", "Invalid JSON body.")

    try:
        body = request.body.decode("utf-8")
        return json.loads(body), None
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, json_error(400, "BadRequest", "Invalid JSON body.")


def _require_post_json(request: HttpRequest) -> JsonResponse | None:
    if request.method != "POST":
        return json_error(
            405,
            "MethodNotAllowed",
            "Only POST is allowed.",
            details={"allowed_methods": ["POST"]},
        )
    return None


def _html_response(title: str, message: str, status: int = 200) -> HttpResponse:
    page = [
        "<!doctype html>",
        "<html lang=\"en\">",
        "<head><meta charset=\"utf-8\"><title>{}</title></head>".format(escape_html(title)),
        "<body>",
        "<h1 style=\"font-family:sans-serif;font-size:1.1rem;\">{}</h1>".format(escape_html(title)),
        "<p style=\"font-family:sans-serif;\">{}</p>".format(escape_html(message)),
        "</body>",
        "</html>",
    ]
    return HttpResponse("\n".join(page), status=status, content_type="text/html; charset=utf-8")


# ==========================================================
# ENGINE LIFECYCLE
# ==========================================================

def set_engine(engine: CliqueEngine | None) -> None:
    """Install the engine the views serve (tests inject a preloaded one)."""
    global _ENGINE
    with _ENGINE_LOCK:
        if _ENGINE is not None and _ENGINE is not engine:
            _ENGINE.stop()
        _ENGINE = engine


def _build_engine_from_settings() -> CliqueEngine:
    graph_path = getattr(settings, "CLIQUE_VIEWER_GRAPH", None)
    cliques_path = getattr(settings, "CLIQUE_VIEWER_CLIQUES", None)
    if not graph_path or not cliques_path:
        raise RuntimeError("CLIQUE_VIEWER_GRAPH and CLIQUE_VIEWER_CLIQUES must be configured.")

    config = ViewerConfig.from_env()
    engine = CliqueEngine(
        visualizer=CircularVisualizer(config),
        datasource=JsonDatasourcePlugin(),
        config=config,
    )
    engine.load_files(graph_path, cliques_path)
    if getattr(settings, "CLIQUE_VIEWER_AUTOSTART", True):
        engine.start()
    return engine


def get_engine() -> CliqueEngine:
    global _ENGINE
    with _ENGINE_LOCK:
        if _ENGINE is None:
            _ENGINE = _build_engine_from_settings()
        return _ENGINE


def _engine_or_error() -> tuple[CliqueEngine | None, str | None]:
    try:
        return get_engine(), None
    except Exception as exc:
        LOGGER.exception("Unable to build the clique engine.")
        return None, str(exc)


# ==========================================================
# VIEWS
# ==========================================================

@require_GET
def index(request: HttpRequest) -> HttpResponse:
    engine, error = _engine_or_error()
    if engine is None:
        return _html_response("Clique Viewer Not Available", f"Could not load graph data: {error}", status=500)

    return HttpResponse(
        engine.page_html(title="Clique Viewer", selector_url="api/selector/", frame_url="api/frame/"),
        content_type="text/html; charset=utf-8",
    )


@csrf_exempt
def selector_api(request: HttpRequest) -> JsonResponse:
    method_error = _require_post_json(request)
    if method_error:
        return method_error

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response

    raw_value = body.get("value") if isinstance(body, dict) else None
    value = parse_selector_value(raw_value)
    if value is None:
        return json_error(
            400,
            "BadRequest",
            "Selector value must be an integer.",
            expected={"value": "int"},
        )

    engine, error = _engine_or_error()
    if engine is None:
        return json_error(503, "Unavailable", f"Clique engine is not available: {error}")

    index_value = engine.select(value)
    return JsonResponse({"ok": True, "value": value, "index": index_value})


@require_GET
def frame_api(request: HttpRequest) -> HttpResponse:
    engine, error = _engine_or_error()
    if engine is None:
        return json_error(503, "Unavailable", f"Clique engine is not available: {error}")

    # Without a running loop nobody else will tick, so render on demand.
    if not engine.running:
        engine.tick()

    response = HttpResponse(engine.frame_svg(), content_type="image/svg+xml; charset=utf-8")
    rendered = engine.rendered_index()
    response["X-Rendered-Index"] = "" if rendered is None else str(rendered)
    response["Cache-Control"] = "no-store"
    return response


@require_GET
def catalog_api(request: HttpRequest) -> JsonResponse:
    engine, error = _engine_or_error()
    if engine is None:
        return json_error(503, "Unavailable", f"Clique engine is not available: {error}")

    payload = engine.catalog.to_dict()
    return JsonResponse({"ok": True, "size": payload["size"], "cliques": payload["cliques"]})
