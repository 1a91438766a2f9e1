import json
import logging
import os.path
import re
from typing import Any

from api.clique_api.datasource_common.base import BaseDatasourcePlugin
from api.clique_api.errors import DataSourceFormatError

LOGGER = logging.getLogger(__name__)

# "var graphdata = {...};" as written by the problem graph exporter
_JS_ASSIGNMENT = re.compile(r"^\s*(?:var|let|const)\s+[A-Za-z_$][\w$]*\s*=\s*(?P<body>.*?)\s*;?\s*$", re.DOTALL)
# Bare integer object keys ("{0 : [1,2], 1 : [0]}") are not valid JSON
_BARE_INT_KEY = re.compile(r"([{,]\s*)(-?\d+)(\s*:)")


class JsonDatasourcePlugin(BaseDatasourcePlugin):
    # Adapter to read a JSON file and map it to a Graph or a CliqueCatalog
    # It extends BaseDatasourcePlugin in which we define TemplateMethod
    # Two layouts are supported:
    #   plain JSON  - {"0": [1, 2], ...} for graphs, {"3": [[0, 1, 2]]} or [[0, 1], ...] for cliques
    #   JS export   - "var graphdata = {0 : [1,2]};" / "var cliques = [[ 0, 1]];"

    @property
    def plugin_id(self) -> str:
        # Platform finds this plugin with this id
        return "json"

    @property
    def display_name(self) -> str:
        # UI dropdown name showcase
        return "JSON file"

    def parameters_schema(self) -> dict:
        # What parameters are needed for us to load the data
        return {
            "file_path": {
                "type": "str",
                "label": "Path to JSON or JS data file",
                "required": True
            },
            "key": {
                "type": "str",
                "label": "Top-level key holding the data (for combined files)",
                "required": False
            }
        }

    def _parse_source(self, source, **kwargs) -> Any:
        # This is the only step that is specific to the JSON plugin
        # Building Graph / CliqueCatalog objects happens in the BaseDatasourcePlugin

        path = self._resolve_path(source, kwargs)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Data file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()

        data = self.decode(text, origin=path)

        # Combined files keep graph and cliques side by side, e.g. {"graph": {...}, "cliques": {...}}
        key = kwargs.get("key")
        if key:
            if not isinstance(data, dict) or key not in data:
                raise DataSourceFormatError(f"Key '{key}' not found in {path}.")
            data = data[key]

        LOGGER.debug("Parsed %s (%s)", path, type(data).__name__)
        return data

    @staticmethod
    def decode(text: str, origin: str = "<string>") -> Any:
        # Try plain JSON first
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass

        # Otherwise expect a JavaScript assignment from the exporter
        match = _JS_ASSIGNMENT.match(text)
        if not match:
            raise DataSourceFormatError(f"{origin} is neither JSON nor a 'var name = ...;' assignment.")

        body = _BARE_INT_KEY.sub(r'\1"\2"\3', match.group("body"))
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise DataSourceFormatError(f"Could not decode {origin}: {exc}") from exc
