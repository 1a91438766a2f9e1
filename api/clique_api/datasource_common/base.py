# base.py
from __future__ import annotations

from abc import abstractmethod
from typing import Any, Optional, Sequence

from api.clique_api.model import CliqueCatalog, Graph
from api.clique_api.services.datasource_plugin import DataSourcePlugin


class BaseDatasourcePlugin(DataSourcePlugin):
    # Base class for defining the flow of creating Graph and CliqueCatalog objects
    # The flow is always to first parse the source (this is different based on plugin)
    # Secondly, we build the model objects (which is the same for all)

    def load_graph(self, source: Any, **options: Any) -> Graph:
        raw_data = self._parse_source(source, **options)
        return Graph.load(raw_data)

    def load_catalog(self, source: Any, **options: Any) -> CliqueCatalog:
        raw_data = self._parse_source(source, **options)
        size_order: Optional[Sequence[int]] = options.get("size_order")
        return CliqueCatalog.build(raw_data, size_order=size_order)

    @staticmethod
    def _resolve_path(source: Any, options: dict[str, Any]) -> str:
        if isinstance(source, str) and source.strip():
            return source
        fp = options.get("file_path")
        if isinstance(fp, str) and fp.strip():
            return fp
        raise ValueError("Missing file path. Provide it as 'source' or as option 'file_path'.")

    @abstractmethod
    def _parse_source(self, source: Any, **options: Any) -> Any:
        # This will be implemented by all classes that extends this .py
        pass
