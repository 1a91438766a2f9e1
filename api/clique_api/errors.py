"""Error taxonomy shared by the clique viewer packages."""


class CliqueViewerError(ValueError):
    """Base class for every data-integrity error raised by the viewer."""


class MalformedGraphError(CliqueViewerError):
    """An adjacency entry references an unknown vertex id, or an id is not an integer."""


class EmptyGraphError(CliqueViewerError):
    """A layout was requested for a graph with no vertices."""


class MalformedCliqueError(CliqueViewerError):
    """A clique repeats a vertex, names an unknown vertex, or sits in the wrong size group."""


class EmptyCatalogError(CliqueViewerError):
    """The clique catalog would contain zero cliques, so no selector range exists."""


class PaletteOverflowError(CliqueViewerError):
    def __init__(self, size: int, palette_length: int):
        super().__init__(
            f"Clique size {size} has no palette color (palette holds {palette_length} colors)."
        )
        self.size = size
        self.palette_length = palette_length


class DataSourceFormatError(CliqueViewerError):
    """A datasource could not decode the content of its source."""
