import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional, Tuple

LOGGER = logging.getLogger(__name__)

# Colors indexed by clique size; same-size cliques share a color
DEFAULT_PALETTE: Tuple[str, ...] = (
    "Coral",
    "CornflowerBlue",
    "DarkGoldenRod",
    "DarkGreen",
    "DarkKhaki",
    "DarkOrange",
    "DarkOrchid",
    "DarkRed",
    "DarkSalmon",
    "HotPink",
    "Yellow",
    "BlueViolet",
    "Sienna",
    "Silver",
    "RosyBrown",
    "MistyRose",
)

ENV_PREFIX = "CLIQUE_VIEWER_"


@dataclass(frozen=True)
class ViewerConfig:
    """
    Canvas, layout and loop settings.

    Defaults reproduce the original sketch: a 1200x800 canvas, vertices of
    size 5 laid out on a circle of radius 7 * size, redrawn at most 4 times
    a second.
    """

    width: int = 1200
    height: int = 800
    vertex_size: float = 5.0
    layout_radius: Optional[float] = None
    tick_rate: float = 4.0
    initial_selection: int = 1

    background: str = "white"
    default_vertex_color: str = "white"
    overflow_color: str = "Gray"
    palette: Tuple[str, ...] = field(default=DEFAULT_PALETTE)

    vertex_stroke: str = "black"
    vertex_stroke_weight: float = 5.0
    heavy_edge_color: str = "rgb(10,10,10)"
    heavy_edge_weight: float = 3.0
    light_edge_color: str = "rgb(153,153,153)"
    light_edge_weight: float = 1.0
    label_color: str = "black"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}.")
        if self.tick_rate <= 0:
            raise ValueError(f"Tick rate must be positive, got {self.tick_rate}.")
        if self.vertex_size <= 0:
            raise ValueError(f"Vertex size must be positive, got {self.vertex_size}.")

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def radius(self) -> float:
        if self.layout_radius is not None:
            return self.layout_radius
        return 7 * self.vertex_size

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_rate

    @property
    def label_offset(self) -> Tuple[float, float]:
        return 0.15 * self.vertex_size, 0.6 * self.vertex_size

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ViewerConfig":
        """Build a config from CLIQUE_VIEWER_* variables (e.g. CLIQUE_VIEWER_TICK_RATE=2)."""
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            if f.name == "palette":
                raw = environ.get(ENV_PREFIX + "PALETTE")
                if raw:
                    values["palette"] = tuple(c.strip() for c in raw.split(",") if c.strip())
                continue

            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            values[f.name] = _coerce(f.name, raw, f.type)

        values.update(overrides)
        LOGGER.debug("Viewer config overrides: %s", sorted(values))
        return cls(**values)

    def with_overrides(self, **overrides) -> "ViewerConfig":
        return replace(self, **overrides)


def _coerce(name: str, raw: str, annotation) -> object:
    kind = str(annotation)
    try:
        if "float" in kind:
            return float(raw)
        if "int" in kind:
            return int(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from None
    return raw
