"""Clique viewer platform: layout, selection, highlighting and the draw loop."""

from .config import ViewerConfig
from .draw_loop import DrawLoop, LoopState
from .engine import CliqueEngine
from .highlight import HighlightEngine, Palette, PaletteLookup
from .layout import CircularLayout, compute_positions
from .registry import PluginRegistry
from .selector import Selector, SelectorState

__all__ = [
    "CircularLayout",
    "CliqueEngine",
    "DrawLoop",
    "HighlightEngine",
    "LoopState",
    "Palette",
    "PaletteLookup",
    "PluginRegistry",
    "Selector",
    "SelectorState",
    "ViewerConfig",
    "compute_positions",
]
