from .plugin import CircularVisualizer
from .surface import CanvasSurface

__all__ = ["CircularVisualizer", "CanvasSurface"]
