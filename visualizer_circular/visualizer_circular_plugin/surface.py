import os
import threading
from typing import List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader


class Line:
    kind = "line"

    def __init__(self, x1: float, y1: float, x2: float, y2: float, stroke: str, weight: float):
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.stroke = stroke
        self.weight = weight


class Circle:
    kind = "circle"

    def __init__(self, x: float, y: float, diameter: float, fill: str, stroke: str, weight: float):
        self.x, self.y = x, y
        self.diameter = diameter
        self.fill = fill
        self.stroke = stroke
        self.weight = weight

    @property
    def r(self) -> float:
        return self.diameter / 2


class Label:
    kind = "label"

    def __init__(self, x: float, y: float, text: str, color: str):
        self.x, self.y = x, y
        self.text = text
        self.color = color


class CanvasSurface:
    """
    Fixed-size, double-buffered drawing surface.

    Drawing calls go to the back buffer. ``present`` publishes it as the
    current frame, so readers on other threads never see a half-drawn frame.
    """

    def __init__(self, width: int, height: int, background: str = "white"):
        self.width = width
        self.height = height
        self.background = background
        self._back: List[object] = []
        self._front: Tuple[object, ...] = ()
        self._front_index: Optional[int] = None
        self._frames = 0
        self._lock = threading.Lock()

        template_path = os.path.join(os.path.dirname(__file__), 'templates')
        self._env = Environment(loader=FileSystemLoader(template_path), autoescape=True)

    # -----------------
    # DRAWING (back buffer)
    # -----------------

    def clear(self) -> None:
        self._back = []

    def line(self, x1: float, y1: float, x2: float, y2: float, stroke: str, weight: float = 1.0) -> None:
        self._back.append(Line(x1, y1, x2, y2, stroke, weight))

    def circle(self, x: float, y: float, diameter: float, fill: str, stroke: str, weight: float = 1.0) -> None:
        self._back.append(Circle(x, y, diameter, fill, stroke, weight))

    def text(self, x: float, y: float, text: str, color: str = "black") -> None:
        self._back.append(Label(x, y, text, color))

    @property
    def pending(self) -> List[object]:
        return list(self._back)

    # -----------------
    # PRESENTING (front buffer)
    # -----------------

    def present(self, index: Optional[int] = None) -> None:
        with self._lock:
            self._front = tuple(self._back)
            self._front_index = index
            self._frames += 1

    def frame(self) -> Tuple[Tuple[object, ...], Optional[int]]:
        with self._lock:
            return self._front, self._front_index

    @property
    def frames_presented(self) -> int:
        with self._lock:
            return self._frames

    def to_svg(self) -> str:
        primitives, index = self.frame()
        template = self._env.get_template('frame.svg')
        return template.render(
            width=self.width,
            height=self.height,
            background=self.background,
            primitives=primitives,
            index=index,
        )
