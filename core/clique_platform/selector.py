import threading
from typing import Optional


class Selector:
    """Maps a raw control value onto a valid catalog index."""

    def __init__(self, catalog_size: int):
        if catalog_size < 1:
            raise ValueError(f"Selector needs at least one catalog entry, got {catalog_size}.")
        self.catalog_size = catalog_size

    @property
    def max_index(self) -> int:
        return self.catalog_size - 1

    def clamp(self, raw_value: int) -> int:
        return max(0, min(int(raw_value), self.max_index))


class SelectorState:
    """
    The raw value of the control surface.

    Written by input events (CLI, web requests), read once per tick by the
    draw loop. The lock makes the write/read pair safe when the loop runs on
    its own thread.
    """

    def __init__(self, initial: int = 0):
        self._lock = threading.Lock()
        self._value = int(initial)
        self._writes = 0

    def set(self, value: int) -> None:
        with self._lock:
            self._value = int(value)
            self._writes += 1

    def read(self) -> int:
        with self._lock:
            return self._value

    @property
    def write_count(self) -> int:
        with self._lock:
            return self._writes

    def __repr__(self) -> str:
        return f"SelectorState(value={self.read()})"


def parse_selector_value(raw: object) -> Optional[int]:
    """Accept ints and integer strings from input events; anything else is None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None
