from enum import Enum
from typing import TYPE_CHECKING

from .color import Color
from .errors import ScanStateError

if TYPE_CHECKING:
    from .grid import PixelGrid


class ScanState(Enum):
    NOT_STARTED = "not_started"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class ScanIterator:
    """Walks the colors of a grid in raster-scan order.

    Row 0 left to right, then row 1, and so on. Bytes past `width * 4` in a
    row are skipped. The iterator reads the grid's live byte array, so pixel
    writes made during a scan are seen; resizing the grid is not.
    """

    def __init__(self, grid: "PixelGrid"):
        self._values = grid.values
        self._width = grid.width
        self._height = grid.height
        self._stride = grid.stride
        self._row = 0
        self._col = -1
        self._current: Color | None = None
        self.state = ScanState.NOT_STARTED

    @property
    def position(self) -> tuple[int, int]:
        return self._row, self._col

    @property
    def current(self) -> Color:
        if self.state is not ScanState.POSITIONED or self._current is None:
            raise ScanStateError(f"No current pixel, scan is {self.state.value}")
        return self._current

    def advance(self) -> bool:
        if self.state is ScanState.EXHAUSTED:
            return False
        self._col += 1
        if self._col >= self._width:
            self._col = 0
            self._row += 1
        if self._row >= self._height or self._width == 0:
            self.state = ScanState.EXHAUSTED
            self._current = None
            return False

        self._current = Color.from_bgra(self._values, self._row * self._stride + self._col * 4)
        self.state = ScanState.POSITIONED
        return True

    def reset(self) -> None:
        self._row = 0
        self._col = -1
        self._current = None
        self.state = ScanState.NOT_STARTED

    def __iter__(self) -> "ScanIterator":
        return self

    def __next__(self) -> Color:
        if not self.advance():
            raise StopIteration
        return self.current
