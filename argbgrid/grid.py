"""
Byte-level access to 32-bit ARGB rasters.

`PixelGrid` keeps the pixels of a `width` by `height` raster in a flat,
mutable `bytearray`. Rows are `stride` bytes apart and may end in padding.
The pixel at (`row`, `col`) is the four bytes starting at
`row * stride + col * 4`, in the order Blue, Green, Red, Alpha.

- `values` is modified in place and may be written directly.
- Coordinates are 0-based, with origin at top-left.
"""

import random
from logging import getLogger
from typing import TYPE_CHECKING

from PIL import Image

from .color import Color
from .errors import PixelIndexError, RasterAccessError, RasterGeometryError
from .grid_config import GridConfig, aligned_stride, get_default_config
from .raster import (
    CANONICAL_FORMAT,
    LockMode,
    PillowRaster,
    Raster,
    as_raster,
    locked,
)
from .scan import ScanIterator

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = getLogger(__name__)


class PixelGrid:
    """A 32bpp ARGB pixel buffer, optionally backed by a raster.

    `PixelGrid()` with no arguments is uninitialized: `get_color` returns
    `Color.empty()` and `set_color` does nothing.
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        stride: int = 0,
        values: "Iterable[int] | None" = None,
        config: GridConfig | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Negative grid size {width}x{height}")
        if stride < width * 4:
            raise ValueError(f"Stride {stride} too small for width {width}")
        data = bytearray(height * stride) if values is None else bytearray(values)
        if len(data) != height * stride:
            raise ValueError(f"Expected {height * stride} bytes, got {len(data)}")
        self.width: int = width
        self.height: int = height
        self.stride: int = stride
        self._values: bytearray = data
        self.config: GridConfig = config or get_default_config()
        self._raster: Raster | None = None
        self._owns_raster: bool = False

    @classmethod
    def create(cls, width: int, height: int, config: GridConfig | None = None) -> "PixelGrid":
        """Blank grid, every byte zero."""
        config = config or get_default_config()
        return cls(width, height, aligned_stride(width, config.row_alignment), config=config)

    @classmethod
    def from_raster(
        cls, source: "Raster | Image.Image", config: GridConfig | None = None
    ) -> "PixelGrid":
        """Copy the pixels of `source` into a new grid that keeps it as backing raster."""
        config = config or get_default_config()
        raster, owned, width, height, stride, values = _read_raster(source, config)
        grid = cls(width, height, stride, values, config)
        grid._raster = raster
        grid._owns_raster = owned
        return grid

    @property
    def values(self) -> bytearray:
        return self._values

    @values.setter
    def values(self, data: "Iterable[int]") -> None:
        data = bytes(data)
        if len(data) != len(self._values):
            raise ValueError(
                f"Grid holds {len(self._values)} bytes, cannot assign {len(data)}"
            )
        self._values[:] = data

    @property
    def raster(self) -> Raster | None:
        """The backing raster, if any. Its pixels are synced by `to_raster`."""
        return self._raster

    @property
    def initialized(self) -> bool:
        return self.stride != 0 and len(self._values) != 0

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise PixelIndexError(row, col, self.width, self.height)
        return row * self.stride + col * 4

    def get_color(self, row: int, col: int) -> Color:
        if not self.initialized:
            return Color.empty()
        return Color.from_bgra(self._values, self._offset(row, col))

    def set_color(self, row: int, col: int, color: Color) -> None:
        if not self.initialized:
            return
        i = self._offset(row, col)
        self._values[i : i + 4] = color.to_bgra()

    def clear(self) -> None:
        self._values[:] = bytes(len(self._values))

    def fill(self, color: Color) -> None:
        """Write `color` into every pixel, leaving row padding alone."""
        row_bytes = self.width * 4
        row_data = color.to_bgra() * self.width
        for row in range(self.height):
            start = row * self.stride
            self._values[start : start + row_bytes] = row_data

    def randomize(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        """Overwrite every byte, padding included, with random values.

        `rng` wins over `seed`, which wins over `config.random_seed`. With
        none of them the generator is seeded from the OS.
        """
        if rng is None:
            if seed is None:
                seed = self.config.random_seed
            rng = random.Random(seed)
        self._values[:] = rng.randbytes(len(self._values))

    def matches(self, other: "PixelGrid") -> bool:
        """True if both grids have the same geometry and identical bytes."""
        if other.width != self.width or other.height != self.height:
            return False
        if other.stride != self.stride:
            return False
        return self._values == other._values

    def copy(self) -> "PixelGrid":
        """A disconnected duplicate. The backing raster is not shared."""
        return PixelGrid(self.width, self.height, self.stride, self._values, self.config)

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, object]) -> "PixelGrid":
        return self.copy()

    def difference(self, other: "PixelGrid", ignore_alpha: bool | None = None) -> "PixelGrid":
        from .difference import difference

        if ignore_alpha is None:
            ignore_alpha = self.config.ignore_alpha
        return difference(self, other, ignore_alpha)

    def load_raster(self, source: "Raster | Image.Image") -> None:
        """Replace size, stride, bytes and backing raster from `source`.

        A previous backing raster that this grid created is disposed.
        """
        raster, owned, width, height, stride, values = _read_raster(source, self.config)
        old = self._raster
        if old is not None and old is not raster and self._owns_raster:
            old.dispose()
        self.width, self.height, self.stride = width, height, stride
        self._values = values
        self._owns_raster = owned or (old is raster and self._owns_raster)
        self._raster = raster

    def to_raster(self) -> Raster:
        """Write the bytes back into the backing raster and return it.

        A new raster of the grid's own size is created when there is none.
        """
        if self._raster is None:
            self._raster = PillowRaster.new(
                self.width, self.height, self.config.row_alignment
            )
            self._owns_raster = True
        raster = self._raster
        if raster.width != self.width or raster.height != self.height:
            raise RasterGeometryError(
                f"Raster is {raster.width}x{raster.height}, grid is {self.width}x{self.height}"
            )
        with locked(raster, LockMode.WRITE) as data:
            if data.stride != self.stride:
                raise RasterGeometryError(
                    f"Raster stride {data.stride} does not match grid stride {self.stride}"
                )
            data.data[:] = self._values
        return raster

    def to_image(self) -> Image.Image:
        raster = self.to_raster()
        if not isinstance(raster, PillowRaster):
            raise RasterAccessError(f"{type(raster).__name__} is not backed by a Pillow image")
        return raster.image

    def dispose(self) -> None:
        """Release the backing raster. The grid's own bytes stay usable."""
        if self._raster is not None:
            self._raster.dispose()
            self._raster = None
            self._owns_raster = False

    def __iter__(self) -> ScanIterator:
        return ScanIterator(self)

    def __len__(self) -> int:
        return self.width * self.height

    def __getitem__(self, pos: tuple[int, int]) -> Color:
        return self.get_color(*pos)

    def __setitem__(self, pos: tuple[int, int], color: Color) -> None:
        self.set_color(*pos, color)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height}, stride={self.stride})"


def _read_raster(
    source: "Raster | Image.Image", config: GridConfig
) -> tuple[Raster, bool, int, int, int, bytearray]:
    """Read `source` and return it as a raster plus its geometry and bytes.

    The bool is True when the raster is a converted copy made here, which
    the caller then owns.
    """
    raster = as_raster(source, config.row_alignment)
    owned = (
        isinstance(source, Image.Image)
        and isinstance(raster, PillowRaster)
        and raster.image is not source
    )
    try:
        if raster.pixel_format != CANONICAL_FORMAT:
            raise RasterAccessError(
                f"Raster format {raster.pixel_format} is not {CANONICAL_FORMAT}"
            )
        with locked(raster, LockMode.READ) as data:
            width, height, stride = data.region.width, data.region.height, data.stride
            if stride < width * 4:
                raise RasterAccessError(f"Raster stride {stride} too small for width {width}")
            values = bytearray(data.data[: height * stride])
        if len(values) != height * stride:
            raise RasterAccessError(
                f"Raster returned {len(values)} bytes for {height} rows of {stride}"
            )
    except Exception:
        if owned:
            raster.dispose()
        raise
    logger.debug(f"Read {width}x{height} raster, stride {stride}")
    return raster, owned, width, height, stride, values
