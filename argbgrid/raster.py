"""
Bridge between pixel grids and external raster objects.

A raster is anything that satisfies the `Raster` protocol: it knows its size
and pixel format and hands out its pixel memory through `lock`/`unlock`.
Pixel memory always comes back in the canonical 32-bit layout, four bytes per
pixel in B, G, R, A order, rows padded to the raster's alignment.

`PillowRaster` implements the protocol on top of a `PIL.Image.Image` in mode
"RGBA", exchanging bytes with Pillow through the "BGRA" raw mode.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Protocol, runtime_checkable

from PIL import Image

from .errors import RasterAccessError
from .grid_config import aligned_stride

logger = getLogger(__name__)

CANONICAL_FORMAT = "RGBA"
RAW_MODE = "BGRA"


class LockMode(Enum):
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"

    @property
    def writes(self) -> bool:
        return self is not LockMode.READ


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int


@dataclass
class LockedRegion:
    """Pixel memory of a locked raster region.

    `data` is a private copy; changes reach the raster when a writable lock
    is released.
    """

    region: Region
    mode: LockMode
    stride: int
    data: bytearray


@runtime_checkable
class Raster(Protocol):
    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def pixel_format(self) -> str: ...

    def lock(self, region: Region | None, mode: LockMode) -> LockedRegion: ...

    def unlock(self, locked: LockedRegion, commit: bool = True) -> None: ...

    def dispose(self) -> None: ...


def to_canonical(image: Image.Image) -> Image.Image:
    """Return `image` if it is already RGBA, else an unscaled RGBA copy."""
    if image.mode == CANONICAL_FORMAT:
        return image
    logger.info(f"Converting {image.mode} image {image.size} to {CANONICAL_FORMAT}")
    try:
        result = Image.new(CANONICAL_FORMAT, image.size)
        result.paste(image.convert(CANONICAL_FORMAT), (0, 0))
    except (ValueError, OSError) as e:
        raise RasterAccessError(f"Unsupported pixel format '{image.mode}'") from e
    return result


def _pad_rows(raw: bytes, row_bytes: int, stride: int, height: int) -> bytearray:
    if row_bytes == stride:
        return bytearray(raw)
    out = bytearray(stride * height)
    for y in range(height):
        out[y * stride : y * stride + row_bytes] = raw[y * row_bytes : (y + 1) * row_bytes]
    return out


def _strip_rows(data: bytearray, row_bytes: int, stride: int, height: int) -> bytes:
    if row_bytes == stride:
        return bytes(data[: stride * height])
    return b"".join(
        bytes(data[y * stride : y * stride + row_bytes]) for y in range(height)
    )


class PillowRaster:
    """A `Raster` backed by a Pillow RGBA image."""

    def __init__(self, image: Image.Image, row_alignment: int = 4):
        if image.mode != CANONICAL_FORMAT:
            raise RasterAccessError(
                f"PillowRaster needs a {CANONICAL_FORMAT} image, got {image.mode}"
            )
        if row_alignment <= 0 or row_alignment % 4:
            raise RasterAccessError(
                f"row_alignment must be a positive multiple of 4, got {row_alignment}"
            )
        self._image: Image.Image | None = image
        self.row_alignment: int = row_alignment
        self._locked: LockedRegion | None = None

    @classmethod
    def new(cls, width: int, height: int, row_alignment: int = 4) -> "PillowRaster":
        """Blank, fully transparent raster in the canonical format."""
        return cls(Image.new(CANONICAL_FORMAT, (width, height)), row_alignment)

    @classmethod
    def from_image(cls, image: Image.Image, row_alignment: int = 4) -> "PillowRaster":
        return cls(to_canonical(image), row_alignment)

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise RasterAccessError("Raster has been disposed")
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def pixel_format(self) -> str:
        return self.image.mode

    @property
    def is_locked(self) -> bool:
        return self._locked is not None

    @property
    def disposed(self) -> bool:
        return self._image is None

    def lock(self, region: Region | None = None, mode: LockMode = LockMode.READ) -> LockedRegion:
        image = self.image
        if self._locked is not None:
            raise RasterAccessError("Raster is already locked")
        if region is None:
            region = Region(0, 0, image.width, image.height)
        if (
            region.x < 0
            or region.y < 0
            or region.width < 0
            or region.height < 0
            or region.x + region.width > image.width
            or region.y + region.height > image.height
        ):
            raise RasterAccessError(f"Lock region {region} outside {image.size} raster")

        row_bytes = region.width * 4
        stride = aligned_stride(region.width, self.row_alignment)
        if region.width == 0 or region.height == 0:
            raw = b""
        else:
            box = (region.x, region.y, region.x + region.width, region.y + region.height)
            src = image if box == (0, 0, image.width, image.height) else image.crop(box)
            try:
                raw = src.tobytes("raw", RAW_MODE)
            except (ValueError, OSError) as e:
                raise RasterAccessError(f"Could not read pixels of {region}") from e

        locked = LockedRegion(
            region, mode, stride, _pad_rows(raw, row_bytes, stride, region.height)
        )
        self._locked = locked
        logger.debug(f"Locked {region} ({mode.value}, stride {stride})")
        return locked

    def unlock(self, locked: LockedRegion, commit: bool = True) -> None:
        """Release `locked`. Writable regions are written back unless `commit` is False."""
        if locked is not self._locked:
            raise RasterAccessError("Region was not locked by this raster")
        self._locked = None
        region = locked.region
        logger.debug(f"Unlocked {region} ({locked.mode.value}, commit={commit})")
        if not commit or not locked.mode.writes or region.width == 0 or region.height == 0:
            return
        expected = locked.stride * region.height
        if len(locked.data) != expected:
            raise RasterAccessError(
                f"Locked data is {len(locked.data)} bytes, expected {expected}"
            )
        packed = _strip_rows(locked.data, region.width * 4, locked.stride, region.height)
        try:
            patch = Image.frombytes(
                CANONICAL_FORMAT, (region.width, region.height), packed, "raw", RAW_MODE
            )
            self.image.paste(patch, (region.x, region.y))
        except (ValueError, OSError) as e:
            raise RasterAccessError(f"Could not write pixels of {region}") from e

    def dispose(self) -> None:
        if self._image is None:
            return
        logger.debug(f"Disposing raster {self._image.size}")
        self._image.close()
        self._image = None
        self._locked = None


def as_raster(source: "Raster | Image.Image", row_alignment: int = 4) -> Raster:
    """Wrap a Pillow image as a canonical raster; pass rasters through."""
    if isinstance(source, Image.Image):
        return PillowRaster.from_image(source, row_alignment)
    if isinstance(source, Raster):
        return source
    raise RasterAccessError(f"Not a raster: {type(source).__name__}")


@contextmanager
def locked(
    raster: Raster, mode: LockMode = LockMode.READ, region: Region | None = None
) -> Iterator[LockedRegion]:
    """Lock `raster` for the duration of the block, always unlocking.

    Changes to a writable region are only written back when the block
    completes without an exception.
    """
    data = raster.lock(region, mode)
    try:
        yield data
    except BaseException:
        raster.unlock(data, commit=False)
        raise
    raster.unlock(data)
