from .color import Color
from .difference import difference
from .errors import (
    ArgbGridError,
    PixelIndexError,
    RasterAccessError,
    RasterGeometryError,
    ScanStateError,
)
from .grid import PixelGrid
from .grid_config import GridConfig, aligned_stride, get_default_config, set_default_config
from .raster import LockMode, LockedRegion, PillowRaster, Raster, Region, locked
from .scan import ScanIterator, ScanState

__all__ = [
    "ArgbGridError",
    "Color",
    "GridConfig",
    "LockMode",
    "LockedRegion",
    "PillowRaster",
    "PixelGrid",
    "PixelIndexError",
    "Raster",
    "RasterAccessError",
    "RasterGeometryError",
    "Region",
    "ScanIterator",
    "ScanState",
    "ScanStateError",
    "aligned_stride",
    "difference",
    "get_default_config",
    "locked",
    "set_default_config",
]
