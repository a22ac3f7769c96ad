class ArgbGridError(Exception):
    """Base class for all argbgrid errors."""


class PixelIndexError(ArgbGridError, IndexError):
    """A row or column lies outside the grid."""

    def __init__(self, row: int, col: int, width: int, height: int):
        super().__init__(
            f"Pixel ({row}, {col}) is outside a {width}x{height} grid"
        )
        self.row = row
        self.col = col


class RasterAccessError(ArgbGridError):
    """The backing raster could not be converted, locked or released."""


class RasterGeometryError(RasterAccessError):
    """Grid and raster no longer agree on size or stride."""


class ScanStateError(ArgbGridError):
    """The scan cursor is not positioned on a pixel."""
