"""
Per-channel absolute difference of two grids of any size.

The result covers the larger of the two widths and the larger of the two
heights. Where both grids have a pixel the result holds `abs(a - b)` per
channel; where only one has a pixel the result copies it; where neither
does the result is transparent black.
"""

from logging import getLogger

from .grid import PixelGrid

logger = getLogger(__name__)

OPAQUE = 0xFF


def difference(a: PixelGrid, b: PixelGrid, ignore_alpha: bool = False) -> PixelGrid:
    """Return a new grid with the channel-wise difference of `a` and `b`.

    Most images have alpha 255 everywhere, so a literal alpha difference is
    zero and the result looks blank. With `ignore_alpha` the alpha of every
    overlapping pixel is set to 255 instead.
    """
    h1, w1 = a.height, a.width
    h2, w2 = b.height, b.width
    min_height, max_height = min(h1, h2), max(h1, h2)
    min_width, max_width = min(w1, w2), max(w1, w2)

    result = PixelGrid.create(max_width, max_height, a.config)
    logger.debug(f"Difference of {w1}x{h1} and {w2}x{h2} into {max_width}x{max_height}")

    src1, src2, out = a.values, b.values, result.values
    stride1, stride2, res_stride = a.stride, b.stride, result.stride

    for row in range(max_height):
        res_row = row * res_stride
        if row < min_height:
            # Overlap, then whichever grid is wider on this row
            for col in range(min_width):
                i1 = row * stride1 + col * 4
                i2 = row * stride2 + col * 4
                o = res_row + col * 4
                out[o] = abs(src1[i1] - src2[i2])
                out[o + 1] = abs(src1[i1 + 1] - src2[i2 + 1])
                out[o + 2] = abs(src1[i1 + 2] - src2[i2 + 2])
                out[o + 3] = OPAQUE if ignore_alpha else abs(src1[i1 + 3] - src2[i2 + 3])
            if w1 > w2:
                _copy_span(src1, row * stride1, out, res_row, min_width, w1)
            elif w2 > w1:
                _copy_span(src2, row * stride2, out, res_row, min_width, w2)
        elif row < h1:
            _copy_span(src1, row * stride1, out, res_row, 0, w1)
        elif row < h2:
            _copy_span(src2, row * stride2, out, res_row, 0, w2)
        # Columns outside both grids stay zero from create()

    return result


def _copy_span(
    src: bytearray, src_row: int, out: bytearray, out_row: int, start: int, stop: int
) -> None:
    out[out_row + start * 4 : out_row + stop * 4] = src[src_row + start * 4 : src_row + stop * 4]
