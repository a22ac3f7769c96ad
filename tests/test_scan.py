import pytest

from argbgrid import Color, GridConfig, PixelGrid, ScanIterator, ScanState, ScanStateError


@pytest.fixture
def numbered_grid() -> PixelGrid:
    """3x2 grid where pixel (row, col) has red = row * 10 + col."""
    grid = PixelGrid.create(3, 2)
    for row in range(2):
        for col in range(3):
            grid.set_color(row, col, Color(255, row * 10 + col, 0, 0))
    return grid


def test_scan_order_and_count(numbered_grid: PixelGrid) -> None:
    scan = ScanIterator(numbered_grid)
    seen: list[int] = []

    while scan.advance():
        assert scan.state is ScanState.POSITIONED
        seen.append(scan.current.r)

    assert seen == [0, 1, 2, 10, 11, 12]
    assert scan.state is ScanState.EXHAUSTED
    assert not scan.advance()


def test_iter_protocol(numbered_grid: PixelGrid) -> None:
    colors = list(numbered_grid)

    assert len(colors) == len(numbered_grid)
    assert [c.r for c in colors] == [0, 1, 2, 10, 11, 12]


def test_current_before_and_after(numbered_grid: PixelGrid) -> None:
    scan = iter(numbered_grid)

    assert scan.state is ScanState.NOT_STARTED
    with pytest.raises(ScanStateError):
        _ = scan.current

    for _ in scan:
        pass
    with pytest.raises(ScanStateError):
        _ = scan.current


def test_reset_restarts(numbered_grid: PixelGrid) -> None:
    scan = ScanIterator(numbered_grid)
    first = list(scan)

    scan.reset()

    assert scan.state is ScanState.NOT_STARTED
    assert list(scan) == first


def test_position_tracks_cursor(numbered_grid: PixelGrid) -> None:
    scan = ScanIterator(numbered_grid)
    positions = []
    while scan.advance():
        positions.append(scan.position)

    assert positions == [(r, c) for r in range(2) for c in range(3)]


def test_padding_is_skipped() -> None:
    grid = PixelGrid.create(1, 3, GridConfig(row_alignment=16))
    grid.randomize(seed=2)
    expected = [grid.get_color(r, 0) for r in range(3)]

    assert list(grid) == expected


def test_sees_pixel_writes(numbered_grid: PixelGrid) -> None:
    scan = ScanIterator(numbered_grid)
    assert scan.advance()

    numbered_grid.set_color(0, 1, Color(1, 2, 3, 4))
    numbered_grid.values[3 * 4 + 2] = 99

    assert scan.advance()
    assert scan.current == Color(1, 2, 3, 4)
    assert scan.advance()
    assert scan.advance()
    assert scan.current.r == 99


def test_sees_clear(numbered_grid: PixelGrid) -> None:
    scan = ScanIterator(numbered_grid)

    numbered_grid.clear()

    assert all(c == Color(0, 0, 0, 0) for c in scan)


@pytest.mark.parametrize("width, height", [(0, 0), (0, 3), (4, 0)])
def test_empty_grid(width: int, height: int) -> None:
    scan = ScanIterator(PixelGrid.create(width, height))

    assert not scan.advance()
    assert scan.state is ScanState.EXHAUSTED
