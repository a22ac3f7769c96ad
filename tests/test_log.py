import logging
from pathlib import Path

import pytest

from argbgrid import PixelGrid
from argbgrid.log import IndentMultiline, setup_logging


@pytest.fixture
def grid_logger():
    logger = logging.getLogger("argbgrid")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def test_indent_multiline() -> None:
    formatter = IndentMultiline("%(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "one\ntwo\nthree", None, None)

    assert formatter.format(record) == "one\n    two\n    three"


def test_single_line_unchanged() -> None:
    formatter = IndentMultiline("%(levelname)s %(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)

    assert formatter.format(record) == "INFO hello"


def test_setup_logging_to_file(tmp_path: Path, grid_logger: logging.Logger) -> None:
    log_file = tmp_path / "argbgrid.log"

    handler = setup_logging("DEBUG", log_file)
    PixelGrid.create(2, 2).to_raster()
    handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "argbgrid.raster" in text
    assert "Locked" in text


def test_setup_logging_default_level(grid_logger: logging.Logger) -> None:
    handler = setup_logging()

    assert isinstance(handler, logging.StreamHandler)
    assert grid_logger.level == logging.WARNING
