"""Logging helpers. The library only creates loggers; applications call setup_logging."""

import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from .grid_config import get_default_config

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class IndentMultiline(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)
        head, *rest = s.splitlines()
        if rest:
            rest = ["    " + line for line in rest]
            return "\n".join([head, *rest])
        return s


def setup_logging(
    level: str | int | None = None, log_file: Path | str | None = None
) -> logging.Handler:
    """Attach a handler to the `argbgrid` logger and return it.

    Logs go to `log_file` when given, else to stderr. `level` defaults to
    the configured `log_level`.
    """
    if level is None:
        level = get_default_config().log_level
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(IndentMultiline(FORMAT))
    logger = logging.getLogger("argbgrid")
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
