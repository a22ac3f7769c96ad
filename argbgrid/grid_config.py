from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass
class GridConfig:
    row_alignment: int = 4
    """Byte alignment of each row; stride is width * 4 rounded up to this"""

    ignore_alpha: bool = False
    """Force alpha to 255 in difference grids instead of diffing it"""

    random_seed: int | None = None
    """Seed used by randomize() when the caller passes none"""

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.row_alignment <= 0 or self.row_alignment % 4:
            raise ValueError(
                f"row_alignment must be a positive multiple of 4, got {self.row_alignment}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GridConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "GridConfig":
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_dict(data)


def aligned_stride(width: int, row_alignment: int = 4) -> int:
    row_bytes = width * 4
    return (row_bytes + row_alignment - 1) // row_alignment * row_alignment


_default_config = GridConfig()


def get_default_config() -> GridConfig:
    return _default_config


def set_default_config(config: GridConfig) -> None:
    global _default_config
    _default_config = config
