from pathlib import Path

import pytest

from argbgrid import GridConfig, PixelGrid, aligned_stride, get_default_config, set_default_config


@pytest.fixture
def restore_default_config():
    config = get_default_config()
    yield
    set_default_config(config)


def test_defaults() -> None:
    config = GridConfig()

    assert config.row_alignment == 4
    assert config.ignore_alpha is False
    assert config.random_seed is None


@pytest.mark.parametrize("alignment", [0, -4, 6])
def test_bad_alignment(alignment: int) -> None:
    with pytest.raises(ValueError):
        GridConfig(row_alignment=alignment)


@pytest.mark.parametrize(
    "width, alignment, stride", [(0, 4, 0), (3, 4, 12), (3, 8, 16), (4, 16, 16), (5, 16, 32)]
)
def test_aligned_stride(width: int, alignment: int, stride: int) -> None:
    assert aligned_stride(width, alignment) == stride


def test_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "grid.yaml"
    path.write_text("row_alignment: 8\nignore_alpha: true\nrandom_seed: 3\n")

    config = GridConfig.from_yaml(path)

    assert config == GridConfig(row_alignment=8, ignore_alpha=True, random_seed=3)


def test_from_yaml_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "grid.yaml"
    path.write_text("")

    assert GridConfig.from_yaml(path) == GridConfig()


def test_from_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "grid.yaml"
    path.write_text("row_alignment: 8\nstrid: 4\n")

    with pytest.raises(ValueError, match="strid"):
        GridConfig.from_yaml(path)


def test_from_yaml_rejects_list(tmp_path: Path) -> None:
    path = tmp_path / "grid.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(ValueError):
        GridConfig.from_yaml(path)


def test_default_config_used_by_create(restore_default_config) -> None:
    set_default_config(GridConfig(row_alignment=32))

    grid = PixelGrid.create(1, 2)

    assert grid.stride == 32
    assert grid.config is get_default_config()
