"""
Test configuration and shared fixtures for truesize_grid.

This module defines reusable pytest fixtures for image arrays, image
files on disk, and configuration objects. These fixtures support all
test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import matplotlib as mpl
import numpy as np
import pytest
from PIL import Image

mpl.use("Agg")

from truesize_grid.config import TruesizeConfig  # noqa: E402
from truesize_grid.constants import COLOR_MODE_RGB  # noqa: E402
from truesize_grid.layout import ImageSize  # noqa: E402
from truesize_grid.logging_utils import logger  # noqa: E402
from truesize_grid.type_defs import InputPaths  # noqa: E402


@pytest.fixture
def sizes_grid() -> Callable[[list[list[tuple[int, int]]]], list[list[ImageSize]]]:
    """Turn nested (width, height) pairs into ImageSize handles."""

    def _build(dims: list[list[tuple[int, int]]]) -> list[list[ImageSize]]:
        return [[ImageSize(w, h) for w, h in row] for row in dims]

    return _build


@pytest.fixture
def sample_array() -> np.ndarray:
    """Create a 40x60 (HxW) RGB uint8 array with a horizontal ramp."""
    ramp = np.linspace(0, 255, 60, dtype=np.float64)
    plane = np.tile(ramp, (40, 1))
    return np.stack([plane, plane[::-1, ::-1], np.full_like(plane, 128)],
                    axis=2).astype(np.uint8)


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 100x100 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (100, 100), color="red")


def _save(path: Path, size: tuple[int, int], color: str) -> Path:
    Image.new(COLOR_MODE_RGB, size, color=color).save(path)
    return path


@pytest.fixture
def smooth_image(tmp_path: Path) -> Path:
    """Save a green 48x32 PNG used as the image to smooth."""
    return _save(tmp_path / "dog.png", (48, 32), "green")


@pytest.fixture
def sharpen_image(tmp_path: Path) -> Path:
    """Save a blue 48x32 PNG used as the image to sharpen."""
    return _save(tmp_path / "cat.png", (48, 32), "blue")


@pytest.fixture
def make_image_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory saving solid-color PNGs of arbitrary size."""

    def _make(name: str, size: tuple[int, int], color: str = "red") -> Path:
        return _save(tmp_path / name, size, color)

    return _make


@pytest.fixture
def input_paths(smooth_image: Path, sharpen_image: Path) -> InputPaths:
    """Typed helper for passing both input paths to the demo."""
    return InputPaths(smooth_path=str(smooth_image),
                      sharpen_path=str(sharpen_image))


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., TruesizeConfig]:
    """
    Build TruesizeConfig instances with optional section overrides.

    Ensures each config uses an isolated output directory under tmp_path
    and a small kernel so filtering stays fast.
    """
    default_output = tmp_path / "tsg_outputs"

    def _build(**sections: dict[str, Any]) -> TruesizeConfig:
        data: dict[str, Any] = {
            "filter": {"kernel_size": 5, "sigma": 1.0},
            "output": {"output": str(default_output)},
        }
        for name, values in sections.items():
            data.setdefault(name, {}).update(values)
        return TruesizeConfig.model_validate(data)

    return _build


@pytest.fixture
def close_figures() -> Generator[None, None, None]:
    """Close every matplotlib figure opened by a test."""
    yield
    import matplotlib.pyplot as plt  # noqa: PLC0415

    plt.close("all")


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the package logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
