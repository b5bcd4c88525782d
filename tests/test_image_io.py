"""Tests for image loading, conversion, and saving."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

import truesize_grid.image_io as tsg_image_io
from truesize_grid.constants import COLOR_WHITE, LARGE_IMAGE_DIMENSION


class TestLoadImage:
    def test_rgb_file_loads_as_uint8(self, smooth_image: Path) -> None:
        pixels = tsg_image_io.load_image(smooth_image)
        assert pixels.shape == (32, 48, 3)
        assert pixels.dtype == np.uint8
        assert tuple(pixels[0, 0]) == (0, 128, 0)

    def test_grayscale_keeps_single_channel(self, tmp_path: Path) -> None:
        path = tmp_path / "gray.png"
        Image.new("L", (8, 4), 90).save(path)
        pixels = tsg_image_io.load_image(str(path))
        assert pixels.shape == (4, 8)

    def test_palette_is_converted_to_rgb(self, tmp_path: Path) -> None:
        path = tmp_path / "palette.png"
        Image.new("RGB", (6, 6), "red").convert("P").save(path)
        assert tsg_image_io.load_image(path).shape == (6, 6, 3)

    def test_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError, match="Image file not found"):
            tsg_image_io.load_image("nope/missing.png")

    def test_invalid_data(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.png"
        path.write_text("not an image", encoding="utf-8")
        with pytest.raises(OSError, match="Error loading image"):
            tsg_image_io.load_image(path)

    def test_large_image_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("WARNING")
        big = np.zeros((1, LARGE_IMAGE_DIMENSION + 1), dtype=np.uint8)
        tsg_image_io.validate_image_dimensions(big)
        assert "may exceed the display" in caplog.text


class TestConversions:
    def test_to_pil_modes(self) -> None:
        assert tsg_image_io.to_pil(np.zeros((2, 3), np.uint8)).mode == "L"
        assert tsg_image_io.to_pil(np.zeros((2, 3, 1), np.uint8)).mode == "L"
        assert tsg_image_io.to_pil(np.zeros((2, 3, 3), np.uint8)).mode == "RGB"
        assert tsg_image_io.to_pil(np.zeros((2, 3, 4), np.uint8)).mode == "RGBA"

    def test_to_pil_rejects_other_arrays(self) -> None:
        with pytest.raises(ValueError, match="Expected a uint8"):
            tsg_image_io.to_pil(np.zeros((2, 2)))
        with pytest.raises(ValueError, match="Unsupported image array shape"):
            tsg_image_io.to_pil(np.zeros((2, 2, 2), np.uint8))

    def test_to_rgb_conversions(self, sample_image: Image.Image) -> None:
        """RGB stays RGB; RGBA alpha-composites; L converts."""
        assert tsg_image_io.to_rgb(sample_image, bg_color=COLOR_WHITE) is sample_image

        rgba = Image.new("RGBA", (2, 2), (255, 0, 0, 0))
        flat = tsg_image_io.to_rgb(rgba, bg_color=COLOR_WHITE)
        assert flat.getpixel((0, 0)) == COLOR_WHITE

        gray = tsg_image_io.to_rgb(Image.new("L", (2, 2), 5), bg_color=COLOR_WHITE)
        assert gray.getpixel((0, 0)) == (5, 5, 5)

    def test_as_pil(self, sample_image: Image.Image) -> None:
        assert tsg_image_io.as_pil(sample_image) is sample_image
        assert tsg_image_io.as_pil(np.zeros((2, 2), np.uint8)).size == (2, 2)
        with pytest.raises(TypeError, match="Cannot render"):
            tsg_image_io.as_pil([[0]])


def test_save_image_round_trip(
    tmp_path: Path, sample_array: np.ndarray,
) -> None:
    out = tsg_image_io.save_image(sample_array, tmp_path / "sub" / "img.png")
    assert np.array_equal(tsg_image_io.load_image(out), sample_array)


def test_save_image_requires_path(sample_array: np.ndarray) -> None:
    with pytest.raises(TypeError, match=r"pathlib\.Path"):
        tsg_image_io.save_image(sample_array, "img.png")  # type: ignore[arg-type]


def test_load_uses_pillow_open(
    make_image_file: Callable[..., Path],
    mocker,  # noqa: ANN001
) -> None:
    path = make_image_file("probe.png", (3, 2))
    spy = mocker.spy(tsg_image_io.Image, "open")
    tsg_image_io.load_image(path)
    spy.assert_called_once_with(path)
