"""Image loading, conversion, and saving as numpy pixel grids."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from truesize_grid.constants import (
    COLOR_MODE_GRAY,
    COLOR_MODE_RGB,
    LARGE_IMAGE_DIMENSION,
)
from truesize_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from truesize_grid.type_defs import RGB, PixelGrid

_KEPT_MODES = (COLOR_MODE_GRAY, COLOR_MODE_RGB, "RGBA")
_CHANNELS_RGB = 3
_CHANNELS_RGBA = 4


def load_image(path: str | Path) -> PixelGrid:
    """
    Load an image file as a uint8 numpy array.

    Grayscale, RGB and RGBA images keep their channels; every other
    mode (palette, CMYK, 16-bit, ...) is converted to RGB.

    Args:
        path: Path to the image file

    Returns:
        Array of shape (H, W) or (H, W, C)

    Raises:
        FileNotFoundError: If the image file does not exist
        OSError: If the image cannot be opened or processed

    """
    try:
        with Image.open(path) as img:
            converted = img if img.mode in _KEPT_MODES else img.convert(
                COLOR_MODE_RGB,
            )
            pixels = np.array(converted)
    except FileNotFoundError as e:
        msg = f"Image file not found: '{path}'"
        raise FileNotFoundError(msg) from e
    except OSError as e:
        msg = f"Error loading image '{path}': {e!s}"
        raise OSError(msg) from e
    validate_image_dimensions(pixels)
    return pixels


def validate_image_dimensions(pixels: PixelGrid) -> None:
    """Warn when an image is large enough to make a huge canvas."""
    height, width = pixels.shape[:2]
    if width > LARGE_IMAGE_DIMENSION or height > LARGE_IMAGE_DIMENSION:
        logger.warning(
            "Image is large: %dx%d. The true-size canvas may exceed the "
            "display.",
            width,
            height,
        )


def to_pil(pixels: PixelGrid) -> Image.Image:
    """Wrap a uint8 array as a PIL image."""
    if pixels.dtype != np.uint8:
        msg = f"Expected a uint8 image array, got {pixels.dtype}"
        raise ValueError(msg)
    if pixels.ndim == 3 and pixels.shape[2] == 1:  # noqa: PLR2004
        pixels = pixels[:, :, 0]
    if pixels.ndim == 2 or (  # noqa: PLR2004
        pixels.ndim == 3  # noqa: PLR2004
        and pixels.shape[2] in (_CHANNELS_RGB, _CHANNELS_RGBA)
    ):
        return Image.fromarray(np.ascontiguousarray(pixels))
    msg = f"Unsupported image array shape: {pixels.shape}"
    raise ValueError(msg)


def to_rgb(img: Image.Image, *, bg_color: RGB) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA"):
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


def as_pil(image: object) -> Image.Image:
    """Return a PIL view of a grid cell, which may already be PIL."""
    if isinstance(image, Image.Image):
        return image
    if isinstance(image, np.ndarray):
        return to_pil(image)
    msg = f"Cannot render image of type {type(image).__name__!r}"
    raise TypeError(msg)


def save_image(pixels: PixelGrid, out_path: Path) -> Path:
    """Write a uint8 array as a PNG, creating the parent directory."""
    if not isinstance(out_path, Path):
        msg = "out_path must be a pathlib.Path"
        raise TypeError(msg)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    to_pil(pixels).save(out_path, format="PNG")
    return out_path
