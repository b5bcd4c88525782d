"""
Gaussian smoothing, unsharp-mask detail extraction, and resizing.

Images are numpy arrays of shape (H, W) or (H, W, C). Filtering works
per channel with zero padding and returns an array of the input's shape
and dtype; integer results are rounded half away from zero and clipped
to the dtype range, so uint8 arithmetic saturates instead of wrapping.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image
from scipy import ndimage

from truesize_grid.constants import GAUSSIAN_EPSILON
from truesize_grid.image_io import to_pil

if TYPE_CHECKING:  # pragma: no cover
    from numpy.typing import NDArray

    from truesize_grid.type_defs import PixelGrid

_COLOR_NDIM = 3


def _kernel_shape(size: int | tuple[int, int]) -> tuple[int, int]:
    rows, cols = (size, size) if isinstance(size, int) else size
    if rows < 1 or cols < 1:
        msg = f"Kernel size must be at least 1, got {size!r}"
        raise ValueError(msg)
    return int(rows), int(cols)


def gaussian_kernel(
    size: int | tuple[int, int],
    sigma: float,
) -> NDArray[np.float64]:
    """
    Build a normalized, rotationally symmetric Gaussian kernel.

    Coordinates are measured from the geometric center of the kernel,
    so even sizes are symmetric too. Values below machine epsilon
    times the peak are zeroed before normalizing to a unit sum.
    """
    if sigma <= 0:
        msg = f"Sigma must be positive, got {sigma}"
        raise ValueError(msg)
    rows, cols = _kernel_shape(size)
    y = np.arange(rows) - (rows - 1) / 2
    x = np.arange(cols) - (cols - 1) / 2
    xx, yy = np.meshgrid(x, y)
    kernel = np.exp(-(xx**2 + yy**2) / (2 * sigma**2))
    kernel[kernel < GAUSSIAN_EPSILON * kernel.max()] = 0
    return kernel / kernel.sum()


def _cast_like(values: NDArray[np.float64], dtype: np.dtype) -> PixelGrid:
    """Round and saturate float results back into ``dtype``."""
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        rounded = np.sign(values) * np.floor(np.abs(values) + 0.5)
        return np.clip(rounded, info.min, info.max).astype(dtype)
    return values.astype(dtype)


def filter_same(image: PixelGrid, kernel: NDArray[np.floating]) -> PixelGrid:
    """
    Correlate each channel with ``kernel`` using zero padding.

    The output has the input's shape. The kernel anchor is the element
    at index (n - 1) // 2 along each axis.
    """
    if kernel.ndim != 2:  # noqa: PLR2004
        msg = f"Kernel must be 2-D, got {kernel.ndim}-D"
        raise ValueError(msg)
    if image.ndim not in (2, _COLOR_NDIM):
        msg = f"Image must be 2-D or 3-D, got shape {image.shape}"
        raise ValueError(msg)

    origin = [(n - 1) // 2 - n // 2 for n in kernel.shape]
    data = image.astype(np.float64)

    def correlate(channel: NDArray[np.float64]) -> NDArray[np.float64]:
        return ndimage.correlate(
            channel, kernel, mode="constant", cval=0.0, origin=origin,
        )

    if data.ndim == 2:  # noqa: PLR2004
        out = correlate(data)
    else:
        out = np.stack(
            [correlate(data[:, :, c]) for c in range(data.shape[2])],
            axis=2,
        )
    return _cast_like(out, image.dtype)


def smooth(
    image: PixelGrid,
    size: int | tuple[int, int],
    sigma: float,
) -> PixelGrid:
    """Blur ``image`` with a Gaussian kernel of the given size and sigma."""
    return filter_same(image, gaussian_kernel(size, sigma))


def _check_pair(a: PixelGrid, b: PixelGrid) -> None:
    if a.shape != b.shape:
        msg = f"Image shapes differ: {a.shape} vs {b.shape}"
        raise ValueError(msg)
    if a.dtype != b.dtype:
        msg = f"Image dtypes differ: {a.dtype} vs {b.dtype}"
        raise ValueError(msg)


def saturating_add(a: PixelGrid, b: PixelGrid) -> PixelGrid:
    """Add two images, clipping integer results to the dtype range."""
    _check_pair(a, b)
    return _cast_like(a.astype(np.float64) + b.astype(np.float64), a.dtype)


def saturating_subtract(a: PixelGrid, b: PixelGrid) -> PixelGrid:
    """Subtract ``b`` from ``a``, clipping integer results to the range."""
    _check_pair(a, b)
    return _cast_like(a.astype(np.float64) - b.astype(np.float64), a.dtype)


def sharpen(
    image: PixelGrid,
    size: int | tuple[int, int],
    sigma: float,
) -> PixelGrid:
    """
    Return the unsharp-mask detail layer of ``image``.

    This is the image minus its Gaussian blur: the high frequencies that
    unsharp masking adds back. For unsigned images negative detail
    saturates at zero.
    """
    return saturating_subtract(image, smooth(image, size, sigma))


def _resize_channel(
    channel: NDArray[np.float64],
    size: tuple[int, int],
) -> NDArray[np.float64]:
    img = Image.fromarray(channel.astype(np.float32))
    return np.asarray(img.resize(size, Image.Resampling.BICUBIC),
                      dtype=np.float64)


def resize(image: PixelGrid, scale: float) -> PixelGrid:
    """
    Resize ``image`` by ``scale`` with antialiased bicubic resampling.

    Output dimensions are ceil(dim * scale); dtype and the number of
    channels are preserved.
    """
    if scale <= 0:
        msg = f"Scale must be positive, got {scale}"
        raise ValueError(msg)
    height, width = image.shape[:2]
    new_size = (
        max(1, math.ceil(width * scale)),
        max(1, math.ceil(height * scale)),
    )

    if image.dtype == np.uint8:
        resized = np.asarray(
            to_pil(image).resize(new_size, Image.Resampling.BICUBIC),
        )
        return resized.reshape(new_size[1], new_size[0], *image.shape[2:])

    data = image.astype(np.float64)
    if data.ndim == 2:  # noqa: PLR2004
        out = _resize_channel(data, new_size)
    else:
        out = np.stack(
            [_resize_channel(data[:, :, c], new_size)
             for c in range(data.shape[2])],
            axis=2,
        )
    return _cast_like(out, image.dtype)
