"""Recursive downsampling of an image into a list of levels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from truesize_grid.config_defaults import DEFAULT_LEVELS, DEFAULT_SCALE
from truesize_grid.filters import resize
from truesize_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from truesize_grid.type_defs import PixelGrid


def build_pyramid(
    image: PixelGrid,
    levels: int = DEFAULT_LEVELS,
    scale: float = DEFAULT_SCALE,
) -> list[PixelGrid]:
    """
    Return ``levels`` images, each ``scale`` times the size of the last.

    The first level is ``image`` itself.
    """
    if levels < 1:
        msg = f"levels must be at least 1, got {levels}"
        raise ValueError(msg)

    pyramid = [image]
    for _ in range(levels - 1):
        pyramid.append(resize(pyramid[-1], scale))

    logger.debug(
        "Pyramid sizes: %s",
        ", ".join(f"{p.shape[1]}x{p.shape[0]}" for p in pyramid),
    )
    return pyramid
