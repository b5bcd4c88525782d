"""
Defines shared type aliases for the true-size grid tools.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray

AlignmentName = Literal["left", "top", "center"]
PixelGrid = NDArray[np.generic]
RGB = tuple[int, int, int]


@dataclass(slots=True)
class InputPaths:
    """Paths of the image to smooth and the image to sharpen."""

    smooth_path: str
    sharpen_path: str
