"""Data model and input normalization for true-size grid layouts."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import TYPE_CHECKING, Any

import numpy as np

from truesize_grid.config_defaults import DEFAULT_MARGINS
from truesize_grid.constants import MARGIN_COMPONENTS_MAX

if TYPE_CHECKING:  # pragma: no cover
    from truesize_grid.type_defs import AlignmentName


class InvalidArgumentError(ValueError):
    """Raised when layout inputs are malformed."""


class Alignment(str, Enum):
    """How images of differing size share a row or column band."""

    LEFT = "left"
    TOP = "top"
    CENTER = "center"

    @classmethod
    def parse(cls, value: Alignment | AlignmentName | str) -> Alignment:
        """
        Return the member matching ``value``.

        Strings are matched exactly against the member values, ignoring
        case and surrounding whitespace. Prefixes are not accepted.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        choices = ", ".join(repr(m.value) for m in cls)
        msg = f"Invalid alignment {value!r}: expected one of {choices}"
        raise InvalidArgumentError(msg)


@dataclass(frozen=True)
class Margins:
    """Horizontal and vertical gap in pixels."""

    horizontal: float
    vertical: float

    @classmethod
    def from_value(
        cls,
        value: Margins | float | Sequence[float] | None,
    ) -> Margins:
        """
        Normalize a user supplied margins value.

        ``None`` and empty sequences select the default, a scalar or a
        one-element sequence is used for both axes, and a pair is taken
        as (horizontal, vertical).
        """
        if isinstance(value, Margins):
            parts: list[Any] = [value.horizontal, value.vertical]
        elif value is None:
            parts = list(DEFAULT_MARGINS)
        elif isinstance(value, (Real, np.number)):
            parts = [value, value]
        elif isinstance(value, (Sequence, np.ndarray)) and not isinstance(
            value, str,
        ):
            parts = list(np.ravel(value)) if isinstance(
                value, np.ndarray,
            ) else list(value)
            if not parts:
                parts = list(DEFAULT_MARGINS)
            elif len(parts) == 1:
                parts = [parts[0], parts[0]]
            elif len(parts) > MARGIN_COMPONENTS_MAX:
                msg = (f"Invalid size for margins: expected at most "
                       f"{MARGIN_COMPONENTS_MAX} values, got {len(parts)}")
                raise InvalidArgumentError(msg)
        else:
            msg = f"Invalid margins value: {value!r}"
            raise InvalidArgumentError(msg)

        for part in parts:
            if isinstance(part, bool) or not isinstance(
                part, (Real, np.number),
            ):
                msg = f"Margins must be numeric, got {part!r}"
                raise InvalidArgumentError(msg)
            if not math.isfinite(part):
                msg = f"Margins must be finite, got {part!r}"
                raise InvalidArgumentError(msg)
            if part < 0:
                msg = f"Margins must not be negative, got {part!r}"
                raise InvalidArgumentError(msg)
        horizontal, vertical = parts
        return cls(_plain_number(horizontal), _plain_number(vertical))

    def as_tuple(self) -> tuple[float, float]:
        """Return (horizontal, vertical)."""
        return self.horizontal, self.vertical


def _plain_number(value: Any) -> float:
    """Convert numpy scalars to builtins, keeping ints as ints."""
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(frozen=True)
class ImageSize:
    """Minimal image handle carrying only pixel dimensions."""

    width: int
    height: int


def image_size(image: object) -> ImageSize:
    """
    Return the pixel size of an image handle.

    Numpy arrays are read as (height, width, ...) via ``shape``; any
    other object must expose ``width`` and ``height`` attributes, as
    PIL images do.
    """
    if isinstance(image, np.ndarray):
        if image.ndim < 2:  # noqa: PLR2004
            msg = f"Image array must be at least 2-D, got shape {image.shape}"
            raise InvalidArgumentError(msg)
        height, width = int(image.shape[0]), int(image.shape[1])
    else:
        try:
            width = int(image.width)  # type: ignore[attr-defined]
            height = int(image.height)  # type: ignore[attr-defined]
        except (AttributeError, TypeError, ValueError) as exc:
            msg = f"Cannot determine the size of {type(image).__name__!r}"
            raise InvalidArgumentError(msg) from exc
    if width <= 0 or height <= 0:
        msg = f"Image dimensions must be positive, got {width}x{height}"
        raise InvalidArgumentError(msg)
    return ImageSize(width=width, height=height)


def grid_shape(grid: Sequence[Sequence[object]]) -> tuple[int, int]:
    """Validate that ``grid`` is a non-empty rectangle and return (R, C)."""
    rows = len(grid)
    if rows == 0:
        msg = "Image grid is empty: at least one row is required"
        raise InvalidArgumentError(msg)
    cols = len(grid[0])
    if cols == 0:
        msg = "Image grid is empty: at least one column is required"
        raise InvalidArgumentError(msg)
    for index, row in enumerate(grid):
        if len(row) != cols:
            msg = (f"Image grid is ragged: row {index} has {len(row)} "
                   f"cells, expected {cols}")
            raise InvalidArgumentError(msg)
    return rows, cols


def as_grid(images: object) -> list[list[object]]:
    """
    Return ``images`` as a list of rows.

    Accepts a nested sequence of image handles or a 2-D numpy object
    array. Numpy pixel arrays are single images, never grids.
    """
    if isinstance(images, np.ndarray):
        if images.dtype != object or images.ndim != 2:  # noqa: PLR2004
            msg = "A numpy grid must be a 2-D array of dtype object"
            raise InvalidArgumentError(msg)
        return [list(row) for row in images]
    if not isinstance(images, Sequence) or isinstance(images, str):
        msg = f"Image grid must be a sequence of rows, got {type(images)!r}"
        raise InvalidArgumentError(msg)
    rows: list[list[object]] = []
    for row in images:
        if isinstance(row, np.ndarray) or not isinstance(row, Sequence):
            msg = ("Image grid rows must be sequences of images; wrap a "
                   "single row as [images]")
            raise InvalidArgumentError(msg)
        rows.append(list(row))
    return rows


@dataclass(frozen=True)
class NormalizedRect:
    """Rectangle as fractions of the canvas, origin bottom-left."""

    left: float
    bottom: float
    width: float
    height: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return (left, bottom, width, height)."""
        return self.left, self.bottom, self.width, self.height


@dataclass(frozen=True)
class CellRect:
    """Pixel rectangle of one grid cell, origin bottom-left, y up."""

    left: float
    bottom: float
    width: int
    height: int

    @property
    def right(self) -> float:
        """Right edge."""
        return self.left + self.width

    @property
    def top(self) -> float:
        """Top edge."""
        return self.bottom + self.height

    def normalized(self, canvas_width: float, canvas_height: float) -> NormalizedRect:
        """Return this rectangle as fractions of the canvas size."""
        return NormalizedRect(
            left=self.left / canvas_width,
            bottom=self.bottom / canvas_height,
            width=self.width / canvas_width,
            height=self.height / canvas_height,
        )

    def top_left(self, canvas_height: float) -> tuple[int, int]:
        """Return the integer top-left corner in top-down image coords."""
        return int(np.floor(self.left)), int(np.floor(canvas_height - self.top))


@dataclass(frozen=True)
class LayoutResult:
    """Canvas size plus one rectangle per grid cell."""

    canvas_width: float
    canvas_height: float
    rects: tuple[tuple[CellRect, ...], ...]
    alignment: Alignment
    margins: Margins

    @property
    def shape(self) -> tuple[int, int]:
        """Grid shape as (rows, cols)."""
        return len(self.rects), len(self.rects[0])

    @property
    def canvas_size(self) -> tuple[float, float]:
        """Return (width, height) in pixels."""
        return self.canvas_width, self.canvas_height

    def normalized(self) -> tuple[tuple[NormalizedRect, ...], ...]:
        """Return every rectangle as fractions of the canvas size."""
        return tuple(
            tuple(
                rect.normalized(self.canvas_width, self.canvas_height)
                for rect in row
            )
            for row in self.rects
        )
