"""
Grid layout planning for images shown at their native pixel size.

Given a grid of images with independent dimensions, compute the canvas
size and the rectangle of every cell so that no image is ever scaled,
neighbouring cells are separated by uniform margins, and rows and
columns are aligned according to the selected policy:

- ``left``: each row is packed left to right on its own, images are
  vertically centered on the row band.
- ``top``: each column is packed top to bottom on its own, images are
  horizontally centered on the column band.
- ``center``: row and column bands are shared, images are centered on
  both axes within their band intersection.

All coordinates use a bottom-left origin with y growing upward, and rows
are indexed top to bottom.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import TYPE_CHECKING

from truesize_grid.layout.core import (
    Alignment,
    CellRect,
    ImageSize,
    LayoutResult,
    Margins,
    as_grid,
    grid_shape,
    image_size,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from truesize_grid.type_defs import AlignmentName


@dataclass(frozen=True)
class _Extents:
    """Per-cell sizes and per-band maxima of a grid."""

    widths: tuple[tuple[int, ...], ...]
    heights: tuple[tuple[int, ...], ...]
    row_heights: tuple[int, ...]
    col_widths: tuple[int, ...]

    @property
    def rows(self) -> int:
        return len(self.widths)

    @property
    def cols(self) -> int:
        return len(self.widths[0])


def _measure(sizes: list[list[ImageSize]]) -> _Extents:
    """Collect widths and heights and the band maxima."""
    widths = tuple(tuple(s.width for s in row) for row in sizes)
    heights = tuple(tuple(s.height for s in row) for row in sizes)
    row_heights = tuple(max(row) for row in heights)
    col_widths = tuple(max(col) for col in zip(*widths, strict=True))
    return _Extents(widths, heights, row_heights, col_widths)


def _content_size(ext: _Extents, alignment: Alignment) -> tuple[int, int]:
    """Return the total image area width and height, without margins."""
    if alignment is Alignment.LEFT:
        width = max(sum(row) for row in ext.widths)
        height = sum(ext.row_heights)
    elif alignment is Alignment.TOP:
        width = sum(ext.col_widths)
        height = max(sum(col) for col in zip(*ext.heights, strict=True))
    else:
        width = sum(ext.col_widths)
        height = sum(ext.row_heights)
    return width, height


def _row_band_bottoms(
    ext: _Extents,
    canvas_height: float,
    v_margin: float,
) -> list[float]:
    """Bottom edge of every row band, rows counted from the top."""
    cumulative = list(accumulate(ext.row_heights))
    return [
        canvas_height - (i + 1) * v_margin - cumulative[i]
        for i in range(ext.rows)
    ]


def _col_band_rights(ext: _Extents, h_margin: float) -> list[float]:
    """Right edge of every column band, columns counted from the left."""
    cumulative = list(accumulate(ext.col_widths))
    return [(j + 1) * h_margin + cumulative[j] for j in range(ext.cols)]


def _place_left(
    ext: _Extents,
    margins: Margins,
    canvas_height: float,
) -> list[list[CellRect]]:
    band_bottoms = _row_band_bottoms(ext, canvas_height, margins.vertical)
    rects: list[list[CellRect]] = []
    for i in range(ext.rows):
        row: list[CellRect] = []
        left: float = margins.horizontal
        for j in range(ext.cols):
            w, h = ext.widths[i][j], ext.heights[i][j]
            bottom = band_bottoms[i] + ext.row_heights[i] / 2 - h / 2
            row.append(CellRect(left, bottom, w, h))
            left = left + margins.horizontal + w
        rects.append(row)
    return rects


def _place_top(
    ext: _Extents,
    margins: Margins,
    canvas_height: float,
) -> list[list[CellRect]]:
    band_rights = _col_band_rights(ext, margins.horizontal)
    rects: list[list[CellRect | None]] = [
        [None] * ext.cols for _ in range(ext.rows)
    ]
    for j in range(ext.cols):
        bottom = canvas_height
        for i in range(ext.rows):
            w, h = ext.widths[i][j], ext.heights[i][j]
            bottom = bottom - margins.vertical - h
            left = band_rights[j] - ext.col_widths[j] / 2 - w / 2
            rects[i][j] = CellRect(left, bottom, w, h)
    return rects  # type: ignore[return-value]


def _place_center(
    ext: _Extents,
    margins: Margins,
    canvas_height: float,
) -> list[list[CellRect]]:
    band_bottoms = _row_band_bottoms(ext, canvas_height, margins.vertical)
    band_rights = _col_band_rights(ext, margins.horizontal)
    return [
        [
            CellRect(
                band_rights[j] - ext.col_widths[j] / 2 - ext.widths[i][j] / 2,
                band_bottoms[i] + ext.row_heights[i] / 2
                - ext.heights[i][j] / 2,
                ext.widths[i][j],
                ext.heights[i][j],
            )
            for j in range(ext.cols)
        ]
        for i in range(ext.rows)
    ]


_PLACERS = {
    Alignment.LEFT: _place_left,
    Alignment.TOP: _place_top,
    Alignment.CENTER: _place_center,
}


def plan_layout(
    grid: Sequence[Sequence[object]],
    margins: Margins | float | Sequence[float] | None = None,
    alignment: Alignment | AlignmentName | str = Alignment.CENTER,
) -> LayoutResult:
    """
    Compute the canvas size and cell rectangles for an image grid.

    Args:
        grid: Rows of image handles. Each handle is a numpy array or
            exposes ``width`` and ``height`` (PIL images, ImageSize).
        margins: Gap in pixels between cells and around the border.
            A scalar applies to both axes; ``None`` means (10, 10).
        alignment: ``left``, ``top`` or ``center``.

    Returns:
        LayoutResult with pixel rectangles that keep every image at its
        native size.

    Raises:
        InvalidArgumentError: If margins, alignment or the grid shape are
            invalid. Nothing is computed in that case.

    """
    align = Alignment.parse(alignment)
    gaps = Margins.from_value(margins)
    rows = as_grid(grid)
    grid_shape(rows)
    ext = _measure([[image_size(im) for im in row] for row in rows])

    content_w, content_h = _content_size(ext, align)
    canvas_width = content_w + (ext.cols + 1) * gaps.horizontal
    canvas_height = content_h + (ext.rows + 1) * gaps.vertical

    placed = _PLACERS[align](ext, gaps, canvas_height)
    return LayoutResult(
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        rects=tuple(tuple(row) for row in placed),
        alignment=align,
        margins=gaps,
    )
