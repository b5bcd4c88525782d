"""
Rendering collaborators for planned true-size layouts.

Two surfaces are supported: a PIL canvas that can be saved to disk, and
a matplotlib figure sized so that one figure pixel maps to one image
pixel, with one axes per grid cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from PIL import Image

from truesize_grid.config_defaults import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DPI,
)
from truesize_grid.constants import COLOR_MODE_GRAY, GRAYSCALE_COLORMAP
from truesize_grid.image_io import as_pil, to_rgb
from truesize_grid.layout.core import Alignment, LayoutResult, as_grid
from truesize_grid.layout.planner import plan_layout
from truesize_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from truesize_grid.layout.core import Margins
    from truesize_grid.type_defs import RGB, AlignmentName

_Position = tuple[float, float, float, float]


def compose_canvas(
    grid: Sequence[Sequence[object]],
    layout: LayoutResult,
    *,
    background_color: RGB = DEFAULT_BACKGROUND_COLOR,
) -> Image.Image:
    """
    Paste every grid image onto an RGB canvas at its planned rectangle.

    Fractional rectangle corners, which appear when an image is centered
    in a band of different parity, are floored.
    """
    rows = as_grid(grid)
    if (len(rows), len(rows[0])) != layout.shape:
        msg = (f"Grid shape {(len(rows), len(rows[0]))} does not match "
               f"layout shape {layout.shape}")
        raise ValueError(msg)

    size = (round(layout.canvas_width), round(layout.canvas_height))
    canvas = Image.new("RGB", size, background_color)
    for row, rect_row in zip(rows, layout.rects, strict=True):
        for image, rect in zip(row, rect_row, strict=True):
            tile = to_rgb(as_pil(image), bg_color=background_color)
            canvas.paste(tile, rect.top_left(layout.canvas_height))
    return canvas


def figure_position(
    canvas_size: tuple[float, float],
    display_size: tuple[int, int],
) -> _Position:
    """
    Return a normalized (left, bottom, width, height) centering the canvas.

    Canvases larger than the display are allowed; the position then
    falls partly outside [0, 1] and a warning is logged.
    """
    canvas_w, canvas_h = canvas_size
    display_w, display_h = display_size
    if display_w <= 0 or display_h <= 0:
        msg = "display_size must be positive"
        raise ValueError(msg)
    if canvas_w > display_w or canvas_h > display_h:
        logger.warning(
            "Canvas %gx%g exceeds the display %dx%d; the figure will be "
            "clipped. Reduce the number of images or the margins.",
            canvas_w,
            canvas_h,
            display_w,
            display_h,
        )
    return (
        ((display_w - canvas_w) / 2) / display_w,
        ((display_h - canvas_h) / 2) / display_h,
        canvas_w / display_w,
        canvas_h / display_h,
    )


@dataclass(frozen=True)
class TruesizeHandles:
    """Figure and per-cell axes of a true-size plot."""

    figure: Figure
    axes: tuple[tuple[Axes, ...], ...]
    layout: LayoutResult
    position: _Position | None = None


def _draw_cell(ax: Axes, image: object) -> None:
    """Show one image on its axes without ticks or frame."""
    pixels: Any = image
    if isinstance(image, Image.Image):
        single_channel = image.mode == COLOR_MODE_GRAY
    else:
        single_channel = getattr(image, "ndim", 0) == 2  # noqa: PLR2004
    if single_channel:
        ax.imshow(pixels, cmap=GRAYSCALE_COLORMAP, vmin=0, vmax=255)
    else:
        ax.imshow(pixels)
    ax.set_axis_off()


def place_window(
    figure: Figure,
    position: _Position,
    display_size: tuple[int, int],
) -> bool:
    """
    Move the figure window to ``position`` on a display of ``display_size``.

    ``position`` is a normalized (left, bottom, width, height) as returned
    by :func:`figure_position`. Tk windows are placed with
    ``wm_geometry``, Qt and GTK windows with ``move``. Returns False when
    the backend has no window to move, as with Agg.
    """
    display_w, display_h = display_size
    left, bottom, _, height = position
    x = round(left * display_w)
    y = round((1 - bottom - height) * display_h)

    manager = getattr(figure.canvas, "manager", None)
    window = getattr(manager, "window", None)
    if hasattr(window, "wm_geometry"):
        window.wm_geometry(f"+{x}+{y}")
    elif hasattr(window, "move"):
        window.move(x, y)
    else:
        logger.debug(
            "Backend %s cannot position figure windows",
            type(figure.canvas).__name__,
        )
        return False
    logger.debug("Moved figure window to +%d+%d", x, y)
    return True


def show_truesize(  # noqa: PLR0913
    grid: Sequence[Sequence[object]],
    margins: Margins | float | Sequence[float] | None = None,
    alignment: Alignment | AlignmentName | str = Alignment.CENTER,
    *,
    display_size: tuple[int, int] | None = None,
    dpi: int = DEFAULT_DPI,
    show: bool = True,
) -> TruesizeHandles:
    """
    Plot a grid of images in one figure at their true pixel size.

    The figure is sized to the planned canvas and every image gets its
    own axes at its normalized rectangle, so aspect ratio and scale are
    preserved. With ``display_size`` the window is centered on a display
    of that size where the backend allows it, and a canvas larger than
    the display is reported. The returned handles let callers add titles
    or turn axes back on.
    """
    layout = plan_layout(grid, margins, alignment)
    position = (
        figure_position(layout.canvas_size, display_size)
        if display_size is not None
        else None
    )

    import matplotlib.pyplot as plt  # noqa: PLC0415

    figure = plt.figure(
        figsize=(layout.canvas_width / dpi, layout.canvas_height / dpi),
        dpi=dpi,
    )
    axes: list[tuple[Axes, ...]] = []
    for row, rects in zip(as_grid(grid), layout.normalized(), strict=True):
        row_axes: list[Axes] = []
        for image, rect in zip(row, rects, strict=True):
            ax = figure.add_axes(rect.as_tuple())
            _draw_cell(ax, image)
            row_axes.append(ax)
        axes.append(tuple(row_axes))
    if position is not None and display_size is not None:
        place_window(figure, position, display_size)

    logger.debug(
        "Opened %gx%g figure for a %dx%d grid",
        layout.canvas_width,
        layout.canvas_height,
        *layout.shape,
    )
    if show:
        plt.show()
    return TruesizeHandles(
        figure=figure, axes=tuple(axes), layout=layout, position=position,
    )


def save_truesize(  # noqa: PLR0913
    grid: Sequence[Sequence[object]],
    out_path: Path,
    margins: Margins | float | Sequence[float] | None = None,
    alignment: Alignment | AlignmentName | str = Alignment.CENTER,
    *,
    background_color: RGB = DEFAULT_BACKGROUND_COLOR,
) -> Path:
    """Plan, compose, and save a true-size canvas as PNG."""
    if not isinstance(out_path, Path):
        msg = "out_path must be a pathlib.Path"
        raise TypeError(msg)

    layout = plan_layout(grid, margins, alignment)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    canvas = compose_canvas(grid, layout, background_color=background_color)
    canvas.save(out_path, format="PNG")
    return out_path
