"""
Reusable true-size montage API shared by the CLI, tools, and tests.

The module exposes a dataclass-based configuration object alongside
helpers for parsing CLI-style arguments. Layout and drawing are
delegated to :mod:`truesize_grid.layout` so callers get the same
planner whether they save a PNG or open a figure window.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from truesize_grid.config_defaults import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DPI,
    DEFAULT_MARGINS,
)
from truesize_grid.constants import MARGIN_COMPONENTS_MAX
from truesize_grid.layout import Alignment, save_truesize, show_truesize
from truesize_grid.logging_utils import logger
from truesize_grid.runtime import canonical_stem, validate_image_paths
from truesize_grid.type_defs import RGB, AlignmentName

ALIGNMENT_CHOICES: tuple[AlignmentName, ...] = ("left", "top", "center")

_SIZE_PARTS = 2
_HEX_RGB_LENGTH = 6


@dataclass(slots=True)
class MontageOptions:
    """
    Configuration for montage rendering.

    The dataclass mirrors the options exposed by ``truesize-montage`` so
    parsed CLI arguments can be passed straight to
    :func:`render_montage`.
    """

    image_paths: list[Path]
    cols: int | None = None
    out_path: Path | None = None
    margins: tuple[int, ...] = DEFAULT_MARGINS
    alignment: AlignmentName = DEFAULT_ALIGNMENT
    background_color: RGB = DEFAULT_BACKGROUND_COLOR
    show: bool = False
    dpi: int = DEFAULT_DPI
    display_size: tuple[int, int] | None = None
    titles: list[str] = field(default_factory=list)


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def size_2d(text: str) -> tuple[int, int]:
    """Parse ``WxH`` strings into integer tuples and validate positivity."""
    parts = text.lower().split("x")
    if len(parts) != _SIZE_PARTS:
        msg = "must look like WxH, e.g., 1920x1080"
        raise ValueError(msg)
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        msg = "width and height must be integers"
        raise ValueError(msg) from exc
    if width <= 0 or height <= 0:
        msg = "width and height must be positive"
        raise ValueError(msg)
    return width, height


def parse_margins(text: str) -> tuple[int, ...]:
    """Parse ``H`` or ``H,V`` into one or two non-negative pixel counts."""
    parts = [p.strip() for p in text.split(",")]
    if not 1 <= len(parts) <= MARGIN_COMPONENTS_MAX:
        msg = "margins must look like H or H,V, e.g., 10,20"
        raise ValueError(msg)
    try:
        values = tuple(int(p) for p in parts)
    except ValueError as exc:
        msg = "margins must be integers"
        raise ValueError(msg) from exc
    if any(v < 0 for v in values):
        msg = "margins must not be negative"
        raise ValueError(msg)
    return values


def parse_alignment(text: str) -> AlignmentName:
    """Validate an alignment name and return it in canonical form."""
    return Alignment.parse(text).value  # type: ignore[return-value]


def parse_hex_color(text: str) -> RGB:
    """Parse ``#rrggbb`` strings into RGB triples."""
    stripped = text.strip().lstrip("#")
    if len(stripped) != _HEX_RGB_LENGTH:
        msg = "color must look like #rrggbb"
        raise ValueError(msg)
    try:
        red = int(stripped[0:2], 16)
        green = int(stripped[2:4], 16)
        blue = int(stripped[4:6], 16)
    except ValueError as exc:
        msg = "color contains invalid hex digits"
        raise ValueError(msg) from exc
    return red, green, blue


def _ensure_png(path: Path) -> Path:
    """Return a path that ends with ``.png`` for output consistency."""
    return path if path.suffix.lower() == ".png" else path.with_suffix(".png")


def default_montage_name(image_paths: list[Path], out_dir: Path) -> Path:
    """Build a deterministic filename from the first input image."""
    first = canonical_stem(Path(image_paths[0]))
    return out_dir / f"montage_{first}_{len(image_paths)}.png"


def arrange_rows(images: list[object], cols: int | None) -> list[list[object]]:
    """Split ``images`` row-major into rows of ``cols`` cells."""
    if not images:
        msg = "At least one image is required"
        raise ValueError(msg)
    width = cols or len(images)
    if width <= 0:
        msg = "cols must be positive"
        raise ValueError(msg)
    if len(images) % width:
        msg = (f"Image count {len(images)} is not a multiple of "
               f"cols={width}")
        raise ValueError(msg)
    return [images[i:i + width] for i in range(0, len(images), width)]


def render_montage(options: MontageOptions) -> Path:
    """
    Save the images of ``options`` on one true-size canvas.

    Returns the saved ``Path``. Inconsistent options (a grid that cannot
    be filled, invalid margins or alignment) surface as
    :class:`ValueError`; Pillow raises its own exceptions for I/O.
    """
    paths = [Path(p) for p in options.image_paths]
    validate_image_paths(paths)
    out_path = _ensure_png(
        Path(options.out_path)
        if options.out_path is not None
        else default_montage_name(paths, Path()),
    )

    with ExitStack() as stack:
        images: list[object] = [
            stack.enter_context(Image.open(p)) for p in paths
        ]
        grid = arrange_rows(images, options.cols)
        saved = save_truesize(
            grid,
            out_path,
            options.margins,
            options.alignment,
            background_color=options.background_color,
        )
        logger.info("Montage saved to: %s", saved)

        if options.show:
            handles = show_truesize(
                grid,
                options.margins,
                options.alignment,
                display_size=options.display_size,
                dpi=options.dpi,
                show=False,
            )
            for title, ax in zip(
                options.titles,
                (ax for row in handles.axes for ax in row),
                strict=False,
            ):
                ax.set_title(title)

            import matplotlib.pyplot as plt  # noqa: PLC0415

            plt.show()
            plt.close(handles.figure)

    return saved


__all__ = [
    "ALIGNMENT_CHOICES",
    "MontageOptions",
    "arrange_rows",
    "default_montage_name",
    "parse_alignment",
    "parse_hex_color",
    "parse_margins",
    "positive_int",
    "render_montage",
    "size_2d",
]
