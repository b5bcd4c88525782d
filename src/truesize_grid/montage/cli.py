"""Command-line entry point for true-size montage rendering."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from truesize_grid.config_defaults import DEFAULT_DPI
from truesize_grid.montage.api import (
    ALIGNMENT_CHOICES,
    MontageOptions,
    parse_alignment,
    parse_hex_color,
    parse_margins,
    positive_int,
    render_montage,
    size_2d,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the montage tool."""
    parser = argparse.ArgumentParser(
        description=(
            "Arrange images on one canvas at their true pixel size, "
            "aligned left, top, or centered, and save it as PNG."
        ),
    )
    parser.add_argument("images", nargs="+", type=Path,
                        help="Images in row-major order.")
    parser.add_argument(
        "--cols",
        type=wrap_validator(positive_int),
        default=None,
        help="Images per row (default: all images in one row).",
    )
    parser.add_argument("--out", type=Path, default=None)
    parser.add_argument(
        "--margins",
        type=wrap_validator(parse_margins),
        default=(10, 10),
        help="Margins in pixels as H or H,V.",
    )
    parser.add_argument(
        "--alignment",
        type=wrap_validator(parse_alignment),
        default="center",
        help=f"One of {', '.join(ALIGNMENT_CHOICES)}.",
    )
    parser.add_argument(
        "--background",
        type=str,
        default="#ffffff",
        help="Canvas color as hex like #ffffff.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Also open a figure window with the montage.",
    )
    parser.add_argument(
        "--dpi",
        type=wrap_validator(positive_int),
        default=DEFAULT_DPI,
    )
    parser.add_argument(
        "--display-size",
        type=wrap_validator(size_2d),
        default=None,
        help="Screen size as WxH, used to center the figure.",
    )
    parser.add_argument(
        "--titles",
        nargs="*",
        default=[],
        help="Optional per-image titles shown in the figure window.",
    )
    return parser


def _build_options(args: argparse.Namespace) -> MontageOptions:
    """Map argparse namespace to :class:`MontageOptions`."""
    return MontageOptions(
        image_paths=list(args.images),
        cols=args.cols,
        out_path=args.out,
        margins=tuple(args.margins),
        alignment=args.alignment,
        background_color=parse_hex_color(args.background),
        show=args.show,
        dpi=args.dpi,
        display_size=args.display_size,
        titles=list(args.titles),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse command-line arguments and render the montage."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = _build_options(args)
        render_montage(options)
    except (ValueError, FileNotFoundError) as exc:
        parser.error(str(exc))

    return 0


__all__ = ["build_parser", "main", "wrap_validator"]
