"""Helpers for managing output locations and persisted artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from truesize_grid.constants import FALLBACK_OUTPUT_DIR
from truesize_grid.image_io import save_image
from truesize_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

    from truesize_grid.type_defs import PixelGrid


def setup_output_directory(
    output_path: str,
    path_factory: Callable[[str], Path] = Path,
) -> Path:
    """
    Create the output directory if needed and return its resolved path.

    Falls back to ``truesize_output`` on failure to create the desired
    directory to keep the run from aborting.
    """
    resolved_path = path_factory(output_path)
    try:
        resolved_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create output directory: %s", exc)
        fallback_path = path_factory(FALLBACK_OUTPUT_DIR)
        fallback_path.mkdir(parents=True, exist_ok=True)
        logger.info("Using fallback directory: %s", fallback_path)
        return fallback_path
    return resolved_path


def canonical_stem(path: Path) -> str:
    """Return a filesystem-safe stem (spaces mapped to underscores)."""
    return path.stem.replace(" ", "_")


def canvas_path_from_paths(
    output_dir: Path,
    smooth_path: Path,
    sharpen_path: Path,
) -> Path:
    """Return the canvas image path using stems from the input files."""
    return output_dir / (
        f"truesize_{canonical_stem(smooth_path)}"
        f"_x_{canonical_stem(sharpen_path)}.png"
    )


def save_levels(
    levels: Sequence[PixelGrid],
    output_dir: Path,
    prefix: str,
) -> list[Path]:
    """Save each pyramid level as ``<prefix>_level<N>.png``."""
    saved = [
        save_image(level, output_dir / f"{prefix}_level{index}.png")
        for index, level in enumerate(levels, start=1)
    ]
    logger.info("Saved %d pyramid levels to: %s", len(saved), output_dir)
    return saved
