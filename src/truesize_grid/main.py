"""Top-level orchestration for the blend-pyramid demo."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import truesize_grid.filters as tsg_filters
import truesize_grid.image_io as tsg_image_io
import truesize_grid.runtime as tsg_runtime
from truesize_grid.layout import (
    LayoutResult,
    compose_canvas,
    plan_layout,
    show_truesize,
)
from truesize_grid.logging_utils import logger
from truesize_grid.pyramid import build_pyramid

if TYPE_CHECKING:  # pragma: no cover
    from truesize_grid.config import FilterConfig, TruesizeConfig
    from truesize_grid.type_defs import InputPaths, PixelGrid


@dataclass(slots=True)
class DemoResult:
    """Levels shown by the demo, their layout, and the saved canvas."""

    levels: list[PixelGrid]
    layout: LayoutResult
    canvas_path: Path | None = None


def blend_images(
    smooth_img: PixelGrid,
    sharpen_img: PixelGrid,
    filter_cfg: FilterConfig,
) -> PixelGrid:
    """
    Add the blur of one image to the detail layer of another.

    Both images must share shape and dtype; the sum saturates.
    """
    if smooth_img.shape != sharpen_img.shape:
        msg = (f"Images must have the same size to be blended, got "
               f"{smooth_img.shape} and {sharpen_img.shape}")
        raise ValueError(msg)

    smoothed = tsg_filters.smooth(
        smooth_img, filter_cfg.kernel_size, filter_cfg.sigma,
    )
    detail = tsg_filters.sharpen(
        sharpen_img, filter_cfg.kernel_size, filter_cfg.sigma,
    )
    return tsg_filters.saturating_add(smoothed, detail)


def run_demo(paths: InputPaths, config: TruesizeConfig) -> DemoResult:
    """Top level demo entry point."""
    # Validate inputs
    tsg_runtime.validate_input_paths(paths.smooth_path, paths.sharpen_path)

    # Load and blend
    smooth_img = tsg_image_io.load_image(paths.smooth_path)
    sharpen_img = tsg_image_io.load_image(paths.sharpen_path)
    blended = blend_images(smooth_img, sharpen_img, config.filter)

    levels = build_pyramid(
        blended, config.pyramid.levels, config.pyramid.scale,
    )
    grid = [levels]
    layout = plan_layout(
        grid, config.layout.margins, config.layout.alignment,
    )
    logger.info(
        "Planned %gx%g canvas for %d levels",
        layout.canvas_width,
        layout.canvas_height,
        len(levels),
    )

    # Persist outputs
    smooth_path = Path(paths.smooth_path)
    sharpen_path = Path(paths.sharpen_path)
    canvas_path: Path | None = None
    if config.output.save_canvas or config.output.save_levels:
        output_dir = tsg_runtime.setup_output_directory(config.output.output)
        if config.output.save_canvas:
            canvas_path = tsg_runtime.canvas_path_from_paths(
                output_dir, smooth_path, sharpen_path,
            )
            canvas = compose_canvas(
                grid,
                layout,
                background_color=config.layout.background_color,
            )
            canvas.save(canvas_path, format="PNG")
            logger.info("Canvas saved to: %s", canvas_path)
        if config.output.save_levels:
            tsg_runtime.save_levels(
                levels,
                output_dir,
                tsg_runtime.canonical_stem(smooth_path),
            )

    if config.display.show:
        show_truesize(
            grid,
            config.layout.margins,
            config.layout.alignment,
            display_size=config.display.display_size,
            dpi=config.display.dpi,
            show=True,
        )

    return DemoResult(levels=levels, layout=layout, canvas_path=canvas_path)
