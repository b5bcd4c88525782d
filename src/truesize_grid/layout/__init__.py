"""
True-size grid layout split into data model, planner, and renderers.

The package exposes the most commonly used entry points directly so
callers can plan and draw a grid with a single import.
"""

from __future__ import annotations

from . import core, planner, render
from .core import (
    Alignment,
    CellRect,
    ImageSize,
    InvalidArgumentError,
    LayoutResult,
    Margins,
    NormalizedRect,
    image_size,
)
from .planner import plan_layout
from .render import (
    TruesizeHandles,
    compose_canvas,
    figure_position,
    place_window,
    save_truesize,
    show_truesize,
)

__all__ = [
    "Alignment",
    "CellRect",
    "ImageSize",
    "InvalidArgumentError",
    "LayoutResult",
    "Margins",
    "NormalizedRect",
    "TruesizeHandles",
    "compose_canvas",
    "core",
    "figure_position",
    "image_size",
    "plan_layout",
    "place_window",
    "planner",
    "render",
    "save_truesize",
    "show_truesize",
]
