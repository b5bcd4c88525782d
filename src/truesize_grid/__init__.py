"""Public package exports for the true-size grid tools."""

from __future__ import annotations

from .layout import (
    Alignment,
    InvalidArgumentError,
    LayoutResult,
    Margins,
    plan_layout,
    save_truesize,
    show_truesize,
)
from .montage import MontageOptions, render_montage

__all__ = [
    "Alignment",
    "InvalidArgumentError",
    "LayoutResult",
    "Margins",
    "MontageOptions",
    "plan_layout",
    "render_montage",
    "save_truesize",
    "show_truesize",
]
