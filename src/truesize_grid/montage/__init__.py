"""Public montage rendering API re-exports."""

from __future__ import annotations

from .api import (
    ALIGNMENT_CHOICES,
    MontageOptions,
    arrange_rows,
    default_montage_name,
    parse_alignment,
    parse_hex_color,
    parse_margins,
    positive_int,
    render_montage,
    size_2d,
)

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
