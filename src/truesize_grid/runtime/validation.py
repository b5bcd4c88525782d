"""Input validation helpers for runtime configuration."""

from __future__ import annotations

from pathlib import Path


def validate_input_paths(smooth_path: str, sharpen_path: str) -> None:
    """Ensure the images to smooth and to sharpen point to files."""
    if not Path(smooth_path).is_file():
        msg = f"Image to smooth not found: {smooth_path}"
        raise FileNotFoundError(msg)
    if not Path(sharpen_path).is_file():
        msg = f"Image to sharpen not found: {sharpen_path}"
        raise FileNotFoundError(msg)


def validate_image_paths(paths: list[Path]) -> None:
    """Ensure every montage input exists."""
    if not paths:
        msg = "At least one image is required"
        raise ValueError(msg)
    missing = [str(p) for p in paths if not Path(p).is_file()]
    if missing:
        msg = f"Image not found: {', '.join(missing)}"
        raise FileNotFoundError(msg)
