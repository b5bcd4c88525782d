"""Runtime utilities for validation, output, and version helpers."""

from .output import (
    canonical_stem,
    canvas_path_from_paths,
    save_levels,
    setup_output_directory,
)
from .validation import validate_image_paths, validate_input_paths
from .version import resolve_project_version

__all__ = [
    "canonical_stem",
    "canvas_path_from_paths",
    "resolve_project_version",
    "save_levels",
    "setup_output_directory",
    "validate_image_paths",
    "validate_input_paths",
]
