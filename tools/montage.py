"""
Compatibility wrapper around the shared montage CLI.

Runs from a checkout without installing the package:

    python tools/montage.py a.png b.png c.png d.png --cols 2 --out grid.png
"""

from __future__ import annotations

import sys
from pathlib import Path

# Source code in src/ subdirectory
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from truesize_grid.montage import (  # noqa: E402
    parse_hex_color,
    parse_margins,
    positive_int,
)
from truesize_grid.montage.cli import build_parser, main  # noqa: E402

__all__ = [
    "build_parser",
    "main",
    "parse_hex_color",
    "parse_margins",
    "positive_int",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
