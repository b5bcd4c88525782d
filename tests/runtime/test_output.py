"""Tests for runtime.output helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path, Path as RealPath
from typing import cast

import numpy as np

from truesize_grid.image_io import load_image
from truesize_grid.runtime import output as runtime_output


def test_setup_output_directory_creates_path(tmp_path: Path) -> None:
    target = tmp_path / "new_dir"
    result = runtime_output.setup_output_directory(str(target))
    assert result == target
    assert target.exists()


def test_setup_output_directory_fallback(
    tmp_path: Path, monkeypatch,  # noqa: ANN001
) -> None:
    class FailingPath(RealPath):
        def mkdir(  # type: ignore[override]
            self,
            mode: int = 0o777,
            parents: bool = False,  # noqa: FBT001, FBT002
            exist_ok: bool = False,  # noqa: FBT001, FBT002
        ) -> None:
            if "restricted" in str(self):
                raise PermissionError("Mock failure")
            return super().mkdir(mode=mode, parents=parents, exist_ok=exist_ok)

    monkeypatch.chdir(tmp_path)
    result = runtime_output.setup_output_directory(
        "restricted",
        path_factory=cast(Callable[[str], Path], FailingPath),
    )
    assert result.name == "truesize_output"
    assert result.exists()


def test_canvas_path_helpers(tmp_path: Path) -> None:
    smooth = tmp_path / "my dog.png"
    sharpen = tmp_path / "cat pic.jpg"

    path = runtime_output.canvas_path_from_paths(tmp_path, smooth, sharpen)
    assert path == tmp_path / "truesize_my_dog_x_cat_pic.png"
    assert runtime_output.canonical_stem(smooth) == "my_dog"


def test_save_levels_numbers_from_one(tmp_path: Path) -> None:
    levels = [
        np.full((4, 6), 10, dtype=np.uint8),
        np.full((2, 3), 20, dtype=np.uint8),
    ]
    saved = runtime_output.save_levels(levels, tmp_path / "levels", "dog")

    assert [p.name for p in saved] == ["dog_level1.png", "dog_level2.png"]
    assert load_image(saved[1]).shape == (2, 3)
