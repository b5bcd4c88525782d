"""
Unit tests for the config module.

Covers:
- Successful loading of a valid config.toml
- Default fallbacks for missing values
- Error handling for missing files and invalid values
- Overlaying CLI arguments on a base configuration
"""
import tempfile
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import truesize_grid.config as tsg_config
from truesize_grid.config_defaults import (
    DEFAULT_ALIGNMENT,
    DEFAULT_DPI,
    DEFAULT_KERNEL_SIZE,
    DEFAULT_LEVELS,
    DEFAULT_MARGINS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SCALE,
    DEFAULT_SIGMA,
)


def create_toml_file(data: dict[str, Any]) -> str:
    """Write a TOML string to a temporary file and return its path."""
    doc = tomlkit.document()
    doc.update(data)
    toml_str = tomlkit.dumps(doc)

    with tempfile.NamedTemporaryFile(
        delete=False,
        suffix=".toml",
        mode="w",
        encoding="utf-8",
    ) as temp:
        temp.write(toml_str)
        return temp.name


def test_load_valid_config() -> None:
    """Test that a well-formed config.toml loads successfully."""
    path = create_toml_file({
        "filter": {"kernel_size": 9, "sigma": 2.5},
        "pyramid": {"levels": 3, "scale": 0.25},
        "layout": {
            "margins": [4, 6],
            "alignment": "top",
            "background_color": [0, 0, 0],
        },
        "display": {"show": True, "display_size": [1920, 1080]},
        "output": {"output": "results", "save_levels": True},
    })
    cfg = tsg_config.ConfigLoader.load(path)

    assert isinstance(cfg, tsg_config.TruesizeConfig)
    assert cfg.filter.kernel_size == 9
    assert cfg.filter.sigma == 2.5
    assert cfg.pyramid.levels == 3
    assert cfg.pyramid.scale == 0.25
    assert cfg.layout.margins == [4, 6]
    assert cfg.layout.alignment == "top"
    assert cfg.layout.background_color == (0, 0, 0)
    assert cfg.display.show is True
    assert cfg.display.display_size == (1920, 1080)
    assert cfg.output.output == "results"
    assert cfg.output.save_levels is True
    assert cfg.output.save_canvas is True


def test_missing_file_raises() -> None:
    """Ensure FileNotFoundError is raised for nonexistent config."""
    with pytest.raises(FileNotFoundError):
        tsg_config.ConfigLoader.load("nonexistent_file.toml")


def test_partial_config_uses_defaults() -> None:
    """ConfigLoader should fall back to defaults for missing sections."""
    path = create_toml_file({"pyramid": {"levels": 2}})
    cfg = tsg_config.ConfigLoader.load(path)

    assert cfg.pyramid.levels == 2
    assert cfg.pyramid.scale == DEFAULT_SCALE
    assert cfg.filter.kernel_size == DEFAULT_KERNEL_SIZE
    assert cfg.filter.sigma == DEFAULT_SIGMA
    assert cfg.layout.margins == list(DEFAULT_MARGINS)
    assert cfg.layout.alignment == DEFAULT_ALIGNMENT
    assert cfg.display.dpi == DEFAULT_DPI
    assert cfg.output.output == DEFAULT_OUTPUT_DIR


@pytest.mark.parametrize(
    "data",
    [
        {"layout": {"alignment": "diagonal"}},
        {"layout": {"margins": [1, 2, 3]}},
        {"layout": {"margins": [-1]}},
        {"layout": {"background_color": [0, 0, 300]}},
        {"filter": {"sigma": 0}},
        {"pyramid": {"scale": 1.5}},
        {"pyramid": {"levels": 0}},
    ],
    ids=[
        "alignment", "margins-size", "margins-negative", "color",
        "sigma", "scale", "levels",
    ],
)
def test_invalid_values_raise(data: dict[str, Any]) -> None:
    path = create_toml_file(data)
    with pytest.raises(ValidationError):
        tsg_config.ConfigLoader.load(path)


@pytest.mark.parametrize(
    ("alignment", "expected"),
    [("Center", "center"), (" TOP ", "top"), ("left", "left")],
)
def test_alignment_is_case_insensitive(alignment: str, expected: str) -> None:
    path = create_toml_file({"layout": {"alignment": alignment}})
    cfg = tsg_config.ConfigLoader.load(path)
    assert cfg.layout.alignment == expected


def test_empty_margins_use_default() -> None:
    path = create_toml_file({"layout": {"margins": []}})
    cfg = tsg_config.ConfigLoader.load(path)
    assert cfg.layout.margins == list(DEFAULT_MARGINS)


class TestBuildConfigFromCli:
    def test_defaults_without_overrides(self) -> None:
        cfg = tsg_config.build_config_from_cli({})
        assert cfg == tsg_config.TruesizeConfig.model_validate({})

    def test_cli_values_override_base(self) -> None:
        base = tsg_config.TruesizeConfig.model_validate(
            {"pyramid": {"levels": 2}, "layout": {"alignment": "top"}},
        )
        cfg = tsg_config.build_config_from_cli(
            {
                "margins": (5,),
                "alignment": "left",
                "sigma": 1.5,
                "background": (1, 2, 3),
                "display_size": (800, 600),
                "config": "ignored.toml",
            },
            base_config=base,
        )
        assert cfg.layout.margins == [5]
        assert cfg.layout.alignment == "left"
        assert cfg.filter.sigma == 1.5
        assert cfg.layout.background_color == (1, 2, 3)
        assert cfg.display.display_size == (800, 600)
        assert cfg.pyramid.levels == 2

    def test_flags_only_apply_when_set(self) -> None:
        base = tsg_config.TruesizeConfig.model_validate(
            {"display": {"show": True}},
        )
        cfg = tsg_config.build_config_from_cli(
            {"show": False, "no_canvas": True, "save_levels": True},
            base_config=base,
        )
        assert cfg.display.show is True
        assert cfg.output.save_canvas is False
        assert cfg.output.save_levels is True

    def test_cli_values_are_validated(self) -> None:
        with pytest.raises(ValidationError):
            tsg_config.build_config_from_cli({"levels": 0})


def test_example_config_is_valid() -> None:
    example = Path(__file__).resolve().parents[1] / "config.example.toml"
    cfg = tsg_config.ConfigLoader.load(str(example))
    assert cfg == tsg_config.TruesizeConfig.model_validate({})
