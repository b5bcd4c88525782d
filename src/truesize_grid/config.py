"""
Configuration schema and loader for the true-size grid demo.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from pathlib import Path
from typing import Annotated, Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

# Import internal constants for shared use
from truesize_grid.config_defaults import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DPI,
    DEFAULT_KERNEL_SIZE,
    DEFAULT_LEVELS,
    DEFAULT_MARGINS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SAVE_CANVAS,
    DEFAULT_SAVE_LEVELS,
    DEFAULT_SCALE,
    DEFAULT_SHOW,
    DEFAULT_SIGMA,
)
from truesize_grid.constants import MARGIN_COMPONENTS_MAX
from truesize_grid.layout.core import Alignment
from truesize_grid.type_defs import AlignmentName

_Channel = Annotated[int, Field(ge=0, le=255)]
_Pixels = Annotated[int, Field(ge=0)]
_PositivePixels = Annotated[int, Field(ge=1)]


class FilterConfig(BaseModel):
    """Gaussian kernel used for smoothing and detail extraction."""

    kernel_size: int = Field(DEFAULT_KERNEL_SIZE, ge=1)
    sigma: float = Field(DEFAULT_SIGMA, gt=0)


class PyramidConfig(BaseModel):
    """Number of downsampled levels and the per-level scale."""

    levels: int = Field(DEFAULT_LEVELS, ge=1)
    scale: float = Field(DEFAULT_SCALE, gt=0, lt=1)


class LayoutConfig(BaseModel):
    """Margins, alignment, and background of the true-size canvas."""

    margins: list[_Pixels] = Field(
        default_factory=lambda: list(DEFAULT_MARGINS),
        min_length=1,
        max_length=MARGIN_COMPONENTS_MAX,
    )
    alignment: AlignmentName = Field(DEFAULT_ALIGNMENT)
    background_color: tuple[_Channel, _Channel, _Channel] = (
        DEFAULT_BACKGROUND_COLOR
    )

    @field_validator("margins", mode="before")
    @classmethod
    def _empty_margins_use_default(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and not value:
            return list(DEFAULT_MARGINS)
        return value

    @field_validator("alignment", mode="before")
    @classmethod
    def _canonical_alignment(cls, value: Any) -> Any:
        return Alignment.parse(value).value


class DisplayConfig(BaseModel):
    """Control whether and how the figure window is opened."""

    show: bool = DEFAULT_SHOW
    dpi: int = Field(DEFAULT_DPI, ge=1)
    display_size: tuple[_PositivePixels, _PositivePixels] | None = None


class OutputConfig(BaseModel):
    """Configure the output directory and which artifacts are saved."""

    output: str = Field(DEFAULT_OUTPUT_DIR)
    save_canvas: bool = DEFAULT_SAVE_CANVAS
    save_levels: bool = DEFAULT_SAVE_LEVELS


class TruesizeConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    # model_validate({}) lets Pydantic v2 populate each section from its
    # Field(...) defaults while keeping type checkers satisfied.
    filter: FilterConfig = Field(
        default_factory=lambda: FilterConfig.model_validate({}),
    )
    pyramid: PyramidConfig = Field(
        default_factory=lambda: PyramidConfig.model_validate({}),
    )
    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    display: DisplayConfig = Field(
        default_factory=lambda: DisplayConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> TruesizeConfig:
        """
        Load a demo configuration from a TOML file.

        Returns a validated TruesizeConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return TruesizeConfig.model_validate(doc.unwrap())


# CLI argument name -> (section, field)
_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "kernel_size": ("filter", "kernel_size"),
    "sigma": ("filter", "sigma"),
    "levels": ("pyramid", "levels"),
    "scale": ("pyramid", "scale"),
    "margins": ("layout", "margins"),
    "alignment": ("layout", "alignment"),
    "background": ("layout", "background_color"),
    "dpi": ("display", "dpi"),
    "display_size": ("display", "display_size"),
    "output": ("output", "output"),
}

# CLI boolean flag -> (section, field, value stored when the flag is set)
_CLI_FLAGS: dict[str, tuple[str, str, bool]] = {
    "show": ("display", "show", True),
    "no_canvas": ("output", "save_canvas", False),
    "save_levels": ("output", "save_levels", True),
}


def build_config_from_cli(
    cli_args: dict[str, Any],
    base_config: TruesizeConfig | None = None,
) -> TruesizeConfig:
    """
    Overlay user-supplied CLI values on a base configuration.

    Only keys present in ``cli_args`` with a non-None value override the
    base; flags only override when set. The result is re-validated so
    CLI values obey the same constraints as the TOML file.
    """
    base = base_config or TruesizeConfig.model_validate({})
    data = base.model_dump()

    for arg_name, (section, field) in _CLI_FIELDS.items():
        value = cli_args.get(arg_name)
        if value is not None:
            data[section][field] = (
                list(value) if field == "margins" else value
            )

    for arg_name, (section, field, flag_value) in _CLI_FLAGS.items():
        if cli_args.get(arg_name):
            data[section][field] = flag_value

    return TruesizeConfig.model_validate(data)
