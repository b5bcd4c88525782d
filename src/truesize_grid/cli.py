"""CLI argument parsing and main entry point for the blend-pyramid demo."""

import argparse
import sys
from pathlib import Path

import truesize_grid.config as tsg_config
import truesize_grid.main as tsg_main
from truesize_grid.config_defaults import (
    DEFAULT_KERNEL_SIZE,
    DEFAULT_LEVELS,
    DEFAULT_SCALE,
    DEFAULT_SIGMA,
)
from truesize_grid.logging_utils import logger
from truesize_grid.montage.api import (
    parse_alignment,
    parse_hex_color,
    parse_margins,
    size_2d,
)
from truesize_grid.montage.cli import wrap_validator
from truesize_grid.runtime import resolve_project_version
from truesize_grid.type_defs import InputPaths


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        description=(
            "Blend a smoothed image with the detail layer of another, "
            "downsample the result, and show every level at true size"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"Examples:\n"
            f"python {Path(__file__).name} --smooth dog.jpg "
            f"--sharpen cat.jpg\n"
            f"python {Path(__file__).name} --smooth dog.jpg "
            f"--sharpen cat.jpg --alignment top --margins 25 --show\n"
            f"python {Path(__file__).name} --smooth dog.jpg "
            f"--sharpen cat.jpg --levels 3 --scale 0.25\n\n"
            "Note:\n"
            "  Both images must have the same size."
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    required = p.add_argument_group("required arguments")
    required.add_argument(
        "--smooth", type=str, help="Path to the image to smooth")
    required.add_argument(
        "--sharpen", type=str, help="Path to the image to sharpen")

    filt = p.add_argument_group("filter")
    filt.add_argument(
        "--kernel-size", type=int, default=argparse.SUPPRESS,
        help=f"Gaussian kernel size in pixels (default: "
             f"{DEFAULT_KERNEL_SIZE})")
    filt.add_argument(
        "--sigma", type=float, default=argparse.SUPPRESS,
        help=f"Gaussian sigma in pixels (default: {DEFAULT_SIGMA})")

    pyr = p.add_argument_group("pyramid")
    pyr.add_argument(
        "--levels", type=int, default=argparse.SUPPRESS,
        help=f"Number of pyramid levels (default: {DEFAULT_LEVELS})")
    pyr.add_argument(
        "--scale", type=float, default=argparse.SUPPRESS,
        help=f"Resize factor between levels (default: {DEFAULT_SCALE})")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--margins", type=wrap_validator(parse_margins),
        default=argparse.SUPPRESS,
        help="Margins in pixels as H or H,V (default: 10,10)")
    layout.add_argument(
        "--alignment", type=wrap_validator(parse_alignment),
        default=argparse.SUPPRESS,
        help="left, top or center (default: center)")
    layout.add_argument(
        "--background", type=wrap_validator(parse_hex_color),
        default=argparse.SUPPRESS,
        help="Canvas background as #rrggbb (default: #ffffff)")

    display = p.add_argument_group("display")
    display.add_argument(
        "--show", action="store_true",
        help="Open a figure window with the true-size grid")
    display.add_argument(
        "--dpi", type=int, default=argparse.SUPPRESS,
        help="Figure DPI used to convert pixels to inches")
    display.add_argument(
        "--display-size", type=wrap_validator(size_2d),
        default=argparse.SUPPRESS,
        help="Screen size as WxH, used to center the figure")

    output = p.add_argument_group("output")
    output.add_argument(
        "--output", type=str, help="Output directory",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--no-canvas", action="store_true",
        help="Do not save the composed canvas PNG")
    output.add_argument(
        "--save-levels", action="store_true",
        help="Save every pyramid level as its own PNG")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without running the demo")

    return p


def log_parameters(
    paths: InputPaths,
    cfg: tsg_config.TruesizeConfig,
    args: argparse.Namespace,
) -> None:
    """Log all user-provided parameters."""
    logger.info("Image to smooth: %s", paths.smooth_path)
    logger.info("Image to sharpen: %s", paths.sharpen_path)
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Output Directory: %s", cfg.output.output)
    logger.info("Kernel Size: %d", cfg.filter.kernel_size)
    logger.info("Sigma: %g", cfg.filter.sigma)
    logger.info("Pyramid Levels: %d", cfg.pyramid.levels)
    logger.info("Pyramid Scale: %g", cfg.pyramid.scale)
    logger.info("Margins: %s", cfg.layout.margins)
    logger.info("Alignment: %s", cfg.layout.alignment)
    logger.info("Canvas Saving: %s",
                "Enabled" if cfg.output.save_canvas else "Disabled")
    logger.info("Level Saving: %s",
                "Enabled" if cfg.output.save_levels else "Disabled")
    logger.info("Figure Window: %s",
                "Enabled" if cfg.display.show else "Disabled")


def run_from_args(args: argparse.Namespace) -> tsg_main.DemoResult | None:
    """Run the demo from command-line arguments."""
    base_cfg: tsg_config.TruesizeConfig | None = None
    if args.config:
        base_cfg = tsg_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            sys.exit(0)

    cfg = tsg_config.build_config_from_cli(vars(args), base_config=base_cfg)

    paths = InputPaths(smooth_path=args.smooth, sharpen_path=args.sharpen)
    log_parameters(paths, cfg, args)

    return tsg_main.run_demo(paths, cfg)


def main() -> None:
    """Run the command-line interface for the demo."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args()
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and (not args.smooth or not args.sharpen):
        arg_parser.error("the following arguments are required: --smooth,"
                         " --sharpen")

    run_from_args(args)


if __name__ == "__main__":  # pragma: no cover
    main()
