"""
run_demo.py: CLI Entry Point

This script serves as the command-line interface entry point for the
blend-pyramid demo. It forwards execution to the modularized CLI logic
defined in `src/truesize_grid/cli.py`.

Usage:
    python run_demo.py --smooth path/to/dog.jpg --sharpen path/to/cat.jpg [options]

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_demo.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import truesize_grid.cli as tsg_cli

if __name__ == "__main__":
    tsg_cli.main()
