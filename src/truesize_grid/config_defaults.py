"""Shared default values for user-facing configuration settings."""
from truesize_grid.constants import COLOR_WHITE
from truesize_grid.type_defs import AlignmentName

# Filter
DEFAULT_KERNEL_SIZE = 50
DEFAULT_SIGMA = 6.0

# Pyramid
DEFAULT_LEVELS = 5
DEFAULT_SCALE = 0.5

# Layout
DEFAULT_MARGINS: tuple[int, int] = (10, 10)
DEFAULT_ALIGNMENT: AlignmentName = "center"
DEFAULT_BACKGROUND_COLOR = COLOR_WHITE

# Display
DEFAULT_SHOW = False
DEFAULT_DPI = 100

# Output
DEFAULT_OUTPUT_DIR = "out"
DEFAULT_SAVE_CANVAS = True
DEFAULT_SAVE_LEVELS = False
