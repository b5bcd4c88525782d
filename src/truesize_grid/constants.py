"""
Constants used internally by the true-size grid tools.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Number of components accepted for a margins value (horizontal, vertical)
MARGIN_COMPONENTS_MAX = 2

# Kernel values below EPSILON * max are zeroed, as in classic fspecial
GAUSSIAN_EPSILON = 2.220446049250313e-16

# Image processing constants
COLOR_MODE_RGB = "RGB"
COLOR_MODE_GRAY = "L"
LARGE_IMAGE_DIMENSION = 4000

# Internal color constants
COLOR_WHITE = (255, 255, 255)

# Colormap used when drawing single channel images on a figure
GRAYSCALE_COLORMAP = "gray"

# Fallback directory when the configured output directory is unusable
FALLBACK_OUTPUT_DIR = "truesize_output"
