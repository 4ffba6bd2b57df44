"""
Package-wide defaults for mask generation and scoring.
"""

# Intensity written along the stroked centerline; raster values are in [0, MAX_INTENSITY]
MAX_INTENSITY = 255

# Default stroke width, in raster pixels
DEFAULT_THICKNESS = 64.0

# Default Gaussian blur sigma, in raster pixels
DEFAULT_BLUR_RADIUS = 32.0

# Number of screen self-composites used to brighten the blurred layer
SCREEN_PASSES = 2

# Raster pixel dtype
RASTER_DTYPE = "uint8"
