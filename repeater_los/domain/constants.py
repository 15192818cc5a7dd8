"""Constants used across the application."""

import os
from pathlib import Path

# Output directory - configurable via environment variable
# Default: 'output_data' in current working directory
OUTPUT_DATA_DIR = os.getenv("OUTPUT_DATA_DIR", str(Path.cwd() / "output_data"))

# Physical constants
EARTH_RADIUS_M = 6_371_000.0  # Earth's mean radius in meters
SPEED_OF_LIGHT = 299_792_458  # Speed of light in m/s

# Refraction
OPTICAL_K_FACTOR = 1.0
STANDARD_K_FACTOR = 4 / 3

# Radio horizon d(mi) = C * (sqrt(h1_ft) + sqrt(h2_ft))
HORIZON_COEFFICIENT_OPTICAL = 1.06  # k = 1
HORIZON_COEFFICIENT_STANDARD = 1.23  # k = 4/3

# Clearance target, fraction of the first Fresnel zone
DEFAULT_FRESNEL_FRACTION = 0.6
# Margin ratio and star rating are always measured against 60% of F1
RATING_FRESNEL_FRACTION = 0.6

# Unit conversions
FT_PER_M = 3.280839895
M_PER_MI = 1609.344
