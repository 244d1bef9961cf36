"""Configuration for the path tracer.

Values can be overridden through environment variables so that the CLI and
library users share one set of defaults.
"""

import os

# Logging settings
LOG_LEVEL = os.getenv("PATHTRACER_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
    "PATHTRACER_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Worker pool size for the threaded strategies
DEFAULT_WORKERS = int(os.getenv("PATHTRACER_WORKERS", "0")) or (os.cpu_count() or 1)

# Render defaults (used by the CLI)
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
DEFAULT_SAMPLES = 10
DEFAULT_MAX_DEPTH = 50

# Largest accepted output dimension, in pixels
MAX_IMAGE_DIMENSION = 4096

# Minimum ray parameter for scene queries ("shadow acne" avoidance)
T_MIN = 0.001
