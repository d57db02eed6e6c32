"""X3G - version constants.

Keep this module tiny and dependency-free. It is imported by settings,
tessellation and the CLI, and must not have side effects.
"""

APP_NAME = "X3dGeometria2D"
APP_SHORT = "X3G"

APP_VERSION = "0.1.0"

# Tessellation defaults.
# NOTE: 10 segmentos por arco (o circulo completo), sin depender del radio.
DEFAULT_ARC_SEGMENTS = 10
MIN_ARC_SEGMENTS = 1
MAX_ARC_SEGMENTS = 1024
