import math

# Fixed tolerances, not caller-configurable
DEGENERATE_EDGE_TOL = 1e-7
DETERMINANT_TOL = 1e-10
ZERO_VECTOR_TOL = 1e-10
MIN_SEGMENT_LENGTH = 1e-6
FULL_CIRCLE_PARAM_TOL = 1e-10
# Arcs sweeping within this of a full turn are drawn as closed circles
CLOSED_SWEEP_TOL = 1e-9

TWO_PI = 2.0 * math.pi

# Tessellation of free-form curves
ANGULAR_DEFLECTION = 0.1  # radians
DEFAULT_DEFLECTION = 0.01

# Hatching
DEFAULT_HATCH_ANGLE = 45.0  # degrees
DEFAULT_HATCH_SPACING = 2.0
HATCH_LINE_PADDING = 2  # extra candidate lines on each side for rotated coverage

DEFAULT_SCALE = 1.0

# Bounding-box fallback plane selection
DOMINANT_AXIS_THRESHOLD = 0.9

# Edge-to-wire connection tolerance used by the OCP backend
WIRE_CONNECT_TOL = 1e-6
