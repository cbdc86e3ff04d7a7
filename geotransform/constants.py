# constants.py
"""
Numeric tolerances shared across geotransform.

Every predicate that compares floats takes a ``tol`` keyword defaulting to one
of these, so callers can tighten or loosen a single call without touching the
module-wide defaults.
"""

# magnitude at or below which a vector, normal or skew part counts as zero
EPSILON = 1e-6

# element-wise tolerance for approximate equality of transforms and planes
MAX_TOLERANCE = 1e-4

# |cos(pitch)| at or below this is treated as gimbal lock
GIMBAL_TOLERANCE = 1e-6
