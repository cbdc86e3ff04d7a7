"""
geotransform: the affine transform kernel of a NURBS geometry library. Builds and composes 4x4 homogeneous
transforms (translation, rotation, scale, reflection, planar projection, plane-to-plane mapping) and decomposes
them back into yaw/pitch/roll and rotation axes.
"""

__version__ = version = "0.1.0"

# exposing the public API of the package
from geotransform.constants import EPSILON, MAX_TOLERANCE, GIMBAL_TOLERANCE
from geotransform.errors import (
    GeometryError,
    DegenerateGeometryError,
    AmbiguousDecompositionError,
    InvalidDimensionError,
)
from geotransform.vector import ORIGIN, X_AXIS, Y_AXIS, Z_AXIS
from geotransform.plane import Plane, PLANE_XY, PLANE_YZ, PLANE_ZX
from geotransform.transform import Transform, TransformRow
from geotransform.linalg import (
    EulerCase,
    get_yaw_pitch_roll,
    get_rotation_axis,
    get_rotation_angle,
    to_radians,
    to_degrees,
)

__all__ = [
    "EPSILON",
    "MAX_TOLERANCE",
    "GIMBAL_TOLERANCE",
    "GeometryError",
    "DegenerateGeometryError",
    "AmbiguousDecompositionError",
    "InvalidDimensionError",
    "ORIGIN",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    "Plane",
    "PLANE_XY",
    "PLANE_YZ",
    "PLANE_ZX",
    "Transform",
    "TransformRow",
    "EulerCase",
    "get_yaw_pitch_roll",
    "get_rotation_axis",
    "get_rotation_angle",
    "to_radians",
    "to_degrees",
]
