# errors.py


class GeometryError(ValueError):
    """Base class for every error raised by geotransform."""


class DegenerateGeometryError(GeometryError):
    """
    Raised when a geometric input has collapsed: a near-zero normal or
    direction, collinear points, or a singular linear block that cannot be
    inverted.
    """


class AmbiguousDecompositionError(GeometryError):
    """
    Raised when a decomposition has no unique answer, e.g. the rotation axis
    of a rotation by 0 or pi.
    """


class InvalidDimensionError(GeometryError, IndexError):
    """
    Raised on an index outside the fixed 4x4 bounds of a Transform, or on a
    vector, row or matrix of the wrong size.
    """
