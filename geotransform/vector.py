# vector.py
"""
Helpers for the 3-component point/vector primitive.

Points and vectors are plain ``float64`` numpy arrays of shape (3,); anything
array-like (lists, tuples) is accepted on the way in.
"""
from typing import Union, List, Tuple
from numpy import ndarray
from numpy import asarray as np_asarray
from numpy import array as np_array
from numpy import cross as np_cross
from numpy import float64 as np_float64
from numpy import isfinite as np_isfinite
from numpy.linalg import norm as np_norm

from geotransform.constants import EPSILON
from geotransform.errors import DegenerateGeometryError, InvalidDimensionError

VectorLike = Union[ndarray, List[float], Tuple[float, float, float]]


def _constant(x: float, y: float, z: float) -> ndarray:
    v = np_array([x, y, z], dtype=np_float64)
    v.setflags(write=False)
    return v


ORIGIN = _constant(0.0, 0.0, 0.0)
X_AXIS = _constant(1.0, 0.0, 0.0)
Y_AXIS = _constant(0.0, 1.0, 0.0)
Z_AXIS = _constant(0.0, 0.0, 1.0)


def as_vector(value: VectorLike) -> ndarray:
    """
    Convert `value` to a length-3 float64 array.

    Raises:
        InvalidDimensionError: if `value` does not hold exactly three components.
    """
    vec = np_asarray(value, dtype=np_float64)
    if vec.shape != (3,):
        raise InvalidDimensionError(
            f"Expected a 3-component vector, got shape {vec.shape}")
    return vec


def magnitude(vector: VectorLike) -> float:
    """Euclidean length of a vector."""
    return float(np_norm(as_vector(vector)))


def normalize(vector: VectorLike, tol: float = EPSILON) -> ndarray:
    """
    Return a unit-length copy of `vector`.

    Args:
        vector: length-3 vector.
        tol: magnitude at or below which the vector is degenerate.

    Raises:
        DegenerateGeometryError: if the vector's magnitude is not finite or not above `tol`.
    """
    vec = as_vector(vector)
    length = np_norm(vec)
    if not np_isfinite(length) or length <= tol:
        raise DegenerateGeometryError(
            f"Cannot normalize a vector of magnitude {length:.3g}")
    return vec / length


def is_parallel(a: VectorLike, b: VectorLike, tol: float = EPSILON) -> bool:
    """
    True if `a` and `b` point along the same line (either sense).

    A zero-length or non-finite vector is parallel to nothing.
    """
    a = as_vector(a)
    b = as_vector(b)
    la = np_norm(a)
    lb = np_norm(b)
    if not (np_isfinite(la) and np_isfinite(lb)) or la <= tol or lb <= tol:
        return False
    return bool(np_norm(np_cross(a, b)) <= tol * la * lb)
