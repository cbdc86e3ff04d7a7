# transform.py

# Written by: Nathan Spencer
# Licensed under the Apache License, Version 2.0 (the "License")

from typing import Union, Optional, List, Iterator, Sequence
import numpy as np
from numpy import ndarray
from numpy.linalg import inv as np_inv
from numpy import allclose as np_allclose
from numpy import append as np_append
from numpy import array as np_array
from numpy import array_equal as np_array_equal
from numpy import array2string as np_array2string
from numpy import asarray as np_asarray
from numpy import dot as np_dot
from numpy import eye as np_eye
from numpy import float64 as np_float64
from numpy import shape as np_shape

from geotransform.constants import EPSILON, MAX_TOLERANCE
from geotransform.errors import DegenerateGeometryError, InvalidDimensionError
from geotransform.geometry import axis_angle_to_rotation, det3, householder
from geotransform.plane import Plane
from geotransform.vector import VectorLike, ORIGIN, Z_AXIS, as_vector, normalize

# preallocate the identity matrix for performance
_EYE4 = np_eye(4, dtype=np_float64)
_AFFINE_ROW = np_array([0.0, 0.0, 0.0, 1.0], dtype=np_float64)
_SIZE = 4


def _check_index(index) -> int:
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise InvalidDimensionError(
            f"Transform indices must be integers, got {type(index).__name__}")
    if not -_SIZE <= index < _SIZE:
        raise InvalidDimensionError(
            f"Index {index} is outside the {_SIZE}x{_SIZE} transform")
    return int(index)


def _from_parts(linear: ndarray, translation: ndarray) -> ndarray:
    mat = _EYE4.copy()
    mat[:3, :3] = linear
    mat[:3, 3] = translation
    return mat


class TransformRow:
    """
    One row of a Transform. Reads and writes go straight to the owner's matrix
    and every column index is bounds-checked.
    """
    __slots__ = ("_values",)

    def __init__(self, values: ndarray):
        self._values = values

    def __getitem__(self, column) -> float:
        return float(self._values[_check_index(column)])

    def __setitem__(self, column, value) -> None:
        self._values[_check_index(column)] = float(value)

    def __len__(self) -> int:
        return _SIZE

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._values)

    def __array__(self, dtype=None, copy=None) -> ndarray:
        return np_array(self._values, dtype=dtype)

    def __eq__(self, other) -> bool:
        if isinstance(other, TransformRow):
            other = other._values
        try:
            other = np_asarray(other, dtype=np_float64)
        except (TypeError, ValueError):
            return NotImplemented
        return np_array_equal(self._values, other)

    __hash__ = None

    def tolist(self) -> List[float]:
        return self._values.tolist()

    def __repr__(self) -> str:
        return f"TransformRow({np_array2string(self._values, precision=6, separator=', ')})"


class Transform:
    """
    A 4x4 homogeneous affine transformation in 3D space.

    Points are column vectors with an implicit trailing 1, so a transform maps
    p to M·p. The upper-left 3x3 block is the linear part and the first three
    entries of the last column are the translation. Composition `a @ b`
    applies `b` first, then `a`.

    Attributes:
        matrix (ndarray): 4x4 row-major transformation matrix.
    """
    __slots__ = ("matrix",)

    row_count = _SIZE
    column_count = _SIZE

    def __init__(self, matrix: Optional[Union[ndarray, Sequence[Sequence[float]]]] = None):
        if matrix is None:
            self.matrix = _EYE4.copy()
        else:
            matrix = np_array(matrix, dtype=np_float64)
            if matrix.shape != (_SIZE, _SIZE):
                raise InvalidDimensionError(
                    f"Invalid matrix shape: {matrix.shape}")
            self.matrix = matrix

    @classmethod
    def identity(cls) -> "Transform":
        """
        Create an identity Transform.

        Returns:
            A new Transform whose `matrix` is the identity matrix.
        """
        return cls(_EYE4.copy())

    @classmethod
    def translation(cls, vector: VectorLike) -> "Transform":
        """
        Create a Transform that moves every point by `vector`.

        Args:
            vector: length-3 offset placed in the last column.

        Returns:
            A new Transform whose `matrix` encodes T(vector).
        """
        mat = _EYE4.copy()
        mat[:3, 3] = as_vector(vector)
        return cls(mat)

    @classmethod
    def scale(cls, center: VectorLike, factor: float) -> "Transform":
        """
        Create a uniform scale by `factor` about `center`.

        Equivalent to T(center) · diag(f, f, f, 1) · T(-center), so the
        translation column is center · (1 - factor) and `center` stays fixed.

        Args:
            center: length-3 fixed point of the scale.
            factor: uniform scale factor.

        Returns:
            A new Transform encoding the scale.
        """
        c = as_vector(center)
        factor = float(factor)
        mat = _EYE4.copy()
        mat[0, 0] = mat[1, 1] = mat[2, 2] = factor
        mat[:3, 3] = c * (1.0 - factor)
        return cls(mat)

    @classmethod
    def rotation(cls, angle: float, center: VectorLike = ORIGIN, axis: VectorLike = Z_AXIS) -> "Transform":
        """
        Create a rotation by `angle` radians about the line through `center` along `axis`.

        The default axis is the world Z axis, which gives the planar rotation
        [[cos, -sin, 0], [sin, cos, 0], [0, 0, 1]] about `center`.
        Built as T(center) · R(axis, angle) · T(-center).

        Args:
            angle: rotation angle in radians, counterclockwise looking down `axis`.
            center: length-3 point on the rotation axis.
            axis: length-3 direction of the rotation axis, any non-zero length.

        Raises:
            DegenerateGeometryError: if `axis` has near-zero magnitude.
        """
        c = as_vector(center)
        R = axis_angle_to_rotation(normalize(axis), float(angle))
        return cls(_from_parts(R, c - R @ c))

    @classmethod
    def rotation_about_axis(cls, angle: float, axis: VectorLike, center: VectorLike = ORIGIN) -> "Transform":
        """
        Create a rotation by `angle` radians about an explicit `axis` through `center`.
        """
        return cls.rotation(angle, center, axis)

    @classmethod
    def reflection(cls, plane: Plane) -> "Transform":
        """
        Create a mirror transform across `plane`.

        With n the unit normal and p0 the plane origin, the linear part is
        I - 2·n·nᵀ (determinant -1) and the translation is 2·(n·p0)·n.

        Raises:
            DegenerateGeometryError: if the plane normal is degenerate.
        """
        n = normalize(plane.normal)
        return cls(_from_parts(householder(n, 2.0), 2.0 * np_dot(n, plane.origin) * n))

    @classmethod
    def planar_projection(cls, plane: Plane) -> "Transform":
        """
        Create an orthogonal projection onto `plane` along its normal.

        With n the unit normal and p0 the plane origin, the linear part is
        I - n·nᵀ (rank 2) and the translation is (n·p0)·n. Applying the result
        twice is the same as applying it once.

        Raises:
            DegenerateGeometryError: if the plane normal is degenerate.
        """
        n = normalize(plane.normal)
        return cls(_from_parts(householder(n, 1.0), np_dot(n, plane.origin) * n))

    @classmethod
    def plane_to_plane(cls, from_plane: Plane, to_plane: Plane) -> "Transform":
        """
        Create the transform that maps the frame of `from_plane` onto the frame of `to_plane`.

        Built as T(to.origin) · (R_to · R_fromᵀ) · T(-from.origin), where R_from
        and R_to are the plane frames (columns x_axis, y_axis, unit_normal).
        The result takes from.origin to to.origin and from's normal to to's normal.
        """
        R = to_plane.frame @ from_plane.frame.T
        return cls(_from_parts(R, to_plane.origin - R @ from_plane.origin))

    @classmethod
    def from_list(cls, values: Union[Sequence[float], Sequence[Sequence[float]]]) -> "Transform":
        """
        Create a Transform from 16 row-major values or from 4 rows of 4.
        """
        shape = np_shape(values)
        if shape == (_SIZE * _SIZE,):
            return cls(np_asarray(values, dtype=np_float64).reshape((_SIZE, _SIZE)))
        if shape != (_SIZE, _SIZE):
            raise InvalidDimensionError(f"Invalid list shape: {shape}")
        return cls(values)

    #########
    # Getters
    #

    @property
    def linear(self) -> ndarray:
        """
        A copy of the upper-left 3x3 linear block (rotation, scale, reflection).
        """
        return self.matrix[:3, :3].copy()

    @property
    def translation_vector(self) -> ndarray:
        """
        A copy of the translation part, the first three entries of the last column.
        """
        return self.matrix[:3, 3].copy()

    def determinant(self) -> float:
        """
        Determinant of the linear block: +1 for rotations, -1 for reflections,
        factor**3 for uniform scales, 0 for projections.
        """
        return float(det3(self.matrix[:3, :3]))

    def is_affine(self, tol: float = EPSILON) -> bool:
        """
        True if the last row is (0, 0, 0, 1) within `tol`.
        """
        return bool(np_allclose(self.matrix[3, :], _AFFINE_ROW, rtol=0.0, atol=tol))

    def is_close(self, other: "Transform", tol: float = MAX_TOLERANCE) -> bool:
        """
        True if every element of the two matrices agrees within `tol`.
        """
        return bool(np_allclose(self.matrix, other.matrix, rtol=0.0, atol=tol))

    ########
    # Transform methods
    #

    def transform_point(self, point: VectorLike) -> ndarray:
        """
        Apply this transform to a 3D point (affine).

        Args:
            point: length-3 array.

        Returns:
            Transformed length-3 point.
        """
        p = np_append(as_vector(point), 1.0)
        return (self.matrix @ p)[:3]

    def transform_vector(self, vector: VectorLike) -> ndarray:
        """
        Apply this transform to a 3D direction (no translation).

        Args:
            vector: length-3 array.

        Returns:
            Transformed length-3 vector.
        """
        return self.matrix[:3, :3] @ as_vector(vector)

    def inverse(self, tol: float = EPSILON) -> "Transform":
        """
        Invert this Transform.

        Raises:
            DegenerateGeometryError: if the linear block is singular, as for planar projections.
        """
        d = det3(self.matrix[:3, :3])
        if abs(d) <= tol:
            raise DegenerateGeometryError(
                f"Transform is singular (determinant {d:.3g}) and cannot be inverted")
        return self.__class__(np_inv(self.matrix))

    def copy(self) -> "Transform":
        """
        Return a copy of this Transform.

        Returns:
            A new Transform that shares no storage with this one.
        """
        return self.__class__(self.matrix.copy())

    def to_list(self) -> List[List[float]]:
        """
        Convert the matrix to nested row lists.
        """
        return self.matrix.tolist()

    #########
    # Dunder methods
    #

    def __getitem__(self, key) -> Union[TransformRow, float]:
        """
        `t[i]` is a bounds-checked, writable handle on row i; `t[i, j]` is a single element.
        """
        if isinstance(key, tuple):
            if len(key) != 2:
                raise InvalidDimensionError(
                    f"Expected a (row, column) pair, got {len(key)} indices")
            row, column = key
            return float(self.matrix[_check_index(row), _check_index(column)])
        return TransformRow(self.matrix[_check_index(key)])

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise InvalidDimensionError(
                    f"Expected a (row, column) pair, got {len(key)} indices")
            row, column = key
            self.matrix[_check_index(row), _check_index(column)] = float(value)
            return

        row = np_asarray(value, dtype=np_float64)
        if row.shape != (_SIZE,):
            raise InvalidDimensionError(
                f"A transform row needs {_SIZE} values, got shape {row.shape}")
        self.matrix[_check_index(key)] = row

    def __len__(self) -> int:
        return _SIZE

    def __iter__(self) -> Iterator[TransformRow]:
        return (TransformRow(row) for row in self.matrix)

    def __matmul__(self, other: Union["Transform", ndarray]) -> Union["Transform", ndarray]:
        """
        Compose transforms or apply this one to an array.

        If `other` is a Transform the result applies `other` first, then this
        transform. A length-3 array is transformed as a point; any other array
        is multiplied by the raw matrix.
        """
        if isinstance(other, ndarray):
            if np_shape(other) == (3,):
                return self.transform_point(other)
            else:
                return self.matrix @ other

        if not isinstance(other, Transform):
            return NotImplemented

        return self.__class__(self.matrix @ other.matrix)

    def __mul__(self, other: Union["Transform", ndarray]) -> Union["Transform", ndarray]:
        """
        Alias for the @ operator: allows `self * other` as well as `self @ other`.
        """
        return self.__matmul__(other)

    def __eq__(self, other: object) -> bool:
        """
        True if `other` is a Transform with exactly the same elements.
        """
        if not isinstance(other, Transform):
            return False
        return np_array_equal(self.matrix, other.matrix)

    __hash__ = None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        mat = np_array2string(self.matrix, precision=6, separator=', ')
        return f"{cls}(matrix=\n{mat}\n)"

    def __copy__(self) -> "Transform":
        return self.copy()

    def __deepcopy__(self, memo) -> "Transform":
        # matrices are numeric, so shallow vs deep is effectively the same here
        return self.copy()

    def __reduce__(self):
        """
        Pickle support: reduces to (class, (matrix,))
        """
        return (self.__class__, (self.matrix.copy(),))
