# plane.py
import json
import logging
from typing import Any, Dict
from numpy import ndarray
from numpy import allclose as np_allclose
from numpy import array as np_array
from numpy import array_equal as np_array_equal
from numpy import array2string as np_array2string
from numpy import cross as np_cross
from numpy import dot as np_dot
from numpy import float64 as np_float64
from numpy import isfinite as np_isfinite
from numpy.linalg import norm as np_norm

from geotransform.constants import EPSILON, MAX_TOLERANCE
from geotransform.errors import DegenerateGeometryError, GeometryError
from geotransform.geometry import frame_from_normal
from geotransform.vector import VectorLike, as_vector, normalize

logger = logging.getLogger(__name__)


def _frozen(vector: VectorLike) -> ndarray:
    v = np_array(as_vector(vector), dtype=np_float64)
    v.setflags(write=False)
    return v


class Plane:
    """
    An oriented plane given by an origin point and a normal vector.

    The normal does not need to be unit length, but it must be finite and not degenerate.
    Planes are immutable; both arrays are stored read-only.

    Attributes:
        origin (ndarray): a point on the plane.
        normal (ndarray): the plane normal, as given.
    """
    __slots__ = ("origin", "normal")

    def __init__(self, origin: VectorLike, normal: VectorLike):
        origin = _frozen(origin)
        normal = _frozen(normal)
        length = np_norm(normal)
        if not np_isfinite(length) or length <= EPSILON:
            raise DegenerateGeometryError(
                f"Plane normal is degenerate (magnitude {length:.3g})")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "normal", normal)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @classmethod
    def from_points(cls, a: VectorLike, b: VectorLike, c: VectorLike) -> "Plane":
        """
        Create the plane through three points.

        The origin is `a` and the normal is (b - a) × (c - a), so the points
        wind counterclockwise seen from the side the normal points to.

        Raises:
            DegenerateGeometryError: if the points are collinear or coincident.
        """
        a = as_vector(a)
        normal = np_cross(as_vector(b) - a, as_vector(c) - a)
        if np_norm(normal) <= EPSILON:
            raise DegenerateGeometryError(
                "Cannot build a plane from collinear points")
        return cls(a, normal)

    #########
    # Frame
    #

    @property
    def unit_normal(self) -> ndarray:
        """The normal scaled to unit length."""
        return normalize(self.normal)

    @property
    def frame(self) -> ndarray:
        """
        The plane's orthonormal basis as a 3x3 matrix with columns (x_axis, y_axis, unit_normal).

        Returns:
            A right-handed rotation matrix mapping plane-local directions to world directions.
        """
        basis, used_fallback = frame_from_normal(self.normal, EPSILON)
        if used_fallback:
            logger.debug("Plane normal %s is parallel to Z, using the Y reference axis",
                         self.normal)
        return basis

    @property
    def x_axis(self) -> ndarray:
        """In-plane x direction of the plane's frame."""
        return self.frame[:, 0]

    @property
    def y_axis(self) -> ndarray:
        """In-plane y direction of the plane's frame."""
        return self.frame[:, 1]

    ########
    # Point queries
    #

    def signed_distance(self, point: VectorLike) -> float:
        """
        Distance from the plane to a point, positive on the side the normal points to.
        """
        return float(np_dot(as_vector(point) - self.origin, self.unit_normal))

    def closest_point(self, point: VectorLike) -> ndarray:
        """
        Orthogonal projection of a point onto the plane.
        """
        p = as_vector(point)
        n = self.unit_normal
        return p - np_dot(p - self.origin, n) * n

    def flipped(self) -> "Plane":
        """The same plane with the normal reversed."""
        return self.__class__(self.origin, -self.normal)

    def is_close(self, other: "Plane", tol: float = MAX_TOLERANCE) -> bool:
        """
        True if origins and normals agree element-wise within `tol`.
        """
        return (np_allclose(self.origin, other.origin, rtol=0.0, atol=tol)
                and np_allclose(self.normal, other.normal, rtol=0.0, atol=tol))

    #########
    # Serialization
    #

    def to_dict(self) -> Dict[str, list]:
        return {"origin": self.origin.tolist(), "normal": self.normal.tolist()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plane":
        """
        Create a Plane from a mapping with "origin" and "normal" entries.

        Raises:
            GeometryError: if either entry is missing.
            InvalidDimensionError: if either entry is not a 3-component vector.
        """
        try:
            origin = data["origin"]
            normal = data["normal"]
        except (KeyError, TypeError) as err:
            raise GeometryError(
                f"Plane data needs 'origin' and 'normal' entries, got {data!r}") from err
        return cls(origin, normal)

    def to_json(self) -> str:
        """Serialize the plane to JSON."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "Plane":
        """Create a Plane from the JSON produced by `to_json`."""
        return cls.from_dict(json.loads(text))

    #########
    # Dunder methods
    #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plane):
            return False
        return (np_array_equal(self.origin, other.origin)
                and np_array_equal(self.normal, other.normal))

    __hash__ = None

    def __repr__(self) -> str:
        origin = np_array2string(self.origin, precision=6, separator=', ')
        normal = np_array2string(self.normal, precision=6, separator=', ')
        return f"{self.__class__.__name__}(origin={origin}, normal={normal})"

    def __copy__(self) -> "Plane":
        # immutable
        return self

    def __deepcopy__(self, memo) -> "Plane":
        return self

    def __reduce__(self):
        """
        Pickle support: reduces to (class, (origin, normal))
        """
        return (self.__class__, (self.origin.copy(), self.normal.copy()))


PLANE_XY = Plane([0.0, 0.0, 0.0], [0.0, 0.0, 1.0])
PLANE_YZ = Plane([0.0, 0.0, 0.0], [1.0, 0.0, 0.0])
PLANE_ZX = Plane([0.0, 0.0, 0.0], [0.0, 1.0, 0.0])
