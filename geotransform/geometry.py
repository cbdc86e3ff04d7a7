# geometry.py
import math
import numpy as np
from numpy import float64 as np_float64
from numpy import ndarray
from numba import njit

from numba.core.errors import NumbaPerformanceWarning
import warnings
warnings.filterwarnings("ignore", category=NumbaPerformanceWarning)


@njit(cache=True, fastmath=True)
def det3(M: ndarray) -> float:
    """Determinant of a 3 x 3 (faster than np.linalg.det for tiny mats)."""
    return (
        M[0, 0] * (M[1, 1] * M[2, 2] - M[1, 2] * M[2, 1])
        - M[0, 1] * (M[1, 0] * M[2, 2] - M[1, 2] * M[2, 0])
        + M[0, 2] * (M[1, 0] * M[2, 1] - M[1, 1] * M[2, 0])
    )


@njit(cache=True)
def frame_from_normal(normal: ndarray, tol: float) -> tuple[ndarray, bool]:
    """
    Build the orthonormal frame (u, v, n) of a plane from its normal.

    The in-plane x-axis is u = normalize(n × Z). When n is parallel to the
    world Z axis that cross product vanishes and u = normalize(Y × n) is used
    instead, which makes the world XY plane map to the identity frame.
    The y-axis completes a right-handed frame as v = n × u.

    Parameters:
        normal (ndarray): A 3-element normal; it does not need to be unit length
            but must have been checked for a non-zero magnitude by the caller.
        tol (float): Magnitude of n × Z at or below which n counts as parallel to Z.

    Returns:
        tuple[ndarray, bool]: A 3x3 matrix whose columns are (u, v, n), and
            whether the fallback reference axis was used.
    """
    length = math.sqrt(normal[0]*normal[0] + normal[1]*normal[1] + normal[2]*normal[2])
    nx, ny, nz = normal[0]/length, normal[1]/length, normal[2]/length

    # n × Z
    ux, uy, uz = ny, -nx, 0.0
    un = math.sqrt(ux*ux + uy*uy)
    used_fallback = un <= tol
    if used_fallback:
        # Y × n
        ux, uy, uz = nz, 0.0, -nx
        un = math.sqrt(ux*ux + uz*uz)
    ux, uy, uz = ux/un, uy/un, uz/un

    # v = n × u
    vx = ny*uz - nz*uy
    vy = nz*ux - nx*uz
    vz = nx*uy - ny*ux

    out = np.empty((3, 3), dtype=np_float64)
    out[0, 0], out[1, 0], out[2, 0] = ux, uy, uz
    out[0, 1], out[1, 1], out[2, 1] = vx, vy, vz
    out[0, 2], out[1, 2], out[2, 2] = nx, ny, nz
    return out, used_fallback


@njit(cache=True)
def axis_angle_to_rotation(axis: ndarray, angle: float) -> ndarray:
    """
    Rotation matrix for a right-handed rotation of `angle` radians about a
    unit `axis`, using the Rodrigues formula.

    For axis = Z this is the planar rotation
    [[cos, -sin, 0], [sin, cos, 0], [0, 0, 1]].
    """
    ux, uy, uz = axis[0], axis[1], axis[2]
    c = math.cos(angle)
    s = math.sin(angle)
    one_c = 1.0 - c

    R = np.empty((3, 3), dtype=np_float64)
    R[0, 0] = c + ux*ux*one_c
    R[0, 1] = ux*uy*one_c - uz*s
    R[0, 2] = ux*uz*one_c + uy*s

    R[1, 0] = uy*ux*one_c + uz*s
    R[1, 1] = c + uy*uy*one_c
    R[1, 2] = uy*uz*one_c - ux*s

    R[2, 0] = uz*ux*one_c - uy*s
    R[2, 1] = uz*uy*one_c + ux*s
    R[2, 2] = c + uz*uz*one_c
    return R


@njit(cache=True, fastmath=True)
def skew_vector(R: ndarray) -> ndarray:
    """
    The axial vector of the skew-symmetric part of R:
    (R21 - R12, R02 - R20, R10 - R01), which equals 2·sin(θ)·axis for a
    rotation by θ.
    """
    out = np.empty(3, dtype=np_float64)
    out[0] = R[2, 1] - R[1, 2]
    out[1] = R[0, 2] - R[2, 0]
    out[2] = R[1, 0] - R[0, 1]
    return out


@njit(cache=True)
def householder(n: ndarray, factor: float) -> ndarray:
    """I - factor·n·nᵀ for a unit vector n (factor 2 mirrors, factor 1 projects)."""
    out = np.empty((3, 3), dtype=np_float64)
    for i in range(3):
        for j in range(3):
            out[i, j] = -factor * n[i] * n[j]
        out[i, i] += 1.0
    return out
