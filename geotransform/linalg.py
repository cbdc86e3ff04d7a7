# linalg.py
"""
Decomposition routines that describe the rotation held in a Transform.

Angles are in radians. Every routine reads only the upper-left 3x3 block, so
it accepts a Transform, a 4x4 array or a bare 3x3 array.
"""
import logging
import math
from enum import Enum
from typing import Dict, Union
from numpy import ndarray
from numpy import asarray as np_asarray
from numpy import float64 as np_float64
from numpy.linalg import norm as np_norm

from geotransform.constants import EPSILON, GIMBAL_TOLERANCE
from geotransform.errors import AmbiguousDecompositionError, InvalidDimensionError
from geotransform.geometry import det3, skew_vector
from geotransform.transform import Transform

logger = logging.getLogger(__name__)

TransformLike = Union[Transform, ndarray]


class EulerCase(Enum):
    """Which extraction formula applies to a given pitch."""
    NORMAL = 0
    GIMBAL_LOCK_UP = 1      # pitch = +pi/2
    GIMBAL_LOCK_DOWN = 2    # pitch = -pi/2


def _linear_block(transform: TransformLike) -> ndarray:
    if isinstance(transform, Transform):
        return transform.matrix[:3, :3]
    mat = np_asarray(transform, dtype=np_float64)
    if mat.shape not in ((4, 4), (3, 3)):
        raise InvalidDimensionError(
            f"Expected a 4x4 or 3x3 matrix, got shape {mat.shape}")
    return mat[:3, :3]


def to_radians(degrees: float) -> float:
    return math.radians(degrees)


def to_degrees(radians: float) -> float:
    return math.degrees(radians)


def classify_pitch(pitch: float, tol: float = GIMBAL_TOLERANCE) -> EulerCase:
    """
    Decide whether yaw and roll can be separated at this pitch.

    Args:
        pitch: pitch angle in radians, in [-pi/2, pi/2].
        tol: |cos(pitch)| at or below which the rotation is in gimbal lock.
    """
    if abs(math.cos(pitch)) > tol:
        return EulerCase.NORMAL
    return EulerCase.GIMBAL_LOCK_UP if pitch > 0.0 else EulerCase.GIMBAL_LOCK_DOWN


def _yaw_roll_normal(R: ndarray) -> tuple[float, float]:
    return math.atan2(R[1, 0], R[0, 0]), math.atan2(R[2, 1], R[2, 2])


def _yaw_roll_lock_up(R: ndarray) -> tuple[float, float]:
    # R01 = sin(roll - yaw), R11 = cos(roll - yaw); all of it goes to roll
    return 0.0, math.atan2(R[0, 1], R[1, 1])


def _yaw_roll_lock_down(R: ndarray) -> tuple[float, float]:
    # R01 = -sin(roll + yaw), R11 = cos(roll + yaw)
    return 0.0, math.atan2(-R[0, 1], R[1, 1])


_YAW_ROLL = {
    EulerCase.NORMAL: _yaw_roll_normal,
    EulerCase.GIMBAL_LOCK_UP: _yaw_roll_lock_up,
    EulerCase.GIMBAL_LOCK_DOWN: _yaw_roll_lock_down,
}


def get_yaw_pitch_roll(transform: TransformLike, tol: float = GIMBAL_TOLERANCE) -> Dict[str, float]:
    """
    Extract Tait-Bryan angles from the rotation block R = Rz(yaw) · Ry(pitch) · Rx(roll).

    pitch = asin(-R20). Away from gimbal lock, yaw = atan2(R10, R00) and
    roll = atan2(R21, R22). At pitch = ±pi/2 only roll ∓ yaw is observable,
    so yaw is set to zero and the whole angle is reported as roll.

    Args:
        transform: Transform or matrix whose upper-left 3x3 is a proper rotation.
        tol: gimbal lock threshold on |cos(pitch)|, see `classify_pitch`.

    Returns:
        Dict[str, float]: {"yaw": ..., "pitch": ..., "roll": ...} in radians.
    """
    R = _linear_block(transform)
    pitch = math.asin(min(1.0, max(-1.0, -float(R[2, 0]))))
    case = classify_pitch(pitch, tol)
    if case is not EulerCase.NORMAL:
        logger.debug("Gimbal lock (%s) at pitch %.6f, yaw set to zero", case.name, pitch)
    yaw, roll = _YAW_ROLL[case](R)
    return {"yaw": yaw, "pitch": pitch, "roll": roll}


def get_rotation_axis(transform: TransformLike, tol: float = EPSILON) -> ndarray:
    """
    Recover the unit rotation axis from the skew-symmetric part of the rotation block.

    The axial vector (R21 - R12, R02 - R20, R10 - R01) equals 2·sin(θ)·axis,
    so it vanishes for rotations by 0 (any axis fits) or pi (both senses
    of the axis fit).

    Args:
        transform: Transform or matrix whose upper-left 3x3 is a proper rotation.
        tol: magnitude of the axial vector at or below which the axis is ambiguous.

    Raises:
        AmbiguousDecompositionError: if the rotation angle is 0 or pi.
    """
    w = skew_vector(_linear_block(transform))
    length = np_norm(w)
    if length <= tol:
        raise AmbiguousDecompositionError(
            "Rotation axis is undefined for a rotation by 0 or pi")
    return w / length


def get_rotation_angle(transform: TransformLike) -> float:
    """
    Rotation angle in [0, pi] from the trace of the rotation block: acos((tr(R) - 1) / 2).
    """
    R = _linear_block(transform)
    c = (float(R[0, 0] + R[1, 1] + R[2, 2]) - 1.0) * 0.5
    return math.acos(min(1.0, max(-1.0, c)))


def determinant(transform: TransformLike) -> float:
    """Determinant of the upper-left 3x3 block."""
    return float(det3(_linear_block(transform)))
