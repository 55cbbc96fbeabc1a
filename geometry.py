from __future__ import annotations

import logging

from pygame.math import Vector3

from errors import DegenerateGeometry


logger = logging.getLogger(__name__)

UP = Vector3(0.0, 1.0, 0.0)
FORWARD = Vector3(0.0, 0.0, 1.0)
RIGHT = Vector3(1.0, 0.0, 0.0)

# squared-length thresholds below which a direction is treated as zero
HORIZONTAL_EPSILON = 0.01
DIRECTION_EPSILON = 0.001
LATERAL_EPSILON = 1e-10


def horizontal(v: Vector3) -> Vector3:
    """Return a copy of v flattened onto the ground plane."""
    return Vector3(v.x, 0.0, v.z)


def normalized(v: Vector3, epsilon: float = DIRECTION_EPSILON) -> Vector3:
    """Return v scaled to unit length.

    Raises:
        DegenerateGeometry: If the squared length of v is below epsilon.
    """
    if v.length_squared() < epsilon:
        raise DegenerateGeometry(f"cannot normalise {tuple(v)}")
    return v.normalize()


def normalized_or(
    v: Vector3, fallback: Vector3, epsilon: float = DIRECTION_EPSILON
) -> Vector3:
    """Normalise v, substituting fallback for a degenerate vector."""
    try:
        return normalized(v, epsilon)
    except DegenerateGeometry as e:
        logger.debug("%s, using %s", e, tuple(fallback))
        return Vector3(fallback)


def lateral_axis(forward: Vector3) -> Vector3:
    """Unit axis to the right of forward on the ground plane (up x forward)."""
    return normalized_or(UP.cross(forward), RIGHT, LATERAL_EPSILON)


def facing(forward: Vector3) -> Vector3:
    """Horizontal facing for an upright object, canonical forward when vertical."""
    return normalized_or(horizontal(forward), FORWARD)


def as_list(v: Vector3) -> list:
    return [round(v.x, 6), round(v.y, 6), round(v.z, 6)]
