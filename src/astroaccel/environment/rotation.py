"""Rotational ephemerides.

A rotational ephemeris gives the orientation of a body-fixed frame
(*target frame*) with respect to an inertial frame (*base frame*) as a
function of time.  Spherical-harmonic gravity builders compare the target
frame with the gravity field's fixed frame before wiring the rotation into
the acceleration model.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from astroaccel.config import get_dtype


def Rz(angle) -> Array:
    """Passive rotation matrix about the z-axis (inertial -> rotated)."""
    _float = get_dtype()
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([[c, s, 0.0],
                      [-s, c, 0.0],
                      [0.0, 0.0, 1.0]], dtype=_float)


class RotationalEphemeris:
    """Base class for rotational ephemerides.

    Subclasses implement :meth:`rotation_to_base_frame`.

    Args:
        base_frame: Name of the inertial frame.
        target_frame: Name of the body-fixed frame.
    """

    def __init__(self, base_frame: str, target_frame: str):
        self.base_frame = base_frame
        self.target_frame = target_frame

    def get_base_frame_orientation(self) -> str:
        return self.base_frame

    def get_target_frame_orientation(self) -> str:
        return self.target_frame

    def rotation_to_base_frame(self, time: float) -> Array:
        """Rotation matrix from the target (body-fixed) frame to the base frame."""
        raise NotImplementedError

    def rotation_to_target_frame(self, time: float) -> Array:
        """Rotation matrix from the base frame to the target (body-fixed) frame."""
        return self.rotation_to_base_frame(time).T

    def angular_velocity_in_target_frame(self, time: float) -> Array:
        """Angular velocity of the target frame, expressed in the target frame [rad/s]."""
        return jnp.zeros(3, dtype=get_dtype())


class SimpleRotationalEphemeris(RotationalEphemeris):
    """Uniform rotation about the body z-axis.

    The rotation angle is ``initial_angle + rotation_rate * (time -
    reference_time)``.

    Args:
        rotation_rate: Angular rate [rad/s].
        base_frame: Name of the inertial frame.
        target_frame: Name of the body-fixed frame.
        initial_angle: Angle at *reference_time* [rad].
        reference_time: Reference time [s].

    Examples:
        ```python
        from astroaccel.constants import OMEGA_EARTH
        from astroaccel.environment import SimpleRotationalEphemeris
        rot = SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth")
        R = rot.rotation_to_base_frame(3600.0)
        ```
    """

    def __init__(
        self,
        rotation_rate: float,
        base_frame: str,
        target_frame: str,
        initial_angle: float = 0.0,
        reference_time: float = 0.0,
    ):
        super().__init__(base_frame, target_frame)
        self.rotation_rate = rotation_rate
        self.initial_angle = initial_angle
        self.reference_time = reference_time

    def rotation_to_base_frame(self, time: float) -> Array:
        angle = self.initial_angle + self.rotation_rate * (time - self.reference_time)
        return Rz(angle).T

    def angular_velocity_in_target_frame(self, time: float) -> Array:
        _float = get_dtype()
        return jnp.array([0.0, 0.0, self.rotation_rate], dtype=_float)
