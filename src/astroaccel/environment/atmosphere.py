"""Atmosphere and shape models of central bodies.

Aerodynamic accelerations need both: the shape model turns a body-fixed
position into an altitude, the atmosphere model turns the altitude into a
density.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype
from astroaccel.constants import H_EARTH, RHO0_EARTH


class ExponentialAtmosphere:
    """Isothermal exponential atmosphere.

    ``rho(h) = base_density * exp(-(h - base_altitude) / scale_height)``

    Args:
        scale_height: Density scale height [m].
        base_density: Density at *base_altitude* [kg/m^3].
        base_altitude: Reference altitude [m].
    """

    def __init__(
        self,
        scale_height: float = H_EARTH,
        base_density: float = RHO0_EARTH,
        base_altitude: float = 0.0,
    ):
        if scale_height <= 0.0:
            raise ValueError(f"scale_height must be positive, got {scale_height}")
        self.scale_height = scale_height
        self.base_density = base_density
        self.base_altitude = base_altitude

    def get_density(self, altitude: ArrayLike) -> Array:
        """Atmospheric density [kg/m^3] at *altitude* [m]."""
        _float = get_dtype()
        h = jnp.asarray(altitude, dtype=_float)
        return _float(self.base_density) * jnp.exp(
            -(h - _float(self.base_altitude)) / _float(self.scale_height)
        )


class SphericalBodyShape:
    """Spherical body shape.

    Args:
        radius: Body radius [m].
    """

    def __init__(self, radius: float):
        self.radius = radius

    def get_average_radius(self) -> float:
        return self.radius

    def get_altitude(self, position_body_fixed: ArrayLike) -> Array:
        """Altitude [m] of a body-fixed position [m] above the sphere."""
        _float = get_dtype()
        r = jnp.asarray(position_body_fixed, dtype=_float)[:3]
        return jnp.linalg.norm(r) - _float(self.radius)
