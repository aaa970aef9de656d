"""Radiation pressure interfaces.

A :class:`RadiationPressureInterface` lives on the body *receiving*
radiation and is keyed by the name of the radiation source.  It holds the
target's radiation properties (area, radiation pressure coefficient) and
the radiation pressure at the target's current distance from the source.

All inputs and outputs use SI base units (metres, N/m^2).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype
from astroaccel.constants import AU, P_SUN


class RadiationPressureInterface:
    """Cannonball radiation properties of a target for one radiation source.

    The pressure follows an inverse-square law from *reference_pressure*
    at *reference_distance*.

    Args:
        area: Cross-sectional area [m^2].
        radiation_pressure_coefficient: Coefficient of reflectivity C_r.
        reference_pressure: Radiation pressure at *reference_distance*
            [N/m^2].  Defaults to the solar value at 1 AU.
        reference_distance: Distance of *reference_pressure* [m].

    Examples:
        ```python
        import jax.numpy as jnp
        from astroaccel.constants import AU
        from astroaccel.environment import RadiationPressureInterface
        iface = RadiationPressureInterface(area=4.0, radiation_pressure_coefficient=1.2)
        iface.update(jnp.zeros(3), jnp.array([AU, 0.0, 0.0]))
        iface.get_current_radiation_pressure()
        ```
    """

    def __init__(
        self,
        area: float,
        radiation_pressure_coefficient: float,
        reference_pressure: float = P_SUN,
        reference_distance: float = AU,
    ):
        self.area = area
        self.radiation_pressure_coefficient = radiation_pressure_coefficient
        self.reference_pressure = reference_pressure
        self.reference_distance = reference_distance
        self.current_radiation_pressure = get_dtype()(0.0)

    def update(self, source_position: ArrayLike, target_position: ArrayLike) -> None:
        """Recompute the radiation pressure at the target's current position."""
        _float = get_dtype()
        d = jnp.asarray(target_position, dtype=_float)[:3] - jnp.asarray(source_position, dtype=_float)[:3]
        distance = jnp.linalg.norm(d)
        self.current_radiation_pressure = (
            _float(self.reference_pressure) * (_float(self.reference_distance) / distance) ** 2
        )

    def get_current_radiation_pressure(self) -> Array:
        return self.current_radiation_pressure

    def get_area(self) -> float:
        return self.area

    def get_radiation_pressure_coefficient(self) -> float:
        return self.radiation_pressure_coefficient
