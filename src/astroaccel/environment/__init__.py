"""Simulation environment: bodies and the capability models they own.

This sub-module provides:

- **Bodies**: :class:`Body` records and the :class:`BodyRegistry` that owns
  them.
- **Gravity fields**: point-mass and spherical harmonic fields, with the
  acceleration kernels evaluated by gravity acceleration models.
- **Rotation**: rotational ephemerides of body-fixed frames.
- **Atmosphere and shape**: exponential atmosphere and spherical shape.
- **Aerodynamics**: coefficient interfaces and flight conditions.
- **Radiation**: cannonball radiation pressure interfaces.
"""

from .aerodynamics import (
    AerodynamicCoefficientInterface,
    FlightConditions,
    create_flight_conditions,
    get_or_create_flight_conditions,
)
from .atmosphere import ExponentialAtmosphere, SphericalBodyShape
from .body import Body, BodyRegistry
from .gravity import (
    GravityFieldModel,
    SphericalHarmonicsGravityField,
    accel_point_mass,
    accel_spherical_harmonics,
)
from .radiation import RadiationPressureInterface
from .rotation import RotationalEphemeris, SimpleRotationalEphemeris

__all__ = [
    # Bodies
    "Body",
    "BodyRegistry",
    # Gravity
    "GravityFieldModel",
    "SphericalHarmonicsGravityField",
    "accel_point_mass",
    "accel_spherical_harmonics",
    # Rotation
    "RotationalEphemeris",
    "SimpleRotationalEphemeris",
    # Atmosphere & shape
    "ExponentialAtmosphere",
    "SphericalBodyShape",
    # Aerodynamics
    "AerodynamicCoefficientInterface",
    "FlightConditions",
    "create_flight_conditions",
    "get_or_create_flight_conditions",
    # Radiation
    "RadiationPressureInterface",
]
