import jax.numpy as jnp
import numpy as np
import pytest

from astroaccel.config import set_dtype
from astroaccel.constants import AU, GM_EARTH, GM_MOON, GM_SUN, OMEGA_EARTH, R_EARTH
from astroaccel.environment import (
    AerodynamicCoefficientInterface,
    Body,
    BodyRegistry,
    ExponentialAtmosphere,
    GravityFieldModel,
    RadiationPressureInterface,
    SimpleRotationalEphemeris,
    SphericalBodyShape,
    SphericalHarmonicsGravityField,
)


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Tests that need another precision override it with their own autouse
    fixture (e.g. test_config.py sets float32).
    """
    set_dtype(jnp.float64)


def _earth_coefficients(n_max: int = 4) -> tuple[np.ndarray, np.ndarray]:
    """Fully normalized low-degree Earth coefficients (GGM05S)."""
    C = np.zeros((n_max + 1, n_max + 1))
    S = np.zeros((n_max + 1, n_max + 1))
    C[0, 0] = 1.0
    C[2, 0] = -4.841651437908150e-4
    C[2, 2] = 2.439383573283130e-6
    S[2, 2] = -1.400273703859340e-6
    if n_max >= 3:
        C[3, 0] = 9.571612070934730e-7
    if n_max >= 4:
        C[4, 0] = 5.399658666389910e-7
    return C, S


@pytest.fixture
def earth_gravity_field() -> SphericalHarmonicsGravityField:
    C, S = _earth_coefficients()
    return SphericalHarmonicsGravityField(GM_EARTH, R_EARTH, C, S, "IAU_Earth")


@pytest.fixture
def bodies(earth_gravity_field) -> BodyRegistry:
    """Sun, Earth, Moon and a 500 kg satellite in a 500 km equatorial orbit.

    Earth has a degree 4 field, a rotation model, an exponential
    atmosphere and a spherical shape.  The satellite has drag coefficients
    and a radiation pressure interface for the Sun.
    """
    registry = BodyRegistry()
    registry.add_body(
        "Sun",
        Body(state=[AU, 0.0, 0.0, 0.0, 0.0, 0.0], gravity_field_model=GravityFieldModel(GM_SUN)),
    )
    registry.add_body(
        "Earth",
        Body(
            gravity_field_model=earth_gravity_field,
            atmosphere_model=ExponentialAtmosphere(),
            shape_model=SphericalBodyShape(R_EARTH),
            rotational_ephemeris=SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth"),
        ),
    )
    registry.add_body(
        "Moon",
        Body(
            state=[0.0, 3.844e8, 0.0, -1.022e3, 0.0, 0.0],
            gravity_field_model=GravityFieldModel(GM_MOON),
        ),
    )
    satellite = registry.add_body(
        "Satellite",
        Body(
            state=[R_EARTH + 500e3, 0.0, 0.0, 0.0, 7.6e3, 0.0],
            mass=500.0,
            aerodynamic_coefficient_interface=AerodynamicCoefficientInterface(4.0, [2.2, 0.0, 0.0]),
        ),
    )
    satellite.set_radiation_pressure_interface("Sun", RadiationPressureInterface(4.0, 1.2))
    return registry
