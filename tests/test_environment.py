"""Tests for the simulation environment.

Tests cover:
- Spherical harmonic gravity fields: truncation, bounds, GFC parsing
- Body state, ephemeris and mass updates
- BodyRegistry lookup semantics
- Rotational ephemerides
- Exponential atmosphere and spherical shape
- Flight conditions creation, sharing and evaluation
- Radiation pressure interfaces
"""

import logging
import math

import jax.numpy as jnp
import numpy as np
import pytest

from astroaccel.constants import AU, GM_EARTH, H_EARTH, OMEGA_EARTH, P_SUN, R_EARTH, RHO0_EARTH
from astroaccel.environment import (
    Body,
    BodyRegistry,
    ExponentialAtmosphere,
    GravityFieldModel,
    RadiationPressureInterface,
    SimpleRotationalEphemeris,
    SphericalBodyShape,
    SphericalHarmonicsGravityField,
    accel_point_mass,
    accel_spherical_harmonics,
    create_flight_conditions,
    get_or_create_flight_conditions,
)
from astroaccel.errors import BodyNotFoundError, MissingCapabilityError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_GFC_CONTENT = """\
product_type            gravity_field
modelname               TEST
earth_gravity_constant  3.986004415E+14
radius                  6.3781363E+06
max_degree              3
norm                    fully_normalized
key     L    M    C                  S
end_of_head ==========================================
gfc     0    0    1.0D+00            0.0D+00
gfc     2    0   -4.84165143790815D-04  0.0D+00
gfc     2    2    2.43938357328313D-06 -1.40027370385934D-06
gfc     3    0    9.57161207093473D-07  0.0D+00
gfc     4    0    5.39965866638991D-07  0.0D+00
"""


# ===========================================================================
# Gravity fields
# ===========================================================================


class TestSphericalHarmonicsGravityField:
    """Tests for SphericalHarmonicsGravityField."""

    def test_degree_and_order(self, earth_gravity_field):
        assert earth_gravity_field.max_degree == 4
        assert earth_gravity_field.max_order == 4
        assert earth_gravity_field.is_normalized

    def test_truncation_shape(self, earth_gravity_field):
        C = earth_gravity_field.get_cosine_coefficients(2, 2)
        S = earth_gravity_field.get_sine_coefficients(2, 1)
        assert C.shape == (3, 3)
        assert S.shape == (3, 2)
        assert C[2, 0] == pytest.approx(-4.841651437908150e-4)

    def test_truncation_returns_copy(self, earth_gravity_field):
        C = earth_gravity_field.get_cosine_coefficients(2, 2)
        C[0, 0] = 0.0
        assert earth_gravity_field.cosine_coefficients[0, 0] == 1.0

    def test_request_beyond_field_raises(self, earth_gravity_field):
        with pytest.raises(ValueError, match="exceeds field bounds"):
            earth_gravity_field.get_cosine_coefficients(5, 0)

    def test_order_above_degree_raises(self, earth_gravity_field):
        with pytest.raises(ValueError, match="cannot exceed"):
            earth_gravity_field.get_sine_coefficients(2, 3)

    def test_mismatched_matrices_raise(self):
        with pytest.raises(ValueError, match="equal"):
            SphericalHarmonicsGravityField(GM_EARTH, R_EARTH, np.zeros((3, 3)), np.zeros((2, 2)), "IAU_Earth")

    def test_fixed_frame(self, earth_gravity_field):
        assert earth_gravity_field.get_fixed_reference_frame() == "IAU_Earth"
        assert earth_gravity_field.get_reference_radius() == R_EARTH


class TestGravityFieldModel:
    """Tests for the point-mass GravityFieldModel."""

    def test_gravitational_parameter(self):
        field = GravityFieldModel(GM_EARTH)
        assert field.get_gravitational_parameter() == GM_EARTH

    def test_update_is_noop(self):
        field = GravityFieldModel(GM_EARTH)
        field.update(100.0)
        assert field.get_gravitational_parameter() == GM_EARTH


class TestGfcParsing:
    """Tests for SphericalHarmonicsGravityField.from_gfc."""

    def test_parse_header_and_coefficients(self, tmp_path):
        path = tmp_path / "test.gfc"
        path.write_text(_GFC_CONTENT)
        field = SphericalHarmonicsGravityField.from_gfc(path, "IAU_Earth")
        assert field.gravitational_parameter == pytest.approx(3.986004415e14)
        assert field.reference_radius == pytest.approx(6.3781363e6)
        assert field.max_degree == 3
        assert field.cosine_coefficients[2, 2] == pytest.approx(2.43938357328313e-6)
        assert field.sine_coefficients[2, 2] == pytest.approx(-1.40027370385934e-6)

    def test_coefficients_beyond_max_degree_ignored(self, tmp_path):
        path = tmp_path / "test.gfc"
        path.write_text(_GFC_CONTENT)
        field = SphericalHarmonicsGravityField.from_gfc(path, "IAU_Earth")
        assert field.cosine_coefficients.shape == (4, 4)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SphericalHarmonicsGravityField.from_gfc(tmp_path / "missing.gfc", "IAU_Earth")

    def test_missing_end_of_head_raises(self, tmp_path):
        path = tmp_path / "bad.gfc"
        path.write_text("earth_gravity_constant 3.986004415E+14\nradius 6378136.3\nmax_degree 2\n")
        with pytest.raises(ValueError, match="end_of_head"):
            SphericalHarmonicsGravityField.from_gfc(path, "IAU_Earth")

    def test_missing_radius_raises(self, tmp_path):
        path = tmp_path / "bad.gfc"
        path.write_text("earth_gravity_constant 3.986004415E+14\nmax_degree 2\nend_of_head\n")
        with pytest.raises(ValueError, match="radius"):
            SphericalHarmonicsGravityField.from_gfc(path, "IAU_Earth")


class TestGravityKernels:
    """Tests for the gravity acceleration kernels."""

    def test_point_mass_magnitude(self):
        a = accel_point_mass(jnp.array([R_EARTH, 0.0, 0.0]), jnp.zeros(3), GM_EARTH)
        assert float(a[0]) == pytest.approx(-GM_EARTH / R_EARTH**2)

    def test_degree_zero_matches_point_mass(self):
        r = jnp.array([7000e3, 1200e3, -800e3])
        a_sh = accel_spherical_harmonics(
            r, jnp.eye(3), jnp.ones((1, 1)), jnp.zeros((1, 1)), R_EARTH, GM_EARTH
        )
        a_pm = accel_point_mass(r, jnp.zeros(3), GM_EARTH)
        assert jnp.allclose(a_sh, a_pm, rtol=1e-12)

    def test_zonal_field_symmetric_about_rotation(self, earth_gravity_field):
        """A purely zonal field gives the same acceleration magnitude after rotating about z."""
        C = earth_gravity_field.get_cosine_coefficients(2, 0)
        S = earth_gravity_field.get_sine_coefficients(2, 0)
        r = jnp.array([7000e3, 0.0, 1000e3])
        R = SimpleRotationalEphemeris(1.0, "J2000", "IAU_Earth").rotation_to_base_frame(0.7)
        a_identity = accel_spherical_harmonics(r, jnp.eye(3), C, S, R_EARTH, GM_EARTH)
        a_rotated = accel_spherical_harmonics(R @ r, R, C, S, R_EARTH, GM_EARTH)
        assert jnp.allclose(R @ a_identity, a_rotated, rtol=1e-10)


# ===========================================================================
# Bodies
# ===========================================================================


class TestBody:
    """Tests for Body state, mass and rotation."""

    def test_default_state_is_origin(self):
        body = Body()
        assert jnp.allclose(body.get_state(), jnp.zeros(6))

    def test_position_and_velocity(self):
        body = Body(state=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert jnp.allclose(body.get_position(), jnp.array([1.0, 2.0, 3.0]))
        assert jnp.allclose(body.get_velocity(), jnp.array([4.0, 5.0, 6.0]))

    def test_translational_update_from_ephemeris(self):
        body = Body(ephemeris=lambda t: [t, 0.0, 0.0, 1.0, 0.0, 0.0])
        body.update_translational_state(10.0)
        assert float(body.get_position()[0]) == pytest.approx(10.0)

    def test_translational_update_without_ephemeris(self):
        body = Body(state=[1.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        body.update_translational_state(10.0)
        assert float(body.get_position()[0]) == pytest.approx(1.0)

    def test_mass_update_from_function(self):
        body = Body(mass=100.0, mass_function=lambda t: 100.0 - 0.1 * t)
        body.update_mass(50.0)
        assert body.get_mass() == pytest.approx(95.0)

    def test_missing_mass_raises(self):
        with pytest.raises(ValueError, match="mass"):
            Body().get_mass()

    def test_identity_rotation_without_model(self):
        body = Body()
        body.update_rotational_state(100.0)
        assert jnp.allclose(body.get_rotation_to_global_frame(), jnp.eye(3))

    def test_rotation_from_rotational_ephemeris(self):
        body = Body(rotational_ephemeris=SimpleRotationalEphemeris(math.pi / 2, "J2000", "IAU_Earth"))
        body.update_rotational_state(1.0)
        R = body.get_rotation_to_global_frame()
        assert jnp.allclose(R @ jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, 1.0, 0.0]), atol=1e-12)

    def test_rotation_from_orientation_calculator(self):
        class _Calculator:
            def get_rotation_to_global_frame(self, time):
                return 2.0 * jnp.eye(3)

        body = Body()
        body.set_dependent_orientation_calculator(_Calculator())
        body.update_rotational_state(0.0)
        assert jnp.allclose(body.get_rotation_to_global_frame(), 2.0 * jnp.eye(3))

    def test_radiation_pressure_interfaces_keyed_by_source(self):
        body = Body()
        interface = RadiationPressureInterface(1.0, 1.3)
        body.set_radiation_pressure_interface("Sun", interface)
        assert body.radiation_pressure_interfaces == {"Sun": interface}


class TestBodyRegistry:
    """Tests for BodyRegistry."""

    def test_add_and_get(self):
        registry = BodyRegistry()
        body = registry.add_body("Earth", Body())
        assert registry["Earth"] is body
        assert len(registry) == 1
        assert list(registry) == ["Earth"]

    def test_duplicate_name_raises(self):
        registry = BodyRegistry({"Earth": Body()})
        with pytest.raises(ValueError, match="already registered"):
            registry.add_body("Earth", Body())

    def test_unknown_name_raises_lookup_error(self):
        registry = BodyRegistry()
        with pytest.raises(LookupError):
            registry["Mars"]

    def test_unknown_name_carries_body_name(self):
        registry = BodyRegistry()
        with pytest.raises(BodyNotFoundError) as excinfo:
            registry["Mars"]
        assert excinfo.value.body_name == "Mars"

    def test_contains_and_get(self):
        registry = BodyRegistry({"Earth": Body()})
        assert "Earth" in registry
        assert "Mars" not in registry
        assert registry.get("Mars") is None


# ===========================================================================
# Rotation, atmosphere and shape
# ===========================================================================


class TestSimpleRotationalEphemeris:
    """Tests for SimpleRotationalEphemeris."""

    def test_frames(self):
        rotation = SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth")
        assert rotation.get_base_frame_orientation() == "J2000"
        assert rotation.get_target_frame_orientation() == "IAU_Earth"

    def test_identity_at_reference_time(self):
        rotation = SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth", reference_time=100.0)
        assert jnp.allclose(rotation.rotation_to_base_frame(100.0), jnp.eye(3))

    def test_target_is_transpose_of_base(self):
        rotation = SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth", initial_angle=0.3)
        R = rotation.rotation_to_base_frame(5000.0)
        assert jnp.allclose(rotation.rotation_to_target_frame(5000.0), R.T)

    def test_angular_velocity(self):
        rotation = SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth")
        assert jnp.allclose(rotation.angular_velocity_in_target_frame(0.0), jnp.array([0.0, 0.0, OMEGA_EARTH]))


class TestAtmosphereAndShape:
    """Tests for ExponentialAtmosphere and SphericalBodyShape."""

    def test_sea_level_density(self):
        assert float(ExponentialAtmosphere().get_density(0.0)) == pytest.approx(RHO0_EARTH)

    def test_density_one_scale_height(self):
        density = ExponentialAtmosphere().get_density(H_EARTH)
        assert float(density) == pytest.approx(RHO0_EARTH / math.e)

    def test_invalid_scale_height_raises(self):
        with pytest.raises(ValueError, match="scale_height"):
            ExponentialAtmosphere(scale_height=0.0)

    def test_spherical_altitude(self):
        shape = SphericalBodyShape(R_EARTH)
        assert float(shape.get_altitude(jnp.array([0.0, R_EARTH + 400e3, 0.0]))) == pytest.approx(400e3)


# ===========================================================================
# Flight conditions
# ===========================================================================


class TestFlightConditions:
    """Tests for flight conditions creation and evaluation."""

    def test_missing_atmosphere_raises(self, bodies):
        with pytest.raises(MissingCapabilityError) as excinfo:
            create_flight_conditions(bodies["Satellite"], bodies["Moon"], "Satellite", "Moon")
        assert excinfo.value.capability == "atmosphere"
        assert excinfo.value.body_exerting == "Moon"

    def test_missing_shape_raises(self):
        central_body = Body(atmosphere_model=ExponentialAtmosphere())
        with pytest.raises(MissingCapabilityError) as excinfo:
            create_flight_conditions(Body(), central_body, "Vehicle", "Mars")
        assert excinfo.value.capability == "shape"

    def test_get_or_create_attaches_once(self, bodies):
        satellite = bodies["Satellite"]
        first = get_or_create_flight_conditions(satellite, bodies["Earth"], "Satellite", "Earth")
        second = get_or_create_flight_conditions(satellite, bodies["Earth"], "Satellite", "Earth")
        assert first is second
        assert satellite.get_flight_conditions() is first

    def test_get_or_create_warns_on_other_central_body(self, bodies, caplog):
        satellite = bodies["Satellite"]
        existing = get_or_create_flight_conditions(satellite, bodies["Earth"], "Satellite", "Earth")
        with caplog.at_level(logging.WARNING, logger="astroaccel.environment.aerodynamics"):
            reused = get_or_create_flight_conditions(satellite, bodies["Moon"], "Satellite", "Moon")
        assert reused is existing
        assert "Reusing flight conditions" in caplog.text

    def test_update_values(self, bodies):
        flight_conditions = create_flight_conditions(bodies["Satellite"], bodies["Earth"], "Satellite", "Earth")
        flight_conditions.update(0.0)

        r = R_EARTH + 500e3
        assert float(flight_conditions.get_current_altitude()) == pytest.approx(500e3)
        assert float(flight_conditions.get_current_density()) == pytest.approx(
            RHO0_EARTH * math.exp(-500e3 / H_EARTH)
        )
        # Co-rotating atmosphere reduces the prograde airspeed
        assert float(flight_conditions.get_current_airspeed()) == pytest.approx(7.6e3 - OMEGA_EARTH * r)

    def test_aerodynamic_frame_x_axis_along_airspeed(self, bodies):
        flight_conditions = create_flight_conditions(bodies["Satellite"], bodies["Earth"], "Satellite", "Earth")
        flight_conditions.update(0.0)
        R = flight_conditions.get_aerodynamic_to_inertial_rotation()
        assert jnp.allclose(R[:, 0], jnp.array([0.0, 1.0, 0.0]), atol=1e-12)
        # z-axis points towards the central body
        assert jnp.allclose(R[:, 2], jnp.array([-1.0, 0.0, 0.0]), atol=1e-12)


# ===========================================================================
# Radiation pressure
# ===========================================================================


class TestRadiationPressureInterface:
    """Tests for RadiationPressureInterface."""

    def test_pressure_at_one_au(self):
        interface = RadiationPressureInterface(4.0, 1.2)
        interface.update(jnp.zeros(3), jnp.array([AU, 0.0, 0.0]))
        assert float(interface.get_current_radiation_pressure()) == pytest.approx(P_SUN)

    def test_inverse_square_law(self):
        interface = RadiationPressureInterface(4.0, 1.2)
        interface.update(jnp.zeros(3), jnp.array([0.0, 2.0 * AU, 0.0]))
        assert float(interface.get_current_radiation_pressure()) == pytest.approx(P_SUN / 4.0)

    def test_properties(self):
        interface = RadiationPressureInterface(4.0, 1.2)
        assert interface.get_area() == 4.0
        assert interface.get_radiation_pressure_coefficient() == 1.2
