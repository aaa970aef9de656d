"""Tests for acceleration model assembly.

Tests cover:
- Direct spherical harmonic gravity about the exerting body
- Mixed selected acceleration maps and the merged update plans
- Validation of undergoing, exerting, central and thrust-referenced bodies
  before any build
- All-or-nothing failure on missing capabilities
- Aerodynamic-before-thrust ordering within a pair
"""

import logging

import jax.numpy as jnp
import pytest

from astroaccel.accelerations import (
    AerodynamicAcceleration,
    AerodynamicSettings,
    CannonballRadiationPressureSettings,
    CentralGravitySettings,
    EnvironmentModelsToUpdate,
    SphericalHarmonicGravitySettings,
    SphericalHarmonicsGravityAcceleration,
    ThirdBodyAcceleration,
    ThrustAcceleration,
    ThrustDirectionSettings,
    ThrustFrame,
    ThrustInterpolatorInterface,
    ThrustMagnitudeSettings,
    ThrustSettings,
    create_acceleration_models,
)
from astroaccel.constants import GM_EARTH, GM_JUPITER, R_EARTH
from astroaccel.environment import Body, GravityFieldModel, accel_point_mass
from astroaccel.errors import BodyNotFoundError, ConfigurationError, MissingCapabilityError

TRANSLATIONAL = EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE
ROTATIONAL = EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE
SH_FIELD = EnvironmentModelsToUpdate.SPHERICAL_HARMONIC_GRAVITY_FIELD
MASS = EnvironmentModelsToUpdate.BODY_MASS
RADIATION = EnvironmentModelsToUpdate.RADIATION_PRESSURE_INTERFACE
FLIGHT_CONDITIONS = EnvironmentModelsToUpdate.VEHICLE_FLIGHT_CONDITIONS


def _full_selection():
    return {
        "Satellite": {
            "Earth": [SphericalHarmonicGravitySettings(4, 4), AerodynamicSettings()],
            "Moon": [CentralGravitySettings()],
            "Sun": [CentralGravitySettings(), CannonballRadiationPressureSettings()],
        }
    }


class TestDirectSphericalHarmonicGravity:
    """Degree 4 field of the Earth acting on a satellite propagated about the Earth."""

    def _setup(self, bodies):
        return create_acceleration_models(
            bodies,
            {"Satellite": {"Earth": [SphericalHarmonicGravitySettings(4, 4)]}},
            {"Satellite": "Earth"},
        )

    def test_single_direct_model(self, bodies):
        models = self._setup(bodies).acceleration_map["Satellite"]["Earth"]
        assert len(models) == 1
        model = models[0]
        assert isinstance(model, SphericalHarmonicsGravityAcceleration)
        assert model.use_central_body_fixed_frame
        assert model.maximum_degree == 4
        assert model.maximum_order == 4

    def test_update_plan(self, bodies):
        plan = self._setup(bodies).update_plan
        assert (ROTATIONAL, "Earth") in plan
        assert (SH_FIELD, "Earth") in plan
        assert (TRANSLATIONAL, "Earth") in plan

    def test_close_to_point_mass(self, bodies):
        model = self._setup(bodies).acceleration_map["Satellite"]["Earth"][0]
        model.update_members(0.0)
        a = model.get_acceleration()
        a_pm = accel_point_mass(bodies["Satellite"].get_position(), jnp.zeros(3), GM_EARTH)
        relative = float(jnp.linalg.norm(a - a_pm) / jnp.linalg.norm(a_pm))
        # J2 perturbation at 500 km altitude is of order 1e-3
        assert 1e-4 < relative < 5e-3


class TestMixedSelection:
    """Gravity, drag and radiation pressure on one satellite."""

    def test_model_types_in_settings_order(self, bodies):
        setup = create_acceleration_models(bodies, _full_selection(), {"Satellite": "Earth"})
        acceleration_map = setup.acceleration_map["Satellite"]
        assert list(acceleration_map) == ["Earth", "Moon", "Sun"]
        assert isinstance(acceleration_map["Earth"][0], SphericalHarmonicsGravityAcceleration)
        assert isinstance(acceleration_map["Earth"][1], AerodynamicAcceleration)
        assert isinstance(acceleration_map["Moon"][0], ThirdBodyAcceleration)
        assert isinstance(acceleration_map["Sun"][0], ThirdBodyAcceleration)
        assert len(acceleration_map["Sun"]) == 2

    def test_merged_update_plan(self, bodies):
        plan = create_acceleration_models(bodies, _full_selection(), {"Satellite": "Earth"}).update_plan
        assert set(plan.bodies_for(TRANSLATIONAL)) == {"Earth", "Moon", "Sun"}
        assert plan.bodies_for(ROTATIONAL) == ("Earth",)
        assert plan.bodies_for(MASS) == ("Satellite",)
        assert plan.bodies_for(RADIATION) == ("Satellite",)
        assert plan.bodies_for(FLIGHT_CONDITIONS) == ("Satellite",)

    def test_plans_per_body(self, bodies):
        bodies.add_body("Probe", Body(state=[0.0, 2.0 * R_EARTH, 0.0, 0.0, 0.0, 0.0], mass=10.0))
        setup = create_acceleration_models(
            bodies,
            {
                "Satellite": {"Earth": [AerodynamicSettings()]},
                "Probe": {"Moon": [CentralGravitySettings()]},
            },
            {"Satellite": "Earth", "Probe": "SSB"},
        )
        assert (FLIGHT_CONDITIONS, "Satellite") in setup.update_plans_per_body["Satellite"]
        assert setup.update_plans_per_body["Probe"].as_dict() == {TRANSLATIONAL: ["Moon"]}
        assert setup.update_plan.bodies_for(TRANSLATIONAL) == ("Earth", "Moon")

    def test_logs_summary(self, bodies, caplog):
        with caplog.at_level(logging.INFO, logger="astroaccel.accelerations.assembly"):
            create_acceleration_models(bodies, _full_selection(), {"Satellite": "Earth"})
        assert "Created 5 acceleration models acting on 1 bodies" in caplog.text

    def test_selection_not_modified(self, bodies):
        thrust = ThrustSettings(
            ThrustDirectionSettings.colinear_with_state("Earth"), ThrustMagnitudeSettings.constant(1.0, 300.0)
        )
        selected = {"Satellite": {"Earth": [thrust, AerodynamicSettings()]}}
        setup = create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        models = setup.acceleration_map["Satellite"]["Earth"]
        assert isinstance(models[0], AerodynamicAcceleration)
        assert isinstance(models[1], ThrustAcceleration)
        assert selected["Satellite"]["Earth"][0] is thrust


class TestValidation:
    """Body validation happens before any model is built."""

    def test_missing_exerting_body(self, bodies):
        selected = {"Satellite": {"Earth": [AerodynamicSettings()], "Mars": [CentralGravitySettings()]}}
        with pytest.raises(LookupError) as excinfo:
            create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        assert isinstance(excinfo.value, BodyNotFoundError)
        assert excinfo.value.body_name == "Mars"
        # The aerodynamic model was never built
        assert bodies["Satellite"].get_flight_conditions() is None

    def test_missing_undergoing_body(self, bodies):
        with pytest.raises(BodyNotFoundError, match="Ghost"):
            create_acceleration_models(
                bodies, {"Ghost": {"Earth": [CentralGravitySettings()]}}, {"Ghost": "Earth"}
            )

    def test_missing_non_inertial_central_body(self, bodies):
        with pytest.raises(BodyNotFoundError, match="Mars"):
            create_acceleration_models(
                bodies, {"Satellite": {"Earth": [CentralGravitySettings()]}}, {"Satellite": "Mars"}
            )

    def test_missing_central_body_entry(self, bodies):
        with pytest.raises(ConfigurationError, match="no central body"):
            create_acceleration_models(bodies, {"Satellite": {"Earth": [CentralGravitySettings()]}}, {})

    def test_missing_thrust_direction_body(self, bodies):
        thrust = ThrustSettings(
            ThrustDirectionSettings.colinear_with_state("Mars"), ThrustMagnitudeSettings.constant(1.0, 300.0)
        )
        selected = {"Satellite": {"Earth": [AerodynamicSettings(), thrust]}}
        with pytest.raises(LookupError) as excinfo:
            create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        assert isinstance(excinfo.value, BodyNotFoundError)
        assert excinfo.value.body_name == "Mars"
        assert "thrust acceleration of Satellite due to Earth" in str(excinfo.value)
        # Neither the aerodynamic nor the thrust model touched the vehicle
        assert bodies["Satellite"].get_flight_conditions() is None
        assert bodies["Satellite"].dependent_orientation_calculator is None

    def test_missing_thrust_magnitude_body(self, bodies):
        thrust = ThrustSettings(
            ThrustDirectionSettings.colinear_with_state("Earth"),
            ThrustMagnitudeSettings.from_flight_conditions(lambda fc: 1.0, 300.0, "Mars"),
        )
        selected = {"Satellite": {"Earth": [AerodynamicSettings(), thrust]}}
        with pytest.raises(BodyNotFoundError, match="thrust magnitude central body Mars"):
            create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        assert bodies["Satellite"].get_flight_conditions() is None

    def test_missing_thrust_frame_body(self, bodies):
        interpolator = ThrustInterpolatorInterface.from_table(
            [0.0, 100.0], [[1.0, 0.0, 0.0], [1.0, 0.0, 0.0]], 300.0
        )
        thrust = ThrustSettings.from_interpolator(interpolator, ThrustFrame.RTN, "Mars")
        selected = {"Satellite": {"Earth": [AerodynamicSettings(), thrust]}}
        with pytest.raises(BodyNotFoundError, match="thrust frame central body Mars"):
            create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        assert bodies["Satellite"].get_flight_conditions() is None

    def test_inertial_thrust_frame_body_not_required(self, bodies):
        interpolator = ThrustInterpolatorInterface.from_table(
            [0.0, 100.0], [[1.0, 0.0, 0.0], [1.0, 0.0, 0.0]], 300.0
        )
        thrust = ThrustSettings.from_interpolator(interpolator, ThrustFrame.LVLH, "SSB")
        setup = create_acceleration_models(bodies, {"Satellite": {"Earth": [thrust]}}, {"Satellite": "Earth"})
        assert isinstance(setup.acceleration_map["Satellite"]["Earth"][0], ThrustAcceleration)

    def test_empty_selection(self, bodies):
        setup = create_acceleration_models(bodies, {}, {})
        assert setup.acceleration_map == {}
        assert len(setup.update_plan) == 0


class TestAllOrNothing:
    """A failing build aborts the whole assembly."""

    def test_missing_gravity_field(self, bodies):
        bodies.add_body("Jupiter", Body(state=[7.8e11, 0.0, 0.0, 0.0, 1.3e4, 0.0]))
        bodies.add_body("Probe", Body(state=[7.7e11, 0.0, 0.0, 0.0, 1.3e4, 0.0], mass=1000.0))
        selected = {
            "Satellite": {"Earth": [CentralGravitySettings()]},
            "Probe": {"Jupiter": [CentralGravitySettings()]},
        }
        setup = None
        with pytest.raises(MissingCapabilityError) as excinfo:
            setup = create_acceleration_models(bodies, selected, {"Satellite": "Earth", "Probe": "SSB"})
        assert setup is None
        error = excinfo.value
        assert error.body_undergoing == "Probe"
        assert error.body_exerting == "Jupiter"
        assert error.capability == "gravity_field"
        assert "central gravity acceleration of Probe due to Jupiter" in str(error)

    def test_missing_spherical_harmonic_field(self, bodies):
        bodies.add_body("Jupiter", Body(gravity_field_model=GravityFieldModel(GM_JUPITER)))
        bodies.add_body("Probe", Body(state=[7.8e11, 0.0, 0.0, 0.0, 1.3e4, 0.0], mass=1000.0))
        selected = {
            "Satellite": {"Earth": [CentralGravitySettings()]},
            "Probe": {"Jupiter": [SphericalHarmonicGravitySettings(2, 2)]},
        }
        with pytest.raises(MissingCapabilityError) as excinfo:
            create_acceleration_models(bodies, selected, {"Satellite": "Earth", "Probe": "SSB"})
        error = excinfo.value
        assert error.body_undergoing == "Probe"
        assert error.body_exerting == "Jupiter"
        assert "Probe" in str(error)
        assert "Jupiter" in str(error)

    def test_invalid_ordering(self, bodies):
        thrust = ThrustSettings(
            ThrustDirectionSettings.colinear_with_state("Earth"), ThrustMagnitudeSettings.constant(1.0, 300.0)
        )
        selected = {"Satellite": {"Earth": [AerodynamicSettings(), AerodynamicSettings(), thrust]}}
        with pytest.raises(ConfigurationError):
            create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
        assert bodies["Satellite"].get_flight_conditions() is None
