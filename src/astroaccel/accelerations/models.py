"""Acceleration models built by :mod:`astroaccel.accelerations.builders`.

Every model follows the same two-step protocol used by the state
derivative evaluator:

1. :meth:`AccelerationModel.update_members` at the current time, after the
   environment has been refreshed according to the model's
   :attr:`~AccelerationModel.environment_updates`;
2. :meth:`AccelerationModel.get_acceleration` to read the result.

Models hold no body state of their own.  They read the environment through
zero-argument accessor closures (``position_of_body_undergoing()``,
``gravitational_parameter()``, ...) bound by the builders, so the same
model class serves direct and third-body configurations alike.

All inputs and outputs use SI base units (metres, seconds, kg).
"""

from __future__ import annotations

import math
from collections.abc import Callable

import jax.numpy as jnp
from jax import Array

from astroaccel.accelerations.settings import AccelerationType
from astroaccel.accelerations.updates import EnvironmentUpdatePlan
from astroaccel.config import get_dtype
from astroaccel.environment.gravity import accel_point_mass, accel_spherical_harmonics

Vector = Callable[[], Array]
"""Accessor returning a vector, e.g. ``body.get_position``."""

Scalar = Callable[[], float]
"""Accessor returning a scalar, e.g. ``body.get_mass``."""


class AccelerationModel:
    """Base class of acceleration models.

    Subclasses implement :meth:`_compute_acceleration`.  Repeated updates at
    the same time are skipped until :meth:`reset_time` is called.

    Attributes:
        acceleration_type: Kind of acceleration (class attribute).
        environment_updates: Environment quantities that must be refreshed
            before :meth:`update_members`.
        current_time: Time of the last update, ``nan`` before the first.
    """

    acceleration_type: AccelerationType

    def __init__(self):
        self.environment_updates = EnvironmentUpdatePlan()
        self.current_time = math.nan
        self.current_acceleration = jnp.zeros(3, dtype=get_dtype())

    def update_members(self, time: float = math.nan) -> None:
        """Recompute the acceleration at *time*."""
        if time == self.current_time:
            return
        self.current_acceleration = self._compute_acceleration(time)
        self.current_time = time

    def reset_time(self, time: float = math.nan) -> None:
        """Forget the last update time so the next update recomputes."""
        self.current_time = time

    def get_acceleration(self) -> Array:
        """Acceleration from the last :meth:`update_members` [m/s^2], shape ``(3,)``."""
        return self.current_acceleration

    def _compute_acceleration(self, time: float) -> Array:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ---------------------------------------------------------------------------
# Gravity
# ---------------------------------------------------------------------------


class CentralGravityAcceleration(AccelerationModel):
    """Point-mass gravity of the exerting body.

    Args:
        position_of_body_undergoing: Accessor of the undergoing body's
            position.
        gravitational_parameter: Accessor of the GM to use, see
            :func:`~astroaccel.accelerations.builders.resolve_gravitational_parameter`.
        position_of_body_exerting: Accessor of the exerting body's position.
        use_central_body_fixed_frame: Whether the acceleration is expressed
            relative to the exerting body as central body, in which case
            *gravitational_parameter* may include the undergoing body's GM.
    """

    acceleration_type = AccelerationType.CENTRAL_GRAVITY

    def __init__(
        self,
        position_of_body_undergoing: Vector,
        gravitational_parameter: Scalar,
        position_of_body_exerting: Vector,
        use_central_body_fixed_frame: bool = False,
    ):
        super().__init__()
        self.position_of_body_undergoing = position_of_body_undergoing
        self.gravitational_parameter = gravitational_parameter
        self.position_of_body_exerting = position_of_body_exerting
        self.use_central_body_fixed_frame = use_central_body_fixed_frame

    def _compute_acceleration(self, time: float) -> Array:
        return accel_point_mass(
            self.position_of_body_undergoing(),
            self.position_of_body_exerting(),
            self.gravitational_parameter(),
        )


class SphericalHarmonicsGravityAcceleration(AccelerationModel):
    """Spherical harmonic gravity of the exerting body.

    Args:
        position_of_body_undergoing: Accessor of the undergoing body's
            position.
        gravitational_parameter: Accessor of the GM to use.
        reference_radius: Field reference radius [m].
        cosine_coefficients: Accessor of the truncated C_nm array.
        sine_coefficients: Accessor of the truncated S_nm array.
        position_of_body_exerting: Accessor of the exerting body's position.
        rotation_to_inertial_frame: Accessor of the exerting body's
            body-fixed to inertial rotation.
        use_central_body_fixed_frame: See :class:`CentralGravityAcceleration`.
        is_normalized: Whether the coefficients are fully normalized.
    """

    acceleration_type = AccelerationType.SPHERICAL_HARMONIC_GRAVITY

    def __init__(
        self,
        position_of_body_undergoing: Vector,
        gravitational_parameter: Scalar,
        reference_radius: float,
        cosine_coefficients: Callable[[], Array],
        sine_coefficients: Callable[[], Array],
        position_of_body_exerting: Vector,
        rotation_to_inertial_frame: Callable[[], Array],
        use_central_body_fixed_frame: bool = False,
        is_normalized: bool = True,
    ):
        super().__init__()
        self.position_of_body_undergoing = position_of_body_undergoing
        self.gravitational_parameter = gravitational_parameter
        self.reference_radius = reference_radius
        self.cosine_coefficients = cosine_coefficients
        self.sine_coefficients = sine_coefficients
        self.position_of_body_exerting = position_of_body_exerting
        self.rotation_to_inertial_frame = rotation_to_inertial_frame
        self.use_central_body_fixed_frame = use_central_body_fixed_frame
        self.is_normalized = is_normalized

    @property
    def maximum_degree(self) -> int:
        return self.cosine_coefficients().shape[0] - 1

    @property
    def maximum_order(self) -> int:
        return self.cosine_coefficients().shape[1] - 1

    def _compute_acceleration(self, time: float) -> Array:
        r_relative = self.position_of_body_undergoing() - self.position_of_body_exerting()
        return accel_spherical_harmonics(
            r_relative,
            self.rotation_to_inertial_frame(),
            self.cosine_coefficients(),
            self.sine_coefficients(),
            self.reference_radius,
            self.gravitational_parameter(),
            self.is_normalized,
        )


class MutualSphericalHarmonicsGravityAcceleration(AccelerationModel):
    """Mutual spherical harmonic gravity between two extended bodies.

    The acceleration is the exerting field acting on the undergoing body,
    minus the undergoing field acting on the exerting body.  Both terms use
    the same gravitational parameter (the exerting body's, or the sum of
    both when expressed relative to the exerting body), which makes the
    reaction term the undergoing field's pull scaled by the mass ratio.  The
    undergoing field's C00 coefficient must be zero so the point-mass
    interaction is counted once.

    Args:
        position_of_body_undergoing: Accessor of the undergoing body's
            position.
        position_of_body_exerting: Accessor of the exerting body's position.
        gravitational_parameter: Accessor of the GM to use.
        reference_radius_of_body_exerting: Exerting field reference radius [m].
        reference_radius_of_body_undergoing: Undergoing field reference
            radius [m].
        cosine_coefficients_of_body_exerting: Accessor of the exerting C_nm.
        sine_coefficients_of_body_exerting: Accessor of the exerting S_nm.
        cosine_coefficients_of_body_undergoing: Accessor of the undergoing
            C_nm with C00 removed.
        sine_coefficients_of_body_undergoing: Accessor of the undergoing S_nm.
        rotation_of_body_exerting: Accessor of the exerting body's body-fixed
            to inertial rotation.
        rotation_of_body_undergoing: Accessor of the undergoing body's
            body-fixed to inertial rotation.
        use_central_body_fixed_frame: See :class:`CentralGravityAcceleration`.
        is_normalized_exerting: Whether exerting coefficients are normalized.
        is_normalized_undergoing: Whether undergoing coefficients are
            normalized.
    """

    acceleration_type = AccelerationType.MUTUAL_SPHERICAL_HARMONIC_GRAVITY

    def __init__(
        self,
        position_of_body_undergoing: Vector,
        position_of_body_exerting: Vector,
        gravitational_parameter: Scalar,
        reference_radius_of_body_exerting: float,
        reference_radius_of_body_undergoing: float,
        cosine_coefficients_of_body_exerting: Callable[[], Array],
        sine_coefficients_of_body_exerting: Callable[[], Array],
        cosine_coefficients_of_body_undergoing: Callable[[], Array],
        sine_coefficients_of_body_undergoing: Callable[[], Array],
        rotation_of_body_exerting: Callable[[], Array],
        rotation_of_body_undergoing: Callable[[], Array],
        use_central_body_fixed_frame: bool = False,
        is_normalized_exerting: bool = True,
        is_normalized_undergoing: bool = True,
    ):
        super().__init__()
        self.position_of_body_undergoing = position_of_body_undergoing
        self.position_of_body_exerting = position_of_body_exerting
        self.gravitational_parameter = gravitational_parameter
        self.reference_radius_of_body_exerting = reference_radius_of_body_exerting
        self.reference_radius_of_body_undergoing = reference_radius_of_body_undergoing
        self.cosine_coefficients_of_body_exerting = cosine_coefficients_of_body_exerting
        self.sine_coefficients_of_body_exerting = sine_coefficients_of_body_exerting
        self.cosine_coefficients_of_body_undergoing = cosine_coefficients_of_body_undergoing
        self.sine_coefficients_of_body_undergoing = sine_coefficients_of_body_undergoing
        self.rotation_of_body_exerting = rotation_of_body_exerting
        self.rotation_of_body_undergoing = rotation_of_body_undergoing
        self.use_central_body_fixed_frame = use_central_body_fixed_frame
        self.is_normalized_exerting = is_normalized_exerting
        self.is_normalized_undergoing = is_normalized_undergoing

    def _compute_acceleration(self, time: float) -> Array:
        gm = self.gravitational_parameter()
        r_relative = self.position_of_body_undergoing() - self.position_of_body_exerting()

        a_exerting_field = accel_spherical_harmonics(
            r_relative,
            self.rotation_of_body_exerting(),
            self.cosine_coefficients_of_body_exerting(),
            self.sine_coefficients_of_body_exerting(),
            self.reference_radius_of_body_exerting,
            gm,
            self.is_normalized_exerting,
        )
        a_undergoing_field = accel_spherical_harmonics(
            -r_relative,
            self.rotation_of_body_undergoing(),
            self.cosine_coefficients_of_body_undergoing(),
            self.sine_coefficients_of_body_undergoing(),
            self.reference_radius_of_body_undergoing,
            gm,
            self.is_normalized_undergoing,
        )
        return a_exerting_field - a_undergoing_field


class ThirdBodyAcceleration(AccelerationModel):
    """Gravity of a third body in a frame centred on a (non-inertial) central body.

    The acceleration is the exerting body's pull on the undergoing body minus
    its pull on the central body.  Both legs are ordinary direct gravity
    models of the same family, built with ``use_central_body_fixed_frame``
    set to ``False``.

    Args:
        acceleration_model_for_body_undergoing: Direct model of the exerting
            body acting on the undergoing body.
        acceleration_model_for_central_body: Direct model of the exerting
            body acting on the central body.
        central_body_name: Name of the central body.
    """

    def __init__(
        self,
        acceleration_model_for_body_undergoing: AccelerationModel,
        acceleration_model_for_central_body: AccelerationModel,
        central_body_name: str,
    ):
        if type(acceleration_model_for_body_undergoing) is not type(acceleration_model_for_central_body):
            raise TypeError(
                "Third-body legs must be of the same model type, got "
                f"{type(acceleration_model_for_body_undergoing).__name__} and "
                f"{type(acceleration_model_for_central_body).__name__}"
            )
        super().__init__()
        self.acceleration_model_for_body_undergoing = acceleration_model_for_body_undergoing
        self.acceleration_model_for_central_body = acceleration_model_for_central_body
        self.central_body_name = central_body_name

    @property
    def acceleration_type(self) -> AccelerationType:
        return self.acceleration_model_for_body_undergoing.acceleration_type

    def update_members(self, time: float = math.nan) -> None:
        if time == self.current_time:
            return
        self.acceleration_model_for_body_undergoing.update_members(time)
        self.acceleration_model_for_central_body.update_members(time)
        self.current_acceleration = (
            self.acceleration_model_for_body_undergoing.get_acceleration()
            - self.acceleration_model_for_central_body.get_acceleration()
        )
        self.current_time = time

    def reset_time(self, time: float = math.nan) -> None:
        super().reset_time(time)
        self.acceleration_model_for_body_undergoing.reset_time(time)
        self.acceleration_model_for_central_body.reset_time(time)

    def __repr__(self) -> str:
        return (
            f"ThirdBodyAcceleration({type(self.acceleration_model_for_body_undergoing).__name__}, "
            f"central_body={self.central_body_name!r})"
        )


# ---------------------------------------------------------------------------
# Surface forces
# ---------------------------------------------------------------------------


class AerodynamicAcceleration(AccelerationModel):
    """Aerodynamic acceleration from force coefficients.

    ``a = s * 0.5 * rho * V^2 * A / m * C``, where ``C`` is the coefficient
    vector rotated to the inertial frame and ``s`` is ``-1`` when positive
    coefficients act along negative axes (e.g. drag along ``-x_aero``).

    Args:
        coefficients_in_inertial_frame: Accessor of the force coefficients
            rotated to the inertial frame.
        density: Accessor of the freestream density [kg/m^3].
        airspeed: Accessor of the airspeed [m/s].
        mass: Accessor of the vehicle mass [kg].
        reference_area: Accessor of the reference area [m^2].
        coefficients_in_negative_axis_direction: Coefficient sign convention.
    """

    acceleration_type = AccelerationType.AERODYNAMIC

    def __init__(
        self,
        coefficients_in_inertial_frame: Vector,
        density: Scalar,
        airspeed: Scalar,
        mass: Scalar,
        reference_area: Scalar,
        coefficients_in_negative_axis_direction: bool = True,
    ):
        super().__init__()
        self.coefficients_in_inertial_frame = coefficients_in_inertial_frame
        self.density = density
        self.airspeed = airspeed
        self.mass = mass
        self.reference_area = reference_area
        self.coefficients_in_negative_axis_direction = coefficients_in_negative_axis_direction

    def _compute_acceleration(self, time: float) -> Array:
        _float = get_dtype()
        sign = -1.0 if self.coefficients_in_negative_axis_direction else 1.0
        V = self.airspeed()
        dynamic_pressure = 0.5 * self.density() * V * V
        return (
            sign
            * dynamic_pressure
            * _float(self.reference_area())
            / _float(self.mass())
            * self.coefficients_in_inertial_frame()
        )


class CannonballRadiationPressureAcceleration(AccelerationModel):
    """Cannonball radiation pressure acceleration.

    The force acts along the line from the source to the target with
    magnitude ``P * C_r * A``.

    Args:
        position_of_source: Accessor of the radiation source's position.
        position_of_target: Accessor of the accelerated body's position.
        radiation_pressure: Accessor of the pressure at the target [N/m^2].
        radiation_pressure_coefficient: Accessor of C_r.
        area: Accessor of the cross-sectional area [m^2].
        mass: Accessor of the target mass [kg].
    """

    acceleration_type = AccelerationType.CANNONBALL_RADIATION_PRESSURE

    def __init__(
        self,
        position_of_source: Vector,
        position_of_target: Vector,
        radiation_pressure: Scalar,
        radiation_pressure_coefficient: Scalar,
        area: Scalar,
        mass: Scalar,
    ):
        super().__init__()
        self.position_of_source = position_of_source
        self.position_of_target = position_of_target
        self.radiation_pressure = radiation_pressure
        self.radiation_pressure_coefficient = radiation_pressure_coefficient
        self.area = area
        self.mass = mass

    def _compute_acceleration(self, time: float) -> Array:
        _float = get_dtype()
        d = self.position_of_target() - self.position_of_source()
        d_hat = d / jnp.linalg.norm(d)
        return (
            self.radiation_pressure()
            * _float(self.radiation_pressure_coefficient())
            * (_float(self.area()) / _float(self.mass()))
            * d_hat
        )


# ---------------------------------------------------------------------------
# Thrust
# ---------------------------------------------------------------------------


class ThrustAcceleration(AccelerationModel):
    """Thrust acceleration ``F / m * u`` along the guidance direction.

    The magnitude and direction models are refreshed through the
    *update_function* and *reset_function* closures bound by the thrust
    builder, which also records their environment requirements in
    :attr:`environment_updates`.

    Args:
        thrust_magnitude: Accessor of the current thrust [N].
        thrust_direction: Accessor of the current inertial unit direction.
        mass: Accessor of the vehicle mass [kg].
        mass_rate: Accessor of the current propellant mass rate [kg/s]
            (negative while thrusting).
        update_function: ``f(time)`` updating magnitude and direction.
        reset_function: ``f(time)`` resetting magnitude and direction.
        thrust_origin_id: Name of the engine.
    """

    acceleration_type = AccelerationType.THRUST

    def __init__(
        self,
        thrust_magnitude: Scalar,
        thrust_direction: Vector,
        mass: Scalar,
        mass_rate: Scalar,
        update_function: Callable[[float], None],
        reset_function: Callable[[float], None],
        thrust_origin_id: str = "",
    ):
        super().__init__()
        self.thrust_magnitude = thrust_magnitude
        self.thrust_direction = thrust_direction
        self.mass = mass
        self.mass_rate = mass_rate
        self.update_function = update_function
        self.reset_function = reset_function
        self.thrust_origin_id = thrust_origin_id

    def _compute_acceleration(self, time: float) -> Array:
        self.update_function(time)
        _float = get_dtype()
        return _float(self.thrust_magnitude()) / _float(self.mass()) * self.thrust_direction()

    def reset_time(self, time: float = math.nan) -> None:
        super().reset_time(time)
        self.reset_function(time)

    def get_current_mass_rate(self) -> float:
        return self.mass_rate()
