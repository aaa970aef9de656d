"""Thrust direction guidance and thrust magnitude models.

A thrust acceleration combines two independent pieces, each created by its
own factory from the corresponding settings:

- a *direction guidance* (:func:`create_thrust_guidance`), giving the
  inertial unit thrust direction and, from it, the vehicle orientation;
- a *magnitude wrapper* (:func:`create_thrust_magnitude_wrapper`), giving
  the thrust force and propellant mass rate.

Both carry the environment updates they rely on in ``environment_updates``,
which the thrust builder merges into the thrust model's plan.  Thrust
profiles given as tabulated vectors are wrapped in a
:class:`ThrustInterpolatorInterface`, which can express its vectors in a
local orbital frame through a bound rotation function.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.accelerations.settings import (
    ThrustDirectionSettings,
    ThrustDirectionType,
    ThrustMagnitudeSettings,
    ThrustMagnitudeType,
)
from astroaccel.accelerations.updates import EnvironmentModelsToUpdate, EnvironmentUpdatePlan
from astroaccel.config import get_dtype
from astroaccel.constants import G0
from astroaccel.environment.aerodynamics import get_or_create_flight_conditions
from astroaccel.errors import ConfigurationError


def _identity_rotation() -> Array:
    return jnp.eye(3, dtype=get_dtype())


class ThrustInterpolatorInterface:
    """Thrust vector profile, optionally expressed in a local orbital frame.

    Args:
        thrust_function: ``f(time) -> (3,)`` thrust vector [N] in the thrust
            frame.
        specific_impulse: Specific impulse of the engine [s].

    Examples:
        ```python
        from astroaccel.accelerations import ThrustInterpolatorInterface
        interp = ThrustInterpolatorInterface.from_table(
            [0.0, 100.0], [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]], specific_impulse=300.0
        )
        interp.update(50.0)
        interp.get_current_thrust_magnitude()  # 1.5
        ```
    """

    def __init__(self, thrust_function: Callable[[float], ArrayLike], specific_impulse: float):
        self.thrust_function = thrust_function
        self.specific_impulse = specific_impulse
        self.rotation_function: Callable[[], Array] = _identity_rotation
        self.current_time = math.nan
        self.current_thrust = jnp.zeros(3, dtype=get_dtype())

    @staticmethod
    def from_table(
        times: ArrayLike,
        thrust_vectors: ArrayLike,
        specific_impulse: float,
    ) -> ThrustInterpolatorInterface:
        """Linearly interpolate tabulated thrust vectors.

        Args:
            times: Strictly increasing epochs [s], shape ``(N,)``.
            thrust_vectors: Thrust vectors [N], shape ``(N, 3)``.
            specific_impulse: Specific impulse [s].

        Raises:
            ValueError: If the table shapes are inconsistent.
        """
        _float = get_dtype()
        t = jnp.asarray(times, dtype=_float)
        F = jnp.asarray(thrust_vectors, dtype=_float)
        if t.ndim != 1 or F.shape != (t.shape[0], 3):
            raise ValueError(
                f"Expected times of shape (N,) and thrust_vectors of shape (N, 3), "
                f"got {t.shape} and {F.shape}"
            )

        def thrust_function(time: float) -> Array:
            return jnp.stack([jnp.interp(time, t, F[:, i]) for i in range(3)])

        return ThrustInterpolatorInterface(thrust_function, specific_impulse)

    def reset_rotation_function(self, rotation_function: Callable[[], Array]) -> None:
        """Bind the thrust-frame to inertial-frame rotation."""
        self.rotation_function = rotation_function

    def update(self, time: float) -> None:
        if time == self.current_time:
            return
        thrust_in_frame = jnp.asarray(self.thrust_function(time), dtype=get_dtype())
        self.current_thrust = self.rotation_function() @ thrust_in_frame
        self.current_time = time

    def reset_time(self, time: float = math.nan) -> None:
        self.current_time = time

    def get_current_thrust_vector(self) -> Array:
        """Inertial thrust vector [N]."""
        return self.current_thrust

    def get_current_thrust_magnitude(self) -> Array:
        return jnp.linalg.norm(self.current_thrust)

    def get_current_thrust_direction(self) -> Array:
        return self.current_thrust / jnp.linalg.norm(self.current_thrust)


# ---------------------------------------------------------------------------
# Direction guidance
# ---------------------------------------------------------------------------


class ThrustDirectionGuidance:
    """Base class of thrust direction guidance.

    A guidance can act as a body's dependent orientation calculator: the
    body-fixed x-axis is aligned with the thrust direction.
    """

    def __init__(self):
        self.environment_updates = EnvironmentUpdatePlan()
        self.current_time = math.nan
        self.current_direction = jnp.array([1.0, 0.0, 0.0], dtype=get_dtype())

    def update(self, time: float) -> None:
        if time == self.current_time:
            return
        direction = jnp.asarray(self._compute_direction(time), dtype=get_dtype())
        self.current_direction = direction / jnp.linalg.norm(direction)
        self.current_time = time

    def reset_time(self, time: float = math.nan) -> None:
        self.current_time = time

    def get_current_direction(self) -> Array:
        """Inertial unit thrust direction."""
        return self.current_direction

    def get_rotation_to_global_frame(self, time: float) -> Array:
        """Body-fixed to inertial rotation with the body x-axis along the thrust."""
        self.update(time)
        x_hat = self.current_direction
        # Any reference axis not parallel to the thrust fixes the roll angle
        reference = jnp.where(
            jnp.abs(x_hat[2]) < 0.9,
            jnp.array([0.0, 0.0, 1.0], dtype=x_hat.dtype),
            jnp.array([0.0, 1.0, 0.0], dtype=x_hat.dtype),
        )
        y_vec = jnp.cross(reference, x_hat)
        y_hat = y_vec / jnp.linalg.norm(y_vec)
        z_hat = jnp.cross(x_hat, y_hat)
        return jnp.column_stack([x_hat, y_hat, z_hat])

    def _compute_direction(self, time: float) -> Array:
        raise NotImplementedError


class StateColinearThrustGuidance(ThrustDirectionGuidance):
    """Thrust along the vehicle's velocity (or position) relative to another body."""

    def __init__(
        self,
        vehicle_state: Callable[[], Array],
        relative_body_state: Callable[[], Array],
        is_colinear_with_velocity: bool = True,
        direction_is_opposite_to_vector: bool = False,
    ):
        super().__init__()
        self.vehicle_state = vehicle_state
        self.relative_body_state = relative_body_state
        self.is_colinear_with_velocity = is_colinear_with_velocity
        self.direction_is_opposite_to_vector = direction_is_opposite_to_vector

    def _compute_direction(self, time: float) -> Array:
        x_rel = self.vehicle_state() - self.relative_body_state()
        vector = x_rel[3:6] if self.is_colinear_with_velocity else x_rel[:3]
        return -vector if self.direction_is_opposite_to_vector else vector


class BodyOrientationThrustGuidance(ThrustDirectionGuidance):
    """Thrust fixed in the body frame, rotated with the body's current orientation."""

    def __init__(self, rotation_to_global_frame: Callable[[], Array], body_fixed_thrust_direction: ArrayLike):
        super().__init__()
        self.rotation_to_global_frame = rotation_to_global_frame
        self.body_fixed_thrust_direction = jnp.asarray(body_fixed_thrust_direction, dtype=get_dtype())

    def _compute_direction(self, time: float) -> Array:
        return self.rotation_to_global_frame() @ self.body_fixed_thrust_direction


class CustomThrustGuidance(ThrustDirectionGuidance):
    """Thrust along a user-supplied inertial direction ``f(time)``."""

    def __init__(self, direction_function: Callable[[float], ArrayLike]):
        super().__init__()
        self.direction_function = direction_function

    def _compute_direction(self, time: float) -> Array:
        return self.direction_function(time)


class InterpolatedThrustGuidance(ThrustDirectionGuidance):
    """Thrust along the direction of a :class:`ThrustInterpolatorInterface`."""

    def __init__(self, interpolator: ThrustInterpolatorInterface):
        super().__init__()
        self.interpolator = interpolator

    def _compute_direction(self, time: float) -> Array:
        self.interpolator.update(time)
        return self.interpolator.get_current_thrust_direction()

    def reset_time(self, time: float = math.nan) -> None:
        super().reset_time(time)
        self.interpolator.reset_time(time)


def create_thrust_guidance(
    direction_settings: ThrustDirectionSettings,
    bodies,
    name_of_body_with_guidance: str,
    body_fixed_thrust_direction: ArrayLike = (1.0, 0.0, 0.0),
) -> ThrustDirectionGuidance:
    """Create the direction guidance described by *direction_settings*.

    Args:
        direction_settings: Direction settings.
        bodies: Body registry.
        name_of_body_with_guidance: Name of the thrusting vehicle.
        body_fixed_thrust_direction: Thrust direction in the vehicle body
            frame, used when the direction follows the body orientation.

    Returns:
        ThrustDirectionGuidance: Guidance with its ``environment_updates``
        filled in.

    Raises:
        BodyNotFoundError: If the vehicle or the relative body is not in
            *bodies*.
        ConfigurationError: If the direction type is not supported.
    """
    vehicle = bodies[name_of_body_with_guidance]
    direction_type = direction_settings.direction_type

    if direction_type is ThrustDirectionType.COLINEAR_WITH_STATE:
        relative_body = bodies[direction_settings.relative_body]
        guidance = StateColinearThrustGuidance(
            vehicle.get_state,
            relative_body.get_state,
            direction_settings.is_colinear_with_velocity,
            direction_settings.direction_is_opposite_to_vector,
        )
        guidance.environment_updates.add(
            EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, direction_settings.relative_body
        )
    elif direction_type is ThrustDirectionType.FROM_EXISTING_BODY_ORIENTATION:
        guidance = BodyOrientationThrustGuidance(
            vehicle.get_rotation_to_global_frame, body_fixed_thrust_direction
        )
        guidance.environment_updates.add(
            EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, name_of_body_with_guidance
        )
    elif direction_type is ThrustDirectionType.CUSTOM:
        guidance = CustomThrustGuidance(direction_settings.direction_function)
    elif direction_type is ThrustDirectionType.INTERPOLATED:
        guidance = InterpolatedThrustGuidance(direction_settings.interpolator)
    else:
        raise ConfigurationError(f"Unsupported thrust direction type: {direction_type!r}")

    return guidance


# ---------------------------------------------------------------------------
# Magnitude
# ---------------------------------------------------------------------------


class ThrustMagnitudeWrapper:
    """Base class of thrust magnitude models.

    The mass rate follows the rocket equation, ``dm/dt = -F / (Isp * g0)``.

    Args:
        specific_impulse: Specific impulse [s].
    """

    def __init__(self, specific_impulse: float):
        self.specific_impulse = specific_impulse
        self.environment_updates = EnvironmentUpdatePlan()
        self.current_time = math.nan
        self.current_thrust_magnitude = get_dtype()(0.0)

    def update(self, time: float) -> None:
        if time == self.current_time:
            return
        self.current_thrust_magnitude = self._compute_thrust_magnitude(time)
        self.current_time = time

    def reset_time(self, time: float = math.nan) -> None:
        self.current_time = time

    def get_current_thrust_magnitude(self) -> float:
        return self.current_thrust_magnitude

    def get_current_mass_rate(self) -> float:
        return -self.current_thrust_magnitude / (self.specific_impulse * G0)

    def _compute_thrust_magnitude(self, time: float) -> float:
        raise NotImplementedError


class ConstantThrustMagnitude(ThrustMagnitudeWrapper):
    def __init__(self, thrust_magnitude: float, specific_impulse: float):
        super().__init__(specific_impulse)
        self.thrust_magnitude = thrust_magnitude

    def _compute_thrust_magnitude(self, time: float) -> float:
        return self.thrust_magnitude


class CustomThrustMagnitude(ThrustMagnitudeWrapper):
    """Thrust magnitude ``f(time)``."""

    def __init__(self, magnitude_function: Callable[[float], float], specific_impulse: float):
        super().__init__(specific_impulse)
        self.magnitude_function = magnitude_function

    def _compute_thrust_magnitude(self, time: float) -> float:
        return self.magnitude_function(time)


class FlightConditionsThrustMagnitude(ThrustMagnitudeWrapper):
    """Thrust magnitude as a function of the vehicle's flight conditions."""

    def __init__(self, flight_conditions, magnitude_function: Callable, specific_impulse: float):
        super().__init__(specific_impulse)
        self.flight_conditions = flight_conditions
        self.magnitude_function = magnitude_function

    def _compute_thrust_magnitude(self, time: float) -> float:
        return self.magnitude_function(self.flight_conditions)


class InterpolatedThrustMagnitude(ThrustMagnitudeWrapper):
    """Thrust magnitude of a :class:`ThrustInterpolatorInterface`."""

    def __init__(self, interpolator: ThrustInterpolatorInterface, specific_impulse: float):
        super().__init__(specific_impulse)
        self.interpolator = interpolator

    def _compute_thrust_magnitude(self, time: float) -> float:
        self.interpolator.update(time)
        return self.interpolator.get_current_thrust_magnitude()

    def reset_time(self, time: float = math.nan) -> None:
        super().reset_time(time)
        self.interpolator.reset_time(time)


def create_thrust_magnitude_wrapper(
    magnitude_settings: ThrustMagnitudeSettings,
    bodies,
    name_of_body_with_guidance: str,
) -> ThrustMagnitudeWrapper:
    """Create the magnitude model described by *magnitude_settings*.

    Magnitudes computed from flight conditions use the vehicle's existing
    flight conditions, creating them relative to
    ``magnitude_settings.central_body`` if the vehicle has none.

    Args:
        magnitude_settings: Magnitude settings.
        bodies: Body registry.
        name_of_body_with_guidance: Name of the thrusting vehicle.

    Returns:
        ThrustMagnitudeWrapper: Magnitude model with its
        ``environment_updates`` filled in.

    Raises:
        BodyNotFoundError: If the vehicle or the central body is not in
            *bodies*.
        MissingCapabilityError: If flight conditions are needed and the
            central body has no atmosphere or shape.
        ConfigurationError: If the magnitude type is not supported.
    """
    vehicle = bodies[name_of_body_with_guidance]
    magnitude_type = magnitude_settings.magnitude_type
    isp = magnitude_settings.specific_impulse

    if magnitude_type is ThrustMagnitudeType.CONSTANT:
        wrapper = ConstantThrustMagnitude(magnitude_settings.thrust_magnitude, isp)
    elif magnitude_type is ThrustMagnitudeType.FROM_FUNCTION:
        wrapper = CustomThrustMagnitude(magnitude_settings.magnitude_function, isp)
    elif magnitude_type is ThrustMagnitudeType.FROM_FLIGHT_CONDITIONS:
        central_body_name = magnitude_settings.central_body
        flight_conditions = get_or_create_flight_conditions(
            vehicle, bodies[central_body_name], name_of_body_with_guidance, central_body_name
        )
        wrapper = FlightConditionsThrustMagnitude(
            flight_conditions, magnitude_settings.magnitude_function, isp
        )
        wrapper.environment_updates.add(
            EnvironmentModelsToUpdate.VEHICLE_FLIGHT_CONDITIONS, name_of_body_with_guidance
        )
        wrapper.environment_updates.add(
            EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, flight_conditions.central_body_name
        )
    elif magnitude_type is ThrustMagnitudeType.INTERPOLATED:
        wrapper = InterpolatedThrustMagnitude(magnitude_settings.interpolator, isp)
    else:
        raise ConfigurationError(f"Unsupported thrust magnitude type: {magnitude_type!r}")

    return wrapper
