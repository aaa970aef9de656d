"""Aerodynamic coefficients and flight conditions.

- :class:`AerodynamicCoefficientInterface`: force coefficients and reference
  area of a vehicle, with the frame the coefficients are defined in.
- :class:`FlightConditions`: the vehicle's derived atmospheric state
  (altitude, density, airspeed) relative to a central body with an
  atmosphere co-rotating with the body-fixed frame.
- :func:`create_flight_conditions`: factory used by the aerodynamic and
  thrust builders to attach flight conditions to a vehicle.

A vehicle has at most one :class:`FlightConditions`; every model that needs
it (aerodynamic acceleration, thrust magnitude from atmospheric state) reads
the same object, refreshed once per evaluation by the environment update.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype
from astroaccel.errors import MissingCapabilityError

logger = logging.getLogger(__name__)


class AerodynamicCoefficientInterface:
    """Constant aerodynamic force coefficients of a vehicle.

    Args:
        reference_area: Reference area [m^2].
        force_coefficients: ``[C_D, C_S, C_L]`` in the aerodynamic frame, or
            ``[C_x, C_y, C_z]`` in the body frame.
        are_coefficients_in_aerodynamic_frame: Whether the coefficients are
            defined in the aerodynamic (airspeed-based) frame rather than the
            body frame.
        are_coefficients_in_negative_axis_direction: Whether a positive
            coefficient produces a force along the negative frame axis (the
            usual convention for drag).
    """

    def __init__(
        self,
        reference_area: float,
        force_coefficients: ArrayLike,
        are_coefficients_in_aerodynamic_frame: bool = True,
        are_coefficients_in_negative_axis_direction: bool = True,
    ):
        coefficients = jnp.asarray(force_coefficients, dtype=get_dtype())
        if coefficients.shape != (3,):
            raise ValueError(
                f"force_coefficients must have shape (3,), got {coefficients.shape}"
            )
        self.reference_area = reference_area
        self.force_coefficients = coefficients
        self.are_coefficients_in_aerodynamic_frame = are_coefficients_in_aerodynamic_frame
        self.are_coefficients_in_negative_axis_direction = are_coefficients_in_negative_axis_direction

    def get_reference_area(self) -> float:
        return self.reference_area

    def get_current_force_coefficients(self) -> Array:
        return self.force_coefficients


class FlightConditions:
    """Atmospheric flight state of a vehicle relative to a central body.

    Call :meth:`update` before reading any ``get_current_*`` value.

    Args:
        vehicle: Body undergoing aerodynamic forces.
        central_body: Body with atmosphere and shape models.
        central_body_name: Name of *central_body*.
    """

    def __init__(self, vehicle, central_body, central_body_name: str):
        self.vehicle = vehicle
        self.central_body = central_body
        self.central_body_name = central_body_name

        _float = get_dtype()
        self.current_time: float | None = None
        self.current_altitude = _float(0.0)
        self.current_density = _float(0.0)
        self.current_relative_position = jnp.zeros(3, dtype=_float)
        self.current_airspeed_velocity = jnp.zeros(3, dtype=_float)

    def update(self, time: float) -> None:
        """Recompute altitude, density and airspeed velocity at *time*."""
        r_rel = self.vehicle.get_position() - self.central_body.get_position()
        v_rel = self.vehicle.get_velocity() - self.central_body.get_velocity()

        R = self.central_body.get_rotation_to_global_frame()
        r_bf = R.T @ r_rel
        v_bf = R.T @ v_rel

        rotation = self.central_body.rotational_ephemeris
        if rotation is not None:
            omega = rotation.angular_velocity_in_target_frame(time)
        else:
            omega = jnp.zeros(3, dtype=get_dtype())

        # Velocity relative to the co-rotating atmosphere
        v_air_bf = v_bf - jnp.cross(omega, r_bf)

        self.current_time = time
        self.current_altitude = self.central_body.shape_model.get_altitude(r_bf)
        self.current_density = self.central_body.atmosphere_model.get_density(self.current_altitude)
        self.current_relative_position = r_rel
        self.current_airspeed_velocity = R @ v_air_bf

    def get_current_altitude(self) -> Array:
        return self.current_altitude

    def get_current_density(self) -> Array:
        return self.current_density

    def get_current_airspeed(self) -> Array:
        return jnp.linalg.norm(self.current_airspeed_velocity)

    def get_current_airspeed_velocity(self) -> Array:
        """Airspeed velocity vector in the inertial frame [m/s]."""
        return self.current_airspeed_velocity

    def get_aerodynamic_to_inertial_rotation(self) -> Array:
        """Rotation from the airspeed-based aerodynamic frame to the inertial frame.

        The x-axis is along the airspeed velocity, the z-axis points
        towards the central body in the plane of position and airspeed, and
        the y-axis completes the right-handed triad.
        """
        x_hat = self.current_airspeed_velocity / jnp.linalg.norm(self.current_airspeed_velocity)
        r_hat = self.current_relative_position / jnp.linalg.norm(self.current_relative_position)
        z_vec = -(r_hat - jnp.dot(r_hat, x_hat) * x_hat)
        z_hat = z_vec / jnp.linalg.norm(z_vec)
        y_hat = jnp.cross(z_hat, x_hat)
        return jnp.column_stack([x_hat, y_hat, z_hat])


def create_flight_conditions(
    vehicle,
    central_body,
    vehicle_name: str,
    central_body_name: str,
) -> FlightConditions:
    """Create flight conditions of *vehicle* relative to *central_body*.

    Args:
        vehicle: Body undergoing aerodynamic forces.
        central_body: Body providing atmosphere and shape.
        vehicle_name: Name of *vehicle*.
        central_body_name: Name of *central_body*.

    Returns:
        FlightConditions: New, not yet updated, flight conditions.

    Raises:
        MissingCapabilityError: If *central_body* has no atmosphere or shape
            model.
    """
    if central_body.atmosphere_model is None:
        raise MissingCapabilityError(
            f"Cannot create flight conditions of {vehicle_name}: central body "
            f"{central_body_name} has no atmosphere model.",
            body_undergoing=vehicle_name,
            body_exerting=central_body_name,
            capability="atmosphere",
        )
    if central_body.shape_model is None:
        raise MissingCapabilityError(
            f"Cannot create flight conditions of {vehicle_name}: central body "
            f"{central_body_name} has no shape model.",
            body_undergoing=vehicle_name,
            body_exerting=central_body_name,
            capability="shape",
        )
    logger.debug("Creating flight conditions of %s w.r.t. %s", vehicle_name, central_body_name)
    return FlightConditions(vehicle, central_body, central_body_name)


def get_or_create_flight_conditions(
    vehicle,
    central_body,
    vehicle_name: str,
    central_body_name: str,
) -> FlightConditions:
    """Return the flight conditions of *vehicle*, attaching new ones if absent.

    Existing flight conditions are reused as they are, so every model on a
    vehicle shares a single instance.

    Raises:
        MissingCapabilityError: If new flight conditions are needed and
            *central_body* has no atmosphere or shape model.
    """
    flight_conditions = vehicle.get_flight_conditions()
    if flight_conditions is None:
        flight_conditions = create_flight_conditions(
            vehicle, central_body, vehicle_name, central_body_name
        )
        vehicle.set_flight_conditions(flight_conditions)
    elif flight_conditions.central_body_name != central_body_name:
        logger.warning(
            "Reusing flight conditions of %s w.r.t. %s where %s was requested",
            vehicle_name,
            flight_conditions.central_body_name,
            central_body_name,
        )
    return flight_conditions
