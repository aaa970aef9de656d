"""Builders turning acceleration settings into acceleration models.

Each acceleration family has a builder that checks the capabilities it
needs on the bodies involved, binds accessor closures over those bodies
into a model from :mod:`astroaccel.accelerations.models`, and records the
environment updates the model depends on.

Gravitational families are built either *directly* (the acceleration of
the undergoing body in an inertial frame, or relative to the exerting body
itself) or as a *third-body* acceleration relative to a non-inertial
central body, decided by :func:`create_gravitational_acceleration_model`.
:func:`create_acceleration_model` dispatches on the settings class through
a table, so every settings class has exactly one builder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import jax.numpy as jnp
import numpy as np

from astroaccel.accelerations.models import (
    AccelerationModel,
    AerodynamicAcceleration,
    CannonballRadiationPressureAcceleration,
    CentralGravityAcceleration,
    MutualSphericalHarmonicsGravityAcceleration,
    SphericalHarmonicsGravityAcceleration,
    ThirdBodyAcceleration,
    ThrustAcceleration,
)
from astroaccel.accelerations.settings import (
    AccelerationSettings,
    AerodynamicSettings,
    CannonballRadiationPressureSettings,
    CentralGravitySettings,
    MutualSphericalHarmonicGravitySettings,
    SphericalHarmonicGravitySettings,
    ThrustDirectionType,
    ThrustFrame,
    ThrustSettings,
)
from astroaccel.accelerations.thrust import create_thrust_guidance, create_thrust_magnitude_wrapper
from astroaccel.accelerations.updates import EnvironmentModelsToUpdate, EnvironmentUpdatePlan
from astroaccel.config import get_dtype
from astroaccel.environment.aerodynamics import get_or_create_flight_conditions
from astroaccel.environment.body import Body
from astroaccel.environment.gravity import SphericalHarmonicsGravityField
from astroaccel.errors import (
    ConfigurationError,
    FrameMismatchError,
    MissingCapabilityError,
)
from astroaccel.frames import is_frame_inertial, rotation_lvlh_to_inertial, rotation_rtn_to_inertial

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Gravitational parameter
# ---------------------------------------------------------------------------


def resolve_gravitational_parameter(
    body_undergoing: Body,
    body_exerting: Body,
    use_central_body_fixed_frame: bool,
) -> Callable[[], float]:
    """Gravitational parameter to use for a gravity acceleration.

    Relative to the exerting body (``use_central_body_fixed_frame``), the
    undergoing body's own GM adds to the exerting body's, since both bodies
    accelerate towards each other.  Otherwise, or if the undergoing body has
    no gravity field, the exerting body's GM is used alone.

    The parameters are read from the fields on every call, so later changes
    to either field are seen by the model.

    Args:
        body_undergoing: Body undergoing the acceleration.
        body_exerting: Body exerting the acceleration; must own a gravity
            field.
        use_central_body_fixed_frame: Whether the acceleration is expressed
            relative to the exerting body.

    Returns:
        Zero-argument callable returning the gravitational parameter
        [m^3/s^2].
    """
    exerting_field = body_exerting.gravity_field_model
    undergoing_field = body_undergoing.gravity_field_model

    if not use_central_body_fixed_frame or undergoing_field is None:
        return exerting_field.get_gravitational_parameter

    def gravitational_parameter() -> float:
        return (
            exerting_field.get_gravitational_parameter()
            + undergoing_field.get_gravitational_parameter()
        )

    return gravitational_parameter


# ---------------------------------------------------------------------------
# Capability checks
# ---------------------------------------------------------------------------


def _missing(capability: str, owner: str, name_undergoing: str, name_exerting: str, label: str):
    return MissingCapabilityError(
        f"Error when making {label} acceleration of {name_undergoing} due to "
        f"{name_exerting}: {owner} has no {capability.replace('_', ' ')}.",
        body_undergoing=name_undergoing,
        body_exerting=name_exerting,
        capability=capability,
    )


def _require_spherical_harmonics_field(
    body: Body,
    owner: str,
    name_undergoing: str,
    name_exerting: str,
    label: str,
) -> SphericalHarmonicsGravityField:
    field = body.gravity_field_model
    if not isinstance(field, SphericalHarmonicsGravityField):
        raise _missing(
            "spherical_harmonics_gravity_field", owner, name_undergoing, name_exerting, label
        )
    return field


def _check_field_truncation(
    field: SphericalHarmonicsGravityField,
    maximum_degree: int,
    maximum_order: int,
    owner: str,
    name_undergoing: str,
    name_exerting: str,
    label: str,
) -> None:
    if maximum_degree > field.max_degree or maximum_order > field.max_order:
        raise ConfigurationError(
            f"Error when making {label} acceleration of {name_undergoing} due to "
            f"{name_exerting}: requested degree/order ({maximum_degree}, {maximum_order}) "
            f"of {owner} exceeds its gravity field ({field.max_degree}, {field.max_order})."
        )


def _check_rotation_model(
    body: Body,
    field: SphericalHarmonicsGravityField,
    owner: str,
    name_undergoing: str,
    name_exerting: str,
    label: str,
) -> None:
    """Check that *body*'s rotation model rotates into *field*'s fixed frame."""
    rotational_ephemeris = body.rotational_ephemeris
    if rotational_ephemeris is None:
        logger.warning(
            "%s has a spherical harmonic gravity field but no rotation model; "
            "evaluating its field in the inertial frame",
            owner,
        )
        return
    target_frame = rotational_ephemeris.get_target_frame_orientation()
    if target_frame != field.get_fixed_reference_frame():
        raise FrameMismatchError(
            f"Error when making {label} acceleration of {name_undergoing} due to "
            f"{name_exerting}: rotation model of {owner} rotates to {target_frame!r}, but its "
            f"spherical harmonic gravity field is fixed in "
            f"{field.get_fixed_reference_frame()!r}."
        )


# ---------------------------------------------------------------------------
# Direct gravity builders
# ---------------------------------------------------------------------------


def _gravity_updates(model: AccelerationModel, name_exerting: str, rotating_bodies: tuple = ()) -> None:
    model.environment_updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, name_exerting)
    for body_name in rotating_bodies:
        model.environment_updates.add(EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, body_name)
        model.environment_updates.add(
            EnvironmentModelsToUpdate.SPHERICAL_HARMONIC_GRAVITY_FIELD, body_name
        )


def create_central_gravity_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    settings: CentralGravitySettings,
    name_undergoing: str,
    name_exerting: str,
    use_central_body_fixed_frame: bool,
) -> CentralGravityAcceleration:
    """Point-mass gravity of *body_exerting* on *body_undergoing*.

    Raises:
        MissingCapabilityError: If *body_exerting* has no gravity field.
    """
    if body_exerting.gravity_field_model is None:
        raise _missing("gravity_field", name_exerting, name_undergoing, name_exerting, "central gravity")

    model = CentralGravityAcceleration(
        body_undergoing.get_position,
        resolve_gravitational_parameter(body_undergoing, body_exerting, use_central_body_fixed_frame),
        body_exerting.get_position,
        use_central_body_fixed_frame,
    )
    _gravity_updates(model, name_exerting)
    return model


def create_spherical_harmonic_gravity_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    settings: SphericalHarmonicGravitySettings,
    name_undergoing: str,
    name_exerting: str,
    use_central_body_fixed_frame: bool,
) -> SphericalHarmonicsGravityAcceleration:
    """Spherical harmonic gravity of *body_exerting* on *body_undergoing*.

    Raises:
        MissingCapabilityError: If *body_exerting* has no spherical harmonic
            gravity field.
        ConfigurationError: If the requested degree/order exceeds the field.
        FrameMismatchError: If *body_exerting*'s rotation model does not
            rotate into the field's fixed frame.
    """
    label = "spherical harmonic gravity"
    field = _require_spherical_harmonics_field(
        body_exerting, name_exerting, name_undergoing, name_exerting, label
    )
    degree, order = settings.maximum_degree, settings.maximum_order
    _check_field_truncation(field, degree, order, name_exerting, name_undergoing, name_exerting, label)
    _check_rotation_model(body_exerting, field, name_exerting, name_undergoing, name_exerting, label)

    model = SphericalHarmonicsGravityAcceleration(
        body_undergoing.get_position,
        resolve_gravitational_parameter(body_undergoing, body_exerting, use_central_body_fixed_frame),
        field.get_reference_radius(),
        lambda: field.get_cosine_coefficients(degree, order),
        lambda: field.get_sine_coefficients(degree, order),
        body_exerting.get_position,
        body_exerting.get_rotation_to_global_frame,
        use_central_body_fixed_frame,
        field.is_normalized,
    )
    _gravity_updates(model, name_exerting, (name_exerting,))
    return model


def create_mutual_spherical_harmonic_gravity_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    settings: MutualSphericalHarmonicGravitySettings,
    name_undergoing: str,
    name_exerting: str,
    use_central_body_fixed_frame: bool,
    accelerated_body_is_central_body: bool = False,
) -> MutualSphericalHarmonicsGravityAcceleration:
    """Mutual spherical harmonic gravity between two extended bodies.

    Args:
        accelerated_body_is_central_body: Whether *body_undergoing* is the
            central body of a third-body acceleration, in which case the
            central-body degree/order of *settings* apply to its field.

    Raises:
        MissingCapabilityError: If either body has no spherical harmonic
            gravity field.
        ConfigurationError: If a requested degree/order exceeds a field.
        FrameMismatchError: If a body's rotation model does not rotate into
            its field's fixed frame.
    """
    label = "mutual spherical harmonic gravity"
    exerting_field = _require_spherical_harmonics_field(
        body_exerting, name_exerting, name_undergoing, name_exerting, label
    )
    undergoing_field = _require_spherical_harmonics_field(
        body_undergoing, name_undergoing, name_undergoing, name_exerting, label
    )

    degree_exerting = settings.maximum_degree_of_body_exerting
    order_exerting = settings.maximum_order_of_body_exerting
    if accelerated_body_is_central_body:
        degree_undergoing = settings.maximum_degree_of_central_body
        order_undergoing = settings.maximum_order_of_central_body
    else:
        degree_undergoing = settings.maximum_degree_of_body_undergoing
        order_undergoing = settings.maximum_order_of_body_undergoing

    names = (name_undergoing, name_exerting, label)
    _check_field_truncation(exerting_field, degree_exerting, order_exerting, name_exerting, *names)
    _check_field_truncation(undergoing_field, degree_undergoing, order_undergoing, name_undergoing, *names)
    _check_rotation_model(body_exerting, exerting_field, name_exerting, *names)
    _check_rotation_model(body_undergoing, undergoing_field, name_undergoing, *names)

    def cosine_coefficients_of_body_undergoing() -> np.ndarray:
        C = undergoing_field.get_cosine_coefficients(degree_undergoing, order_undergoing)
        # Point-mass term is already in the exerting field's expansion
        C[0, 0] = 0.0
        return C

    model = MutualSphericalHarmonicsGravityAcceleration(
        body_undergoing.get_position,
        body_exerting.get_position,
        resolve_gravitational_parameter(body_undergoing, body_exerting, use_central_body_fixed_frame),
        exerting_field.get_reference_radius(),
        undergoing_field.get_reference_radius(),
        lambda: exerting_field.get_cosine_coefficients(degree_exerting, order_exerting),
        lambda: exerting_field.get_sine_coefficients(degree_exerting, order_exerting),
        cosine_coefficients_of_body_undergoing,
        lambda: undergoing_field.get_sine_coefficients(degree_undergoing, order_undergoing),
        body_exerting.get_rotation_to_global_frame,
        body_undergoing.get_rotation_to_global_frame,
        use_central_body_fixed_frame,
        exerting_field.is_normalized,
        undergoing_field.is_normalized,
    )
    _gravity_updates(model, name_exerting, (name_exerting, name_undergoing))
    model.environment_updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, name_undergoing)
    return model


_DIRECT_GRAVITY_BUILDERS = {
    CentralGravitySettings: create_central_gravity_acceleration,
    SphericalHarmonicGravitySettings: create_spherical_harmonic_gravity_acceleration,
    MutualSphericalHarmonicGravitySettings: create_mutual_spherical_harmonic_gravity_acceleration,
}


def create_direct_gravitational_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    settings: AccelerationSettings,
    name_undergoing: str,
    name_exerting: str,
    use_central_body_fixed_frame: bool,
    accelerated_body_is_central_body: bool = False,
) -> AccelerationModel:
    """Gravity of *body_exerting* on *body_undergoing*, without central-body correction.

    Raises:
        ConfigurationError: If *settings* is not a gravitational settings
            class.
    """
    builder = _DIRECT_GRAVITY_BUILDERS.get(type(settings))
    if builder is None:
        raise ConfigurationError(
            f"Acceleration of type {settings.acceleration_type.value} of {name_undergoing} "
            f"due to {name_exerting} is not a gravitational acceleration."
        )
    if isinstance(settings, MutualSphericalHarmonicGravitySettings):
        return builder(
            body_undergoing,
            body_exerting,
            settings,
            name_undergoing,
            name_exerting,
            use_central_body_fixed_frame,
            accelerated_body_is_central_body,
        )
    return builder(
        body_undergoing, body_exerting, settings, name_undergoing, name_exerting, use_central_body_fixed_frame
    )


def create_third_body_gravitational_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    central_body: Body,
    settings: AccelerationSettings,
    name_undergoing: str,
    name_exerting: str,
    name_central_body: str,
) -> ThirdBodyAcceleration:
    """Gravity of *body_exerting* on *body_undergoing* relative to *central_body*.

    Both legs (exerting on undergoing, exerting on central) are built with
    the direct builder of the settings family, in the inertial sense.  For
    mutual spherical harmonics the central body must own a spherical
    harmonic field, and its leg uses the central-body degree and order.

    Raises:
        MissingCapabilityError: If a required field is missing, naming the
            central body when its field is the one missing.
    """
    if isinstance(settings, MutualSphericalHarmonicGravitySettings):
        _require_spherical_harmonics_field(
            central_body,
            name_central_body,
            name_central_body,
            name_exerting,
            "third-body mutual spherical harmonic gravity",
        )

    model_for_body_undergoing = create_direct_gravitational_acceleration(
        body_undergoing, body_exerting, settings, name_undergoing, name_exerting, False
    )
    model_for_central_body = create_direct_gravitational_acceleration(
        central_body,
        body_exerting,
        settings,
        name_central_body,
        name_exerting,
        False,
        accelerated_body_is_central_body=True,
    )

    model = ThirdBodyAcceleration(model_for_body_undergoing, model_for_central_body, name_central_body)
    model.environment_updates.merge(model_for_body_undergoing.environment_updates)
    model.environment_updates.merge(model_for_central_body.environment_updates)
    model.environment_updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, name_central_body)
    return model


def create_gravitational_acceleration_model(
    body_undergoing: Body,
    body_exerting: Body,
    settings: AccelerationSettings,
    name_undergoing: str,
    name_exerting: str,
    central_body: Body | None,
    name_central_body: str,
) -> AccelerationModel:
    """Direct or third-body gravity, depending on the undergoing body's central body.

    Third-body gravity is used when the central body is neither the exerting
    body nor an inertial frame.  A direct acceleration is expressed relative
    to the exerting body exactly when the exerting body is the central
    body.
    """
    if name_central_body == name_exerting or is_frame_inertial(name_central_body):
        use_central_body_fixed_frame = name_central_body == name_exerting
        logger.debug(
            "Creating direct %s acceleration of %s due to %s",
            settings.acceleration_type.value,
            name_undergoing,
            name_exerting,
        )
        return create_direct_gravitational_acceleration(
            body_undergoing,
            body_exerting,
            settings,
            name_undergoing,
            name_exerting,
            use_central_body_fixed_frame,
        )

    logger.debug(
        "Creating third-body %s acceleration of %s due to %s w.r.t. %s",
        settings.acceleration_type.value,
        name_undergoing,
        name_exerting,
        name_central_body,
    )
    return create_third_body_gravitational_acceleration(
        body_undergoing,
        body_exerting,
        central_body,
        settings,
        name_undergoing,
        name_exerting,
        name_central_body,
    )


# ---------------------------------------------------------------------------
# Surface force builders
# ---------------------------------------------------------------------------


def create_aerodynamic_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    name_undergoing: str,
    name_exerting: str,
) -> AerodynamicAcceleration:
    """Aerodynamic acceleration of *body_undergoing* in *body_exerting*'s atmosphere.

    Flight conditions of *body_undergoing* are created on first use and
    shared with every later model that needs them.

    Raises:
        MissingCapabilityError: If *body_undergoing* has no aerodynamic
            coefficients, or *body_exerting* has no atmosphere or shape.
    """
    label = "aerodynamic"
    coefficients = body_undergoing.aerodynamic_coefficient_interface
    if coefficients is None:
        raise _missing("aerodynamic_coefficients", name_undergoing, name_undergoing, name_exerting, label)
    if body_exerting.atmosphere_model is None:
        raise _missing("atmosphere", name_exerting, name_undergoing, name_exerting, label)
    if body_exerting.shape_model is None:
        raise _missing("shape", name_exerting, name_undergoing, name_exerting, label)

    flight_conditions = get_or_create_flight_conditions(
        body_undergoing, body_exerting, name_undergoing, name_exerting
    )

    if coefficients.are_coefficients_in_aerodynamic_frame:

        def coefficients_in_inertial_frame():
            return (
                flight_conditions.get_aerodynamic_to_inertial_rotation()
                @ coefficients.get_current_force_coefficients()
            )

    else:

        def coefficients_in_inertial_frame():
            return (
                body_undergoing.get_rotation_to_global_frame()
                @ coefficients.get_current_force_coefficients()
            )

    model = AerodynamicAcceleration(
        coefficients_in_inertial_frame,
        flight_conditions.get_current_density,
        flight_conditions.get_current_airspeed,
        body_undergoing.get_mass,
        coefficients.get_reference_area,
        coefficients.are_coefficients_in_negative_axis_direction,
    )
    updates = model.environment_updates
    updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, name_exerting)
    updates.add(EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, flight_conditions.central_body_name)
    updates.add(EnvironmentModelsToUpdate.BODY_MASS, name_undergoing)
    updates.add(EnvironmentModelsToUpdate.VEHICLE_FLIGHT_CONDITIONS, name_undergoing)
    if not coefficients.are_coefficients_in_aerodynamic_frame:
        updates.add(EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, name_undergoing)
    return model


def create_cannonball_radiation_pressure_acceleration(
    body_undergoing: Body,
    body_exerting: Body,
    name_undergoing: str,
    name_exerting: str,
) -> CannonballRadiationPressureAcceleration:
    """Radiation pressure on *body_undergoing* from the source *body_exerting*.

    Raises:
        MissingCapabilityError: If *body_undergoing* has no radiation
            pressure interface for *name_exerting*.
    """
    interface = body_undergoing.radiation_pressure_interfaces.get(name_exerting)
    if interface is None:
        raise MissingCapabilityError(
            f"Error when making cannonball radiation pressure acceleration of "
            f"{name_undergoing} due to {name_exerting}: {name_undergoing} has no "
            f"radiation pressure interface for source {name_exerting}.",
            body_undergoing=name_undergoing,
            body_exerting=name_exerting,
            capability="radiation_pressure_interface",
        )

    model = CannonballRadiationPressureAcceleration(
        body_exerting.get_position,
        body_undergoing.get_position,
        interface.get_current_radiation_pressure,
        interface.get_radiation_pressure_coefficient,
        interface.get_area,
        body_undergoing.get_mass,
    )
    updates = model.environment_updates
    updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, name_exerting)
    updates.add(EnvironmentModelsToUpdate.BODY_MASS, name_undergoing)
    updates.add(EnvironmentModelsToUpdate.RADIATION_PRESSURE_INTERFACE, name_undergoing)
    return model


# ---------------------------------------------------------------------------
# Thrust
# ---------------------------------------------------------------------------


def _bind_thrust_frame_rotation(settings: ThrustSettings, bodies, name_undergoing: str, updates) -> None:
    """Bind the thrust-frame to inertial rotation into the settings' interpolator."""
    thrust_frame = settings.thrust_frame
    if thrust_frame is ThrustFrame.UNSPECIFIED:
        raise ConfigurationError(
            f"Thrust frame of {name_undergoing} is unspecified; an interpolated "
            f"thrust vector needs an inertial, LVLH or RTN frame."
        )
    if thrust_frame is ThrustFrame.INERTIAL:
        return

    vehicle = bodies[name_undergoing]
    central_body_name = settings.central_body
    if is_frame_inertial(central_body_name):
        _float = get_dtype()

        def central_body_state():
            return jnp.zeros(6, dtype=_float)

    else:
        central_body_state = bodies[central_body_name].get_state
        updates.add(EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE, central_body_name)

    if thrust_frame is ThrustFrame.LVLH:
        n_axis_points_away = settings.n_axis_points_away_from_central_body

        def rotation_function():
            return rotation_lvlh_to_inertial(vehicle.get_state(), central_body_state(), n_axis_points_away)

    elif thrust_frame is ThrustFrame.RTN:

        def rotation_function():
            return rotation_rtn_to_inertial(vehicle.get_state(), central_body_state())

    else:
        raise ConfigurationError(f"Unsupported thrust frame: {thrust_frame!r}")

    settings.interpolator.reset_rotation_function(rotation_function)


def create_thrust_acceleration(
    settings: ThrustSettings,
    bodies,
    name_undergoing: str,
) -> ThrustAcceleration:
    """Thrust acceleration of *name_undergoing*.

    Direction guidance and magnitude model are created by their own
    factories; their environment updates are merged into the model's plan
    and their update and reset functions are bound to the model.  Unless
    the thrust follows the vehicle's existing orientation, the guidance
    becomes the vehicle's orientation calculator (if it has none yet).

    Raises:
        ConfigurationError: If *settings* lacks direction or magnitude
            settings, or an interpolated thrust has an unspecified frame.
        BodyNotFoundError: If a body named by the thrust settings is not in
            *bodies*.
    """
    if settings.direction_settings is None or settings.magnitude_settings is None:
        raise ConfigurationError(
            f"Thrust settings of {name_undergoing} need both direction and magnitude settings."
        )
    vehicle = bodies[name_undergoing]

    model_updates = []
    if settings.interpolator is not None:
        frame_updates = EnvironmentUpdatePlan()
        _bind_thrust_frame_rotation(settings, bodies, name_undergoing, frame_updates)
        model_updates.append(frame_updates)

    guidance = create_thrust_guidance(
        settings.direction_settings,
        bodies,
        name_undergoing,
        settings.magnitude_settings.body_fixed_thrust_direction,
    )
    magnitude = create_thrust_magnitude_wrapper(settings.magnitude_settings, bodies, name_undergoing)

    if settings.direction_settings.direction_type is not ThrustDirectionType.FROM_EXISTING_BODY_ORIENTATION:
        if vehicle.dependent_orientation_calculator is None:
            logger.debug("Setting thrust guidance as orientation calculator of %s", name_undergoing)
            vehicle.set_dependent_orientation_calculator(guidance)

    def update_function(time: float) -> None:
        magnitude.update(time)
        guidance.update(time)

    def reset_function(time: float) -> None:
        magnitude.reset_time(time)
        guidance.reset_time(time)

    model = ThrustAcceleration(
        magnitude.get_current_thrust_magnitude,
        guidance.get_current_direction,
        vehicle.get_mass,
        magnitude.get_current_mass_rate,
        update_function,
        reset_function,
        settings.magnitude_settings.thrust_origin_id,
    )
    model.environment_updates.merge(magnitude.environment_updates)
    model.environment_updates.merge(guidance.environment_updates)
    for updates in model_updates:
        model.environment_updates.merge(updates)
    model.environment_updates.add(EnvironmentModelsToUpdate.BODY_MASS, name_undergoing)
    return model


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _build_aerodynamic(bodies, settings, name_undergoing, name_exerting, name_central_body):
    return create_aerodynamic_acceleration(
        bodies[name_undergoing], bodies[name_exerting], name_undergoing, name_exerting
    )


def _build_cannonball_radiation_pressure(bodies, settings, name_undergoing, name_exerting, name_central_body):
    return create_cannonball_radiation_pressure_acceleration(
        bodies[name_undergoing], bodies[name_exerting], name_undergoing, name_exerting
    )


def _build_thrust(bodies, settings, name_undergoing, name_exerting, name_central_body):
    return create_thrust_acceleration(settings, bodies, name_undergoing)


def _build_gravity(bodies, settings, name_undergoing, name_exerting, name_central_body):
    central_body = None if is_frame_inertial(name_central_body) else bodies[name_central_body]
    return create_gravitational_acceleration_model(
        bodies[name_undergoing],
        bodies[name_exerting],
        settings,
        name_undergoing,
        name_exerting,
        central_body,
        name_central_body,
    )


_ACCELERATION_BUILDERS = {
    CentralGravitySettings: _build_gravity,
    SphericalHarmonicGravitySettings: _build_gravity,
    MutualSphericalHarmonicGravitySettings: _build_gravity,
    AerodynamicSettings: _build_aerodynamic,
    CannonballRadiationPressureSettings: _build_cannonball_radiation_pressure,
    ThrustSettings: _build_thrust,
}


def create_acceleration_model(
    bodies,
    settings: AccelerationSettings,
    name_undergoing: str,
    name_exerting: str,
    name_central_body: str = "SSB",
) -> AccelerationModel:
    """Create a single acceleration model from its settings.

    Args:
        bodies: Body registry.
        settings: Settings of the acceleration.
        name_undergoing: Name of the body undergoing the acceleration.
        name_exerting: Name of the body exerting the acceleration.
        name_central_body: Name of the central body of the undergoing body's
            propagation, or an inertial frame name.

    Returns:
        AccelerationModel: The model, with its ``environment_updates``.

    Raises:
        ConfigurationError: If *settings* is not a known settings class.
        BodyNotFoundError: If a named body is not in *bodies*.
    """
    builder = _ACCELERATION_BUILDERS.get(type(settings))
    if builder is None:
        raise ConfigurationError(
            f"Unsupported acceleration settings {type(settings).__name__} for acceleration "
            f"of {name_undergoing} due to {name_exerting}."
        )
    return builder(bodies, settings, name_undergoing, name_exerting, name_central_body)
