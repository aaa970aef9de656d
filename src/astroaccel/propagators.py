"""Helpers for evaluating assembled acceleration models in a propagation loop.

The numerical integrator itself is external.  At each state derivative
evaluation it is expected to:

1. set the propagated bodies' states (in the order given by
   :func:`determine_ephemeris_update_order` when bodies are propagated
   relative to each other);
2. refresh the environment with :func:`update_environment`;
3. sum the accelerations with :func:`evaluate_total_acceleration`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import jax.numpy as jnp
from jax import Array

from astroaccel.accelerations.assembly import AccelerationMap
from astroaccel.accelerations.updates import EnvironmentModelsToUpdate, EnvironmentUpdatePlan
from astroaccel.config import get_dtype
from astroaccel.errors import ConfigurationError


def determine_ephemeris_update_order(
    integrated_bodies: Sequence[str],
    central_bodies: Sequence[str],
    ephemeris_origins: Sequence[str],
) -> list[str]:
    """Order in which the states of integrated bodies must be updated.

    A body propagated relative to a central body, or whose ephemeris is
    given relative to an origin, can only be updated after that body if it
    is itself integrated.

    Args:
        integrated_bodies: Names of the integrated bodies.
        central_bodies: Central body of each integrated body.
        ephemeris_origins: Ephemeris origin of each integrated body.

    Returns:
        list[str]: *integrated_bodies* in update order.

    Raises:
        ValueError: If the three sequences differ in length.
        ConfigurationError: If the dependencies are circular.

    Examples:
        ```python
        from astroaccel.propagators import determine_ephemeris_update_order
        determine_ephemeris_update_order(
            ["Moon", "Earth"], ["Earth", "Sun"], ["Earth", "Sun"]
        )  # ["Earth", "Moon"]
        ```
    """
    if not len(integrated_bodies) == len(central_bodies) == len(ephemeris_origins):
        raise ValueError(
            f"Expected equal numbers of integrated bodies, central bodies and ephemeris "
            f"origins, got {len(integrated_bodies)}, {len(central_bodies)} and "
            f"{len(ephemeris_origins)}"
        )

    remaining = list(zip(integrated_bodies, central_bodies, ephemeris_origins))
    update_order: list[str] = []
    current = 0
    visited: set[int] = set()

    while remaining:
        names = [entry[0] for entry in remaining]
        body_name, central_body, ephemeris_origin = remaining[current]
        dependencies = [names.index(name) for name in (central_body, ephemeris_origin) if name in names]

        if not dependencies:
            update_order.append(body_name)
            del remaining[current]
            current = 0
            visited.clear()
            continue

        # Follow the dependency chain to a body that depends on no integrated body
        visited.add(current)
        current = min(dependencies)
        if current in visited:
            raise ConfigurationError(
                f"Circular dependency in central bodies or ephemeris origins of {names[current]}."
            )

    return update_order


def _update_translational_state(bodies, body_name: str, time: float) -> None:
    bodies[body_name].update_translational_state(time)


def _update_rotational_state(bodies, body_name: str, time: float) -> None:
    bodies[body_name].update_rotational_state(time)


def _update_mass(bodies, body_name: str, time: float) -> None:
    bodies[body_name].update_mass(time)


def _update_gravity_field(bodies, body_name: str, time: float) -> None:
    bodies[body_name].gravity_field_model.update(time)


def _update_radiation_pressure(bodies, body_name: str, time: float) -> None:
    body = bodies[body_name]
    for source_name, interface in body.radiation_pressure_interfaces.items():
        interface.update(bodies[source_name].get_position(), body.get_position())


def _update_flight_conditions(bodies, body_name: str, time: float) -> None:
    bodies[body_name].get_flight_conditions().update(time)


_ENVIRONMENT_UPDATERS = {
    EnvironmentModelsToUpdate.BODY_TRANSLATIONAL_STATE: _update_translational_state,
    EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE: _update_rotational_state,
    EnvironmentModelsToUpdate.BODY_MASS: _update_mass,
    EnvironmentModelsToUpdate.SPHERICAL_HARMONIC_GRAVITY_FIELD: _update_gravity_field,
    EnvironmentModelsToUpdate.RADIATION_PRESSURE_INTERFACE: _update_radiation_pressure,
    EnvironmentModelsToUpdate.VEHICLE_FLIGHT_CONDITIONS: _update_flight_conditions,
}


def update_environment(bodies, update_plan: EnvironmentUpdatePlan, time: float) -> None:
    """Refresh the environment quantities listed in *update_plan* at *time*.

    Categories are processed in :class:`EnvironmentModelsToUpdate`
    declaration order, so translational and rotational states are current
    before flight conditions and radiation pressure are recomputed.

    Args:
        bodies: Body registry.
        update_plan: Plan returned by the assembler.
        time: Current time [s].
    """
    for category, body_name in update_plan:
        _ENVIRONMENT_UPDATERS[category](bodies, body_name, time)


def reset_acceleration_models(acceleration_map: AccelerationMap, time: float = math.nan) -> None:
    """Reset the update time of every model, forcing recomputation."""
    for models_per_exerting in acceleration_map.values():
        for models in models_per_exerting.values():
            for model in models:
                model.reset_time(time)


def evaluate_total_acceleration(acceleration_map: AccelerationMap, body_name: str, time: float) -> Array:
    """Update every model acting on *body_name* and return their sum.

    Args:
        acceleration_map: Acceleration map returned by the assembler.
        body_name: Name of the undergoing body.
        time: Current time [s].

    Returns:
        Total acceleration [m/s^2], shape ``(3,)``.

    Raises:
        KeyError: If no accelerations act on *body_name*.
    """
    total = jnp.zeros(3, dtype=get_dtype())
    for models in acceleration_map[body_name].values():
        for model in models:
            model.update_members(time)
            total = total + model.get_acceleration()
    return total
