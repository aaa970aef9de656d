"""Environment update dependencies of acceleration models.

Every acceleration model reads environment state (body positions, body
orientations, flight conditions, radiation pressure) that must be refreshed
before the model is evaluated.  Builders record these requirements in an
:class:`EnvironmentUpdatePlan` attached to each model; the assembler merges
the per-model plans so the propagation loop refreshes exactly the
environment quantities in use, once per evaluation.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping


class EnvironmentModelsToUpdate(enum.Enum):
    """Categories of environment state refreshed before model evaluation.

    The declaration order is the order in which
    :func:`~astroaccel.propagators.update_environment` processes them:
    flight conditions depend on both translational and rotational state,
    radiation pressure on translational state.

    Attributes:
        BODY_TRANSLATIONAL_STATE: Position and velocity of a body.
        BODY_ROTATIONAL_STATE: Orientation of a body-fixed frame.
        BODY_MASS: Mass of a body.
        SPHERICAL_HARMONIC_GRAVITY_FIELD: Coefficients of a body's gravity
            field.
        RADIATION_PRESSURE_INTERFACE: Radiation pressure on a body.
        VEHICLE_FLIGHT_CONDITIONS: Altitude, density and airspeed of a body.
    """

    BODY_TRANSLATIONAL_STATE = "body_translational_state_update"
    BODY_ROTATIONAL_STATE = "body_rotational_state_update"
    BODY_MASS = "body_mass_update"
    SPHERICAL_HARMONIC_GRAVITY_FIELD = "spherical_harmonic_gravity_field_update"
    RADIATION_PRESSURE_INTERFACE = "radiation_pressure_interface_update"
    VEHICLE_FLIGHT_CONDITIONS = "vehicle_flight_conditions_update"


class EnvironmentUpdatePlan:
    """Set of ``(category, body name)`` environment updates.

    Body names are kept per category in insertion order; adding an update
    that is already present is a no-op, so merging plans is a set union.

    Args:
        updates: Optional initial ``{category: body names}`` mapping.

    Examples:
        ```python
        from astroaccel.accelerations.updates import (
            EnvironmentModelsToUpdate, EnvironmentUpdatePlan,
        )
        plan = EnvironmentUpdatePlan()
        plan.add(EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, "Earth")
        plan.add(EnvironmentModelsToUpdate.BODY_ROTATIONAL_STATE, "Earth")
        len(plan)  # 1
        ```
    """

    def __init__(self, updates: Mapping[EnvironmentModelsToUpdate, Iterable[str]] | None = None):
        self._updates: dict[EnvironmentModelsToUpdate, list[str]] = {}
        if updates is not None:
            for category, body_names in updates.items():
                for body_name in body_names:
                    self.add(category, body_name)

    def add(self, category: EnvironmentModelsToUpdate, body_name: str) -> None:
        """Add the update of *category* for *body_name*."""
        if not isinstance(category, EnvironmentModelsToUpdate):
            raise TypeError(f"Expected EnvironmentModelsToUpdate, got {category!r}")
        body_names = self._updates.setdefault(category, [])
        if body_name not in body_names:
            body_names.append(body_name)

    def merge(self, other: EnvironmentUpdatePlan) -> EnvironmentUpdatePlan:
        """Add every update of *other* to this plan (in place) and return it."""
        for category, body_name in other:
            self.add(category, body_name)
        return self

    def copy(self) -> EnvironmentUpdatePlan:
        return EnvironmentUpdatePlan(self._updates)

    def bodies_for(self, category: EnvironmentModelsToUpdate) -> tuple[str, ...]:
        """Names of the bodies whose *category* state must be refreshed."""
        return tuple(self._updates.get(category, ()))

    def categories_for_body(self, body_name: str) -> set[EnvironmentModelsToUpdate]:
        """Categories to refresh for *body_name*."""
        return {category for category, names in self._updates.items() if body_name in names}

    def as_dict(self) -> dict[EnvironmentModelsToUpdate, list[str]]:
        """Copy of the plan as ``{category: [body names]}`` in processing order."""
        return {
            category: list(self._updates[category])
            for category in EnvironmentModelsToUpdate
            if self._updates.get(category)
        }

    def __iter__(self) -> Iterator[tuple[EnvironmentModelsToUpdate, str]]:
        for category, body_names in self.as_dict().items():
            for body_name in body_names:
                yield category, body_name

    def __contains__(self, item) -> bool:
        category, body_name = item
        return body_name in self._updates.get(category, ())

    def __len__(self) -> int:
        return sum(len(names) for names in self._updates.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, EnvironmentUpdatePlan):
            return NotImplemented
        return set(self) == set(other)

    def __repr__(self) -> str:
        entries = ", ".join(f"{c.value}: {names}" for c, names in self.as_dict().items())
        return f"EnvironmentUpdatePlan({{{entries}}})"


def merge_update_plans(plans: Iterable[EnvironmentUpdatePlan]) -> EnvironmentUpdatePlan:
    """Union of several plans, as a new plan."""
    merged = EnvironmentUpdatePlan()
    for plan in plans:
        merged.merge(plan)
    return merged


def create_acceleration_update_plan(acceleration_model) -> EnvironmentUpdatePlan:
    """Environment updates required before evaluating *acceleration_model*.

    Returns a copy, so the caller may extend it without affecting the model.
    """
    return acceleration_model.environment_updates.copy()
