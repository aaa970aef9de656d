"""Assembly of the acceleration models of a simulation.

:func:`create_acceleration_models` turns a selected acceleration map into
an acceleration map of built models, together with the environment update
plan the propagation loop must execute before evaluating them.

Assembly is all-or-nothing: every referenced body is validated before any
model is built, and the first error raised while building propagates
unchanged, without returning a partial map.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import NamedTuple

from astroaccel.accelerations.builders import create_acceleration_model
from astroaccel.accelerations.models import AccelerationModel
from astroaccel.accelerations.ordering import order_selected_acceleration_map
from astroaccel.accelerations.settings import (
    AccelerationSettings,
    SelectedAccelerationMap,
    ThrustDirectionType,
    ThrustMagnitudeType,
    ThrustSettings,
)
from astroaccel.accelerations.updates import (
    EnvironmentUpdatePlan,
    create_acceleration_update_plan,
    merge_update_plans,
)
from astroaccel.errors import BodyNotFoundError, ConfigurationError
from astroaccel.frames import is_frame_inertial

logger = logging.getLogger(__name__)

AccelerationMap = dict[str, dict[str, list[AccelerationModel]]]
"""``{undergoing body: {exerting body: [model, ...]}}``."""


class AccelerationModelSetup(NamedTuple):
    """Result of :func:`create_acceleration_models`.

    Attributes:
        acceleration_map: Built models per undergoing and exerting body, in
            the (ordered) settings order.
        update_plan: Union of the environment updates of every model.
        update_plans_per_body: Union of the environment updates of the
            models acting on each undergoing body.
    """

    acceleration_map: AccelerationMap
    update_plan: EnvironmentUpdatePlan
    update_plans_per_body: dict[str, EnvironmentUpdatePlan]


def _bodies_named_by_settings(settings: AccelerationSettings) -> Iterator[tuple[str, str]]:
    """Yield ``(body name, role)`` for each body *settings* looks up while building."""
    if not isinstance(settings, ThrustSettings):
        return
    if settings.interpolator is not None and not is_frame_inertial(settings.central_body):
        yield settings.central_body, "thrust frame central body"
    direction = settings.direction_settings
    if direction is not None and direction.direction_type is ThrustDirectionType.COLINEAR_WITH_STATE:
        yield direction.relative_body, "thrust direction relative body"
    magnitude = settings.magnitude_settings
    if magnitude is not None and magnitude.magnitude_type is ThrustMagnitudeType.FROM_FLIGHT_CONDITIONS:
        yield magnitude.central_body, "thrust magnitude central body"


def _validate_bodies(
    bodies,
    selected: SelectedAccelerationMap,
    central_bodies: Mapping[str, str],
) -> None:
    for name_undergoing, per_exerting in selected.items():
        if name_undergoing not in bodies:
            raise BodyNotFoundError(
                f"Error when making acceleration models: requested forces acting on "
                f"{name_undergoing}, but no such body found in the body registry.",
                name_undergoing,
            )
        if name_undergoing not in central_bodies:
            raise ConfigurationError(
                f"Error when making acceleration models: no central body given for {name_undergoing}."
            )
        name_central_body = central_bodies[name_undergoing]
        if not is_frame_inertial(name_central_body) and name_central_body not in bodies:
            raise BodyNotFoundError(
                f"Error when making acceleration models: could not find non-inertial "
                f"central body {name_central_body} of {name_undergoing}.",
                name_central_body,
            )
        for name_exerting, settings_list in per_exerting.items():
            if name_exerting not in bodies:
                raise BodyNotFoundError(
                    f"Error when making acceleration models: requested forces acting on "
                    f"{name_undergoing} due to {name_exerting}, but no such body found "
                    f"in the body registry.",
                    name_exerting,
                )
            for settings in settings_list:
                for name_referenced, role in _bodies_named_by_settings(settings):
                    if name_referenced not in bodies:
                        raise BodyNotFoundError(
                            f"Error when making {settings.acceleration_type.value} acceleration "
                            f"of {name_undergoing} due to {name_exerting}: {role} "
                            f"{name_referenced} not found in the body registry.",
                            name_referenced,
                        )


def create_acceleration_models(
    bodies,
    selected_acceleration_map: SelectedAccelerationMap,
    central_bodies: Mapping[str, str],
) -> AccelerationModelSetup:
    """Create the acceleration models of a simulation.

    Gravitational accelerations are built as third-body accelerations when
    the undergoing body's central body is neither the exerting body nor an
    inertial frame (see
    :func:`~astroaccel.accelerations.builders.create_gravitational_acceleration_model`).
    Within each body pair, the aerodynamic acceleration is built before any
    thrust acceleration.

    Args:
        bodies: :class:`~astroaccel.environment.BodyRegistry` (or any
            mapping of names to bodies).
        selected_acceleration_map: ``{undergoing: {exerting: [settings]}}``.
        central_bodies: Central body (or inertial frame name such as
            ``"SSB"``) of every undergoing body.

    Returns:
        AccelerationModelSetup: Acceleration map and environment update
        plans.

    Raises:
        BodyNotFoundError: If an undergoing, exerting or non-inertial central
            body, or a body named by thrust settings, is not in *bodies*.
            Raised before any model is built.
        ConfigurationError: If an undergoing body has no central body, or
            for invalid settings or orderings.
        MissingCapabilityError: If a body lacks an environment model that an
            acceleration requires.
        FrameMismatchError: If a rotation model and gravity field disagree
            on the body-fixed frame.

    Examples:
        ```python
        from astroaccel.accelerations import (
            CentralGravitySettings, create_acceleration_models,
        )
        setup = create_acceleration_models(
            bodies, {"Satellite": {"Earth": [CentralGravitySettings()]}}, {"Satellite": "Earth"}
        )
        setup.acceleration_map["Satellite"]["Earth"][0].update_members(0.0)
        ```
    """
    _validate_bodies(bodies, selected_acceleration_map, central_bodies)
    ordered = order_selected_acceleration_map(selected_acceleration_map)

    acceleration_map: AccelerationMap = {}
    update_plans_per_body: dict[str, EnvironmentUpdatePlan] = {}
    n_models = 0

    for name_undergoing, per_exerting in ordered.items():
        name_central_body = central_bodies[name_undergoing]
        models_for_body: dict[str, list[AccelerationModel]] = {}
        body_plan = EnvironmentUpdatePlan()

        for name_exerting, settings_list in per_exerting.items():
            models = models_for_body.setdefault(name_exerting, [])
            for settings in settings_list:
                model = create_acceleration_model(
                    bodies, settings, name_undergoing, name_exerting, name_central_body
                )
                body_plan.merge(create_acceleration_update_plan(model))
                models.append(model)
                n_models += 1

        acceleration_map[name_undergoing] = models_for_body
        update_plans_per_body[name_undergoing] = body_plan

    update_plan = merge_update_plans(update_plans_per_body.values())

    logger.info(
        "Created %d acceleration models acting on %d bodies", n_models, len(acceleration_map)
    )
    return AccelerationModelSetup(acceleration_map, update_plan, update_plans_per_body)
