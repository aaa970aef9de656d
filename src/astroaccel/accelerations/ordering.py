"""Build order of accelerations within one body pair.

Thrust models may read flight conditions that are attached to the vehicle
when its aerodynamic acceleration is built, so within a body pair the
aerodynamic acceleration is built before any thrust acceleration.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from astroaccel.accelerations.settings import (
    AccelerationSettings,
    AccelerationType,
    SelectedAccelerationMap,
)
from astroaccel.errors import ConfigurationError

logger = logging.getLogger(__name__)


def order_acceleration_settings(
    settings: Sequence[AccelerationSettings],
    name_undergoing: str = "",
    name_exerting: str = "",
) -> list[AccelerationSettings]:
    """Reorder one pair's settings so aerodynamic precedes thrust.

    A pair may combine thrust with at most one aerodynamic entry.  If that
    entry comes after a thrust entry it is swapped with the first thrust
    entry; every other entry keeps its position.  The input is left
    unchanged.

    Args:
        settings: Settings of one ``(undergoing, exerting)`` pair.
        name_undergoing: Name of the undergoing body, for messages.
        name_exerting: Name of the exerting body, for messages.

    Returns:
        list[AccelerationSettings]: Settings in build order.

    Raises:
        ConfigurationError: If thrust is combined with more than one
            aerodynamic entry.

    Examples:
        ```python
        from astroaccel.accelerations import (
            AerodynamicSettings, ThrustSettings, order_acceleration_settings,
        )
        order_acceleration_settings([ThrustSettings(), AerodynamicSettings()])
        # [AerodynamicSettings(), ThrustSettings(...)]
        ```
    """
    ordered = list(settings)
    aerodynamic = [i for i, s in enumerate(ordered) if s.acceleration_type is AccelerationType.AERODYNAMIC]
    thrust = [i for i, s in enumerate(ordered) if s.acceleration_type is AccelerationType.THRUST]

    if not aerodynamic or not thrust:
        return ordered

    if len(aerodynamic) > 1:
        raise ConfigurationError(
            f"Cannot combine {len(aerodynamic)} aerodynamic accelerations of {name_undergoing} "
            f"due to {name_exerting} with thrust; at most one aerodynamic acceleration "
            f"is supported alongside thrust."
        )

    i_aero, i_thrust = aerodynamic[0], thrust[0]
    if i_aero > i_thrust:
        ordered[i_aero], ordered[i_thrust] = ordered[i_thrust], ordered[i_aero]
        logger.debug(
            "Moved aerodynamic acceleration of %s due to %s before thrust", name_undergoing, name_exerting
        )
    return ordered


def order_selected_acceleration_map(selected: SelectedAccelerationMap) -> SelectedAccelerationMap:
    """Apply :func:`order_acceleration_settings` to every pair of *selected*."""
    return {
        name_undergoing: {
            name_exerting: order_acceleration_settings(settings, name_undergoing, name_exerting)
            for name_exerting, settings in per_exerting.items()
        }
        for name_undergoing, per_exerting in selected.items()
    }
