"""Acceleration settings: the declarative description of a simulation's forces.

A *selected acceleration map* states, for every body undergoing an
acceleration, which bodies exert which kinds of acceleration on it::

    {"Satellite": {"Earth": [SphericalHarmonicGravitySettings(4, 4),
                             AerodynamicSettings()],
                   "Moon": [CentralGravitySettings()]}}

The settings classes form a closed family.  Each is a frozen dataclass
carrying its :class:`AccelerationType` as a class attribute, so the type
tag always agrees with the concrete settings class.  Validation that only
depends on the settings themselves is done in ``__post_init__`` (raising
``ValueError``); validation against the bodies happens in the builders.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from jax.typing import ArrayLike

if TYPE_CHECKING:
    from astroaccel.accelerations.thrust import ThrustInterpolatorInterface
    from astroaccel.environment.aerodynamics import FlightConditions


class AccelerationType(enum.Enum):
    """Kinds of acceleration the builders can create."""

    CENTRAL_GRAVITY = "central_gravity"
    SPHERICAL_HARMONIC_GRAVITY = "spherical_harmonic_gravity"
    MUTUAL_SPHERICAL_HARMONIC_GRAVITY = "mutual_spherical_harmonic_gravity"
    AERODYNAMIC = "aerodynamic"
    CANNONBALL_RADIATION_PRESSURE = "cannonball_radiation_pressure"
    THRUST = "thrust"


GRAVITATIONAL_ACCELERATION_TYPES = frozenset(
    {
        AccelerationType.CENTRAL_GRAVITY,
        AccelerationType.SPHERICAL_HARMONIC_GRAVITY,
        AccelerationType.MUTUAL_SPHERICAL_HARMONIC_GRAVITY,
    }
)
"""Acceleration types built as direct or third-body gravity."""


def _check_degree_order(degree: int, order: int, label: str) -> None:
    if degree < 0 or order < 0:
        raise ValueError(f"{label} degree and order must be non-negative, got ({degree}, {order})")
    if order > degree:
        raise ValueError(f"{label} order must not exceed degree, got ({degree}, {order})")


@dataclass(frozen=True)
class AccelerationSettings:
    """Base class of all acceleration settings."""

    acceleration_type: ClassVar[AccelerationType]

    @property
    def is_gravitational(self) -> bool:
        return self.acceleration_type in GRAVITATIONAL_ACCELERATION_TYPES


# ---------------------------------------------------------------------------
# Gravity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CentralGravitySettings(AccelerationSettings):
    """Point-mass gravity of the exerting body."""

    acceleration_type: ClassVar[AccelerationType] = AccelerationType.CENTRAL_GRAVITY


@dataclass(frozen=True)
class SphericalHarmonicGravitySettings(AccelerationSettings):
    """Spherical harmonic gravity of the exerting body.

    Args:
        maximum_degree: Maximum degree of the expansion.
        maximum_order: Maximum order of the expansion.

    Examples:
        ```python
        from astroaccel.accelerations import SphericalHarmonicGravitySettings
        settings = SphericalHarmonicGravitySettings(maximum_degree=4, maximum_order=4)
        ```
    """

    acceleration_type: ClassVar[AccelerationType] = AccelerationType.SPHERICAL_HARMONIC_GRAVITY

    maximum_degree: int
    maximum_order: int

    def __post_init__(self) -> None:
        _check_degree_order(self.maximum_degree, self.maximum_order, "Spherical harmonic")


@dataclass(frozen=True)
class MutualSphericalHarmonicGravitySettings(AccelerationSettings):
    """Mutual spherical harmonic gravity between two extended bodies.

    The acceleration includes the exerting body's field acting on the
    undergoing body and the reaction to the undergoing body's field acting on
    the exerting body.  When the acceleration is built as a third-body
    acceleration, the central body takes the role of the undergoing body in
    the central-body term, using the ``*_of_central_body`` degree and order.

    Args:
        maximum_degree_of_body_exerting: Degree of the exerting body's field.
        maximum_order_of_body_exerting: Order of the exerting body's field.
        maximum_degree_of_body_undergoing: Degree of the undergoing body's
            field.
        maximum_order_of_body_undergoing: Order of the undergoing body's field.
        maximum_degree_of_central_body: Degree of the central body's field,
            used for third-body accelerations only.
        maximum_order_of_central_body: Order of the central body's field,
            used for third-body accelerations only.
    """

    acceleration_type: ClassVar[AccelerationType] = (
        AccelerationType.MUTUAL_SPHERICAL_HARMONIC_GRAVITY
    )

    maximum_degree_of_body_exerting: int
    maximum_order_of_body_exerting: int
    maximum_degree_of_body_undergoing: int
    maximum_order_of_body_undergoing: int
    maximum_degree_of_central_body: int = 0
    maximum_order_of_central_body: int = 0

    def __post_init__(self) -> None:
        _check_degree_order(
            self.maximum_degree_of_body_exerting, self.maximum_order_of_body_exerting, "Exerting body"
        )
        _check_degree_order(
            self.maximum_degree_of_body_undergoing,
            self.maximum_order_of_body_undergoing,
            "Undergoing body",
        )
        _check_degree_order(
            self.maximum_degree_of_central_body, self.maximum_order_of_central_body, "Central body"
        )


# ---------------------------------------------------------------------------
# Surface forces
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AerodynamicSettings(AccelerationSettings):
    """Aerodynamic acceleration from the exerting body's atmosphere."""

    acceleration_type: ClassVar[AccelerationType] = AccelerationType.AERODYNAMIC


@dataclass(frozen=True)
class CannonballRadiationPressureSettings(AccelerationSettings):
    """Cannonball radiation pressure from the exerting (source) body."""

    acceleration_type: ClassVar[AccelerationType] = AccelerationType.CANNONBALL_RADIATION_PRESSURE


# ---------------------------------------------------------------------------
# Thrust
# ---------------------------------------------------------------------------


class ThrustFrame(enum.Enum):
    """Frame in which an interpolated thrust vector is expressed."""

    UNSPECIFIED = "unspecified"
    INERTIAL = "inertial"
    LVLH = "lvlh"
    RTN = "rtn"


class ThrustDirectionType(enum.Enum):
    """How the thrust direction is determined."""

    COLINEAR_WITH_STATE = "colinear_with_state"
    FROM_EXISTING_BODY_ORIENTATION = "from_existing_body_orientation"
    CUSTOM = "custom"
    INTERPOLATED = "interpolated"


class ThrustMagnitudeType(enum.Enum):
    """How the thrust magnitude is determined."""

    CONSTANT = "constant"
    FROM_FUNCTION = "from_function"
    FROM_FLIGHT_CONDITIONS = "from_flight_conditions"
    INTERPOLATED = "interpolated"


@dataclass(frozen=True)
class ThrustDirectionSettings:
    """Thrust direction guidance settings.

    Use the ``colinear_with_state``, ``from_existing_body_orientation``,
    ``custom`` and ``interpolated`` constructors rather than filling the
    fields by hand.

    Args:
        direction_type: Kind of guidance.
        relative_body: Body whose relative state sets the direction
            (``COLINEAR_WITH_STATE``).
        is_colinear_with_velocity: Align with relative velocity rather than
            relative position (``COLINEAR_WITH_STATE``).
        direction_is_opposite_to_vector: Thrust against the state vector
            (``COLINEAR_WITH_STATE``).
        direction_function: ``f(time) -> (3,)`` inertial direction
            (``CUSTOM``).
        interpolator: Thrust interpolator providing the direction
            (``INTERPOLATED``).
    """

    direction_type: ThrustDirectionType
    relative_body: str = ""
    is_colinear_with_velocity: bool = True
    direction_is_opposite_to_vector: bool = False
    direction_function: Callable[[float], ArrayLike] | None = None
    interpolator: ThrustInterpolatorInterface | None = None

    def __post_init__(self) -> None:
        if self.direction_type is ThrustDirectionType.CUSTOM and self.direction_function is None:
            raise ValueError("Custom thrust direction requires a direction_function")
        if self.direction_type is ThrustDirectionType.INTERPOLATED and self.interpolator is None:
            raise ValueError("Interpolated thrust direction requires an interpolator")
        if self.direction_type is ThrustDirectionType.COLINEAR_WITH_STATE and not self.relative_body:
            raise ValueError("Thrust direction colinear with state requires a relative_body")

    @staticmethod
    def colinear_with_state(
        relative_body: str,
        is_colinear_with_velocity: bool = True,
        direction_is_opposite_to_vector: bool = False,
    ) -> ThrustDirectionSettings:
        """Thrust along the vehicle's position or velocity relative to *relative_body*."""
        return ThrustDirectionSettings(
            ThrustDirectionType.COLINEAR_WITH_STATE,
            relative_body=relative_body,
            is_colinear_with_velocity=is_colinear_with_velocity,
            direction_is_opposite_to_vector=direction_is_opposite_to_vector,
        )

    @staticmethod
    def from_existing_body_orientation() -> ThrustDirectionSettings:
        """Thrust fixed in the vehicle's body frame, using its current orientation."""
        return ThrustDirectionSettings(ThrustDirectionType.FROM_EXISTING_BODY_ORIENTATION)

    @staticmethod
    def custom(direction_function: Callable[[float], ArrayLike]) -> ThrustDirectionSettings:
        """Thrust along ``direction_function(time)`` in the inertial frame."""
        return ThrustDirectionSettings(
            ThrustDirectionType.CUSTOM, direction_function=direction_function
        )

    @staticmethod
    def interpolated(interpolator: ThrustInterpolatorInterface) -> ThrustDirectionSettings:
        return ThrustDirectionSettings(ThrustDirectionType.INTERPOLATED, interpolator=interpolator)


@dataclass(frozen=True)
class ThrustMagnitudeSettings:
    """Thrust magnitude and engine settings.

    Args:
        magnitude_type: Kind of magnitude model.
        thrust_magnitude: Constant thrust [N] (``CONSTANT``).
        specific_impulse: Specific impulse [s], sets the mass rate.
        magnitude_function: ``f(time) -> thrust [N]`` (``FROM_FUNCTION``) or
            ``f(flight_conditions) -> thrust [N]``
            (``FROM_FLIGHT_CONDITIONS``).
        central_body: Body whose atmosphere the flight conditions refer to
            (``FROM_FLIGHT_CONDITIONS``).
        interpolator: Thrust interpolator providing the magnitude
            (``INTERPOLATED``).
        body_fixed_thrust_direction: Thrust direction in the vehicle body
            frame, used with ``FROM_EXISTING_BODY_ORIENTATION`` guidance.
        thrust_origin_id: Name of the engine, for bookkeeping.
    """

    magnitude_type: ThrustMagnitudeType
    thrust_magnitude: float = 0.0
    specific_impulse: float = 300.0
    magnitude_function: Callable | None = None
    central_body: str = ""
    interpolator: ThrustInterpolatorInterface | None = None
    body_fixed_thrust_direction: tuple[float, float, float] = (1.0, 0.0, 0.0)
    thrust_origin_id: str = ""

    def __post_init__(self) -> None:
        if self.specific_impulse <= 0.0:
            raise ValueError(f"specific_impulse must be positive, got {self.specific_impulse}")
        if self.magnitude_type is ThrustMagnitudeType.CONSTANT and self.thrust_magnitude < 0.0:
            raise ValueError(f"thrust_magnitude must be non-negative, got {self.thrust_magnitude}")
        if (
            self.magnitude_type
            in (ThrustMagnitudeType.FROM_FUNCTION, ThrustMagnitudeType.FROM_FLIGHT_CONDITIONS)
            and self.magnitude_function is None
        ):
            raise ValueError(f"{self.magnitude_type.value} thrust magnitude requires a magnitude_function")
        if self.magnitude_type is ThrustMagnitudeType.FROM_FLIGHT_CONDITIONS and not self.central_body:
            raise ValueError("Thrust magnitude from flight conditions requires a central_body")
        if self.magnitude_type is ThrustMagnitudeType.INTERPOLATED and self.interpolator is None:
            raise ValueError("Interpolated thrust magnitude requires an interpolator")

    @staticmethod
    def constant(
        thrust_magnitude: float,
        specific_impulse: float,
        body_fixed_thrust_direction: tuple[float, float, float] = (1.0, 0.0, 0.0),
    ) -> ThrustMagnitudeSettings:
        """Constant thrust and specific impulse."""
        return ThrustMagnitudeSettings(
            ThrustMagnitudeType.CONSTANT,
            thrust_magnitude=thrust_magnitude,
            specific_impulse=specific_impulse,
            body_fixed_thrust_direction=body_fixed_thrust_direction,
        )

    @staticmethod
    def from_function(
        magnitude_function: Callable[[float], float],
        specific_impulse: float,
    ) -> ThrustMagnitudeSettings:
        return ThrustMagnitudeSettings(
            ThrustMagnitudeType.FROM_FUNCTION,
            magnitude_function=magnitude_function,
            specific_impulse=specific_impulse,
        )

    @staticmethod
    def from_flight_conditions(
        magnitude_function: Callable[[FlightConditions], float],
        specific_impulse: float,
        central_body: str,
    ) -> ThrustMagnitudeSettings:
        """Thrust as a function of the vehicle's flight conditions (e.g. air-breathing engines)."""
        return ThrustMagnitudeSettings(
            ThrustMagnitudeType.FROM_FLIGHT_CONDITIONS,
            magnitude_function=magnitude_function,
            specific_impulse=specific_impulse,
            central_body=central_body,
        )

    @staticmethod
    def interpolated(interpolator: ThrustInterpolatorInterface) -> ThrustMagnitudeSettings:
        return ThrustMagnitudeSettings(
            ThrustMagnitudeType.INTERPOLATED,
            specific_impulse=interpolator.specific_impulse,
            interpolator=interpolator,
        )


@dataclass(frozen=True)
class ThrustSettings(AccelerationSettings):
    """Thrust acceleration settings.

    Args:
        direction_settings: Thrust direction guidance settings.
        magnitude_settings: Thrust magnitude settings.
        interpolator: Interpolator providing the full thrust vector in
            *thrust_frame*, when thrust comes from a tabulated profile.
        thrust_frame: Frame of the interpolated thrust vector.
        central_body: Body relative to which the LVLH or RTN frame is
            defined.
        n_axis_points_away_from_central_body: LVLH convention: whether the
            ``n`` axis points away from the central body.

    Examples:
        ```python
        from astroaccel.accelerations import (
            ThrustDirectionSettings, ThrustMagnitudeSettings, ThrustSettings,
        )
        settings = ThrustSettings(
            ThrustDirectionSettings.colinear_with_state("Earth"),
            ThrustMagnitudeSettings.constant(1.0, 300.0),
        )
        ```
    """

    acceleration_type: ClassVar[AccelerationType] = AccelerationType.THRUST

    direction_settings: ThrustDirectionSettings | None = None
    magnitude_settings: ThrustMagnitudeSettings | None = None
    interpolator: ThrustInterpolatorInterface | None = None
    thrust_frame: ThrustFrame = ThrustFrame.UNSPECIFIED
    central_body: str = ""
    n_axis_points_away_from_central_body: bool = True

    @staticmethod
    def from_interpolator(
        interpolator: ThrustInterpolatorInterface,
        thrust_frame: ThrustFrame,
        central_body: str = "",
        n_axis_points_away_from_central_body: bool = True,
    ) -> ThrustSettings:
        """Thrust from a tabulated thrust vector expressed in *thrust_frame*.

        Both direction and magnitude are read from *interpolator*.
        """
        return ThrustSettings(
            direction_settings=ThrustDirectionSettings.interpolated(interpolator),
            magnitude_settings=ThrustMagnitudeSettings.interpolated(interpolator),
            interpolator=interpolator,
            thrust_frame=thrust_frame,
            central_body=central_body,
            n_axis_points_away_from_central_body=n_axis_points_away_from_central_body,
        )


SelectedAccelerationMap = dict[str, dict[str, list[AccelerationSettings]]]
"""``{undergoing body: {exerting body: [settings, ...]}}``."""
