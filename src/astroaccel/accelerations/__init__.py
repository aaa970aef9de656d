"""Acceleration settings, models and their assembly.

This sub-module provides:

- **Settings**: the closed family of acceleration settings making up a
  selected acceleration map.
- **Models**: acceleration models evaluated during propagation, including
  the third-body composite.
- **Thrust**: direction guidance, magnitude models and thrust
  interpolation.
- **Builders**: per-family builders and the settings dispatch.
- **Ordering**: aerodynamic-before-thrust build order.
- **Environment updates**: update categories and plans.
- **Assembly**: :func:`create_acceleration_models`, the entry point.
"""

from .assembly import AccelerationMap, AccelerationModelSetup, create_acceleration_models
from .builders import (
    create_acceleration_model,
    create_aerodynamic_acceleration,
    create_cannonball_radiation_pressure_acceleration,
    create_central_gravity_acceleration,
    create_direct_gravitational_acceleration,
    create_gravitational_acceleration_model,
    create_mutual_spherical_harmonic_gravity_acceleration,
    create_spherical_harmonic_gravity_acceleration,
    create_third_body_gravitational_acceleration,
    create_thrust_acceleration,
    resolve_gravitational_parameter,
)
from .models import (
    AccelerationModel,
    AerodynamicAcceleration,
    CannonballRadiationPressureAcceleration,
    CentralGravityAcceleration,
    MutualSphericalHarmonicsGravityAcceleration,
    SphericalHarmonicsGravityAcceleration,
    ThirdBodyAcceleration,
    ThrustAcceleration,
)
from .ordering import order_acceleration_settings, order_selected_acceleration_map
from .settings import (
    GRAVITATIONAL_ACCELERATION_TYPES,
    AccelerationSettings,
    AccelerationType,
    AerodynamicSettings,
    CannonballRadiationPressureSettings,
    CentralGravitySettings,
    MutualSphericalHarmonicGravitySettings,
    SelectedAccelerationMap,
    SphericalHarmonicGravitySettings,
    ThrustDirectionSettings,
    ThrustDirectionType,
    ThrustFrame,
    ThrustMagnitudeSettings,
    ThrustMagnitudeType,
    ThrustSettings,
)
from .thrust import (
    ThrustDirectionGuidance,
    ThrustInterpolatorInterface,
    ThrustMagnitudeWrapper,
    create_thrust_guidance,
    create_thrust_magnitude_wrapper,
)
from .updates import (
    EnvironmentModelsToUpdate,
    EnvironmentUpdatePlan,
    create_acceleration_update_plan,
    merge_update_plans,
)

__all__ = [
    # Settings
    "AccelerationType",
    "GRAVITATIONAL_ACCELERATION_TYPES",
    "AccelerationSettings",
    "CentralGravitySettings",
    "SphericalHarmonicGravitySettings",
    "MutualSphericalHarmonicGravitySettings",
    "AerodynamicSettings",
    "CannonballRadiationPressureSettings",
    "ThrustFrame",
    "ThrustDirectionType",
    "ThrustMagnitudeType",
    "ThrustDirectionSettings",
    "ThrustMagnitudeSettings",
    "ThrustSettings",
    "SelectedAccelerationMap",
    # Models
    "AccelerationModel",
    "CentralGravityAcceleration",
    "SphericalHarmonicsGravityAcceleration",
    "MutualSphericalHarmonicsGravityAcceleration",
    "ThirdBodyAcceleration",
    "AerodynamicAcceleration",
    "CannonballRadiationPressureAcceleration",
    "ThrustAcceleration",
    # Thrust
    "ThrustInterpolatorInterface",
    "ThrustDirectionGuidance",
    "ThrustMagnitudeWrapper",
    "create_thrust_guidance",
    "create_thrust_magnitude_wrapper",
    # Builders
    "resolve_gravitational_parameter",
    "create_central_gravity_acceleration",
    "create_spherical_harmonic_gravity_acceleration",
    "create_mutual_spherical_harmonic_gravity_acceleration",
    "create_direct_gravitational_acceleration",
    "create_third_body_gravitational_acceleration",
    "create_gravitational_acceleration_model",
    "create_aerodynamic_acceleration",
    "create_cannonball_radiation_pressure_acceleration",
    "create_thrust_acceleration",
    "create_acceleration_model",
    # Ordering
    "order_acceleration_settings",
    "order_selected_acceleration_map",
    # Environment updates
    "EnvironmentModelsToUpdate",
    "EnvironmentUpdatePlan",
    "create_acceleration_update_plan",
    "merge_update_plans",
    # Assembly
    "AccelerationMap",
    "AccelerationModelSetup",
    "create_acceleration_models",
]
