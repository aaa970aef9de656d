"""
astroaccel assembles the acceleration models of N-body orbit propagation, implemented in JAX.
"""

from .constants import (
    AU,
    R_EARTH,
    GM_EARTH,
    OMEGA_EARTH,
    RHO0_EARTH,
    H_EARTH,
    GM_SUN,
    P_SUN,
    GM_MOON,
    GM_JUPITER,
    G0,
)

from .config import set_dtype, get_dtype

from .errors import (
    AccelerationSetupError,
    ConfigurationError,
    MissingCapabilityError,
    BodyNotFoundError,
    FrameMismatchError,
)

from .frames import (
    is_frame_inertial,
    rotation_rtn_to_inertial,
    rotation_lvlh_to_inertial,
)

from .environment import (
    Body,
    BodyRegistry,
    GravityFieldModel,
    SphericalHarmonicsGravityField,
    SimpleRotationalEphemeris,
    ExponentialAtmosphere,
    SphericalBodyShape,
    AerodynamicCoefficientInterface,
    RadiationPressureInterface,
)

from .accelerations import (
    AccelerationType,
    CentralGravitySettings,
    SphericalHarmonicGravitySettings,
    MutualSphericalHarmonicGravitySettings,
    AerodynamicSettings,
    CannonballRadiationPressureSettings,
    ThrustDirectionSettings,
    ThrustMagnitudeSettings,
    ThrustSettings,
    ThrustFrame,
    ThrustInterpolatorInterface,
    ThirdBodyAcceleration,
    EnvironmentModelsToUpdate,
    EnvironmentUpdatePlan,
    AccelerationModelSetup,
    create_acceleration_models,
    order_acceleration_settings,
)

from .propagators import (
    determine_ephemeris_update_order,
    update_environment,
    evaluate_total_acceleration,
)

__all__ = [
    # Constants
    "AU",
    "R_EARTH",
    "GM_EARTH",
    "OMEGA_EARTH",
    "RHO0_EARTH",
    "H_EARTH",
    "GM_SUN",
    "P_SUN",
    "GM_MOON",
    "GM_JUPITER",
    "G0",
    # Config
    "set_dtype",
    "get_dtype",
    # Errors
    "AccelerationSetupError",
    "ConfigurationError",
    "MissingCapabilityError",
    "BodyNotFoundError",
    "FrameMismatchError",
    # Frames
    "is_frame_inertial",
    "rotation_rtn_to_inertial",
    "rotation_lvlh_to_inertial",
    # Environment
    "Body",
    "BodyRegistry",
    "GravityFieldModel",
    "SphericalHarmonicsGravityField",
    "SimpleRotationalEphemeris",
    "ExponentialAtmosphere",
    "SphericalBodyShape",
    "AerodynamicCoefficientInterface",
    "RadiationPressureInterface",
    # Accelerations
    "AccelerationType",
    "CentralGravitySettings",
    "SphericalHarmonicGravitySettings",
    "MutualSphericalHarmonicGravitySettings",
    "AerodynamicSettings",
    "CannonballRadiationPressureSettings",
    "ThrustDirectionSettings",
    "ThrustMagnitudeSettings",
    "ThrustSettings",
    "ThrustFrame",
    "ThrustInterpolatorInterface",
    "ThirdBodyAcceleration",
    "EnvironmentModelsToUpdate",
    "EnvironmentUpdatePlan",
    "AccelerationModelSetup",
    "create_acceleration_models",
    "order_acceleration_settings",
    # Propagation
    "determine_ephemeris_update_order",
    "update_environment",
    "evaluate_total_acceleration",
]
