"""Frame classification and local orbital frame rotations.

Provides:

- :func:`is_frame_inertial`: decide whether a named frame (or central body
  name) denotes an inertial frame.
- :func:`rotation_rtn_to_inertial`: rotation from the vehicle-centred
  Radial, Transverse, Normal (RTN) frame to the inertial frame.
- :func:`rotation_lvlh_to_inertial`: rotation from the velocity-based local
  vertical, local horizontal (LVLH) frame to the inertial frame.

The RTN frame is defined as:

- **R** (Radial): from the central body towards the vehicle.
- **T** (Transverse): in the orbital plane, completing the triad (N x R).
- **N** (Normal): along the relative angular-momentum vector.

The velocity-based LVLH frame is defined as:

- **T**: along the relative velocity.
- **N**: in the orbital plane, completing the triad (W x T).
- **W**: along the relative angular-momentum vector, or against it when the
  N axis is to point away from the central body.

All states are 6-element ``[x, y, z, vx, vy, vz]`` vectors in SI units.
Both rotations are JIT-compatible; under tracing a degenerate geometry
yields a NaN matrix instead of raising.

References:
    1. H. Schaub and J. Junkins, *Analytical Mechanics of Space Systems*,
       2nd ed., AIAA, 2009.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype

INERTIAL_FRAME_NAMES = frozenset({"SSB", "", "Inertial"})
"""Frame names treated as inertial (no rotating or accelerating origin)."""


def is_frame_inertial(frame: str) -> bool:
    """Return whether *frame* names an inertial frame.

    The solar-system barycentre (``"SSB"``), the explicit ``"Inertial"``
    frame and the empty name are inertial.  Any other name is taken to be a
    body, whose frame is not inertial.

    Args:
        frame: Frame or central-body name.

    Returns:
        bool: ``True`` if *frame* is inertial.

    Examples:
        ```python
        from astroaccel.frames import is_frame_inertial
        is_frame_inertial("SSB")    # True
        is_frame_inertial("Earth")  # False
        ```
    """
    return frame in INERTIAL_FRAME_NAMES


def _relative_state(
    vehicle_state: ArrayLike, central_body_state: ArrayLike
) -> tuple[Array, Array, Array, Array]:
    _float = get_dtype()
    x = jnp.asarray(vehicle_state, dtype=_float) - jnp.asarray(central_body_state, dtype=_float)
    r = x[:3]
    v = x[3:6]
    h = jnp.cross(r, v)
    h_norm = jnp.linalg.norm(h)

    try:
        degenerate = bool(h_norm == 0.0)
    except jax.errors.ConcretizationTypeError:
        # Traced input, masked with NaN by the caller
        degenerate = False
    if degenerate:
        raise ValueError(
            "Cannot define local orbital frame: relative position and "
            "velocity are parallel."
        )
    return r, v, h, h_norm


def rotation_rtn_to_inertial(
    vehicle_state: ArrayLike,
    central_body_state: ArrayLike,
) -> Array:
    """Rotation matrix from the RTN frame to the inertial frame.

    The columns of the returned matrix are the RTN unit vectors expressed in
    inertial coordinates: ``[r_hat | t_hat | n_hat]``.

    Args:
        vehicle_state: Inertial state of the vehicle [m; m/s].
        central_body_state: Inertial state of the central body [m; m/s].

    Returns:
        jax.Array: 3x3 rotation matrix (RTN -> inertial).

    Raises:
        ValueError: If the relative position and velocity are parallel
            (concrete inputs only; traced inputs give a NaN matrix).
    """
    r, v, h, h_norm = _relative_state(vehicle_state, central_body_state)

    r_hat = r / jnp.linalg.norm(r)
    n_hat = h / h_norm
    t_hat = jnp.cross(n_hat, r_hat)

    R = jnp.column_stack([r_hat, t_hat, n_hat])
    return jnp.where(h_norm > 0.0, R, jnp.nan)


def rotation_lvlh_to_inertial(
    vehicle_state: ArrayLike,
    central_body_state: ArrayLike,
    n_axis_points_away_from_central_body: bool = True,
) -> Array:
    """Rotation matrix from the velocity-based LVLH frame to the inertial frame.

    Args:
        vehicle_state: Inertial state of the vehicle [m; m/s].
        central_body_state: Inertial state of the central body [m; m/s].
        n_axis_points_away_from_central_body: If ``True`` the W axis is
            anti-parallel to the angular momentum, which makes the N axis
            point away from the central body.

    Returns:
        jax.Array: 3x3 rotation matrix (LVLH -> inertial), columns
        ``[t_hat | n_hat | w_hat]``.

    Raises:
        ValueError: If the relative position and velocity are parallel
            (concrete inputs only; traced inputs give a NaN matrix).
    """
    r, v, h, h_norm = _relative_state(vehicle_state, central_body_state)

    t_hat = v / jnp.linalg.norm(v)
    sign = -1.0 if n_axis_points_away_from_central_body else 1.0
    w_hat = sign * h / h_norm
    n_vec = jnp.cross(w_hat, t_hat)
    n_hat = n_vec / jnp.linalg.norm(n_vec)

    R = jnp.column_stack([t_hat, n_hat, w_hat])
    return jnp.where(h_norm > 0.0, R, jnp.nan)
