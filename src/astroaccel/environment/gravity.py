"""Gravity field models and their acceleration kernels.

Provides the two gravity field capabilities a :class:`~astroaccel.environment.Body`
can own:

- :class:`GravityFieldModel`: point-mass field, only a gravitational parameter.
- :class:`SphericalHarmonicsGravityField`: point-mass field extended with
  Stokes coefficients (C_nm, S_nm), a reference radius and the name of the
  body-fixed frame the coefficients are expressed in.

and the acceleration kernels the gravity acceleration models evaluate:

- :func:`accel_point_mass`
- :func:`accel_spherical_harmonics`

All inputs and outputs use SI base units (metres, metres/second squared).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 56-68.
"""

from __future__ import annotations

import math
from pathlib import Path

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype


class GravityFieldModel:
    """Point-mass gravity field.

    The gravitational parameter is read through
    :meth:`get_gravitational_parameter` every time an acceleration is
    evaluated, so updating it (e.g. during estimation) is seen by every
    model built on this field.

    Args:
        gravitational_parameter: Gravitational parameter [m^3/s^2].
    """

    def __init__(self, gravitational_parameter: float):
        self.gravitational_parameter = gravitational_parameter

    def get_gravitational_parameter(self) -> float:
        """Return the current gravitational parameter [m^3/s^2]."""
        return self.gravitational_parameter

    def update(self, time: float) -> None:
        """Refresh time-variable field properties at *time*.

        Fields in this module are static, so this is a no-op; subclasses with
        time-variable coefficients override it.
        """

    def __repr__(self) -> str:
        return f"GravityFieldModel(gm={self.gravitational_parameter:.6e})"


class SphericalHarmonicsGravityField(GravityFieldModel):
    """Spherical harmonic gravity field.

    Coefficients are stored as two lower-triangular matrices,
    ``cosine_coefficients[n, m] = C_nm`` and ``sine_coefficients[n, m] = S_nm``.

    Args:
        gravitational_parameter: Gravitational parameter [m^3/s^2].
        reference_radius: Reference radius of the expansion [m].
        cosine_coefficients: C_nm matrix, shape ``(N+1, M+1)``.
        sine_coefficients: S_nm matrix, same shape as the cosine matrix.
        fixed_reference_frame: Name of the body-fixed frame in which the
            coefficients are defined (e.g. ``"IAU_Earth"``).
        normalization: ``"fully_normalized"`` or ``"unnormalized"``.

    Raises:
        ValueError: If the coefficient matrices have different shapes.

    Examples:
        ```python
        import numpy as np
        from astroaccel.constants import GM_EARTH, R_EARTH
        from astroaccel.environment import SphericalHarmonicsGravityField
        C = np.zeros((5, 5)); C[0, 0] = 1.0; C[2, 0] = -4.84165e-4
        field = SphericalHarmonicsGravityField(
            GM_EARTH, R_EARTH, C, np.zeros((5, 5)), "IAU_Earth")
        field.max_degree
        ```
    """

    def __init__(
        self,
        gravitational_parameter: float,
        reference_radius: float,
        cosine_coefficients: ArrayLike,
        sine_coefficients: ArrayLike,
        fixed_reference_frame: str,
        normalization: str = "fully_normalized",
    ):
        super().__init__(gravitational_parameter)
        cosine = np.asarray(cosine_coefficients, dtype=np.float64)
        sine = np.asarray(sine_coefficients, dtype=np.float64)
        if cosine.ndim != 2 or cosine.shape != sine.shape:
            raise ValueError(
                f"Cosine and sine coefficient matrices must be 2-D with equal "
                f"shapes, got {cosine.shape} and {sine.shape}."
            )
        self.reference_radius = reference_radius
        self.cosine_coefficients = cosine
        self.sine_coefficients = sine
        self.fixed_reference_frame = fixed_reference_frame
        self.normalization = normalization

    @property
    def max_degree(self) -> int:
        """Highest degree available in the coefficient matrices."""
        return self.cosine_coefficients.shape[0] - 1

    @property
    def max_order(self) -> int:
        """Highest order available in the coefficient matrices."""
        return self.cosine_coefficients.shape[1] - 1

    @property
    def is_normalized(self) -> bool:
        """Whether the coefficients are fully normalized."""
        return self.normalization == "fully_normalized"

    def get_reference_radius(self) -> float:
        """Return the reference radius [m]."""
        return self.reference_radius

    def get_fixed_reference_frame(self) -> str:
        """Return the name of the body-fixed frame of the coefficients."""
        return self.fixed_reference_frame

    def _check_bounds(self, max_degree: int, max_order: int) -> None:
        if max_order > max_degree:
            raise ValueError(
                f"Maximum order (m={max_order}) cannot exceed maximum degree "
                f"(n={max_degree})."
            )
        if max_degree > self.max_degree or max_order > self.max_order:
            raise ValueError(
                f"Requested (n={max_degree}, m={max_order}) exceeds field bounds "
                f"(n_max={self.max_degree}, m_max={self.max_order})."
            )

    def get_cosine_coefficients(self, max_degree: int, max_order: int) -> np.ndarray:
        """Cosine coefficients truncated to the requested degree and order.

        Args:
            max_degree: Maximum degree to return.
            max_order: Maximum order to return.

        Returns:
            np.ndarray: C_nm block, shape ``(max_degree+1, max_order+1)``.

        Raises:
            ValueError: If the request exceeds the field bounds or
                *max_order* > *max_degree*.
        """
        self._check_bounds(max_degree, max_order)
        return self.cosine_coefficients[: max_degree + 1, : max_order + 1].copy()

    def get_sine_coefficients(self, max_degree: int, max_order: int) -> np.ndarray:
        """Sine coefficients truncated to the requested degree and order.

        Args:
            max_degree: Maximum degree to return.
            max_order: Maximum order to return.

        Returns:
            np.ndarray: S_nm block, shape ``(max_degree+1, max_order+1)``.

        Raises:
            ValueError: If the request exceeds the field bounds or
                *max_order* > *max_degree*.
        """
        self._check_bounds(max_degree, max_order)
        return self.sine_coefficients[: max_degree + 1, : max_order + 1].copy()

    @classmethod
    def from_gfc(
        cls,
        filepath: str | Path,
        fixed_reference_frame: str,
    ) -> SphericalHarmonicsGravityField:
        """Load a field from an ICGEM GFC format file.

        Args:
            filepath: Path to the ``.gfc`` file.
            fixed_reference_frame: Body-fixed frame of the coefficients.

        Returns:
            SphericalHarmonicsGravityField: Loaded field.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If required header fields are missing.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Gravity field file not found: {filepath}")
        with open(filepath) as f:
            return cls._parse_gfc(f, fixed_reference_frame)

    @classmethod
    def _parse_gfc(cls, fileobj, fixed_reference_frame: str) -> SphericalHarmonicsGravityField:
        gm = 0.0
        radius = 0.0
        n_max = 0
        normalization = "fully_normalized"

        in_header = True
        lines = iter(fileobj)
        for line in lines:
            line = line.strip()
            if line.startswith("end_of_head"):
                in_header = False
                break

            parts = line.split()
            if len(parts) < 2:
                continue

            key = parts[0].lower()
            value = parts[-1]
            if key in ("earth_gravity_constant", "gravity_constant"):
                gm = float(value.replace("D", "e").replace("d", "e"))
            elif key == "radius":
                radius = float(value.replace("D", "e").replace("d", "e"))
            elif key == "max_degree":
                n_max = int(value)
            elif key in ("norm", "normalization"):
                normalization = value

        if in_header:
            raise ValueError("GFC file missing 'end_of_head' marker.")
        if gm == 0.0:
            raise ValueError("GFC header missing gravity constant.")
        if radius == 0.0:
            raise ValueError("GFC header missing 'radius'.")
        if n_max == 0:
            raise ValueError("GFC header missing 'max_degree'.")

        cosine = np.zeros((n_max + 1, n_max + 1), dtype=np.float64)
        sine = np.zeros((n_max + 1, n_max + 1), dtype=np.float64)

        for line in lines:
            line = line.strip()
            if not line.startswith("gfc"):
                continue

            # gfc  n  m  C  S  [sig_C  sig_S]
            parts = line.replace("D", "e").replace("d", "e").split()
            n = int(parts[1])
            m = int(parts[2])
            if n <= n_max and m <= n_max:
                cosine[n, m] = float(parts[3])
                sine[n, m] = float(parts[4])

        return cls(
            gravitational_parameter=gm,
            reference_radius=radius,
            cosine_coefficients=cosine,
            sine_coefficients=sine,
            fixed_reference_frame=fixed_reference_frame,
            normalization=normalization,
        )

    def __repr__(self) -> str:
        return (
            f"SphericalHarmonicsGravityField(frame={self.fixed_reference_frame!r}, "
            f"n_max={self.max_degree}, m_max={self.max_order}, "
            f"gm={self.gravitational_parameter:.6e}, radius={self.reference_radius:.1f})"
        )


# ---------------------------------------------------------------------------
# Acceleration kernels
# ---------------------------------------------------------------------------


def accel_point_mass(
    r_undergoing: ArrayLike,
    r_exerting: ArrayLike,
    gm: float,
) -> Array:
    """Point-mass gravitational acceleration of one body due to another.

    Args:
        r_undergoing: Position of the body undergoing the acceleration [m].
            Shape ``(3,)`` or ``(6,)`` (only first 3 elements used).
        r_exerting: Position of the body exerting the acceleration [m].
        gm: Gravitational parameter to use [m^3/s^2].

    Returns:
        Acceleration vector [m/s^2], shape ``(3,)``.
    """
    _float = get_dtype()
    d = jnp.asarray(r_undergoing, dtype=_float)[:3] - jnp.asarray(r_exerting, dtype=_float)[:3]
    d_norm = jnp.linalg.norm(d)
    return -_float(gm) * d / d_norm**3


def _factorial_product(n: int, m: int) -> float:
    """Compute (n-m)!/(n+m)! without full factorials."""
    p = 1.0
    for i in range(n - m + 1, n + m + 1):
        p /= i
    return p


def accel_spherical_harmonics(
    r_relative: ArrayLike,
    rotation_to_inertial: ArrayLike,
    cosine_coefficients: ArrayLike,
    sine_coefficients: ArrayLike,
    reference_radius: float,
    gm: float,
    is_normalized: bool = True,
) -> Array:
    """Acceleration from a spherical harmonic gravity field expansion.

    The position relative to the field's body is rotated into the body-fixed
    frame, the acceleration is computed there with the V/W recursion and
    rotated back.  Degree and order are taken from the coefficient shapes,
    so they are static Python ints under ``jax.jit``.

    Args:
        r_relative: Position of the attracted point relative to the field's
            body, inertial frame [m].  Shape ``(3,)``.
        rotation_to_inertial: Rotation matrix from the body-fixed frame to
            the inertial frame, shape ``(3, 3)``.
        cosine_coefficients: C_nm, shape ``(n_max+1, m_max+1)``.
        sine_coefficients: S_nm, same shape.
        reference_radius: Reference radius [m].
        gm: Gravitational parameter [m^3/s^2].
        is_normalized: Whether the coefficients are fully normalized.

    Returns:
        Acceleration in the inertial frame [m/s^2], shape ``(3,)``.
    """
    _float = get_dtype()
    r = jnp.asarray(r_relative, dtype=_float)[:3]
    R = jnp.asarray(rotation_to_inertial, dtype=_float)
    C = jnp.asarray(cosine_coefficients, dtype=_float)
    S = jnp.asarray(sine_coefficients, dtype=_float)
    n_max = C.shape[0] - 1
    m_max = C.shape[1] - 1

    a_bf = _compute_spherical_harmonics(
        R.T @ r, C, S, n_max, m_max, reference_radius, gm, is_normalized
    )
    return R @ a_bf


def _compute_spherical_harmonics(
    r_bf: Array,
    C: Array,
    S: Array,
    n_max: int,
    m_max: int,
    r_ref: float,
    gm: float,
    is_normalized: bool,
) -> Array:
    """Core V/W recursion (Montenbruck & Gill, p. 66-68) in the body-fixed frame."""
    r_sqr = jnp.dot(r_bf, r_bf)
    rho = r_ref * r_ref / r_sqr

    x0 = r_ref * r_bf[0] / r_sqr
    y0 = r_ref * r_bf[1] / r_sqr
    z0 = r_ref * r_bf[2] / r_sqr

    size = n_max + 2
    V = jnp.zeros((size, size), dtype=r_bf.dtype)
    W = jnp.zeros((size, size), dtype=r_bf.dtype)

    # Zonal terms V(n,0); W(n,0) = 0
    V = V.at[0, 0].set(r_ref / jnp.sqrt(r_sqr))
    V = V.at[1, 0].set(z0 * V[0, 0])
    for n in range(2, n_max + 2):
        V = V.at[n, 0].set(
            ((2.0 * n - 1.0) * z0 * V[n - 1, 0] - (n - 1.0) * rho * V[n - 2, 0]) / n
        )

    # Tesseral and sectorial terms
    for m in range(1, m_max + 2):
        V = V.at[m, m].set((2.0 * m - 1.0) * (x0 * V[m - 1, m - 1] - y0 * W[m - 1, m - 1]))
        W = W.at[m, m].set((2.0 * m - 1.0) * (x0 * W[m - 1, m - 1] + y0 * V[m - 1, m - 1]))

        if m <= n_max:
            V = V.at[m + 1, m].set((2.0 * m + 1.0) * z0 * V[m, m])
            W = W.at[m + 1, m].set((2.0 * m + 1.0) * z0 * W[m, m])

        for n in range(m + 2, n_max + 2):
            V = V.at[n, m].set(
                ((2.0 * n - 1.0) * z0 * V[n - 1, m] - (n + m - 1.0) * rho * V[n - 2, m]) / (n - m)
            )
            W = W.at[n, m].set(
                ((2.0 * n - 1.0) * z0 * W[n - 1, m] - (n + m - 1.0) * rho * W[n - 2, m]) / (n - m)
            )

    ax = jnp.zeros((), dtype=r_bf.dtype)
    ay = ax
    az = ax

    for m in range(m_max + 1):
        for n in range(m, n_max + 1):
            if m == 0:
                c = math.sqrt(2.0 * n + 1.0) * C[n, 0] if is_normalized else C[n, 0]
                ax = ax - c * V[n + 1, 1]
                ay = ay - c * W[n + 1, 1]
                az = az - (n + 1.0) * c * V[n + 1, 0]
            else:
                if is_normalized:
                    N = math.sqrt(2.0 * (2.0 * n + 1.0) * _factorial_product(n, m))
                    c = N * C[n, m]
                    s = N * S[n, m]
                else:
                    c = C[n, m]
                    s = S[n, m]

                fac = 0.5 * (n - m + 1.0) * (n - m + 2.0)
                ax = ax + (
                    0.5 * (-c * V[n + 1, m + 1] - s * W[n + 1, m + 1])
                    + fac * (c * V[n + 1, m - 1] + s * W[n + 1, m - 1])
                )
                ay = ay + (
                    0.5 * (-c * W[n + 1, m + 1] + s * V[n + 1, m + 1])
                    + fac * (-c * W[n + 1, m - 1] + s * V[n + 1, m - 1])
                )
                az = az + (n - m + 1.0) * (-c * V[n + 1, m] - s * W[n + 1, m])

    return (gm / (r_ref * r_ref)) * jnp.array([ax, ay, az])
