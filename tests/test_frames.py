"""Tests for frame classification and local orbital frame rotations."""

import jax
import jax.numpy as jnp
import pytest

from astroaccel.constants import GM_EARTH, R_EARTH
from astroaccel.frames import (
    is_frame_inertial,
    rotation_lvlh_to_inertial,
    rotation_rtn_to_inertial,
)


def _leo_state(alt_km: float = 500.0) -> jnp.ndarray:
    """Circular equatorial LEO state at given altitude."""
    sma = R_EARTH + alt_km * 1e3
    v_circ = float(jnp.sqrt(GM_EARTH / sma))
    return jnp.array([sma, 0.0, 0.0, 0.0, v_circ, 0.0])


class TestIsFrameInertial:
    @pytest.mark.parametrize("frame", ["SSB", "Inertial", ""])
    def test_inertial_names(self, frame):
        assert is_frame_inertial(frame)

    @pytest.mark.parametrize("frame", ["Earth", "Moon", "ssb"])
    def test_body_names(self, frame):
        assert not is_frame_inertial(frame)


class TestRotationRtnToInertial:
    def test_axes_for_equatorial_orbit(self):
        R = rotation_rtn_to_inertial(_leo_state(), jnp.zeros(6))
        assert jnp.allclose(R[:, 0], jnp.array([1.0, 0.0, 0.0]))
        assert jnp.allclose(R[:, 1], jnp.array([0.0, 1.0, 0.0]))
        assert jnp.allclose(R[:, 2], jnp.array([0.0, 0.0, 1.0]))

    def test_orthonormal(self):
        state = jnp.array([7000e3, 1000e3, -500e3, 100.0, 7.4e3, 1.2e3])
        R = rotation_rtn_to_inertial(state, jnp.zeros(6))
        assert jnp.allclose(R.T @ R, jnp.eye(3), atol=1e-12)
        assert float(jnp.linalg.det(R)) == pytest.approx(1.0)

    def test_relative_to_moving_central_body(self):
        """Only the relative state defines the frame."""
        offset = jnp.array([1e9, -2e9, 3e8, 1e3, 2e3, -5e2])
        R_origin = rotation_rtn_to_inertial(_leo_state(), jnp.zeros(6))
        R_offset = rotation_rtn_to_inertial(_leo_state() + offset, offset)
        assert jnp.allclose(R_origin, R_offset, atol=1e-9)

    def test_parallel_position_velocity_raises(self):
        state = jnp.array([7000e3, 0.0, 0.0, 1.0e3, 0.0, 0.0])
        with pytest.raises(ValueError, match="parallel"):
            rotation_rtn_to_inertial(state, jnp.zeros(6))


class TestRotationLvlhToInertial:
    def test_t_axis_along_velocity(self):
        R = rotation_lvlh_to_inertial(_leo_state(), jnp.zeros(6))
        assert jnp.allclose(R[:, 0], jnp.array([0.0, 1.0, 0.0]))

    def test_n_axis_points_away_from_central_body(self):
        R = rotation_lvlh_to_inertial(_leo_state(), jnp.zeros(6), True)
        assert jnp.allclose(R[:, 1], jnp.array([1.0, 0.0, 0.0]))
        assert jnp.allclose(R[:, 2], jnp.array([0.0, 0.0, -1.0]))

    def test_n_axis_points_towards_central_body(self):
        R = rotation_lvlh_to_inertial(_leo_state(), jnp.zeros(6), False)
        assert jnp.allclose(R[:, 1], jnp.array([-1.0, 0.0, 0.0]))
        assert jnp.allclose(R[:, 2], jnp.array([0.0, 0.0, 1.0]))

    def test_right_handed(self):
        state = jnp.array([7000e3, 1000e3, -500e3, 100.0, 7.4e3, 1.2e3])
        for n_away in (True, False):
            R = rotation_lvlh_to_inertial(state, jnp.zeros(6), n_away)
            assert jnp.allclose(R.T @ R, jnp.eye(3), atol=1e-12)
            assert float(jnp.linalg.det(R)) == pytest.approx(1.0)


class TestJitCompatibility:
    def test_jit_rotation_rtn_to_inertial(self):
        """rotation_rtn_to_inertial is JIT-compilable."""
        R_eager = rotation_rtn_to_inertial(_leo_state(), jnp.zeros(6))
        R_jit = jax.jit(rotation_rtn_to_inertial)(_leo_state(), jnp.zeros(6))
        assert jnp.allclose(R_eager, R_jit, atol=1e-12)

    def test_jit_rotation_lvlh_to_inertial(self):
        """rotation_lvlh_to_inertial is JIT-compilable."""
        state = jnp.array([7000e3, 1000e3, -500e3, 100.0, 7.4e3, 1.2e3])
        rotation = jax.jit(rotation_lvlh_to_inertial, static_argnames="n_axis_points_away_from_central_body")
        for n_away in (True, False):
            R_eager = rotation_lvlh_to_inertial(state, jnp.zeros(6), n_away)
            R_jit = rotation(state, jnp.zeros(6), n_axis_points_away_from_central_body=n_away)
            assert jnp.allclose(R_eager, R_jit, atol=1e-12)

    def test_jit_parallel_position_velocity_gives_nan(self):
        state = jnp.array([7000e3, 0.0, 0.0, 1.0e3, 0.0, 0.0])
        assert jnp.all(jnp.isnan(jax.jit(rotation_rtn_to_inertial)(state, jnp.zeros(6))))
        assert jnp.all(jnp.isnan(jax.jit(rotation_lvlh_to_inertial)(state, jnp.zeros(6))))
