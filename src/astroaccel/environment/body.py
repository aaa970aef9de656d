"""Capability-bearing body records and the registry that owns them.

A :class:`Body` is a bag of optional environment models (gravity field,
atmosphere, shape, aerodynamic coefficients, radiation pressure interfaces,
rotational ephemeris) plus the current translational and rotational state.
Acceleration builders only *query* these capabilities; the only mutations
they perform are attaching flight conditions and a dependent orientation
calculator, both of which are idempotent.

:class:`BodyRegistry` is the single owner of all bodies in a simulation.
Acceleration models keep plain references to bodies in the registry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroaccel.config import get_dtype
from astroaccel.errors import BodyNotFoundError


class Body:
    """A body in the simulation environment.

    Every capability argument is optional; builders raise
    :class:`~astroaccel.errors.MissingCapabilityError` when an acceleration
    needs one that is absent.

    Args:
        state: Initial inertial state ``[x, y, z, vx, vy, vz]`` [m; m/s].
            Defaults to the origin at rest.
        mass: Body mass [kg].
        gravity_field_model: Point-mass or spherical harmonic gravity field.
        atmosphere_model: Atmosphere model (e.g. ``ExponentialAtmosphere``).
        shape_model: Shape model (e.g. ``SphericalBodyShape``).
        aerodynamic_coefficient_interface: Aerodynamic coefficients of this
            body as a vehicle.
        rotational_ephemeris: Orientation model of the body-fixed frame.
        ephemeris: Callable ``ephemeris(time) -> state`` giving the inertial
            state of a body that is not propagated.
        mass_function: Callable ``mass_function(time) -> mass`` for a body
            whose mass is not propagated.
    """

    def __init__(
        self,
        state: ArrayLike | None = None,
        mass: float | None = None,
        gravity_field_model=None,
        atmosphere_model=None,
        shape_model=None,
        aerodynamic_coefficient_interface=None,
        rotational_ephemeris=None,
        ephemeris: Callable[[float], ArrayLike] | None = None,
        mass_function: Callable[[float], float] | None = None,
    ):
        _float = get_dtype()
        self.state = jnp.zeros(6, dtype=_float) if state is None else jnp.asarray(state, dtype=_float)
        self.ephemeris = ephemeris
        self.mass = mass
        self.mass_function = mass_function
        self.gravity_field_model = gravity_field_model
        self.atmosphere_model = atmosphere_model
        self.shape_model = shape_model
        self.aerodynamic_coefficient_interface = aerodynamic_coefficient_interface
        self.rotational_ephemeris = rotational_ephemeris
        self.radiation_pressure_interfaces: dict = {}
        self.flight_conditions = None
        self.dependent_orientation_calculator = None
        self._rotation_to_global_frame: Array | None = None

    # ------------------------------------------------------------------
    # Translational state and mass
    # ------------------------------------------------------------------

    def get_state(self) -> Array:
        return self.state

    def set_state(self, state: ArrayLike) -> None:
        self.state = jnp.asarray(state, dtype=get_dtype())

    def update_translational_state(self, time: float) -> None:
        """Set the state from the ephemeris at *time*; no-op without ephemeris."""
        if self.ephemeris is not None:
            self.set_state(self.ephemeris(time))

    def get_position(self) -> Array:
        return self.state[:3]

    def get_velocity(self) -> Array:
        return self.state[3:6]

    def get_mass(self) -> float:
        """Return the body mass [kg].

        Raises:
            ValueError: If no mass has been set.
        """
        if self.mass is None:
            raise ValueError("Body mass has not been set.")
        return self.mass

    def set_mass(self, mass: float) -> None:
        self.mass = mass

    def update_mass(self, time: float) -> None:
        if self.mass_function is not None:
            self.mass = self.mass_function(time)

    # ------------------------------------------------------------------
    # Capabilities attached after construction
    # ------------------------------------------------------------------

    def set_radiation_pressure_interface(self, source_body_name: str, interface) -> None:
        """Register the radiation pressure interface for radiation from *source_body_name*."""
        self.radiation_pressure_interfaces[source_body_name] = interface

    def get_flight_conditions(self):
        return self.flight_conditions

    def set_flight_conditions(self, flight_conditions) -> None:
        self.flight_conditions = flight_conditions

    def set_dependent_orientation_calculator(self, calculator) -> None:
        self.dependent_orientation_calculator = calculator

    # ------------------------------------------------------------------
    # Rotational state
    # ------------------------------------------------------------------

    def update_rotational_state(self, time: float) -> None:
        """Recompute the body-fixed to global frame rotation at *time*.

        The rotational ephemeris takes precedence; without one, a dependent
        orientation calculator (e.g. thrust guidance) is used.  Bodies with
        neither keep the identity rotation.
        """
        if self.rotational_ephemeris is not None:
            self._rotation_to_global_frame = self.rotational_ephemeris.rotation_to_base_frame(time)
        elif self.dependent_orientation_calculator is not None:
            self._rotation_to_global_frame = (
                self.dependent_orientation_calculator.get_rotation_to_global_frame(time)
            )

    def get_rotation_to_global_frame(self) -> Array:
        """Current rotation matrix from the body-fixed frame to the global frame."""
        if self._rotation_to_global_frame is None:
            return jnp.eye(3, dtype=get_dtype())
        return self._rotation_to_global_frame

    def __repr__(self) -> str:
        capabilities = [
            name
            for name, value in (
                ("gravity", self.gravity_field_model),
                ("atmosphere", self.atmosphere_model),
                ("shape", self.shape_model),
                ("aero", self.aerodynamic_coefficient_interface),
                ("rotation", self.rotational_ephemeris),
            )
            if value is not None
        ]
        return f"Body(mass={self.mass}, capabilities={capabilities})"


class BodyRegistry(Mapping):
    """Name-keyed registry owning every :class:`Body` in a simulation.

    Behaves as a read-only mapping; bodies are added with :meth:`add_body`.
    Looking up an unknown name raises
    :class:`~astroaccel.errors.BodyNotFoundError`, which is a
    :class:`LookupError`.

    Examples:
        ```python
        from astroaccel.environment import Body, BodyRegistry
        bodies = BodyRegistry()
        bodies.add_body("Satellite", Body(mass=500.0))
        "Satellite" in bodies
        ```
    """

    def __init__(self, bodies: Mapping[str, Body] | None = None):
        self._bodies: dict[str, Body] = {}
        if bodies is not None:
            for name, body in bodies.items():
                self.add_body(name, body)

    def add_body(self, name: str, body: Body) -> Body:
        """Register *body* under *name*.

        Raises:
            ValueError: If a body with the same name is already registered.
        """
        if name in self._bodies:
            raise ValueError(f"Body {name!r} is already registered.")
        self._bodies[name] = body
        return body

    def __getitem__(self, name: str) -> Body:
        try:
            return self._bodies[name]
        except KeyError:
            raise BodyNotFoundError(f"No body named {name!r} in the body registry.", name) from None

    # Mapping's defaults catch KeyError only.
    def __contains__(self, name) -> bool:
        return name in self._bodies

    def get(self, name, default=None):
        return self._bodies.get(name, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self) -> str:
        return f"BodyRegistry({list(self._bodies)})"
