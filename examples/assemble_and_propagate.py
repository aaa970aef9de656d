# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "astroaccel"]
#
# [tool.uv.sources]
# astroaccel = { path = ".." }
# ///
"""Assemble a force model for an Earth satellite and propagate it.

Builds an Earth/Moon/Sun environment, selects spherical harmonic gravity,
exponential-atmosphere drag, cannonball radiation pressure, third-body
perturbations and an optional constant along-track thrust, assembles the
acceleration models and integrates the satellite with a fixed-step RK4
loop driven by the assembled update plan.

Requires astroaccel to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/assemble_and_propagate.py [OPTIONS]

Examples:
    # Ten minutes of flight with the full force model
    uv run examples/assemble_and_propagate.py --duration 600

    # Point-mass Earth, no drag, with 50 mN of thrust
    uv run examples/assemble_and_propagate.py --gravity-degree 0 --no-drag --thrust 0.05
"""

import logging
import time
from typing import Annotated

import jax.numpy as jnp
import numpy as np
import typer

from astroaccel import set_dtype
from astroaccel.accelerations import (
    AerodynamicSettings,
    CannonballRadiationPressureSettings,
    CentralGravitySettings,
    SphericalHarmonicGravitySettings,
    ThrustDirectionSettings,
    ThrustMagnitudeSettings,
    ThrustSettings,
    create_acceleration_models,
)
from astroaccel.constants import AU, GM_EARTH, GM_MOON, GM_SUN, OMEGA_EARTH, R_EARTH
from astroaccel.environment import (
    AerodynamicCoefficientInterface,
    Body,
    BodyRegistry,
    ExponentialAtmosphere,
    GravityFieldModel,
    RadiationPressureInterface,
    SimpleRotationalEphemeris,
    SphericalBodyShape,
    SphericalHarmonicsGravityField,
)
from astroaccel.propagators import (
    evaluate_total_acceleration,
    reset_acceleration_models,
    update_environment,
)

set_dtype(jnp.float64)

# Fully normalized low-degree Earth coefficients (GGM05S)
_EARTH_CNM = {(0, 0): 1.0, (2, 0): -4.841651437908e-04, (2, 2): 2.439383573283e-06,
              (3, 0): 9.571612070934e-07, (4, 0): 5.399658666389e-07}
_EARTH_SNM = {(2, 2): -1.400273703859e-06}


def _earth_gravity_field(degree: int) -> SphericalHarmonicsGravityField:
    n = max(degree, 4)
    C = np.zeros((n + 1, n + 1))
    S = np.zeros((n + 1, n + 1))
    for (i, j), value in _EARTH_CNM.items():
        C[i, j] = value
    for (i, j), value in _EARTH_SNM.items():
        S[i, j] = value
    return SphericalHarmonicsGravityField(GM_EARTH, R_EARTH, C, S, "IAU_Earth")


def _create_bodies(altitude: float, mass: float) -> BodyRegistry:
    bodies = BodyRegistry()
    bodies.add_body("Sun", Body(state=[AU, 0.0, 0.0, 0.0, 0.0, 0.0], gravity_field_model=GravityFieldModel(GM_SUN)))
    bodies.add_body(
        "Earth",
        Body(
            gravity_field_model=_earth_gravity_field(4),
            atmosphere_model=ExponentialAtmosphere(),
            shape_model=SphericalBodyShape(R_EARTH),
            rotational_ephemeris=SimpleRotationalEphemeris(OMEGA_EARTH, "J2000", "IAU_Earth"),
        ),
    )
    bodies.add_body(
        "Moon",
        Body(state=[0.0, 3.844e8, 0.0, -1.022e3, 0.0, 0.0], gravity_field_model=GravityFieldModel(GM_MOON)),
    )

    r = R_EARTH + altitude
    v = float(np.sqrt(GM_EARTH / r))
    satellite = bodies.add_body(
        "Satellite",
        Body(
            state=[r, 0.0, 0.0, 0.0, v, 0.0],
            mass=mass,
            aerodynamic_coefficient_interface=AerodynamicCoefficientInterface(4.0, [2.2, 0.0, 0.0]),
        ),
    )
    satellite.set_radiation_pressure_interface("Sun", RadiationPressureInterface(4.0, 1.2))
    return bodies


def main(
    altitude: Annotated[float, typer.Option(help="Initial circular orbit altitude [m]")] = 400e3,
    mass: Annotated[float, typer.Option(help="Satellite mass [kg]")] = 500.0,
    timestep: Annotated[float, typer.Option(help="Integration timestep [s]")] = 10.0,
    duration: Annotated[float, typer.Option(help="Propagation duration [s]")] = 5400.0,
    gravity_degree: Annotated[int, typer.Option(help="Spherical harmonic degree (0 for point mass)")] = 4,
    drag: Annotated[bool, typer.Option(help="Enable atmospheric drag")] = True,
    srp: Annotated[bool, typer.Option(help="Enable solar radiation pressure")] = True,
    third_body: Annotated[bool, typer.Option(help="Enable Sun and Moon perturbations")] = True,
    thrust: Annotated[float, typer.Option(help="Constant along-track thrust [N], 0 to disable")] = 0.0,
    verbose: Annotated[bool, typer.Option(help="Show assembly log messages")] = False,
) -> None:
    """Assemble acceleration models and propagate a satellite about the Earth."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    bodies = _create_bodies(altitude, mass)

    # ── Stage 1: Select accelerations ─────────────────────────────────────
    earth_settings = []
    if thrust > 0.0:
        earth_settings.append(
            ThrustSettings(
                ThrustDirectionSettings.colinear_with_state("Earth"),
                ThrustMagnitudeSettings.constant(thrust, 300.0),
            )
        )
    if gravity_degree > 0:
        earth_settings.append(SphericalHarmonicGravitySettings(gravity_degree, gravity_degree))
    else:
        earth_settings.append(CentralGravitySettings())
    if drag:
        earth_settings.append(AerodynamicSettings())

    selected = {"Satellite": {"Earth": earth_settings}}
    if third_body:
        selected["Satellite"]["Moon"] = [CentralGravitySettings()]
        selected["Satellite"]["Sun"] = [CentralGravitySettings()]
    if srp:
        selected["Satellite"].setdefault("Sun", []).append(CannonballRadiationPressureSettings())

    # ── Stage 2: Assemble ─────────────────────────────────────────────────
    t0 = time.perf_counter()
    setup = create_acceleration_models(bodies, selected, {"Satellite": "Earth"})
    print(f"Assembled models in {time.perf_counter() - t0:.3f}s")
    for name_exerting, models in setup.acceleration_map["Satellite"].items():
        print(f"  {name_exerting}: {', '.join(type(m).__name__ for m in models)}")
    for category, names in setup.update_plan.as_dict().items():
        print(f"  update {category.value}: {names}")

    # ── Stage 3: Propagate ────────────────────────────────────────────────
    satellite = bodies["Satellite"]

    def derivative(t: float, x: jnp.ndarray) -> jnp.ndarray:
        satellite.set_state(x)
        update_environment(bodies, setup.update_plan, t)
        reset_acceleration_models(setup.acceleration_map)
        a = evaluate_total_acceleration(setup.acceleration_map, "Satellite", t)
        return jnp.concatenate([x[3:6], a])

    x = satellite.get_state()
    n_steps = int(duration / timestep)
    t = 0.0
    t0 = time.perf_counter()
    for _ in range(n_steps):
        k1 = derivative(t, x)
        k2 = derivative(t + 0.5 * timestep, x + 0.5 * timestep * k1)
        k3 = derivative(t + 0.5 * timestep, x + 0.5 * timestep * k2)
        k4 = derivative(t + timestep, x + timestep * k3)
        x = x + timestep / 6.0 * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
        t += timestep
    satellite.set_state(x)
    print(f"Propagated {n_steps} steps in {time.perf_counter() - t0:.1f}s")

    altitude_final = float(jnp.linalg.norm(x[:3])) - R_EARTH
    print(f"  Final altitude: {altitude_final / 1e3:.3f} km (initial {altitude / 1e3:.3f} km)")
    print(f"  Final speed: {float(jnp.linalg.norm(x[3:6])) / 1e3:.4f} km/s")
    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
