# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Forces: softened pairwise gravity and the matching pair potential.
    - Integrators: the semi-implicit Euler step.
    - Invariants: energy, momentum, angular momentum, centre of mass.

Typical usage:
    from nbody_sim.core import gravitational_accelerations, integrate

    acc = gravitational_accelerations(bodies, G=1.0, softening=0.08)
    integrate(bodies, acc, dt=0.01)
"""
from .forces import gravitational_accelerations, pair_potential, softened_distance_sq
from .integrators import integrate, semi_implicit_euler_step
from .invariants import (
    kinetic_energy,
    potential_energy,
    linear_momentum,
    angular_momentum,
    center_of_mass,
)

__all__ = [
    # Forces
    "gravitational_accelerations",
    "pair_potential",
    "softened_distance_sq",
    # Integrators
    "integrate",
    "semi_implicit_euler_step",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "linear_momentum",
    "angular_momentum",
    "center_of_mass",
]
