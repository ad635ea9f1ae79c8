# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used by the energy diagnostics and by tests. Without a controller the system
is closed, so momentum is conserved exactly (pairwise forces cancel) and
total energy only drifts by integration error.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import Body
from .forces import pair_potential


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """
    Calculate the total kinetic energy of a system of bodies.

    T = Σ 0.5 * m * v²
    """
    ke = 0.0
    for b in bodies:
        v_sq = float(np.dot(b.velocity, b.velocity))
        ke += 0.5 * b.mass * v_sq
    return ke


def potential_energy(bodies: Sequence[Body], G: float, softening: float) -> float:
    """
    Calculate the softened gravitational potential energy.

    U = Σ_{i<j} -G m_i m_j / sqrt(|r_ij|² + ε²)

    Uses the same softened separation as the force kernel.
    """
    pe = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            pe += pair_potential(bodies[i], bodies[j], G, softening)
    return pe


def linear_momentum(bodies: Sequence[Body]) -> np.ndarray:
    """
    Calculate the total linear momentum of a system.

    P = Σ (m * v)
    """
    p = np.zeros(3, dtype=np.float64)
    for b in bodies:
        p += b.momentum
    return p


def angular_momentum(bodies: Sequence[Body], origin=(0.0, 0.0, 0.0)) -> np.ndarray:
    """
    Total angular momentum about a point.

    L = Σ m (x - origin) × v
    """
    o = np.asarray(origin, dtype=np.float64)
    L = np.zeros(3, dtype=np.float64)
    for b in bodies:
        L += b.mass * np.cross(b.position - o, b.velocity)
    return L


def center_of_mass(bodies: Sequence[Body]) -> tuple[np.ndarray, np.ndarray]:
    """
    Mass-weighted centroid position and velocity.

    Returns:
        Tuple (position, velocity). Both are zero vectors for a massless set.
    """
    m_sum = 0.0
    c = np.zeros(3, dtype=np.float64)
    cv = np.zeros(3, dtype=np.float64)
    for b in bodies:
        m_sum += b.mass
        c += b.mass * b.position
        cv += b.mass * b.velocity
    if m_sum <= 0:
        return c, cv
    return c / m_sum, cv / m_sum
