# MIT License (see LICENSE)
"""
Softened Newtonian gravity.

Accelerations and the pair potential share a single definition of the
softened squared separation,

    d² = max(|r_ij|² + ε², MIN_DISTANCE_SQ)

so that the force is exactly minus the gradient of the potential reported by
the energy diagnostics (Plummer softening).

Complexity: O(N²) direct summation. Body counts are small, so no tree or
multipole approximation is used.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..constants import MIN_DISTANCE_SQ
from ..types import Body
from ..util import norm2


def softened_distance_sq(r: np.ndarray, softening: float) -> float:
    """
    Softened squared separation for a displacement vector r.

    With softening = 0 and near-coincident bodies the result can be tiny and
    the resulting acceleration huge (but finite); only an exact coincidence is
    caught by the MIN_DISTANCE_SQ floor.
    """
    d2 = norm2(r) + softening * softening
    return d2 if d2 > MIN_DISTANCE_SQ else MIN_DISTANCE_SQ


def gravitational_accelerations(
    bodies: Sequence[Body],
    G: float,
    softening: float,
) -> np.ndarray:
    """
    Compute the gravitational acceleration of every body.

    Implements a_i = Σ_j G m_j r_ij / d³ with r_ij = x_j - x_i.
    Each unordered pair is visited once and both sides are updated.

    Args:
        bodies: Bodies in engine order.
        G: Gravitational constant.
        softening: Plummer softening length ε ≥ 0.

    Returns:
        Array of shape (N, 3), row i aligned with bodies[i].
    """
    n = len(bodies)
    acc = np.zeros((n, 3), dtype=np.float64)
    for i in range(n):
        bi = bodies[i]
        for j in range(i + 1, n):
            bj = bodies[j]

            r = bj.position - bi.position
            d2 = softened_distance_sq(r, softening)
            inv_d3 = 1.0 / (d2 * np.sqrt(d2))
            g = G * r * inv_d3

            acc[i] += bj.mass * g
            acc[j] -= bi.mass * g
    return acc


def pair_potential(bi: Body, bj: Body, G: float, softening: float) -> float:
    """Softened potential energy -G m_i m_j / d of one pair."""
    d2 = softened_distance_sq(bj.position - bi.position, softening)
    return -G * bi.mass * bj.mass / float(np.sqrt(d2))
