# MIT License (see LICENSE)
"""
Time-stepping for point bodies.

The engine uses a single explicit pass: every acceleration is computed from
the pre-step positions, then each body is advanced with

    v(t+dt) = v(t) + a(t)·dt
    x(t+dt) = x(t) + v(t+dt)·dt

This is the semi-implicit (symplectic) Euler method. It is first order but
cheap, deterministic, and keeps bound orbits bounded, which is what a
real-time driver needs. Energy is not conserved exactly.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import Body


def semi_implicit_euler_step(body: Body, acceleration: np.ndarray, dt: float) -> None:
    """
    Advance one body by dt with a fixed acceleration.

    Args:
        body: Body to integrate (modified in-place).
        acceleration: Total acceleration [ax, ay, az] evaluated at the
                      pre-step state.
        dt: Timestep (> 0, checked by the caller).
    """
    body.velocity = body.velocity + acceleration * dt
    body.position = body.position + body.velocity * dt


def integrate(bodies: Sequence[Body], accelerations: np.ndarray, dt: float) -> None:
    """Apply semi_implicit_euler_step to every body, in index order."""
    for body, a in zip(bodies, accelerations):
        semi_implicit_euler_step(body, a, dt)
