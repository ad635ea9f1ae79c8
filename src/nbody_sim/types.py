# MIT License (see LICENSE)
"""
Core type definitions for the N-body simulation.

Defines Body, the point-mass record the engine integrates. The equations of
motion are plain Newtonian point dynamics:
  dx/dt = v
  dv/dt = a_gravity + a_control
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .util import vec3


@dataclass(eq=False)
class Body:
    """
    A massive point body.

    Attributes:
        name: Display name. Controllers may select bodies by name prefix.
        mass: Gravitating mass, must be > 0 when handed to an Engine.
        position: Position [x, y, z].
        velocity: Velocity [vx, vy, vz].
        radius: Visual radius only; never used by the physics.
        color: Visual color only (any string the presentation layer accepts).
        is_star: Presentation hint (e.g. emissive rendering).

    Note:
        Position and velocity are converted to float64 arrays of shape (3,) on
        init. Bodies read from Engine.bodies are copies; mutating them has no
        effect on the simulation.
    """
    name: str
    mass: float
    position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 1.0
    color: str = "#ffffff"
    is_star: bool = False

    def __post_init__(self) -> None:
        """Convert position/velocity to float64 arrays for consistent numerics."""
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        self.position = vec3(self.position)
        self.velocity = vec3(self.velocity)

    def copy(self) -> "Body":
        """Deep copy; the arrays are not shared with the original."""
        return Body(
            name=self.name,
            mass=self.mass,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            radius=self.radius,
            color=self.color,
            is_star=self.is_star,
        )

    @property
    def momentum(self) -> np.ndarray:
        """Linear momentum m·v."""
        return self.mass * self.velocity
