# MIT License (see LICENSE)
"""
Physical and numerical constants used throughout the simulation.

Units are simulation units (G = 1 by default), not SI: scenarios choose
masses and distances that look reasonable on screen.
"""
from __future__ import annotations

# Default gravitational constant in simulation units.
DEFAULT_G: float = 1.0

# Default Plummer softening length. The effective squared separation used by
# both the force and the potential is r² + ε².
DEFAULT_SOFTENING: float = 0.08

# Advisory base timestep for Engine.step() when no dt is passed.
DEFAULT_TIME_STEP: float = 0.01

# Floor for the softened squared separation. Only matters when softening is 0
# and two bodies coincide exactly; keeps r / d³ finite (and zero at r = 0).
MIN_DISTANCE_SQ: float = 1e-20

# Fallback target radius for the ring controller when the ring carries no mass.
DEFAULT_RING_RADIUS: float = 12.0
