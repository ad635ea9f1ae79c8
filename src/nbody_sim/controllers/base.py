# MIT License (see LICENSE)
"""
Acceleration law interface.

An acceleration law is a closed-loop control term evaluated once per engine
step against the pre-step state. Its output is summed onto the gravitational
accelerations before integration, so it may inject or remove energy: it is
non-conservative on purpose.

Implementations are built once from an initial snapshot and must hold only
constants: evaluate() is a pure function of (bodies, t).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ..types import Body


class AccelerationLaw(ABC):
    """
    Abstract base class for corrective acceleration laws.

    Usage:
        law = make_ring_controller(initial_bodies)
        correction = law.evaluate(bodies, t)   # shape (N, 3)
    """

    @abstractmethod
    def evaluate(self, bodies: Sequence[Body], t: float) -> np.ndarray:
        """
        Compute per-body correction accelerations.

        Args:
            bodies: Current state, in engine order.
            t: Elapsed simulated time.

        Returns:
            Array of shape (len(bodies), 3), row i aligned with bodies[i].
            Bodies the law does not act on get a zero row.
        """
        ...

