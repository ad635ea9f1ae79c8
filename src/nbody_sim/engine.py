# MIT License (see LICENSE)
"""
The simulation engine and its step loop.

The Engine owns the only mutable simulation data: an ordered, fixed-length
list of bodies. It provides:
- Construction-time validation and a deep copy of the initial bodies.
- The step loop:
    1. Softened pairwise gravity from the pre-step state.
    2. Optional controller correction, summed onto gravity.
    3. Semi-implicit Euler integration of every body.
    4. Push delivery of EnergyStats every energy_sample_interval steps.
- Read-only snapshots for presentation (bodies, get_stats()).

Structure:
    - A driver creates an Engine from initial bodies and a SimulationConfig.
    - The driver calls engine.step(dt) one or more times per frame.
    - The driver reads engine.bodies / engine.get_stats() to present state.
    - On scenario change the engine is discarded and a new one built.

Everything is synchronous and single threaded; the stats callback runs
inline, inside step().
"""
from __future__ import annotations
import logging
import math
from typing import Callable, Sequence

import numpy as np

from .config import SimulationConfig
from .core.forces import gravitational_accelerations
from .core.integrators import integrate
from .errors import ConfigurationError
from .profiler import Profiler
from .stats import EnergyMonitor, EnergyStats
from .types import Body

logger = logging.getLogger(__name__)

StatsCallback = Callable[[EnergyStats], None]


class Engine:
    """
    N-body gravity engine.

    Attributes:
        config: The SimulationConfig fixed at construction.
        profiler: Optional Profiler timing the step phases.

    Raises:
        ConfigurationError: Empty body set, a body with mass ≤ 0 or
                            radius ≤ 0, or an invalid config.

    Example:
        engine = Engine(bodies, SimulationConfig(G=1.0, softening=0.08))
        for _ in range(10):
            engine.step(0.001)
        print(engine.get_stats().total_energy)
    """

    def __init__(
        self,
        initial_bodies: Sequence[Body],
        config: SimulationConfig | None = None,
        *,
        profiler: Profiler | None = None,
    ) -> None:
        self.config = config if config is not None else SimulationConfig()
        if not isinstance(self.config, SimulationConfig):
            raise ConfigurationError(f"config must be a SimulationConfig, got {type(self.config).__name__}")

        bodies = list(initial_bodies)
        if not bodies:
            raise ConfigurationError("initial_bodies must contain at least one body")
        for i, b in enumerate(bodies):
            if not (math.isfinite(b.mass) and b.mass > 0):
                raise ConfigurationError(f"Body {i} ({b.name!r}) has non-positive mass {b.mass}")
            if not (math.isfinite(b.radius) and b.radius > 0):
                raise ConfigurationError(f"Body {i} ({b.name!r}) has non-positive radius {b.radius}")

        self._bodies: list[Body] = [b.copy() for b in bodies]
        self._time = 0.0
        self._steps = 0
        self._callback: StatsCallback | None = None
        self.profiler = profiler

        self._monitor = EnergyMonitor(
            self.config.G, self.config.softening, self.config.stability
        ).with_baseline(self._bodies)

        if self.config.softening == 0.0:
            logger.warning(
                "Softening is 0: close encounters will produce very large accelerations"
            )
        logger.debug(
            "Engine created: %d bodies, G=%g, softening=%g, controller=%s",
            len(self._bodies),
            self.config.G,
            self.config.softening,
            type(self.config.controller).__name__ if self.config.controller else None,
        )

    def __len__(self) -> int:
        return len(self._bodies)

    @property
    def bodies(self) -> tuple[Body, ...]:
        """Copies of the current bodies, in engine order."""
        return tuple(b.copy() for b in self._bodies)

    @property
    def time(self) -> float:
        """Elapsed simulated time (sum of all dt passed to step)."""
        return self._time

    @property
    def step_count(self) -> int:
        return self._steps

    def _accelerations(self) -> np.ndarray:
        """Gravity plus controller correction, from the current (pre-step) state."""
        cfg = self.config
        prof = self.profiler

        if prof:
            with prof.section("forces"):
                acc = gravitational_accelerations(self._bodies, cfg.G, cfg.softening)
        else:
            acc = gravitational_accelerations(self._bodies, cfg.G, cfg.softening)

        if cfg.controller is not None:
            if prof:
                with prof.section("controller"):
                    correction = cfg.controller.evaluate(self._bodies, self._time)
            else:
                correction = cfg.controller.evaluate(self._bodies, self._time)
            acc += np.asarray(correction, dtype=np.float64).reshape(acc.shape)

        return acc

    def step(self, dt: float | None = None) -> None:
        """
        Advance the simulation by dt in place.

        Args:
            dt: Time increment (> 0). Defaults to config.time_step. Large
                values are accepted but degrade accuracy; substepping is the
                caller's job.

        Raises:
            ValueError: dt is not a finite positive number.
        """
        dt = float(self.config.time_step if dt is None else dt)
        if not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"dt must be a finite positive number, got {dt}")

        acc = self._accelerations()

        if self.profiler:
            with self.profiler.section("integrate"):
                integrate(self._bodies, acc, dt)
        else:
            integrate(self._bodies, acc, dt)

        self._time += dt
        self._steps += 1

        if self._callback is not None and self._steps % self.config.energy_sample_interval == 0:
            self._callback(self.get_stats())

    def get_stats(self) -> EnergyStats:
        """Energy diagnostics of the current state, recomputed on every call."""
        if self.profiler:
            with self.profiler.section("stats"):
                return self._monitor.compute(self._bodies)
        return self._monitor.compute(self._bodies)

    def set_stats_callback(self, callback: StatsCallback | None) -> None:
        """
        Register the push-delivery callback.

        The callback is invoked synchronously from step() after every
        config.energy_sample_interval completed steps. Registering again
        replaces the previous callback; None removes it.
        """
        self._callback = callback
