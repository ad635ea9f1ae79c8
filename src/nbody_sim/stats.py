# MIT License (see LICENSE)
"""
Energy diagnostics and stability classification.

EnergyMonitor derives kinetic, potential and total energy from a snapshot of
bodies. The "habitable" flag is not a physical law: it is whatever the
injected stability predicate says about the energies. Three policies ship
with the package:

- EnergyDriftPredicate: total energy stays within a relative tolerance of a
  baseline (the engine uses the initial total). This is the default.
- BoundSystemPredicate: total energy is negative.
- always_stable: never flags anything.

A predicate is any callable

    predicate(kinetic, potential, total, baseline_total) -> bool

where baseline_total may be None when no baseline is known.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .core.invariants import kinetic_energy, potential_energy
from .types import Body

StabilityPredicate = Callable[[float, float, float, Optional[float]], bool]


@dataclass(frozen=True)
class EnergyStats:
    """
    Aggregate energy of a snapshot.

    Attributes:
        kinetic_energy: Σ ½ m v².
        potential_energy: Softened pairwise potential (≤ 0).
        total_energy: kinetic + potential.
        habitable: Verdict of the configured stability predicate.
    """
    kinetic_energy: float
    potential_energy: float
    total_energy: float
    habitable: bool


@dataclass(frozen=True)
class EnergyDriftPredicate:
    """
    Stable while |E - E0| / |E0| <= tolerance.

    With no baseline (or a zero baseline) there is nothing to drift from and
    the system is reported stable.
    """
    tolerance: float = 0.05

    def __call__(
        self,
        kinetic: float,
        potential: float,
        total: float,
        baseline_total: float | None,
    ) -> bool:
        if baseline_total is None or baseline_total == 0.0:
            return True
        return abs(total - baseline_total) / abs(baseline_total) <= self.tolerance


@dataclass(frozen=True)
class BoundSystemPredicate:
    """Stable while the total energy is negative (gravitationally bound)."""

    def __call__(
        self,
        kinetic: float,
        potential: float,
        total: float,
        baseline_total: float | None,
    ) -> bool:
        return total < 0.0


def always_stable(
    kinetic: float,
    potential: float,
    total: float,
    baseline_total: float | None,
) -> bool:
    return True


class EnergyMonitor:
    """
    Computes EnergyStats for snapshots of one simulation.

    The monitor only holds constants (G, softening, predicate, baseline), so
    compute() is a pure function of the bodies it is given.

    Usage:
        monitor = EnergyMonitor(G=1.0, softening=0.08)
        monitor = monitor.with_baseline(bodies)
        stats = monitor.compute(bodies)
    """

    def __init__(
        self,
        G: float,
        softening: float,
        stability: StabilityPredicate | None = None,
        baseline_total: float | None = None,
    ) -> None:
        self.G = G
        self.softening = softening
        self.stability = stability if stability is not None else EnergyDriftPredicate()
        self.baseline_total = baseline_total

    def energies(self, bodies: Sequence[Body]) -> tuple[float, float, float]:
        """Return (kinetic, potential, total) for a snapshot."""
        ke = kinetic_energy(bodies)
        pe = potential_energy(bodies, self.G, self.softening)
        return ke, pe, ke + pe

    def compute(self, bodies: Sequence[Body]) -> EnergyStats:
        """Derive EnergyStats from a snapshot. O(N²)."""
        ke, pe, total = self.energies(bodies)
        habitable = bool(self.stability(ke, pe, total, self.baseline_total))
        return EnergyStats(
            kinetic_energy=ke,
            potential_energy=pe,
            total_energy=total,
            habitable=habitable,
        )

    def with_baseline(self, bodies: Sequence[Body]) -> "EnergyMonitor":
        """Return a monitor whose baseline is the total energy of bodies."""
        _, _, total = self.energies(bodies)
        return EnergyMonitor(self.G, self.softening, self.stability, baseline_total=total)
