import numpy as np
import pytest
from nbody_sim.engine import Engine
from nbody_sim.config import SimulationConfig
from nbody_sim.stats import (
    EnergyMonitor,
    EnergyStats,
    EnergyDriftPredicate,
    BoundSystemPredicate,
    always_stable,
)
from nbody_sim.types import Body


def _bodies():
    return [
        Body("Sun", 20.0, position=(0.1, 0.0, 0.0), velocity=(0.0, -0.02, 0.0)),
        Body("P1", 0.5, position=(4.0, 0.0, 0.0), velocity=(0.0, 2.2, 0.1)),
        Body("P2", 0.3, position=(-6.0, 1.0, 0.0), velocity=(0.3, -1.7, 0.0)),
        Body("P3", 0.1, position=(0.0, 9.0, -0.5), velocity=(-1.4, 0.0, 0.05)),
    ]


def test_kinetic_energy_matches_independent_sum():
    engine = Engine(_bodies(), SimulationConfig(G=1.0, softening=0.08))
    for _ in range(37):
        engine.step(0.01)

    snap = engine.bodies
    expected = 0.0
    for b in snap:
        expected += 0.5 * b.mass * float(np.dot(b.velocity, b.velocity))

    stats = engine.get_stats()
    assert stats.kinetic_energy == expected


def test_potential_uses_softened_distance():
    G, eps = 1.7, 0.5
    a = Body("A", 2.0, position=(0.0, 0.0, 0.0))
    b = Body("B", 3.0, position=(1.0, 2.0, 2.0))
    stats = EnergyMonitor(G, eps).compute([a, b])

    expected = -G * 2.0 * 3.0 / np.sqrt(9.0 + eps * eps)
    assert stats.potential_energy == pytest.approx(expected, rel=1e-14)
    assert stats.kinetic_energy == 0.0
    assert stats.total_energy == pytest.approx(expected, rel=1e-14)


def test_total_is_kinetic_plus_potential():
    stats = EnergyMonitor(1.0, 0.08).compute(_bodies())
    assert stats.total_energy == stats.kinetic_energy + stats.potential_energy
    assert stats.potential_energy < 0


def test_compute_is_pure():
    bodies = _bodies()
    monitor = EnergyMonitor(1.0, 0.08)
    before = [(b.position.copy(), b.velocity.copy()) for b in bodies]
    s1 = monitor.compute(bodies)
    s2 = monitor.compute(bodies)
    assert s1 == s2
    for (p, v), b in zip(before, bodies):
        assert np.array_equal(p, b.position)
        assert np.array_equal(v, b.velocity)


def test_drift_predicate():
    p = EnergyDriftPredicate(tolerance=0.05)
    assert p(0.0, 0.0, -1.04, -1.0)
    assert not p(0.0, 0.0, -1.06, -1.0)
    assert p(0.0, 0.0, 123.0, None)
    assert p(0.0, 0.0, 123.0, 0.0)


def test_bound_predicate():
    p = BoundSystemPredicate()
    assert p(1.0, -2.0, -1.0, None)
    assert not p(3.0, -2.0, 1.0, None)
    assert always_stable(1e9, 0.0, 1e9, -1.0)


def test_engine_baseline_is_initial_total():
    """The predicate always sees the construction-time total, however far the state drifts."""
    seen = []

    def record(kinetic, potential, total, baseline):
        seen.append((total, baseline))
        return True

    engine = Engine(_bodies(), SimulationConfig(G=1.0, softening=0.08, stability=record))
    e0 = engine.get_stats().total_energy
    for _ in range(20):
        engine.step(0.5)  # coarse steps, total energy wanders
    engine.get_stats()

    assert seen[0] == (e0, e0)
    assert seen[-1][1] == e0
    assert seen[-1][0] != e0


def test_drift_predicate_flips_once_past_tolerance():
    tight = EnergyDriftPredicate(tolerance=1e-12)
    engine = Engine(_bodies(), SimulationConfig(G=1.0, softening=0.08, stability=tight))
    assert engine.get_stats().habitable
    engine.step(0.5)
    assert not engine.get_stats().habitable


def test_injected_predicate_decides_habitable():
    calls = []

    def never(kinetic, potential, total, baseline):
        calls.append((kinetic, potential, total, baseline))
        return False

    engine = Engine(_bodies(), SimulationConfig(stability=never))
    stats = engine.get_stats()
    assert stats.habitable is False
    k, p, t, base = calls[-1]
    assert (k, p, t) == (stats.kinetic_energy, stats.potential_energy, stats.total_energy)
    assert base == pytest.approx(t)


def test_callback_fires_every_sample_interval():
    engine = Engine(_bodies(), SimulationConfig(energy_sample_interval=3))
    received = []

    def on_stats(stats):
        assert isinstance(stats, EnergyStats)
        received.append((engine.step_count, stats))

    engine.set_stats_callback(on_stats)
    for _ in range(10):
        engine.step(0.01)

    assert [n for n, _ in received] == [3, 6, 9]
    engine.step(0.01)
    engine.step(0.01)
    assert received[-1][0] == 12
    assert received[-1][1] == engine.get_stats()


def test_callback_can_be_replaced_and_cleared():
    engine = Engine(_bodies(), SimulationConfig(energy_sample_interval=1))
    first, second = [], []
    engine.set_stats_callback(first.append)
    engine.step(0.01)
    engine.set_stats_callback(second.append)
    engine.step(0.01)
    engine.set_stats_callback(None)
    engine.step(0.01)

    assert len(first) == 1
    assert len(second) == 1
