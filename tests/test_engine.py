import logging

import numpy as np
import pytest
from nbody_sim.engine import Engine
from nbody_sim.config import SimulationConfig
from nbody_sim.controllers.base import AccelerationLaw
from nbody_sim.errors import ConfigurationError
from nbody_sim.profiler import Profiler
from nbody_sim.types import Body


def _three_bodies():
    return [
        Body("Sun", 10.0, position=(0, 0, 0), velocity=(0, 0, 0), is_star=True),
        Body("Inner", 0.1, position=(3, 0, 0), velocity=(0, 1.8, 0)),
        Body("Outer", 0.2, position=(0, -7, 0.2), velocity=(1.2, 0, 0)),
    ]


class ConstantPush(AccelerationLaw):
    """Applies a fixed acceleration to every body and records its calls."""

    def __init__(self, a):
        self.a = np.asarray(a, dtype=np.float64)
        self.calls = []

    def evaluate(self, bodies, t):
        self.calls.append((t, [b.position.copy() for b in bodies]))
        return np.tile(self.a, (len(bodies), 1))


def test_empty_body_set_rejected():
    with pytest.raises(ConfigurationError):
        Engine([], SimulationConfig())


@pytest.mark.parametrize("mass", [0.0, -1.0, float("nan")])
def test_non_positive_mass_rejected(mass):
    bodies = _three_bodies()
    bodies[1].mass = mass
    with pytest.raises(ConfigurationError):
        Engine(bodies)


def test_non_positive_radius_rejected():
    bodies = _three_bodies()
    bodies[2].radius = 0.0
    with pytest.raises(ConfigurationError):
        Engine(bodies)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"G": 0.0},
        {"G": -1.0},
        {"time_step": 0.0},
        {"time_step": -0.01},
        {"softening": -0.1},
        {"energy_sample_interval": 0},
        {"energy_sample_interval": 1.5},
        {"controller": object()},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**kwargs)


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_initial_bodies_are_deep_copied():
    source = _three_bodies()
    engine = Engine(source)

    source[1].position[0] = 999.0
    source[1].velocity[:] = 0.0
    source[1].name = "Renamed"

    inner = engine.bodies[1]
    assert inner.name == "Inner"
    assert inner.position[0] == 3.0
    assert inner.velocity[1] == 1.8


def test_bodies_snapshot_cannot_corrupt_engine():
    engine = Engine(_three_bodies())
    snap = engine.bodies
    snap[1].position[:] = 1e6
    snap[1].mass = 1e9

    again = engine.bodies
    assert again[1].position[0] == 3.0
    assert again[1].mass == 0.1
    assert again[1] is not snap[1]


def test_index_stability_over_steps():
    source = _three_bodies()
    engine = Engine(source, SimulationConfig(G=1.0, softening=0.05))
    names = [b.name for b in source]
    masses = [b.mass for b in source]

    for _ in range(500):
        engine.step(0.01)
        snap = engine.bodies
        assert len(snap) == len(engine) == 3
        assert [b.name for b in snap] == names
        assert [b.mass for b in snap] == masses

    # Positions did change
    assert not np.allclose(engine.bodies[1].position, source[1].position)


@pytest.mark.parametrize("dt", [0.0, -0.01, float("nan"), float("inf")])
def test_step_rejects_bad_dt(dt):
    engine = Engine(_three_bodies())
    with pytest.raises(ValueError):
        engine.step(dt)
    assert engine.step_count == 0
    assert engine.time == 0.0


def test_step_defaults_to_config_time_step():
    engine = Engine(_three_bodies(), SimulationConfig(time_step=0.02))
    for _ in range(5):
        engine.step()
    assert engine.step_count == 5
    assert engine.time == pytest.approx(0.1)


def test_integration_order_velocity_then_position():
    """
    Lone body (no gravity partner) with a constant push a from rest:
      v1 = a dt,   x1 = v1 dt = a dt²
    """
    law = ConstantPush((1.0, 0.0, 0.0))
    engine = Engine([Body("Probe", 1.0)], SimulationConfig(controller=law))
    engine.step(0.1)

    probe = engine.bodies[0]
    assert probe.velocity[0] == pytest.approx(0.1)
    assert probe.position[0] == pytest.approx(0.01)


def test_controller_sees_pre_step_state_and_elapsed_time():
    law = ConstantPush((0.0, 0.0, 0.0))
    source = _three_bodies()
    engine = Engine(source, SimulationConfig(controller=law))

    engine.step(0.05)
    engine.step(0.05)

    assert len(law.calls) == 2
    t0, pos0 = law.calls[0]
    t1, pos1 = law.calls[1]
    assert t0 == 0.0
    assert t1 == pytest.approx(0.05)
    for p, b in zip(pos0, source):
        assert np.array_equal(p, b.position)
    # Second call sees the state after the first step
    assert not np.array_equal(pos1[1], source[1].position)


def test_controller_correction_is_added_to_gravity():
    bodies = _three_bodies()
    plain = Engine(bodies, SimulationConfig(G=1.0, softening=0.05))
    pushed = Engine(bodies, SimulationConfig(G=1.0, softening=0.05, controller=ConstantPush((0.0, 0.0, 2.0))))

    plain.step(0.1)
    pushed.step(0.1)

    for a, b in zip(plain.bodies, pushed.bodies):
        assert b.velocity[2] - a.velocity[2] == pytest.approx(0.2)


def test_profiler_records_step_sections():
    prof = Profiler()
    engine = Engine(_three_bodies(), SimulationConfig(controller=ConstantPush((0, 0, 0))), profiler=prof)
    for _ in range(10):
        engine.step(0.01)
    engine.get_stats()

    summary = prof.stats.summary()
    for name in ("forces", "controller", "integrate"):
        assert summary[name]["n"] == 10
    assert summary["stats"]["n"] == 1


def test_zero_softening_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="nbody_sim.engine"):
        Engine(_three_bodies(), SimulationConfig(softening=0.0))
    assert any("Softening is 0" in r.getMessage() for r in caplog.records)
