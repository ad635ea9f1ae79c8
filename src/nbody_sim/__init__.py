# MIT License (see LICENSE)
"""
nbody_sim - A small deterministic N-body gravity engine.

This package integrates a handful of massive point bodies under softened
Newtonian gravity, optionally with a corrective acceleration law that keeps
artificial formations (such as a co-rotating ring) in shape, and reports
energy diagnostics.

Main entry points:
    - Engine: Owns the bodies and advances them with step(dt).
    - Body: A point mass with position and velocity.
    - SimulationConfig: G, softening, timestep, stats cadence, controller.
    - EnergyStats: Kinetic, potential, total energy and a stability flag.
    - make_ring_controller: Builds the ring station-keeping law.

Submodules:
    - core: Forces, integrator, physical invariants.
    - controllers: Acceleration law interface and the ring controller.
    - stats: Energy monitor and stability predicates.
    - scenarios: Catalog of initial conditions and create_engine().
    - driver: Playback substep policy.

Example:
    from nbody_sim import Engine, Body, SimulationConfig

    bodies = [
        Body("A", 1.0, position=(1, 0, 0), velocity=(0, 0.5, 0)),
        Body("B", 1.0, position=(-1, 0, 0), velocity=(0, -0.5, 0)),
    ]
    engine = Engine(bodies, SimulationConfig(G=1.0, softening=0.01))
    engine.step(0.01)
"""
from .types import Body
from .config import SimulationConfig, GlobalParams, ParameterMeta
from .errors import ConfigurationError
from .stats import EnergyStats, EnergyDriftPredicate, BoundSystemPredicate, always_stable
from .engine import Engine
from .controllers import AccelerationLaw, RingGains, RingStationKeeper, make_ring_controller
from .scenarios import Scenario, create_engine, get_scenario, get_all_scenarios
from .profiler import Profiler

__all__ = [
    # Core simulation
    "Engine",
    "Body",
    "SimulationConfig",
    "GlobalParams",
    "ParameterMeta",
    "ConfigurationError",
    # Diagnostics
    "EnergyStats",
    "EnergyDriftPredicate",
    "BoundSystemPredicate",
    "always_stable",
    # Control
    "AccelerationLaw",
    "RingGains",
    "RingStationKeeper",
    "make_ring_controller",
    # Scenarios
    "Scenario",
    "create_engine",
    "get_scenario",
    "get_all_scenarios",
    "Profiler",
]
