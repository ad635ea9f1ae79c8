# MIT License (see LICENSE)
"""
Corrective acceleration laws.

This subpackage provides:
    - AccelerationLaw: the interface the engine evaluates once per step.
    - RingStationKeeper: PD controller holding a ring of bodies on a
      co-rotating circle, built by make_ring_controller().

Typical usage:
    from nbody_sim.controllers import make_ring_controller

    law = make_ring_controller(initial_bodies, {"a_max": 0.05})
    engine = Engine(initial_bodies, SimulationConfig(controller=law))
"""
from .base import AccelerationLaw
from .ring import (
    DEFAULT_RING_PREFIX,
    RING_PARAMETERS,
    RingGains,
    RingStationKeeper,
    make_ring_controller,
    select_ring_members,
)

__all__ = [
    "AccelerationLaw",
    "DEFAULT_RING_PREFIX",
    "RING_PARAMETERS",
    "RingGains",
    "RingStationKeeper",
    "make_ring_controller",
    "select_ring_members",
]
