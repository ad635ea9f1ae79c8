# examples/rosette_ring.py
import logging

from nbody_sim.scenarios import create_engine
from nbody_sim.driver import advance_frame
from nbody_sim.logging_config import setup_logging
import numpy as np

setup_logging(logging.INFO)

engine = create_engine("Rosette", params={"a_max": 0.05}, energy_sample_interval=200)
law = engine.config.controller

engine.set_stats_callback(
    lambda s: print(f"t={engine.time:7.2f}  E={s.total_energy:9.4f}  habitable={s.habitable}")
)

# 60 frames per second of wall time, 20 seconds, at 4x playback
for _ in range(60 * 20):
    advance_frame(engine, speed=4.0)

radii = [np.linalg.norm(engine.bodies[i].position) for i in law.members]
print("target radius:", law.r_star)
print("petal radii:", np.round(radii, 3))
