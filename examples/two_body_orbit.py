# examples/two_body_orbit.py
from nbody_sim.engine import Engine
from nbody_sim.config import SimulationConfig
from nbody_sim.types import Body
import numpy as np

# Equal masses at ±1 on a circular orbit: v = sqrt(G m r) / d = 0.5, period 4π
a = Body("A", 1.0, position=(1.0, 0.0, 0.0), velocity=(0.0, 0.5, 0.0))
b = Body("B", 1.0, position=(-1.0, 0.0, 0.0), velocity=(0.0, -0.5, 0.0))
engine = Engine([a, b], SimulationConfig(G=1.0, softening=1e-3, time_step=0.005))

e0 = engine.get_stats().total_energy
while engine.time < 4 * np.pi:
    engine.step()

a, b = engine.bodies
print("t:", engine.time)
print("separation:", float(np.linalg.norm(a.position - b.position)))
print("energy drift:", abs(engine.get_stats().total_energy - e0) / abs(e0))
