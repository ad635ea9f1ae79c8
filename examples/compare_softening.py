# examples/compare_softening.py
from nbody_sim.engine import Engine
from nbody_sim.config import SimulationConfig
from nbody_sim.types import Body

# Head-on fall from rest; softening bounds the force at the crossing
for eps in (0.0, 0.01, 0.08, 0.3):
    bodies = [
        Body("A", 1.0, position=(-1.0, 0.0, 0.0)),
        Body("B", 1.0, position=(1.0, 0.0, 0.0)),
    ]
    engine = Engine(bodies, SimulationConfig(G=1.0, softening=eps))
    peak = 0.0
    for _ in range(400):
        engine.step(0.005)
        peak = max(peak, abs(engine.bodies[0].velocity[0]))
    s = engine.get_stats()
    print(f"eps={eps:5.2f}  peak |v|={peak:10.4f}  E={s.total_energy:10.4f}")
