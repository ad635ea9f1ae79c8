"""
Microbenchmark: time per step vs number of bodies.
Run:
  python benchmarks/bench_steps.py
"""
import time

from nbody_sim.scenarios import create_engine
from nbody_sim.profiler import Profiler


def run(n: int, steps: int = 300):
    prof = Profiler()
    # Random scenario: one star plus n - 1 planets
    engine = create_engine("Random", params={"count": n - 1}, seed=12345, profiler=prof)

    # warmup
    for _ in range(30):
        engine.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        engine.step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for n in [2, 4, 8, 13]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "controller", "integrate"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
