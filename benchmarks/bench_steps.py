"""
Microbenchmark: time per tick for each entity and landscape.
Run:
  python benchmarks/bench_steps.py
"""
import time

from playground_sim.simulation import Simulation
from playground_sim.profiler import Profiler
from playground_sim.renderer import NullRenderer


def run(entity: str, landscape: str, steps: int = 3000, render: bool = False):
    prof = Profiler()
    sim = Simulation(entity=entity, landscape_name=landscape, seed=12345, profiler=prof)
    renderer = NullRenderer()
    sim.controls.right = True

    # warmup
    for _ in range(30):
        sim.step(1/60)
    prof.reset()

    t0 = time.perf_counter()
    for i in range(steps):
        if entity == "person" and i % 90 == 0:
            sim.controls.jump_queued = True
        if sim.body.crashed:
            sim.respawn()
        sim.step(1/60)
        if render:
            renderer.render_simulation(sim)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof


if __name__ == "__main__":
    for entity in ["person", "car"]:
        for landscape in ["beach", "racetrack", "farm"]:
            per_step, prof = run(entity, landscape)
            print(f"{entity:6s} {landscape:9s}  tick={1e6*per_step:8.2f} us  ticks/s={1/per_step:10.1f}")
            for line in prof.report():
                print(" ", line)
            print()
