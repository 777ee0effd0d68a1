# examples/drive_farm.py
# Drive a car across rolling farmland in the rain with a headwind and print a readout each second.
import logging

from playground_sim import Simulation
from playground_sim.equations import build_readout
from playground_sim.renderer import DebugRenderer
from playground_sim.util import to_meters

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

sim = Simulation(entity="car", landscape_name="farm", seed=2024)
sim.environment.set_slickness_percent(40.0)
sim.environment.wind_speed = -5.0
sim.controls.right = True

renderer = DebugRenderer(verbose=False)
for frame in range(600):
    sim.step(1/60)
    if frame % 60 == 0:
        r = build_readout(sim)
        speed, speed_alt = r.speed_text()
        print(f"t={frame / 60:4.1f}s  x={to_meters(sim.world_x):8.1f} m  {speed} ({speed_alt})  "
              f"grip={sim.environment.effective_friction:.2f}  crashed={sim.body.crashed}")
    if sim.body.crashed:
        renderer.render_simulation(sim)
        break
