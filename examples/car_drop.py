# examples/car_drop.py
# Drop a car from increasing heights onto flat farmland and report which drops it survives.
import logging

from playground_sim import Simulation
from playground_sim.util import to_pixels

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

for height_m in (1.0, 3.0, 6.0, 10.0, 15.0):
    sim = Simulation(entity="car", landscape_name="farm", seed=7)
    sim.environment.farm.height = 0.0
    sim.respawn()
    body = sim.body
    body.position[1] = sim.ground_elevation() - body.half_height - to_pixels(height_m)
    body.on_ground = False

    event = None
    for _ in range(600):
        event = sim.step(1/120) or event
        if body.on_ground and event is None and abs(body.velocity[1]) < 1.0:
            break

    if event is None:
        print(f"{height_m:5.1f} m: survived")
    else:
        print(f"{height_m:5.1f} m: {event.reason} (severity {event.severity:.1f})")
        print("        ", event.narrative)
