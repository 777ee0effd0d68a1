import numpy as np
import pytest

from playground_sim.constants import MAX_FRAME_DT
from playground_sim.simulation import Simulation
from playground_sim.terrain import Landscape
from playground_sim.types import UnknownVariantError
from playground_sim.util import to_meters, to_pixels


class Wall(Landscape):
    """Flat ground that turns into a 2:1 ramp at x = 100 px."""
    name = "wall"
    label = "Wall"

    def ground_elevation(self, x, t):
        base = 400.0
        return base if x < 100.0 else base - (x - 100.0) * 2.0


def _flat_car(seed: int = 1) -> Simulation:
    sim = Simulation(entity="car", landscape_name="farm", seed=seed)
    sim.environment.farm.height = 0.0
    sim.environment.air_resistance = 0.0
    sim.respawn()
    return sim


def test_flat_terrain_drop_bounces_once_then_settles():
    """
    A car released 1.0 m above flat ground hits at v ≈ sqrt(2 g h) ≈ 4.43 m/s,
    well below every crash threshold, rebounds at e * v with e = 0.05 and
    then comes to rest on the ground.
    """
    sim = _flat_car()
    sim.environment.gravity = 9.81
    dt = 1 / 120
    ground = sim.ground_elevation()
    sim.body.position[1] = ground - sim.body.half_height - to_pixels(1.0)
    sim.body.on_ground = False

    impact = rebound = None
    for _ in range(240):
        vy_before = sim.body.velocity[1]
        sim.step(dt)
        if sim.body.on_ground:
            impact = vy_before + to_pixels(9.81) * dt
            rebound = -sim.body.velocity[1]
            break

    assert impact is not None, "car never reached the ground"
    assert np.isclose(to_meters(impact), np.sqrt(2 * 9.81 * 1.0), rtol=0.05)
    assert np.isclose(rebound, impact * 0.05)
    assert rebound > 0.0

    for _ in range(120):
        sim.step(dt)
    assert sim.body.on_ground
    assert sim.body.velocity[1] == 0.0
    assert not sim.body.crashed
    assert sim.diagnostics is None


def test_hard_landing_crashes_car_and_spawns_debris():
    sim = _flat_car(seed=4)
    body = sim.body
    body.position[1] = sim.ground_elevation() - body.half_height - 1.0
    body.velocity[:] = (0.0, to_pixels(15.0))
    body.on_ground = False
    body.air_time = 0.2

    event = sim.step(1 / 60)
    assert event is not None
    assert event.reason == "Hard vertical impact"
    assert sim.diagnostics is event
    assert body.crashed and body.on_ground
    assert np.all(body.velocity == 0.0)
    assert len(sim.debris) == 9
    assert event.effective_friction == sim.environment.effective_friction


def test_crashed_car_stays_crashed_and_ignores_input():
    sim = _flat_car(seed=4)
    body = sim.body
    body.position[1] = sim.ground_elevation() - body.half_height - 1.0
    body.velocity[1] = to_pixels(15.0)
    body.air_time = 0.5
    first = sim.step(1 / 60)
    assert first is not None

    sim.controls.right = True
    for _ in range(60):
        assert sim.step(1 / 60) is None
        assert sim.body.crashed
        assert sim.body.velocity[0] == 0.0
    assert sim.diagnostics is first
    assert sim.world_offset == 0.0
    assert np.isclose(sim.crash_timer, 61 / 60)


def test_car_runs_into_steep_ramp():
    sim = Simulation(entity="car", landscape_name="beach", seed=2)
    sim.environment.air_resistance = 0.0
    sim.environment.ground_friction = 0.0
    sim.landscape = Wall()
    sim.respawn()
    sim.body.on_ground = True
    sim.body.velocity[0] = to_pixels(10.0)

    event = None
    for _ in range(60):
        event = sim.step(1 / 60)
        if event:
            break

    assert event is not None
    assert event.reason == "Impacted steep slope"
    assert sim.body.on_ground
    assert sim.world_x < 100.0
    assert len(event.thresholds) == 2


def test_person_never_crashes():
    sim = Simulation(entity="person", landscape_name="beach", seed=2)
    sim.landscape = Wall()
    sim.respawn()
    sim.body.on_ground = True
    sim.body.velocity[0] = to_pixels(8.0)
    sim.controls.right = True
    for _ in range(120):
        assert sim.step(1 / 60) is None
    assert not sim.body.crashed


def test_respawn_resets_state():
    sim = _flat_car(seed=9)
    body = sim.body
    body.position[1] = sim.ground_elevation() - body.half_height - 1.0
    body.velocity[1] = to_pixels(15.0)
    body.air_time = 0.5
    assert sim.step(1 / 60) is not None

    old = sim.body
    sim.respawn()
    body = sim.body
    assert body is not old
    assert body.crashed is False
    assert body.on_ground is False
    assert np.all(body.velocity == 0.0)
    assert body.air_time == 0.0
    assert sim.diagnostics is None
    assert len(sim.debris) == 0
    assert sim.world_offset == 0.0
    assert sim.crash_timer == 0.0
    assert np.isclose(body.bottom, sim.ground_elevation(0.0))


def test_frame_dt_is_clamped():
    sim = Simulation(entity="person", landscape_name="beach", seed=3)
    sim.controls.right = True
    sim.step(5.0)
    assert np.isclose(sim.scene_time, MAX_FRAME_DT)
    # from rest, one clamped tick moves at most a * dt² with a = F / m
    accel = to_pixels(220.0 / 70.0)
    expected_dx = accel * MAX_FRAME_DT ** 2
    assert sim.world_offset <= expected_dx + 1e-9


def test_invalid_dt_is_ignored():
    sim = Simulation(seed=3)
    snapshot = sim.body.position.copy()
    assert sim.step(0.0) is None
    assert sim.step(-1.0) is None
    assert sim.step(float("nan")) is None
    assert np.array_equal(sim.body.position, snapshot)
    assert sim.scene_time == 0.0


def test_scene_clock_only_runs_while_moving():
    sim = _flat_car(seed=6)
    for _ in range(30):
        sim.step(1 / 60)
    assert sim.scene_time == 0.0

    sim.controls.right = True
    sim.step(1 / 60)
    assert sim.scene_time > 0.0


def test_live_parameter_writes_are_seen_next_tick():
    sim = _flat_car(seed=6)
    for _ in range(10):
        sim.step(1 / 60)
    assert sim.body.velocity[0] == 0.0

    sim.environment.air_resistance = 0.5
    sim.environment.wind_speed = 10.0
    sim.step(1 / 60)
    # a_drag = -c (0 - 10) = 5 m/s², F = m a
    assert np.isclose(sim.ledger.drag, 1200.0 * 5.0)

    flat = sim.ground_elevation(137.0)
    sim.environment.farm.height = 80.0
    assert sim.ground_elevation(137.0) != flat


def test_landscape_switch_applies_defaults_and_respawns():
    sim = Simulation(entity="car", landscape_name="beach", seed=11)
    assert sim.environment.ground_friction == 0.45
    sim.controls.right = True
    for _ in range(30):
        sim.step(1 / 60)
    sim.set_landscape("racetrack")
    assert sim.environment.ground_friction == 0.92
    assert sim.environment.air_resistance == 0.015
    assert sim.scene_time == 0.0
    assert sim.world_offset == 0.0

    sim.set_entity("person")
    assert sim.body.mass == 70.0
    with pytest.raises(UnknownVariantError):
        sim.set_landscape("moon")
    with pytest.raises(UnknownVariantError):
        sim.set_entity("bicycle")


def test_reset_restores_defaults_and_reseeds_farm():
    sim = Simulation(entity="car", landscape_name="farm", seed=12)
    env = sim.environment
    env.gravity = 3.0
    env.wind_speed = 7.0
    env.set_slickness_percent(250.0)
    assert env.slickness == 1.0
    env.farm.height = 5.0

    sim.reset()
    assert env.gravity == 9.81
    assert env.wind_speed == 0.0
    assert env.slickness == 0.0
    assert env.ground_friction == 0.72
    assert env.farm.height == 40.0
    assert 0 <= env.farm.seed < 1_000_000


def test_same_seed_same_run():
    def run(seed):
        sim = Simulation(entity="car", landscape_name="farm", seed=seed)
        sim.controls.right = True
        for _ in range(200):
            sim.step(1 / 60)
        return sim.world_offset, sim.body.position.copy()

    a, b = run(21), run(21)
    assert a[0] == b[0]
    assert np.array_equal(a[1], b[1])


def test_nan_farm_height_keeps_body_on_flat_ground():
    sim = Simulation(entity="car", landscape_name="farm", seed=13)
    sim.environment.farm.height = float("nan")
    sim.respawn()
    for _ in range(5):
        sim.step(1 / 60)
    baseline = sim.viewport_height * 0.74
    assert np.all(np.isfinite(sim.body.position))
    assert np.isclose(sim.body.bottom, baseline)


class Void(Landscape):
    name = "void"
    label = "Void"

    def ground_elevation(self, x, t):
        return float("nan")


def test_undefined_ground_recovers_to_viewport_floor():
    sim = Simulation(entity="person", landscape_name="beach", seed=14)
    sim.landscape = Void()
    sim.respawn()
    for _ in range(3):
        sim.step(1 / 60)
        assert np.all(np.isfinite(sim.body.position))
        assert sim.body.position[1] == sim.viewport_height - sim.body.half_height
        assert np.all(sim.body.velocity == 0.0)
