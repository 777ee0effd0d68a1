import io

import numpy as np

from playground_sim.effects import DebrisField
from playground_sim.environment import FarmParameters
from playground_sim.equations import build_equations, build_readout
from playground_sim.profiler import Profiler
from playground_sim.renderer import BufferedRenderer, DebugRenderer, NullRenderer
from playground_sim.simulation import Simulation
from playground_sim.terrain import Farm
from playground_sim.util import format_or_na, to_pixels


def _crash(sim: Simulation) -> None:
    sim.environment.farm.height = 0.0
    sim.respawn()
    body = sim.body
    body.position[1] = sim.ground_elevation() - body.half_height - 1.0
    body.velocity[1] = to_pixels(16.0)
    body.air_time = 0.4
    assert sim.step(1 / 60) is not None


def test_debris_burst_is_thrown_upward_and_expires():
    debris = DebrisField(np.random.default_rng(0))
    flat = Farm(FarmParameters(height=0.0), height=540.0)
    origin = np.array([480.0, 300.0])
    debris.burst(origin, 91.0, 49.0, base_speed=500.0)
    assert len(debris) == 9
    for frag in debris.fragments:
        assert frag.vy <= 0.0
        assert 1.2 <= frag.life <= 1.7
        assert abs(frag.x - 480.0) <= 91.0 * 0.3

    for _ in range(200):
        debris.update(flat, 9.81, 0.0, 0.0, 480.0, 1 / 60)
        for frag in debris.fragments:
            assert frag.y <= flat.ground_elevation(0.0, 0.0) + 1e-9
    assert len(debris) == 0


def test_new_burst_replaces_old_fragments():
    debris = DebrisField(np.random.default_rng(1))
    debris.burst(np.zeros(2), 10.0, 10.0, 100.0)
    debris.burst(np.zeros(2), 10.0, 10.0, 100.0)
    assert len(debris) == 9
    debris.clear()
    assert len(debris) == 0


def test_equation_panel_reflects_state():
    sim = Simulation(entity="car", landscape_name="racetrack", seed=3)
    sim.controls.right = True
    for _ in range(30):
        sim.step(1 / 60)
    cards = build_equations(sim)
    assert [c.title for c in cards] == [
        "Vertical Motion", "Horizontal Motion", "Energy Snapshot", "Supporting Relations",
    ]
    horizontal = cards[1]
    assert "F_input = 4000 N" in horizontal.details
    assert horizontal.modified  # racetrack grip differs from the default 0.8
    assert "g = 9.81 m/s^2" in cards[0].details
    assert cards[2].modified


def test_equation_panel_reports_crash_status():
    sim = Simulation(entity="car", landscape_name="farm", seed=3)
    _crash(sim)
    relations = build_equations(sim)[3].details
    assert relations[0] == "Status: vehicle disabled after high-impact collision"


def test_readout_units():
    sim = Simulation(entity="person", landscape_name="beach", seed=3)
    sim.body.velocity[:] = (to_pixels(3.0), to_pixels(4.0))
    readout = build_readout(sim)
    assert np.isclose(readout.speed, 5.0)
    assert np.isclose(readout.speed_kmh, 18.0)
    assert readout.speed_text() == ("5.0 m/s", "18.0 km/h")
    assert readout.speed_text(imperial=True)[0] == "11.2 mph"
    assert np.isclose(readout.height_above_ground, 0.0, atol=1e-9)


def test_non_finite_values_render_as_na():
    assert format_or_na(float("nan")) == "n/a"
    assert format_or_na(float("inf"), 1) == "n/a"
    assert format_or_na(1.234, 1) == "1.2"


def test_buffered_renderer_records_frames():
    sim = Simulation(entity="car", landscape_name="farm", seed=8)
    renderer = BufferedRenderer()
    for _ in range(5):
        sim.step(1 / 60)
        renderer.render_simulation(sim)
    assert len(renderer.frames) == 5
    frame = renderer.frames[-1]
    assert frame["body"]["kind"] == "car"
    assert frame["body"]["position"][0] == sim.center_x
    assert frame["ground"].shape[1] == 2
    assert frame["crash"] is None

    _crash(sim)
    renderer.render_simulation(sim)
    assert renderer.frames[-1]["crash"].startswith("Hard vertical impact")
    assert len(renderer.frames[-1]["debris"]) == 9


def test_debug_and_null_renderers():
    sim = Simulation(entity="car", landscape_name="farm", seed=8)
    _crash(sim)
    out = io.StringIO()
    DebugRenderer(output=out).render_simulation(sim)
    text = out.getvalue()
    assert "=== Frame" in text
    assert "[car]" in text
    assert "Crash! Hard vertical impact" in text
    NullRenderer().render_simulation(sim)


def test_profiler_records_tick_phases():
    prof = Profiler()
    sim = Simulation(entity="person", landscape_name="beach", seed=1, profiler=prof)
    for _ in range(10):
        sim.step(1 / 60)
    summary = prof.stats.summary()
    for name in ("forces", "integrate", "collide", "friction", "debris"):
        assert summary[name]["n"] == 10


def test_profiler_report_and_reset():
    prof = Profiler()
    with prof.section("collide"):
        pass
    with prof.section("collide"):
        pass
    stats = prof.stats.summary()["collide"]
    assert stats["n"] == 2
    assert stats["max_ms"] >= stats["p95_ms"] >= 0.0
    lines = prof.report()
    assert len(lines) == 1 and lines[0].startswith("collide")
    prof.reset()
    assert prof.stats.summary() == {}
