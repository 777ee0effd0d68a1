import math

import numpy as np

from playground_sim.environment import FarmParameters
from playground_sim.terrain import (
    Beach,
    Farm,
    Racetrack,
    create_landscape,
    sample_profile,
    smooth_noise,
)
from playground_sim.types import UnknownVariantError

import pytest


def test_farm_is_deterministic_per_seed():
    xs = np.linspace(-5000, 5000, 257)
    a = sample_profile(Farm(FarmParameters(seed=1234)), xs, 0.7)
    b = sample_profile(Farm(FarmParameters(seed=1234)), xs, 0.7)
    c = sample_profile(Farm(FarmParameters(seed=4321)), xs, 0.7)
    assert np.array_equal(a, b)
    assert not np.allclose(a, c)


def test_farm_stays_within_amplitude():
    params = FarmParameters(height=60.0, frequency=120.0, seed=99)
    farm = Farm(params, height=540.0)
    ys = sample_profile(farm, np.linspace(0, 20000, 2001), 3.0)
    baseline = 540.0 * 0.74
    assert np.all(ys >= baseline - 60.0 - 1e-9)
    assert np.all(ys <= baseline + 60.0 + 1e-9)


def test_zero_amplitude_farm_is_flat():
    farm = Farm(FarmParameters(height=0.0, seed=7), height=540.0)
    ys = sample_profile(farm, np.linspace(-1e4, 1e4, 101), 12.0)
    assert np.all(ys == 540.0 * 0.74)


@pytest.mark.parametrize("field", ["height", "frequency"])
def test_non_finite_farm_parameters_fall_back_to_flat(field):
    params = FarmParameters(height=40.0, frequency=180.0, seed=5)
    setattr(params, field, float("nan"))
    farm = Farm(params, height=540.0)
    ys = sample_profile(farm, np.linspace(-500, 500, 11), 2.0)
    assert np.all(ys == 540.0 * 0.74)

    params.height = float("inf")
    params.frequency = 180.0
    assert farm.ground_elevation(10.0, 0.0) == 540.0 * 0.74


def test_farm_frequency_is_floored():
    low = Farm(FarmParameters(frequency=1.0, seed=3))
    floor = Farm(FarmParameters(frequency=20.0, seed=3))
    xs = np.linspace(0, 500, 51)
    assert np.array_equal(sample_profile(low, xs, 0.0), sample_profile(floor, xs, 0.0))


def test_farm_is_smooth_enough_for_slope_probing():
    """Nearby samples differ by a small amount: the field is continuous."""
    farm = Farm(FarmParameters(height=40.0, frequency=180.0, seed=42))
    xs = np.arange(0.0, 3000.0, 0.1)
    ys = sample_profile(farm, xs, 0.0)
    assert np.max(np.abs(np.diff(ys))) < 1.0


def test_smooth_noise_is_continuous_across_lattice_points():
    for k in range(-3, 4):
        left = smooth_noise(17, k - 1e-9)
        right = smooth_noise(17, k + 1e-9)
        assert abs(left - right) < 1e-6
        assert 0.0 <= smooth_noise(17, k + 0.5) < 1.0


def test_frozen_snapshot_ignores_live_changes():
    params = FarmParameters(height=40.0, seed=10)
    farm = Farm(params)
    snapshot = farm.frozen()
    before = snapshot.ground_elevation(250.0, 1.0)
    params.height = 0.0
    params.seed = 11
    assert snapshot.ground_elevation(250.0, 1.0) == before
    assert farm.ground_elevation(250.0, 1.0) == farm.height * 0.74


def test_landscapes_are_well_defined_far_from_origin():
    for landscape in (Beach(), Racetrack(), Farm(FarmParameters(seed=5))):
        for x in (1e6, -1e7, 1e9):
            y = landscape.ground_elevation(x, 1234.5)
            assert math.isfinite(y)
            assert 0.0 < y < landscape.height


def test_racetrack_is_static_and_has_its_bump():
    track = Racetrack(width=960.0, height=540.0)
    assert track.ground_elevation(100.0, 0.0) == track.ground_elevation(100.0, 50.0)
    peak = track.ground_elevation(960.0 * 0.55, 0.0)
    assert peak < track.ground_elevation(960.0 * 0.55 + 1000.0, 0.0)


def test_registry():
    assert isinstance(create_landscape("beach"), Beach)
    shared = FarmParameters(seed=8)
    farm = create_landscape("farm", shared)
    assert farm.params is shared
    with pytest.raises(UnknownVariantError):
        create_landscape("moon")
