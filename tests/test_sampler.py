import numpy as np
import pytest

from tankdrain.core.interpolation import hold_interp
from tankdrain.core.sampler import TrajectorySampler, height_at
from tankdrain.core.trajectory import Trajectory
from tankdrain.domain.drain_settings import DrainSettings


@pytest.fixture
def trajectory():
    return Trajectory(times=[0.0, 5.0, 9.0, 10.0], heights=[5.0, 1.0, 0.04, 0.03])


def test_linear_interpolation(trajectory):
    assert height_at(trajectory, 0.0) == 5.0
    assert height_at(trajectory, 2.5) == pytest.approx(3.0)
    assert height_at(trajectory, 7.0) == pytest.approx(0.52)


def test_clamped_to_zero_at_and_after_span(trajectory):
    assert height_at(trajectory, 10.0) == 0.0
    assert height_at(trajectory, 10.5) == 0.0
    assert height_at(trajectory, 1e6) == 0.0


def test_idempotent(trajectory):
    assert height_at(trajectory, 6.3) == height_at(trajectory, 6.3)


def test_snap_to_zero_near_end(trajectory):
    # below 0.05 m but before 95 % of the span: keep the value
    assert height_at(trajectory, 9.0) == pytest.approx(0.04)
    # below 0.05 m and past 95 % of the span: snap
    assert height_at(trajectory, 9.6) == 0.0


def test_snap_thresholds_are_independent(trajectory):
    assert height_at(trajectory, 9.6, snap_height=0.0) == pytest.approx(0.034)
    assert height_at(trajectory, 9.2, snap_time_fraction=0.9) == 0.0


def test_custom_interpolator(trajectory):
    calls = []

    def nearest(x, xp, fp):
        calls.append(x)
        return float(fp[int(np.argmin(np.abs(np.asarray(xp) - x)))])

    assert height_at(trajectory, 4.0, interp=nearest) == 1.0
    assert calls == [4.0]


def test_nan_rejected(trajectory):
    with pytest.raises(ValueError):
        height_at(trajectory, float('nan'))


def test_sampler_uses_settings(trajectory):
    sampler = TrajectorySampler(trajectory, DrainSettings(snap_height=0.0))
    assert sampler(9.6) == pytest.approx(0.034)
    assert sampler.height_at(10.0) == 0.0
    assert sampler.total_time == 10.0
    assert sampler.trajectory is trajectory


def test_trajectory_is_read_only(trajectory):
    with pytest.raises(ValueError):
        trajectory.heights[0] = 1.0
    with pytest.raises(AttributeError):
        trajectory.times = np.zeros(4)


def test_trajectory_copies_input():
    heights = np.array([2.0, 1.0])
    traj = Trajectory(times=[0.0, 1.0], heights=heights)
    heights[0] = 9.0
    assert traj.initial_height == 2.0


@pytest.mark.parametrize('times, heights', [
    ([0.0, 0.0, 1.0], [1.0, 0.5, 0.0]),
    ([0.0, 1.0], [1.0]),
    ([0.0], [1.0]),
    ([0.0, 1.0], [1.0, -0.1]),
])
def test_trajectory_validation(times, heights):
    with pytest.raises(ValueError):
        Trajectory(times=times, heights=heights)


def test_first_time_below(trajectory):
    assert trajectory.first_time_below(0.05) == 9.0
    assert trajectory.first_time_below(0.01) is None


def test_to_frame(trajectory):
    df = trajectory.to_frame()
    assert list(df.columns) == ['t, с', 'h, м']
    assert len(df) == 4


def test_hold_interpolator(trajectory):
    assert hold_interp(7.0, trajectory.times, trajectory.heights) == 1.0
    assert hold_interp(5.0, trajectory.times, trajectory.heights) == 1.0
    assert hold_interp(-1.0, trajectory.times, trajectory.heights) == 5.0
    sampler = TrajectorySampler(trajectory, interp=hold_interp)
    assert sampler(9.4) == pytest.approx(0.04)
