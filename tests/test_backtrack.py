import numpy as np
import pytest

from dynwarp.core import (
    accumulate_error_function,
    backtrack_distance_function,
    compute_dtw_error,
    compute_error_function,
)
from dynwarp.types import ContractViolation, Direction


def _surfaces(direction, b, n=60, lag=6, seed=0):
    rng = np.random.default_rng(seed)
    err = compute_error_function(rng.normal(size=n), rng.normal(size=n), n, lag)
    d = accumulate_error_function(direction, err, n, lag, b)
    return err, d


@pytest.mark.parametrize("direction", [Direction.FORWARD, Direction.BACKWARD])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_strain_bound_b1(direction, seed):
    err, d = _surfaces(direction, 1, seed=seed)
    walk = -direction.step
    lags = backtrack_distance_function(walk, d, err, -6, 1)
    assert lags.shape == (60,)
    assert np.all(np.abs(np.diff(lags)) <= 1)
    assert lags.min() >= -6 and lags.max() <= 6


@pytest.mark.parametrize("b", [2, 3, 4])
def test_lag_changes_are_spaced_by_b(b):
    err, d = _surfaces(Direction.FORWARD, b, seed=4)
    lags = backtrack_distance_function(Direction.BACKWARD, d, err, -6, b)
    steps = np.diff(lags)
    assert np.all(np.abs(steps) <= 1)
    changes = np.flatnonzero(steps)
    if changes.size > 1:
        assert np.all(np.diff(changes) >= b)


@pytest.mark.parametrize("direction", [Direction.FORWARD, Direction.BACKWARD])
@pytest.mark.parametrize("b", [1, 2, 3])
def test_path_cost_equals_minimum_distance(direction, b):
    err, d = _surfaces(direction, b, seed=5)
    walk = -direction.step
    lags = backtrack_distance_function(walk, d, err, -6, b)
    end = -1 if direction is Direction.FORWARD else 0
    assert compute_dtw_error(err, lags, -6) == pytest.approx(d[end].min())


def _tie_surfaces(first_row):
    d = np.array([first_row, [5.0, 0.0, 5.0]])
    err = np.zeros_like(d)
    return d, err


def test_tie_keeps_current_lag():
    d, err = _tie_surfaces([1.0, 1.0, 1.0])
    lags = backtrack_distance_function(Direction.BACKWARD, d, err, -1, 1)
    np.testing.assert_array_equal(lags, [0, 0])


def test_tie_between_neighbours_prefers_lower_lag():
    d, err = _tie_surfaces([0.5, 1.0, 0.5])
    lags = backtrack_distance_function(Direction.BACKWARD, d, err, -1, 1)
    np.testing.assert_array_equal(lags, [-1, 0])


def test_moves_to_upper_lag_when_cheaper():
    d, err = _tie_surfaces([1.0, 1.0, 0.5])
    lags = backtrack_distance_function(Direction.BACKWARD, d, err, -1, 1)
    np.testing.assert_array_equal(lags, [1, 0])


def test_forward_walk_starts_at_first_sample():
    d = np.array([[3.0, 2.0, 0.0], [1.0, 1.0, 1.0]])
    err = np.zeros_like(d)
    lags = backtrack_distance_function(Direction.FORWARD, d, err, -1, 1)
    np.testing.assert_array_equal(lags, [1, 1])


def test_new_lag_held_over_skipped_samples():
    # walking backward from the last sample with b=3: a move to l-1 at
    # sample 4 is held over samples 4, 3 and 2
    n, n_lag = 6, 3
    d = np.full((n, n_lag), 10.0)
    d[5] = [9.0, 0.0, 9.0]
    d[4, 1] = 10.0
    d[2, 0] = 0.0
    err = np.zeros((n, n_lag))
    lags = backtrack_distance_function(Direction.BACKWARD, d, err, -1, 3)
    np.testing.assert_array_equal(lags[2:], [-1, -1, -1, 0])


def test_shape_mismatch_rejected():
    d = np.zeros((4, 3))
    with pytest.raises(ContractViolation):
        backtrack_distance_function(Direction.BACKWARD, d, np.zeros((4, 5)), -1, 1)


def test_path_length_mismatch_rejected():
    err = np.zeros((5, 3))
    with pytest.raises(ContractViolation):
        compute_dtw_error(err, [0, 0, 0], -1)
