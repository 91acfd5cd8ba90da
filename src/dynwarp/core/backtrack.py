"""Recovery of the warping path from a distance surface."""

from __future__ import annotations

import numpy as np

from ..types import ContractViolation, Direction
from .accumulate import _clip, strain_candidates


def backtrack_distance_function(
    direction: Direction | int,
    d: np.ndarray,
    err: np.ndarray,
    lag_min: int,
    b: int,
) -> np.ndarray:
    """Walk ``d`` from one boundary to the other and return integer lags.

    Parameters
    ----------
    direction:
        Side to start from: ``Direction.FORWARD`` (``+1``) starts at the
        first sample and walks forward in time, ``Direction.BACKWARD``
        (``-1``) starts at the last sample.  This is the opposite of the
        sweep that produced ``d``.
    d:
        Distance surface of shape ``(n_sample, n_lag)``.
    err:
        Error surface matching ``d``.
    lag_min:
        Lag value of the first column, i.e. ``-max_lag``.
    b:
        Strain limit, ``b >= 1``.

    Returns
    -------
    numpy.ndarray
        Integer lag at every sample, satisfying ``|u[i] - u[i-1]| <= 1/b``.

    Notes
    -----
    On equal candidate costs the current lag is kept; between the two
    neighbouring lags ``l-1`` wins over ``l+1``.
    """

    step = Direction.coerce(direction).step
    if b < 1:
        raise ContractViolation("b must be a positive integer")
    if d.shape != err.shape:
        raise ContractViolation("distance and error surfaces must have the same shape")

    n_sample, n_lag = d.shape
    stbar = np.zeros(n_sample, dtype=np.int64)

    if step > 0:
        i_begin, i_end = 0, n_sample - 1
    else:
        i_begin, i_end = n_sample - 1, 0

    ll = int(np.argmin(d[i_begin]))
    stbar[i_begin] = ll + lag_min

    ii = i_begin
    while ii != i_end:
        ji = _clip(ii + step, n_sample)
        jb = _clip(ii + step * b, n_sample)

        dist_minus, dist_same, dist_plus = strain_candidates(d, err, ji, jb, ll)
        dl = min(dist_minus, dist_same, dist_plus)

        if dl == dist_same:
            ll_next = ll
            changed = False
        elif dl == dist_minus:
            ll_next = max(ll - 1, 0)
            changed = True
        else:
            ll_next = min(ll + 1, n_lag - 1)
            changed = True

        ii += step
        stbar[ii] = ll_next + lag_min

        if changed and ji != jb:
            # hold the new lag over the samples skipped by the strain limit
            while ii != jb:
                ii += step
                stbar[ii] = ll_next + lag_min

        ll = ll_next

    return stbar


__all__ = ["backtrack_distance_function"]
