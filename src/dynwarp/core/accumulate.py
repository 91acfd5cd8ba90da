"""Accumulation of the error surface into a distance surface.

The recurrence is equation 6 of Hale (2013) generalised to a strain limit
``b`` through equation 10: the lag may change by one step every ``b``
samples, and the errors of the skipped samples are added to the two lag
changing candidates, as the lag is assumed to ramp linearly over them.
"""

from __future__ import annotations

import logging

import numpy as np

from ..types import ContractViolation, Direction

logger = logging.getLogger(__name__)


def _clip(index: int, n_sample: int) -> int:
    return max(0, min(n_sample - 1, index))


def _skipped(ji: int, jb: int) -> slice:
    """Samples from ``ji`` toward ``jb``, ``jb`` excluded."""
    if ji > jb:
        return slice(jb + 1, ji + 1)
    return slice(ji, jb)


def strain_candidates(
    d: np.ndarray,
    err: np.ndarray,
    ji: int,
    jb: int,
    lag_index: int | np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the three predecessor costs for ``lag_index``.

    Parameters
    ----------
    d:
        Distance surface being accumulated or walked.
    err:
        Error surface matching ``d``.
    ji:
        Neighbouring sample (one step away).
    jb:
        Sample ``b`` steps away, already clipped to the array.
    lag_index:
        Column index, or array of column indices, of the current lag.

    Returns
    -------
    tuple
        ``(dist_minus, dist_same, dist_plus)`` for the lag columns ``l-1``,
        ``l`` and ``l+1``.  Neighbouring columns are clamped to the array.
    """

    n_lag = d.shape[1]
    l = np.asarray(lag_index)
    l_minus = np.maximum(l - 1, 0)
    l_plus = np.minimum(l + 1, n_lag - 1)

    dist_minus = d[jb, l_minus]
    dist_same = d[ji, l]
    dist_plus = d[jb, l_plus]

    if ji != jb:  # equation 10 in Hale (2013)
        skip = _skipped(ji, jb)
        dist_minus = dist_minus + err[skip, l_minus].sum(axis=0)
        dist_plus = dist_plus + err[skip, l_plus].sum(axis=0)

    return dist_minus, dist_same, dist_plus


def accumulate_error_function(
    direction: Direction | int,
    err: np.ndarray,
    n_sample: int,
    lag: int,
    b: int,
) -> np.ndarray:
    """Accumulate ``err`` into a distance surface.

    Parameters
    ----------
    direction:
        ``Direction.FORWARD`` (or ``+1``) sweeps forward in time,
        ``Direction.BACKWARD`` (or ``-1``) backward.
    err:
        Error surface of shape ``(n_sample, 2 * lag + 1)``.
    n_sample:
        Number of samples in the error surface.
    lag:
        Maximum lag in samples.
    b:
        Strain limit, ``b >= 1``.

    Returns
    -------
    numpy.ndarray
        Distance surface with the same shape as ``err``.  The first row
        processed by the sweep equals the matching row of ``err``.
    """

    step = Direction.coerce(direction).step
    if b < 1:
        raise ContractViolation("b must be a positive integer")
    n_lag = 2 * lag + 1
    if err.shape != (n_sample, n_lag):
        raise ContractViolation(
            f"error surface has shape {err.shape}, expected {(n_sample, n_lag)}"
        )

    d = np.zeros((n_sample, n_lag), dtype=float)
    lags = np.arange(n_lag)

    samples = range(n_sample) if step > 0 else range(n_sample - 1, -1, -1)
    for ii in samples:
        ji = _clip(ii - step, n_sample)
        jb = _clip(ii - step * b, n_sample)
        if ji == ii:
            # boundary sample: no predecessor
            d[ii] = err[ii]
            continue
        dist_minus, dist_same, dist_plus = strain_candidates(d, err, ji, jb, lags)
        d[ii] = err[ii] + np.minimum(np.minimum(dist_minus, dist_same), dist_plus)

    return d


def accumulate_symmetric(err: np.ndarray, n_sample: int, lag: int, b: int) -> np.ndarray:
    """Accumulate in both directions and combine the two surfaces.

    The sum of the forward and backward surfaces counts the error at every
    cell twice, so one copy of ``err`` is subtracted.
    """

    backward = accumulate_error_function(Direction.BACKWARD, err, n_sample, lag, b)
    forward = accumulate_error_function(Direction.FORWARD, err, n_sample, lag, b)
    return backward + forward - err


__all__ = ["strain_candidates", "accumulate_error_function", "accumulate_symmetric"]
