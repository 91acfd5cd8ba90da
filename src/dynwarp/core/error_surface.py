"""Pointwise error surface between two traces.

The error surface ``e[i, l]`` holds the mismatch between sample ``i`` of the
trace being warped and sample ``i + lag`` of the reference trace for every
candidate lag in ``[-lag, +lag]``.  Column ``c`` corresponds to the lag
``c - lag``.  See Hale (2013), "Dynamic warping of seismic images",
Geophysics 78, S105-S115.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..types import ContractViolation, Norm

logger = logging.getLogger(__name__)


def compute_error_function(
    u1: Sequence[float] | np.ndarray,
    u0: Sequence[float] | np.ndarray,
    n_sample: int,
    lag: int,
    norm: Norm | str = Norm.L2,
) -> np.ndarray:
    """Compute the error function for each sample and lag.

    Parameters
    ----------
    u1:
        Trace we intend to warp.
    u0:
        Reference trace to compare with.
    n_sample:
        Number of points to compare in the traces.
    lag:
        Maximum lag in samples to search.
    norm:
        ``"L2"`` for squared differences or ``"L1"`` for absolute differences.

    Returns
    -------
    numpy.ndarray
        Array of shape ``(n_sample, 2 * lag + 1)``.  Entries whose
        comparison sample would fall outside the traces are filled by constant
        extrapolation from the nearest valid sample of the same lag.
    """

    if lag < 0:
        raise ContractViolation("lag must be non-negative")
    if lag >= n_sample:
        raise ContractViolation("lag must be smaller than n_sample")
    norm = Norm.coerce(norm)

    a = np.asarray(u1, dtype=float)[:n_sample]
    r = np.asarray(u0, dtype=float)[:n_sample]
    if a.size != n_sample or r.size != n_sample:
        raise ContractViolation("traces must contain at least n_sample points")

    err = np.zeros((n_sample, 2 * lag + 1), dtype=float)

    for ll in range(-lag, lag + 1):
        col = ll + lag
        # valid samples satisfy 0 <= i + ll < n_sample
        lo = max(0, -ll)
        hi = min(n_sample, n_sample - ll)
        diff = a[lo:hi] - r[lo + ll : hi + ll]
        if norm is Norm.L2:
            err[lo:hi, col] = diff ** 2
        else:
            err[lo:hi, col] = np.abs(diff)

        # corners: constant extrapolation along the sample axis
        err[:lo, col] = err[lo, col]
        err[hi:, col] = err[hi - 1, col]

    logger.debug("error surface %s computed with %s norm", err.shape, norm.value)
    return err


__all__ = ["compute_error_function"]
