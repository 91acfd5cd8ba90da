"""Dynamic time warping between two traces.

:func:`dtwdt` measures the time-varying lag between two equal-length traces
over a window of samples.  The error surface is computed once, accumulated in
the requested direction (or in both directions for smoothing), and the
minimum-distance path is recovered by backtracking.  :func:`dtw_dvv` follows
the warp with a linear regression of the time shifts to estimate dv/v.

References: Hale (2013), "Dynamic warping of seismic images"; Mikesell et al.
(2015), "Monitoring glacier surface seismicity in time and space using
Rayleigh waves".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..config import Settings
from ..types import ContractViolation, Direction, Norm
from .accumulate import accumulate_error_function, accumulate_symmetric
from .backtrack import backtrack_distance_function
from .cost import compute_dtw_error
from .error_surface import compute_error_function
from .regression import DvvEstimate, dvv_lstsq

logger = logging.getLogger(__name__)


@dataclass
class WarpResult:
    """Result of warping one trace onto another.

    Attributes
    ----------
    time_shift:
        Time shift at each windowed sample, ``lags / fs``.
    lags:
        Integer lag in samples at each windowed sample.
    distance:
        Distance surface used for backtracking, shape ``(N, 2 * max_lag + 1)``.
    error:
        Accumulated error along the warping path.
    warped_time:
        Windowed time axis plus ``time_shift``.
    max_lag:
        Maximum lag searched; column ``c`` of ``distance`` is lag
        ``c - max_lag``.
    """

    time_shift: np.ndarray
    lags: np.ndarray
    distance: np.ndarray
    error: float
    warped_time: np.ndarray
    max_lag: int


def resolve_window(window: Sequence[int] | np.ndarray | None, npts: int) -> np.ndarray:
    """Return ``window`` as an array of sample indices into ``npts`` samples."""

    if window is None:
        return np.arange(npts)
    idx = np.asarray(window)
    if idx.dtype == bool:
        if idx.size != npts:
            raise ContractViolation("boolean window must match the signal length")
        return np.flatnonzero(idx)
    if idx.ndim != 1 or idx.size == 0:
        raise ContractViolation("window must be a non-empty 1-D sequence of indices")
    if not np.issubdtype(idx.dtype, np.integer):
        if not np.all(np.equal(np.mod(idx, 1), 0)):
            raise ContractViolation("window must contain integer sample indices")
        idx = idx.astype(np.int64)
    if idx.min() < 0 or idx.max() >= npts:
        raise ContractViolation("window indices fall outside the signals")
    return idx


def dtwdt(
    u0: Sequence[float] | np.ndarray,
    u1: Sequence[float] | np.ndarray,
    t: Sequence[float] | np.ndarray,
    window: Sequence[int] | np.ndarray | None,
    fs: float,
    *,
    norm: Norm | str | None = None,
    max_lag: int | None = None,
    b: int | None = None,
    direction: Direction | int | str | None = None,
    settings: Settings | None = None,
) -> WarpResult:
    """Measure the lag between ``u0`` and ``u1`` at every windowed sample.

    Parameters
    ----------
    u0:
        Trace to be warped.
    u1:
        Reference trace, same length as ``u0``.
    t:
        Time axis common to both traces.
    window:
        Indices into ``t`` over which to measure the lags, or ``None`` for
        every sample.
    fs:
        Sampling frequency in Hz.
    norm, max_lag, b, direction:
        Overrides for the corresponding :class:`~dynwarp.config.WarpSettings`
        fields.  ``direction`` accepts :class:`~dynwarp.types.Direction`
        members, their names or the integers ``1``, ``-1`` and ``0``.
    settings:
        Optional settings supplying defaults for the overrides.

    Returns
    -------
    WarpResult
    """

    if settings is None:
        settings = Settings()

    norm = Norm.coerce(settings.warp.norm if norm is None else norm)
    max_lag = settings.warp.max_lag if max_lag is None else int(max_lag)
    b = settings.warp.b if b is None else int(b)
    direction = Direction.coerce(settings.warp.direction if direction is None else direction)

    a = np.asarray(u0, dtype=float)
    r = np.asarray(u1, dtype=float)
    t = np.asarray(t, dtype=float)
    if a.ndim != 1 or r.ndim != 1:
        raise ContractViolation("u0 and u1 must be one-dimensional")
    if a.size != r.size:
        raise ContractViolation("u0 and u1 must be same length")
    if t.size != a.size:
        raise ContractViolation("t must have the same length as the signals")
    if b < 1:
        raise ContractViolation("b must be a positive integer")
    if fs <= 0:
        raise ContractViolation("fs must be positive")

    idx = resolve_window(window, a.size)
    npts = idx.size

    err = compute_error_function(a[idx], r[idx], npts, max_lag, norm=norm)

    if direction is Direction.SYMMETRIC:
        dist = accumulate_symmetric(err, npts, max_lag, b)
        lags = backtrack_distance_function(Direction.BACKWARD, dist, err, -max_lag, b)
    else:
        dist = accumulate_error_function(direction, err, npts, max_lag, b)
        walk = Direction.BACKWARD if direction is Direction.FORWARD else Direction.FORWARD
        lags = backtrack_distance_function(walk, dist, err, -max_lag, b)

    time_shift = lags / fs
    warped_time = t[idx] + time_shift
    error = compute_dtw_error(err, lags, -max_lag)
    logger.debug(
        "warped %d samples (max_lag=%d, b=%d, %s): error=%g",
        npts,
        max_lag,
        b,
        direction.value,
        error,
    )

    return WarpResult(
        time_shift=time_shift,
        lags=lags,
        distance=dist,
        error=error,
        warped_time=warped_time,
        max_lag=max_lag,
    )


def dtw_dvv(
    ref: Sequence[float] | np.ndarray,
    cur: Sequence[float] | np.ndarray,
    t: Sequence[float] | np.ndarray,
    window: Sequence[int] | np.ndarray | None,
    fs: float,
    *,
    settings: Settings | None = None,
    **warp_kwargs,
) -> DvvEstimate:
    """Estimate dv/v between ``ref`` and ``cur`` by warping and regression.

    ``warp_kwargs`` are forwarded to :func:`dtwdt`.
    """

    if settings is None:
        settings = Settings()
    result = dtwdt(ref, cur, t, window, fs, settings=settings, **warp_kwargs)
    idx = resolve_window(window, len(t))
    return dvv_lstsq(np.asarray(t, dtype=float)[idx], result.time_shift, percent=settings.regression.percent)


__all__ = ["WarpResult", "resolve_window", "dtwdt", "dtw_dvv"]
