"""Helpers for selecting sample windows on a time axis."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def time_window(t: Sequence[float] | np.ndarray, tmin: float | None = None, tmax: float | None = None) -> np.ndarray:
    """Return the indices of ``t`` falling inside ``[tmin, tmax]``.

    Unset bounds are open.  ``ValueError`` is raised if ``tmax < tmin`` or
    the window selects no sample.
    """

    arr = np.asarray(t, dtype=float)
    lo = -np.inf if tmin is None else tmin
    hi = np.inf if tmax is None else tmax
    if hi < lo:
        raise ValueError("tmax must not be smaller than tmin")
    idx = np.flatnonzero((arr >= lo) & (arr <= hi))
    if idx.size == 0:
        raise ValueError("time window selects no samples")
    return idx
