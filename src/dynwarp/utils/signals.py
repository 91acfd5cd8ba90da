"""Signal processing helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def zscore(data: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return *data* with zero mean and unit standard deviation.

    ``ValueError`` is raised for empty sequences.  A constant signal yields
    non-finite values, which callers must handle.
    """

    arr = np.asarray(data, dtype=float)
    if arr.size == 0:
        raise ValueError("data must not be empty")
    return (arr - arr.mean()) / arr.std()


def time_axis(npts: int, fs: float, t0: float = 0.0) -> np.ndarray:
    """Return ``npts`` regularly spaced times starting at ``t0``."""

    if npts < 0:
        raise ValueError("npts must be non-negative")
    if fs <= 0:
        raise ValueError("fs must be positive")
    return t0 + np.arange(npts) / fs
