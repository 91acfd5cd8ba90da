"""Accumulated error along a warping path."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..types import ContractViolation


def compute_dtw_error(err: np.ndarray, path: Sequence[int] | np.ndarray, lag_min: int) -> float:
    """Sum the error surface along ``path``.

    ``path`` holds lag values (not column indices); ``lag_min`` is the lag of
    the first column of ``err``.
    """

    u = np.asarray(path, dtype=np.int64)
    if u.ndim != 1 or u.size != err.shape[0]:
        raise ContractViolation(
            f"path of length {u.size} does not match error surface with {err.shape[0]} samples"
        )
    cols = u - lag_min
    if cols.size and (cols.min() < 0 or cols.max() >= err.shape[1]):
        raise ContractViolation("path contains lags outside the error surface")
    return float(err[np.arange(u.size), cols].sum())


__all__ = ["compute_dtw_error"]
