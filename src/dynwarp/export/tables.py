"""Tabular export of warping results.

The per-sample outputs of :func:`~dynwarp.core.warp.dtwdt` are collected into
a :class:`pandas.DataFrame` with one row per windowed sample.  The table can
be persisted as CSV or JSON, or as an ``.npz`` archive that also keeps the
distance surface for plotting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from ..core.bands import BandDvvResult
from ..core.warp import WarpResult

WARP_COLUMNS = ("time", "lag", "time_shift", "warped_time")


def warp_table(result: WarpResult, t_window: Sequence[float] | np.ndarray) -> pd.DataFrame:
    """Return the per-sample warp as a dataframe.

    ``t_window`` is the time axis restricted to the warping window.
    """

    t_window = np.asarray(t_window, dtype=float)
    if t_window.shape != result.lags.shape:
        raise ValueError("t_window must have one entry per warped sample")
    return pd.DataFrame(
        {
            "time": t_window,
            "lag": result.lags,
            "time_shift": result.time_shift,
            "warped_time": result.warped_time,
        },
        columns=list(WARP_COLUMNS),
    )


def band_table(result: BandDvvResult) -> pd.DataFrame:
    """Return one row per frequency band with its dv/v estimates."""

    return pd.DataFrame(
        {
            "fmin": result.freqbands[:, 0],
            "fmax": result.freqbands[:, 1],
            "dvv": result.dvv,
            "dvv_err": result.dvv_err,
            "intercept": result.intercept,
            "intercept_err": result.intercept_err,
            "dvv0": result.dvv0,
            "dvv0_err": result.dvv0_err,
        }
    )


def export_warp(result: WarpResult, t_window: Sequence[float] | np.ndarray, path: str | Path) -> Path:
    """Write ``result`` to ``path``.

    The format follows the suffix: ``.csv`` and ``.json`` hold the per-sample
    table, ``.npz`` additionally stores ``distance``, ``error`` and
    ``max_lag``.
    """

    path = Path(path)
    df = warp_table(result, t_window)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".json":
        df.to_json(path, orient="records")
    elif suffix == ".npz":
        np.savez(
            path,
            distance=result.distance,
            error=result.error,
            max_lag=result.max_lag,
            **{col: df[col].to_numpy() for col in WARP_COLUMNS},
        )
    else:
        raise ValueError(f"unsupported export format: {path.suffix}")
    return path


def load_warp(path: str | Path) -> WarpResult:
    """Load a :class:`WarpResult` previously written as ``.npz``."""

    with np.load(Path(path)) as data:
        return WarpResult(
            time_shift=data["time_shift"],
            lags=data["lag"].astype(np.int64),
            distance=data["distance"],
            error=float(data["error"]),
            warped_time=data["warped_time"],
            max_lag=int(data["max_lag"]),
        )
