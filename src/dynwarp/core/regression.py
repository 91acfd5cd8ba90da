"""Linear regression of time shifts against time.

A homogeneous relative velocity change ``dv/v`` delays arrivals in proportion
to their lapse time, ``dt/t = -dv/v``.  The slope of the time shifts measured
by the warping therefore gives ``-dv/v``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..types import ContractViolation


@dataclass(frozen=True)
class DvvEstimate:
    """dv/v estimates with and without an intercept.

    ``dvv0`` and ``dvv0_err`` come from a fit forced through the origin.
    """

    dvv: float
    dvv_err: float
    intercept: float
    intercept_err: float
    dvv0: float
    dvv0_err: float


def dvv_lstsq(
    t: Sequence[float] | np.ndarray,
    dt: Sequence[float] | np.ndarray,
    w: Sequence[float] | np.ndarray | None = None,
    *,
    percent: bool = True,
) -> DvvEstimate:
    """Weighted least-squares estimate of dv/v from time shifts ``dt``.

    Parameters
    ----------
    t:
        Lapse times of the measurements.
    dt:
        Time shifts measured at ``t``.
    w:
        Optional non-negative weights, one per measurement.
    percent:
        Report ``dvv``, ``dvv0`` and their errors in percent.

    Returns
    -------
    DvvEstimate
        Standard errors use the weighted residual variance with ``n - 2``
        (intercept) and ``n - 1`` (through origin) degrees of freedom.
    """

    x = np.asarray(t, dtype=float).reshape(-1)
    y = np.asarray(dt, dtype=float).reshape(-1)
    if x.size != y.size:
        raise ContractViolation("t and dt must have the same length")
    if x.size < 3:
        raise ContractViolation("at least three points are required to estimate dv/v")
    if w is None:
        wts = np.ones_like(x)
    else:
        wts = np.asarray(w, dtype=float).reshape(-1)
        if wts.size != x.size:
            raise ContractViolation("weights must match the number of points")
        if np.any(wts < 0):
            raise ContractViolation("weights must be non-negative")
    if np.unique(x[wts > 0]).size < 2:
        raise ContractViolation("time axis is degenerate: at least two distinct weighted times are required")

    n = x.size
    scale = 100.0 if percent else 1.0

    # with intercept: y = m * x + a
    X = np.column_stack([x, np.ones_like(x)])
    A = X.T @ (wts[:, None] * X)
    coef = np.linalg.solve(A, X.T @ (wts * y))
    resid = y - X @ coef
    s2 = float(np.sum(wts * resid ** 2) / (n - 2))
    cov = s2 * np.linalg.inv(A)
    slope, intercept = float(coef[0]), float(coef[1])
    slope_err = float(np.sqrt(cov[0, 0]))
    intercept_err = float(np.sqrt(cov[1, 1]))

    # through the origin: y = m0 * x
    sxx = float(np.sum(wts * x * x))
    m0 = float(np.sum(wts * x * y) / sxx)
    resid0 = y - m0 * x
    s2_0 = float(np.sum(wts * resid0 ** 2) / (n - 1))
    m0_err = float(np.sqrt(s2_0 / sxx))

    return DvvEstimate(
        dvv=-slope * scale,
        dvv_err=slope_err * scale,
        intercept=intercept,
        intercept_err=intercept_err,
        dvv0=-m0 * scale,
        dvv0_err=m0_err * scale,
    )


__all__ = ["DvvEstimate", "dvv_lstsq"]
