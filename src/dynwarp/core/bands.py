"""dv/v per frequency band.

Each band of both traces is isolated with a band-pass filter from the
:mod:`dynwarp.bandpass` registry, optionally normalised, warped with
:func:`~dynwarp.core.warp.dtwdt` and regressed with
:func:`~dynwarp.core.regression.dvv_lstsq`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..bandpass import BandPass, get_bandpass
from ..bandpass.butterworth.filter import ButterworthBandPass
from ..config import Settings
from ..types import ContractViolation
from ..utils.signals import zscore
from .regression import dvv_lstsq
from .warp import dtwdt, resolve_window

logger = logging.getLogger(__name__)


@dataclass
class BandDvvResult:
    """dv/v estimates for a set of frequency bands.

    Every array has one entry per row of ``freqbands``.
    """

    freqbands: np.ndarray
    dvv: np.ndarray
    dvv_err: np.ndarray
    intercept: np.ndarray
    intercept_err: np.ndarray
    dvv0: np.ndarray
    dvv0_err: np.ndarray


def as_freqbands(freqbands: Sequence[float] | Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    """Return ``freqbands`` as an ``(nbands, 2)`` array of ``(fmin, fmax)``."""

    bands = np.asarray(freqbands, dtype=float)
    if bands.ndim == 1 and bands.size == 2:
        bands = bands.reshape(1, 2)
    if bands.ndim != 2 or bands.shape[1] != 2 or bands.shape[0] == 0:
        raise ContractViolation("freqbands must have shape (2,) or (nbands, 2)")
    if np.any(bands[:, 1] < bands[:, 0]):
        raise ContractViolation("please ensure columns 1 and 2 are the right frequency limits in freqbands")
    return bands


def dtw_bands(
    ref: Sequence[float] | np.ndarray,
    cur: Sequence[float] | np.ndarray,
    t: Sequence[float] | np.ndarray,
    window: Sequence[int] | np.ndarray | None,
    fs: float,
    freqbands: Sequence[float] | Sequence[Sequence[float]] | np.ndarray,
    *,
    bandpass: BandPass | str | None = None,
    normalize: bool | None = None,
    settings: Settings | None = None,
    **warp_kwargs,
) -> BandDvvResult:
    """Estimate dv/v between ``ref`` and ``cur`` in each frequency band.

    Parameters
    ----------
    ref, cur:
        Reference and current traces of equal length.
    t:
        Time axis common to both traces.
    window:
        Indices of ``t`` over which lags are measured, ``None`` for all.
    fs:
        Sampling frequency in Hz.
    freqbands:
        ``(fmin, fmax)`` pairs in Hz.
    bandpass:
        Band-pass filter or registered name; defaults to
        ``settings.bands.bandpass``.  The registered Butterworth filter is
        rebuilt with ``settings.bands.order``.
    normalize:
        Z-score each band-passed trace before warping; defaults to
        ``settings.bands.normalize``.
    warp_kwargs:
        Forwarded to :func:`~dynwarp.core.warp.dtwdt`.
    """

    if settings is None:
        settings = Settings()
    if bandpass is None:
        bandpass = settings.bands.bandpass
    if isinstance(bandpass, str):
        bandpass = get_bandpass(bandpass)
        if isinstance(bandpass, ButterworthBandPass):
            bandpass = ButterworthBandPass(order=settings.bands.order)
    if normalize is None:
        normalize = settings.bands.normalize

    a = np.asarray(ref, dtype=float)
    r = np.asarray(cur, dtype=float)
    if a.shape != r.shape:
        raise ContractViolation("ref and cur must be same length")
    t = np.asarray(t, dtype=float)
    idx = resolve_window(window, a.size)
    bands = as_freqbands(freqbands)

    nbands = bands.shape[0]
    out = {key: np.zeros(nbands) for key in ("dvv", "dvv_err", "intercept", "intercept_err", "dvv0", "dvv0_err")}

    for iband, (fmin, fmax) in enumerate(bands):
        fa = bandpass.apply(a, fs, fmin, fmax)
        fr = bandpass.apply(r, fs, fmin, fmax)
        if normalize:
            fa = zscore(fa)
            fr = zscore(fr)

        result = dtwdt(fa, fr, t, idx, fs, settings=settings, **warp_kwargs)
        est = dvv_lstsq(t[idx], result.time_shift, percent=settings.regression.percent)
        logger.info(
            "band %.3g-%.3g Hz: dv/v=%.4g +/- %.2g (dtw error %.4g)",
            fmin,
            fmax,
            est.dvv,
            est.dvv_err,
            result.error,
        )
        for key in out:
            out[key][iband] = getattr(est, key)

    return BandDvvResult(freqbands=bands, **out)


__all__ = ["BandDvvResult", "as_freqbands", "dtw_bands"]
