"""Constrained dynamic time warping and dv/v estimation."""

from .core import (
    BandDvvResult,
    DvvEstimate,
    WarpResult,
    dtw_bands,
    dtw_dvv,
    dtwdt,
)
from .types import ContractViolation, Direction, Norm

__all__ = [
    "BandDvvResult",
    "DvvEstimate",
    "WarpResult",
    "dtw_bands",
    "dtw_dvv",
    "dtwdt",
    "ContractViolation",
    "Direction",
    "Norm",
]
