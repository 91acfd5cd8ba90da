"""Band-pass protocol and registry."""

from __future__ import annotations

from typing import Dict, List, Protocol, runtime_checkable

import numpy as np

from ..types import ContractViolation


@runtime_checkable
class BandPass(Protocol):
    """Protocol describing a band-pass filter.

    Implementations restrict a one-dimensional signal to the frequency band
    ``[fmin, fmax]`` and return an array of the same length.
    """

    name: str

    def apply(self, signal: np.ndarray, fs: float, fmin: float, fmax: float) -> np.ndarray:
        """Return ``signal`` band-passed to ``[fmin, fmax]``.

        Parameters
        ----------
        signal:
            One-dimensional signal array.
        fs:
            Sampling frequency of ``signal`` in Hz.
        fmin, fmax:
            Corner frequencies in Hz.
        """


_registry: Dict[str, BandPass] = {}


def register_bandpass(bandpass: BandPass) -> None:
    """Register ``bandpass`` in the global registry."""
    validate_bandpass(bandpass)
    _registry[bandpass.name] = bandpass


def get_bandpass(name: str) -> BandPass:
    """Retrieve a band-pass filter by ``name``."""
    return _registry[name]


def available_bandpasses() -> List[str]:
    """Return the list of registered band-pass names."""
    return list(_registry)


def validate_bandpass(bandpass: BandPass) -> None:
    """Validate that ``bandpass`` satisfies the :class:`BandPass` protocol."""
    if not isinstance(bandpass, BandPass):
        raise TypeError("Band-pass does not implement the required protocol")


def check_band(signal: np.ndarray, fs: float, fmin: float, fmax: float) -> None:
    """Validate the common band-pass arguments."""
    if signal.ndim != 1:
        raise ContractViolation("signal must be one-dimensional")
    if fs <= 0:
        raise ContractViolation("fs must be positive")
    if fmax < fmin:
        raise ContractViolation("fmax must not be smaller than fmin")
    if fmin < 0 or fmax > fs / 2:
        raise ContractViolation("band must lie within [0, fs / 2]")
