"""Band-pass filters used to split signals into frequency bands."""

from importlib import import_module

from .base import (
    BandPass,
    register_bandpass,
    get_bandpass,
    available_bandpasses,
    check_band,
)

# Import filter modules to ensure registration
for _name in ["butterworth", "fft"]:
    import_module(f".{_name}.filter", __name__)

__all__ = [
    "BandPass",
    "register_bandpass",
    "get_bandpass",
    "available_bandpasses",
    "check_band",
]
