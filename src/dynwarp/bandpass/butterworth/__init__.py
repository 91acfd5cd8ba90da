"""Zero-phase Butterworth band-pass."""
