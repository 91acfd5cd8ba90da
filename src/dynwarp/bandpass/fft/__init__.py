"""Ideal FFT band-pass."""
