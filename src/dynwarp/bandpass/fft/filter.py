from ..base import register_bandpass, check_band
import numpy as np


class FftBandPass:
    name = "fft"

    def apply(self, signal: np.ndarray, fs: float, fmin: float, fmax: float) -> np.ndarray:
        signal = np.asarray(signal, dtype=float)
        check_band(signal, fs, fmin, fmax)
        spectrum = np.fft.rfft(signal)
        freqs = np.fft.rfftfreq(signal.size, d=1.0 / fs)
        spectrum[(freqs < fmin) | (freqs > fmax)] = 0.0
        return np.fft.irfft(spectrum, n=signal.size)


register_bandpass(FftBandPass())
