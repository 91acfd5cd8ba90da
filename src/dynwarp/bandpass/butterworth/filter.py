from ..base import register_bandpass, check_band
from ...types import ContractViolation
import numpy as np
from scipy.signal import butter, sosfiltfilt


class ButterworthBandPass:
    name = "butterworth"

    def __init__(self, order: int = 4) -> None:
        if int(order) < 1:
            raise ContractViolation("Butterworth order must be a positive integer")
        self.order = int(order)

    def apply(self, signal: np.ndarray, fs: float, fmin: float, fmax: float) -> np.ndarray:
        signal = np.asarray(signal, dtype=float)
        check_band(signal, fs, fmin, fmax)
        nyquist = fs / 2
        if fmin <= 0 and fmax >= nyquist:
            return signal.copy()
        if fmin <= 0:
            sos = butter(self.order, fmax, btype="lowpass", fs=fs, output="sos")
        elif fmax >= nyquist:
            sos = butter(self.order, fmin, btype="highpass", fs=fs, output="sos")
        elif fmin == fmax:
            raise ContractViolation("Butterworth band-pass needs fmin < fmax")
        else:
            sos = butter(self.order, [fmin, fmax], btype="bandpass", fs=fs, output="sos")
        return sosfiltfilt(sos, signal)


register_bandpass(ButterworthBandPass())
