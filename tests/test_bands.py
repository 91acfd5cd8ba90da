import numpy as np
import pytest

from dynwarp.config import Settings
from dynwarp.core import dtw_bands, dtw_dvv
from dynwarp.core.bands import as_freqbands
from dynwarp.types import ContractViolation


def make_stretched_pair(dvv=0.01, fs=100.0, duration=20.0, seed=0):
    """Return ``(t, ref, cur)`` with ``cur(t) = ref(t * (1 + dvv))``."""
    rng = np.random.default_rng(seed)
    freqs = rng.uniform(1.0, 10.0, size=30)
    phases = rng.uniform(0.0, 2 * np.pi, size=30)
    t = np.arange(int(round(duration * fs))) / fs

    def trace(times):
        return np.sin(2 * np.pi * freqs[:, None] * times[None, :] + phases[:, None]).sum(axis=0)

    return t, trace(t), trace(t * (1 + dvv))


class IdentityBandPass:
    name = "identity"

    def apply(self, signal, fs, fmin, fmax):
        return np.asarray(signal, dtype=float)


def test_broadband_dvv_from_stretch():
    t, ref, cur = make_stretched_pair()
    window = np.flatnonzero((t >= 2.0) & (t <= 18.0))
    est = dtw_dvv(ref, cur, t, window, 100.0, max_lag=25, b=1)
    assert est.dvv == pytest.approx(1.0, abs=0.1)
    assert est.dvv0 == pytest.approx(1.0, abs=0.1)


def test_one_estimate_per_band():
    t, ref, cur = make_stretched_pair()
    window = np.flatnonzero((t >= 2.0) & (t <= 18.0))
    result = dtw_bands(ref, cur, t, window, 100.0, [[1.0, 6.0], [4.0, 10.0]], max_lag=25, b=1)
    assert result.freqbands.shape == (2, 2)
    assert result.dvv.shape == (2,)
    np.testing.assert_allclose(result.dvv, 1.0, atol=0.2)


def test_band_loop_with_identity_filter_matches_broadband():
    t, ref, cur = make_stretched_pair(seed=1)
    window = np.flatnonzero((t >= 2.0) & (t <= 18.0))
    settings = Settings()
    settings.warp.max_lag = 25
    broadband = dtw_dvv(ref, cur, t, window, 100.0, settings=settings)
    result = dtw_bands(
        ref,
        cur,
        t,
        window,
        100.0,
        [[1.0, 10.0], [2.0, 8.0]],
        bandpass=IdentityBandPass(),
        normalize=False,
        settings=settings,
    )
    np.testing.assert_allclose(result.dvv, broadband.dvv)
    np.testing.assert_allclose(result.dvv0_err, broadband.dvv0_err)


def test_freqbands_shapes():
    assert as_freqbands([1.0, 2.0]).shape == (1, 2)
    assert as_freqbands([[1.0, 2.0], [2.0, 4.0]]).shape == (2, 2)
    with pytest.raises(ContractViolation):
        as_freqbands([1.0, 2.0, 3.0])
    with pytest.raises(ContractViolation):
        as_freqbands([[2.0, 1.0]])


def test_unknown_bandpass_name():
    t, ref, cur = make_stretched_pair(duration=2.0)
    with pytest.raises(KeyError):
        dtw_bands(ref, cur, t, None, 100.0, [1.0, 5.0], bandpass="nope", max_lag=5)


@pytest.mark.parametrize("order", [1, 8])
def test_butterworth_order_comes_from_settings(monkeypatch, order):
    from dynwarp.bandpass.butterworth.filter import ButterworthBandPass

    seen = []
    original = ButterworthBandPass.apply

    def recording_apply(self, signal, fs, fmin, fmax):
        seen.append(self.order)
        return original(self, signal, fs, fmin, fmax)

    monkeypatch.setattr(ButterworthBandPass, "apply", recording_apply)
    t, ref, cur = make_stretched_pair(duration=4.0)
    settings = Settings()
    settings.bands.order = order
    dtw_bands(ref, cur, t, None, 100.0, [[2.0, 4.0]], bandpass="butterworth", max_lag=5, settings=settings)
    assert seen == [order, order]
