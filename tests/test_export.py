import json

import numpy as np
import pandas as pd
import pytest

from dynwarp import dtwdt
from dynwarp.core.bands import BandDvvResult
from dynwarp.export import band_table, export_warp, load_warp, warp_table


def _result():
    u0 = np.arange(10, dtype=float)
    u1 = np.concatenate([[0.0], u0[:-1]])
    t = np.arange(10) / 2.0
    window = np.arange(3, 8)
    return dtwdt(u0, u1, t, window, 2.0, max_lag=3, b=1), t[window]


def test_warp_table_columns():
    result, tw = _result()
    df = warp_table(result, tw)
    assert list(df.columns) == ["time", "lag", "time_shift", "warped_time"]
    assert len(df) == 5
    np.testing.assert_allclose(df["time_shift"], 0.5)
    np.testing.assert_allclose(df["warped_time"], df["time"] + 0.5)


def test_warp_table_length_mismatch():
    result, tw = _result()
    with pytest.raises(ValueError):
        warp_table(result, tw[:-1])


def test_export_csv_and_json(tmp_path):
    result, tw = _result()
    csv = export_warp(result, tw, tmp_path / "warp.csv")
    df = pd.read_csv(csv)
    assert df["lag"].tolist() == [1, 1, 1, 1, 1]
    rows = json.loads(export_warp(result, tw, tmp_path / "warp.json").read_text())
    assert rows[0]["lag"] == 1


def test_export_npz_keeps_distance(tmp_path):
    result, tw = _result()
    path = export_warp(result, tw, tmp_path / "warp.npz")
    loaded = load_warp(path)
    np.testing.assert_array_equal(loaded.distance, result.distance)
    np.testing.assert_array_equal(loaded.lags, result.lags)
    assert loaded.error == result.error
    assert loaded.max_lag == 3


def test_export_unknown_format(tmp_path):
    result, tw = _result()
    with pytest.raises(ValueError):
        export_warp(result, tw, tmp_path / "warp.parquet")


def test_band_table():
    result = BandDvvResult(
        freqbands=np.array([[1.0, 2.0], [2.0, 4.0]]),
        dvv=np.array([0.1, 0.2]),
        dvv_err=np.zeros(2),
        intercept=np.zeros(2),
        intercept_err=np.zeros(2),
        dvv0=np.array([0.1, 0.2]),
        dvv0_err=np.zeros(2),
    )
    df = band_table(result)
    assert df.shape == (2, 8)
    assert df["fmax"].tolist() == [2.0, 4.0]
