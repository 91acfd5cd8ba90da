import json

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
from typer.testing import CliRunner

from dynwarp.cli import app
from dynwarp.viz import plot_warp
from test_bands import make_stretched_pair


def make_pair(tmp_path):
    u = np.array([1, 2, 3, 2, 1, 2, 3, 2, 1, 2], dtype=float)
    ref = tmp_path / "ref.npy"
    cur = tmp_path / "cur.csv"
    np.save(ref, u)
    np.savetxt(cur, u, delimiter=",")
    return ref, cur


def test_warp_identity(tmp_path):
    ref, cur = make_pair(tmp_path)
    out = tmp_path / "warp.csv"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["warp", str(ref), str(cur), "--fs", "1", "--max-lag", "2", "--export", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert "samples=10" in result.stdout
    assert "error=0" in result.stdout
    df = pd.read_csv(out)
    assert (df["lag"] == 0).all()


def test_set_override_and_plot(tmp_path):
    ref, cur = make_pair(tmp_path)
    out = tmp_path / "warp.npz"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "--set",
            "warp.max_lag=3",
            "--set",
            "warp.direction=symmetric",
            "warp",
            str(ref),
            str(cur),
            "--fs",
            "2",
            "--tmin",
            "1",
            "--export",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "samples=8" in result.stdout
    with np.load(out) as data:
        assert data["distance"].shape == (8, 7)

    png = tmp_path / "warp.png"
    plot_warp.main([str(out), "--save", str(png)])
    assert png.exists()


def test_config_file(tmp_path):
    ref, cur = make_pair(tmp_path)
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"warp": {"max_lag": 4, "norm": "L1"}}))
    out = tmp_path / "warp.npz"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["--config", str(cfg), "warp", str(ref), str(cur), "--fs", "1", "--export", str(out)],
    )
    assert result.exit_code == 0, result.output
    with np.load(out) as data:
        assert data["distance"].shape == (10, 9)


def test_warp_rejects_large_lag(tmp_path):
    ref, cur = make_pair(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["warp", str(ref), str(cur), "--fs", "1", "--max-lag", "10"])
    assert result.exit_code != 0


def test_unknown_override_key(tmp_path):
    ref, cur = make_pair(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["--set", "warp.nope=1", "warp", str(ref), str(cur), "--fs", "1"])
    assert result.exit_code != 0


def test_dvv_broadband_and_bands(tmp_path):
    t, ref, cur = make_stretched_pair()
    ref_path = tmp_path / "ref.npy"
    cur_path = tmp_path / "cur.npy"
    np.save(ref_path, ref)
    np.save(cur_path, cur)
    runner = CliRunner()
    common = [str(ref_path), str(cur_path), "--fs", "100", "--tmin", "2", "--tmax", "18"]

    result = runner.invoke(app, ["--set", "warp.max_lag=25", "dvv", *common])
    assert result.exit_code == 0, result.output
    assert "dvv=" in result.stdout

    out = tmp_path / "bands.csv"
    result = runner.invoke(
        app,
        ["--set", "warp.max_lag=25", "dvv", *common, "--band", "1,6", "--band", "4,10", "--bandpass", "fft", "--export", str(out)],
    )
    assert result.exit_code == 0, result.output
    df = pd.read_csv(out)
    assert len(df) == 2
    assert np.allclose(df["dvv"], 1.0, atol=0.2)


def test_dvv_broadband_uses_dtw_dvv(tmp_path, monkeypatch):
    from dynwarp import cli
    from dynwarp.core.regression import DvvEstimate

    calls = []

    def fake_dtw_dvv(ref, cur, t, window, fs, *, settings=None, **kwargs):
        calls.append((window[0], window[-1], fs, settings.warp.max_lag))
        return DvvEstimate(dvv=0.25, dvv_err=0.0, intercept=0.0, intercept_err=0.0, dvv0=0.5, dvv0_err=0.0)

    monkeypatch.setattr(cli, "dtw_dvv", fake_dtw_dvv)
    ref, cur = make_pair(tmp_path)
    result = CliRunner().invoke(app, ["--set", "warp.max_lag=2", "dvv", str(ref), str(cur), "--fs", "1", "--tmin", "1", "--tmax", "8"])
    assert result.exit_code == 0, result.output
    assert calls == [(1, 8, 1.0, 2)]
    assert "dvv=0.25" in result.stdout
    assert "dvv0=0.5" in result.stdout
