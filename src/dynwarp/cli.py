"""Command line interface for dynwarp using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import json
import logging

import numpy as np
import typer
from pydantic import ValidationError

from .config import Settings, load_settings
from .core import dtw_bands, dtw_dvv, dtwdt
from .export import band_table, export_warp
from .utils.io import load_array
from .utils.logging import get_logger
from .utils.signals import time_axis
from .utils.windows import time_window

app = typer.Typer(help="Constrained dynamic time warping and dv/v estimation")
logger = logging.getLogger(__name__)


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys[:-1]:
        if not hasattr(current, key):
            raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")
        current = getattr(current, key)
    if not hasattr(current, keys[-1]):
        raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


def _parse_band(raw: str) -> tuple[float, float]:
    parts = [p for p in raw.replace(":", ",").split(",") if p.strip()]
    if len(parts) != 2:
        raise typer.BadParameter(f"bands must be given as FMIN,FMAX: {raw}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise typer.BadParameter(f"invalid band limits: {raw}") from None


def _load_pair(ref: Path, cur: Path) -> tuple[np.ndarray, np.ndarray]:
    a = load_array(ref)
    b = load_array(cur)
    if a.size != b.size:
        raise typer.BadParameter(f"{ref} and {cur} must contain the same number of samples")
    return a, b


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. warp.max_lag=40",
    ),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, RuntimeError, TypeError, json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                raise typer.BadParameter(
                    "overrides must be of the form --set section.key=value"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                raise typer.BadParameter("override key cannot be empty")
            keys = key.split(".")
            _ensure_path(settings, keys)
            value = _parse_override_value(raw_value)
            _apply_override(data, keys, value)
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise typer.BadParameter(f"invalid configuration override: {exc}") from exc

    get_logger("dynwarp", level=settings.logging.level, fmt=settings.logging.format)
    ctx.obj = settings


@app.command()
def warp(
    ctx: typer.Context,
    ref: Path = typer.Argument(..., exists=True, dir_okay=False, help="Trace to be warped"),
    cur: Path = typer.Argument(..., exists=True, dir_okay=False, help="Reference trace"),
    fs: float = typer.Option(..., "--fs", help="Sampling frequency in Hz"),
    t0: float = typer.Option(0.0, "--t0", help="Time of the first sample in seconds"),
    tmin: Optional[float] = typer.Option(None, "--tmin", help="Start of the warping window"),
    tmax: Optional[float] = typer.Option(None, "--tmax", help="End of the warping window"),
    max_lag: Optional[int] = typer.Option(None, "--max-lag", help="Maximum lag in samples"),
    b: Optional[int] = typer.Option(None, "--b", help="Strain limit"),
    direction: Optional[str] = typer.Option(None, "--direction", help="forward, backward or symmetric"),
    norm: Optional[str] = typer.Option(None, "--norm", help="L2 or L1"),
    export: Optional[Path] = typer.Option(None, "--export", "-e", help="Write the warp to .csv, .json or .npz"),
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks on failure"),
) -> None:
    """Warp REF onto CUR and report the lag path and DTW error."""

    cfg: Settings = ctx.obj
    u0, u1 = _load_pair(ref, cur)
    t = time_axis(u0.size, fs, t0)

    try:
        window = time_window(t, tmin, tmax)
        result = dtwdt(
            u0,
            u1,
            t,
            window,
            fs,
            norm=norm,
            max_lag=max_lag,
            b=b,
            direction=direction,
            settings=cfg,
        )
    except ValueError as exc:
        if debug:
            logger.exception("warping %s onto %s failed", ref, cur)
            raise
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(
        f"samples={result.lags.size} lag_min={int(result.lags.min())} "
        f"lag_max={int(result.lags.max())} error={result.error:.6g}"
    )
    if export:
        export_warp(result, t[window], export)
        typer.echo(f"Exported warp to {export}")


@app.command()
def dvv(
    ctx: typer.Context,
    ref: Path = typer.Argument(..., exists=True, dir_okay=False, help="Reference trace"),
    cur: Path = typer.Argument(..., exists=True, dir_okay=False, help="Current trace"),
    fs: float = typer.Option(..., "--fs", help="Sampling frequency in Hz"),
    t0: float = typer.Option(0.0, "--t0", help="Time of the first sample in seconds"),
    tmin: Optional[float] = typer.Option(None, "--tmin", help="Start of the warping window"),
    tmax: Optional[float] = typer.Option(None, "--tmax", help="End of the warping window"),
    band: List[str] = typer.Option([], "--band", help="Frequency band FMIN,FMAX in Hz; repeatable"),
    bandpass: Optional[str] = typer.Option(None, "--bandpass", help="Registered band-pass filter"),
    export: Optional[Path] = typer.Option(None, "--export", "-e", help="Write per-band estimates as CSV"),
) -> None:
    """Estimate dv/v between REF and CUR, broadband or per frequency band."""

    cfg: Settings = ctx.obj
    ref_data, cur_data = _load_pair(ref, cur)
    t = time_axis(ref_data.size, fs, t0)

    try:
        window = time_window(t, tmin, tmax)
        if band:
            freqbands = [_parse_band(raw) for raw in band]
            result = dtw_bands(ref_data, cur_data, t, window, fs, freqbands, bandpass=bandpass, settings=cfg)
            table = band_table(result)
            typer.echo(table.to_string(index=False))
            if export:
                table.to_csv(export, index=False)
                typer.echo(f"Exported estimates to {export}")
            return
        est = dtw_dvv(ref_data, cur_data, t, window, fs, settings=cfg)
    except (ValueError, KeyError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(
        f"dvv={est.dvv:.6g} dvv_err={est.dvv_err:.3g} "
        f"intercept={est.intercept:.6g} intercept_err={est.intercept_err:.3g} "
        f"dvv0={est.dvv0:.6g} dvv0_err={est.dvv0_err:.3g}"
    )


def main() -> None:  # pragma: no cover - console entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
