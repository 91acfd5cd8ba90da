"""Plot a distance surface and its warping path from an ``.npz`` export."""

from __future__ import annotations

import argparse

import matplotlib.pyplot as plt

from ..config import Settings
from ..export import load_warp
from .helpers import auto_label, plot_distance, plot_path, save_or_show
from .styles import apply_style


def main(argv: list[str] | None = None) -> None:
    settings = Settings()
    parser = argparse.ArgumentParser(description="Visualise the distance surface of a warp")
    parser.add_argument("export", help="Path to an .npz file written by 'dynwarp warp --export'")
    parser.add_argument("--title", help="Figure title")
    parser.add_argument("--save", default=settings.viz.save, help="Path to save the figure")
    parser.add_argument("--show", action="store_true", help="Display the figure interactively")
    args = parser.parse_args(argv)

    result = load_warp(args.export)
    times = result.warped_time - result.time_shift

    apply_style()
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True)

    plot_distance(ax1, times, result.distance, result.max_lag)
    plot_path(ax1, times, result.lags)
    ax1.set_ylabel("Lag [samples]")
    ax1.set_title(args.title or f"{settings.viz.title}: {auto_label(args.export)}")

    ax2.plot(times, result.time_shift)
    ax2.set_xlabel("Time [s]")
    ax2.set_ylabel("Time shift [s]")
    ax2.set_title(f"DTW error {result.error:.4g}")

    save_or_show(fig, args.save, args.show)


if __name__ == "__main__":
    main()
