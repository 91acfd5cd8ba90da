"""Utility helpers for plotting."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np


def auto_label(path: str | Path) -> str:
    """Return a legend label derived from the file name of ``path``."""
    return Path(path).stem


def plot_distance(ax: plt.Axes, times: np.ndarray, distance: np.ndarray, max_lag: int) -> None:
    """Show ``distance`` as an image with time on x and lag on y."""
    extent = (float(times[0]), float(times[-1]), -max_lag - 0.5, max_lag + 0.5)
    image = ax.imshow(distance.T, origin="lower", aspect="auto", extent=extent)
    ax.figure.colorbar(image, ax=ax, label="Distance")


def plot_path(ax: plt.Axes, times: np.ndarray, lags: np.ndarray, label: str | None = "warping path", **kwargs) -> None:
    """Overlay the integer warping path on ``ax``."""
    ax.step(times, lags, where="mid", label=label, color=kwargs.pop("color", "white"), **kwargs)
    if label:
        ax.legend()


def save_or_show(fig: plt.Figure, save: str | Path | None = None, show: bool = False) -> None:
    """Save ``fig`` to ``save`` or display it interactively.

    If ``save`` is ``None`` the figure will only be shown when ``show`` is
    True.  When both are unset the figure is shown by default to give quick
    feedback during inspection.
    """
    if save:
        fig.savefig(save, bbox_inches="tight")
    if show or not save:
        plt.show()
