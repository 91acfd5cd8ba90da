"""Matplotlib styles for dynwarp visualisations."""

from __future__ import annotations

import matplotlib.pyplot as plt

# Base style configuration used across all plots.  The values can be
# overridden by supplying a different style mapping to :func:`apply_style`.
BASE_STYLE = {
    "figure.figsize": (10, 6),
    "axes.grid": False,
    "axes.titlesize": "large",
    "axes.labelsize": "medium",
    "lines.linewidth": 1.5,
    "image.cmap": "viridis",
}


def apply_style(extra: dict | None = None) -> None:
    """Apply a consistent matplotlib style.

    Parameters
    ----------
    extra:
        Optional dictionary of rcParams that override the base style.
    """
    style = BASE_STYLE.copy()
    if extra:
        style.update(extra)
    plt.rcParams.update(style)
