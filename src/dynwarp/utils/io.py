"""Loading of signal arrays from disk."""

from __future__ import annotations

from pathlib import Path

import numpy as np


def load_array(path: str | Path) -> np.ndarray:
    """Load a 1D numeric array from ``path``.

    ``.npy`` files are loaded with :func:`numpy.load` while any other extension
    is treated as a text file with comma separated values.
    """
    p = Path(path)
    if p.suffix == ".npy":
        return np.asarray(np.load(p), dtype=float).reshape(-1)
    return np.loadtxt(p, delimiter=",", ndmin=1).astype(float).reshape(-1)
