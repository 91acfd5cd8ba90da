"""Core algorithms and data structures for dynwarp."""

from .error_surface import compute_error_function
from .accumulate import accumulate_error_function, accumulate_symmetric
from .backtrack import backtrack_distance_function
from .cost import compute_dtw_error
from .regression import DvvEstimate, dvv_lstsq
from .warp import WarpResult, dtwdt, dtw_dvv
from .bands import BandDvvResult, dtw_bands

__all__ = [
    "compute_error_function",
    "accumulate_error_function",
    "accumulate_symmetric",
    "backtrack_distance_function",
    "compute_dtw_error",
    "DvvEstimate",
    "dvv_lstsq",
    "WarpResult",
    "dtwdt",
    "dtw_dvv",
    "BandDvvResult",
    "dtw_bands",
]
