"""Export helpers for warping results."""

from .tables import band_table, export_warp, load_warp, warp_table

__all__ = ["band_table", "export_warp", "load_warp", "warp_table"]
