"""Plotting helpers for dynwarp."""
