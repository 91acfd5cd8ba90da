"""Utility helpers for dynwarp."""
