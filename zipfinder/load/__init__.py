"""Persistence helpers for zip selections."""

from .csv import save_geometry, save_selection

__all__ = ["save_geometry", "save_selection"]
