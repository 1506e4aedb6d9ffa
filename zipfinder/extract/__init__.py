"""Extraction helpers for the zip finder."""

from .dataset import DatasetConfig, GeometryStore, fetch_geojson, parse_feature_collection

__all__ = [
    "DatasetConfig",
    "GeometryStore",
    "fetch_geojson",
    "parse_feature_collection",
]
