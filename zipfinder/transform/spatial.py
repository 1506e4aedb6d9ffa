"""Tabular views of zip selections."""

from __future__ import annotations

from collections.abc import Iterable

import geopandas as gpd
import pandas as pd

from ..models import ZipRecord, polygon_ring
from .raycast import contains

WGS84 = "EPSG:4326"


def records_to_geodataframe(records: Iterable[ZipRecord]) -> gpd.GeoDataFrame:
    """Return one row per record with ``zip_code``, ``found`` and ``geometry``.

    Records without a geometry keep an empty (``None``) geometry cell so the
    row order matches the input.
    """

    records = list(records)
    frame = pd.DataFrame(
        {
            "zip_code": [record.zip_code for record in records],
            "found": [record.found for record in records],
        }
    )
    geometries = [record.to_shape() for record in records]
    return gpd.GeoDataFrame(frame, geometry=geometries, crs=WGS84)


def tag_points_with_zip(
    df: pd.DataFrame,
    records: Iterable[ZipRecord],
    *,
    lat_column: str = "lat",
    lng_column: str = "lng",
    column: str = "zip_code",
) -> pd.DataFrame:
    """Return a copy of ``df`` with the zip code whose ring contains each row.

    Each row's ``(lng, lat)`` is tested against the exterior rings of the
    found records, in order; the first containing zip code is written to
    ``column``. Rows outside every ring get ``None``.
    """

    for name in (lat_column, lng_column):
        if name not in df.columns:
            raise ValueError(f"input DataFrame must contain a '{name}' column")

    rings = []
    for record in records:
        ring = polygon_ring(record.geometry) if record.found else None
        if ring is not None:
            rings.append((record.zip_code, ring))

    def _zip_for(lng: float, lat: float) -> str | None:
        for zip_code, ring in rings:
            if contains((lng, lat), ring):
                return zip_code
        return None

    result = df.copy()
    values = [
        _zip_for(float(lng), float(lat))
        for lng, lat in zip(result[lng_column].tolist(), result[lat_column].tolist())
    ]
    result[column] = pd.Series(values, index=result.index, dtype=object)
    return result


__all__ = ["records_to_geodataframe", "tag_points_with_zip"]
