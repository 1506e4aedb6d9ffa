"""Helpers to persist zip selections on disk."""

from __future__ import annotations

import json
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import Any

import pandas as pd

from ..models import ZipRecord
from ..transform.bounds import bounding_box_of

SELECTION_COLUMNS = ["zip_code", "found", "min_lat", "max_lat", "min_lng", "max_lng"]


def _ensure_path(path: Path | str | PathLike[str]) -> Path:
    """Return ``path`` as :class:`pathlib.Path` enforcing valid types."""

    if isinstance(path, Path):
        return path
    if isinstance(path, (str, PathLike)):
        return Path(path)
    raise TypeError("path must be a string, Path or os.PathLike instance")


def _selection_row(record: ZipRecord) -> dict[str, Any]:
    box = bounding_box_of([record.geometry])
    return {
        "zip_code": record.zip_code,
        "found": record.found,
        "min_lat": box.min_lat if box else None,
        "max_lat": box.max_lat if box else None,
        "min_lng": box.min_lng if box else None,
        "max_lng": box.max_lng if box else None,
    }


def selection_to_dataframe(records: Iterable[ZipRecord]) -> pd.DataFrame:
    """One row per record with its per-zip bounding box."""

    rows = [_selection_row(record) for record in records]
    return pd.DataFrame(rows, columns=SELECTION_COLUMNS)


def save_selection(records: Iterable[ZipRecord], path: Path | str | PathLike[str]) -> Path:
    """Persist a selection to CSV ensuring the parent directory exists."""

    target = _ensure_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    selection_to_dataframe(records).to_csv(target, index=False)
    return target


def _as_feature_collection(records: Iterable[ZipRecord]) -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [record.as_feature() for record in records if record.found and record.geometry is not None],
    }


def save_geometry(records: Iterable[ZipRecord], path: Path | str | PathLike[str]) -> Path:
    """Persist the found records of a selection as a GeoJSON FeatureCollection."""

    target = _ensure_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    feature_collection = _as_feature_collection(records)
    target.write_text(json.dumps(feature_collection, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


__all__ = ["save_geometry", "save_selection", "selection_to_dataframe"]
