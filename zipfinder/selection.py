"""Caller side helpers for a selection of zip records."""

from __future__ import annotations

from collections.abc import Iterable

from .models import BoundingBox, ZipRecord, normalize_zip_code
from .transform.bounds import bounding_box_of


def merge_selection(existing: Iterable[ZipRecord], incoming: Iterable[ZipRecord]) -> list[ZipRecord]:
    """Return ``existing`` followed by the ``incoming`` records it does not hold yet.

    Records are keyed by ``zip_code``; the first record seen for a code wins.
    Neither input is modified.
    """

    merged: list[ZipRecord] = []
    seen: set[str] = set()
    for record in (*existing, *incoming):
        if record.zip_code in seen:
            continue
        seen.add(record.zip_code)
        merged.append(record)
    return merged


def remove_from_selection(selection: Iterable[ZipRecord], zip_code: object) -> list[ZipRecord]:
    normalized = normalize_zip_code(zip_code)
    return [record for record in selection if record.zip_code != normalized]


def selection_bounds(selection: Iterable[ZipRecord]) -> BoundingBox | None:
    """Bounding box of the found records, ``None`` if none has a geometry."""

    return bounding_box_of(record.geometry for record in selection if record.found)


__all__ = ["merge_selection", "remove_from_selection", "selection_bounds"]
