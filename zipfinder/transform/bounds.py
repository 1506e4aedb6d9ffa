"""Bounding boxes used to frame a map view around zip geometries."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from ..models import BoundingBox, GeometryLike, as_coordinate, exterior_ring

logger = logging.getLogger(__name__)


def bounding_box_of(geometries: Iterable[GeometryLike]) -> BoundingBox | None:
    """Return the box enclosing the exterior rings of ``geometries``.

    Positions are GeoJSON ``(lng, lat)`` pairs. Absent geometries, geometries
    without usable coordinates or of an unsupported type are skipped, and so
    are individual non-numeric positions. Returns ``None`` when nothing valid
    was found.
    """

    min_lat = min_lng = math.inf
    max_lat = max_lng = -math.inf
    seen = 0

    for index, geometry in enumerate(geometries):
        if geometry is None:
            continue

        ring = exterior_ring(geometry)
        if ring is None:
            logger.warning("Skipping geometry %s: no usable Polygon/MultiPolygon ring", index)
            continue

        skipped = 0
        for position in ring:
            coordinate = as_coordinate(position)
            if coordinate is None:
                skipped += 1
                continue

            lng, lat = coordinate
            min_lat = min(min_lat, lat)
            max_lat = max(max_lat, lat)
            min_lng = min(min_lng, lng)
            max_lng = max(max_lng, lng)
            seen += 1

        if skipped:
            logger.warning("Ignored %s invalid positions in geometry %s", skipped, index)

    if not seen:
        return None

    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)


__all__ = ["bounding_box_of"]
