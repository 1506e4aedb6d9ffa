"""Value types shared by the extract, transform and load layers.

Geometries travel through the package as GeoJSON-like mappings. Helpers in
this module accept a bare geometry (``{"type": ..., "coordinates": ...}``), a
Feature wrapping one (``{"geometry": {...}}``) or any object implementing the
``__geo_interface__`` protocol, such as a shapely geometry.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any

from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

Coordinate = tuple[float, float]
Ring = Sequence[Sequence[float]]
GeometryLike = Any

ZIP_CODE_LENGTH = 5
SUPPORTED_GEOMETRY_TYPES = ("Polygon", "MultiPolygon")


def normalize_zip_code(value: object) -> str:
    """Return ``value`` as a trimmed, zero-padded five character zip code.

    ``28277``, ``"28277"`` and ``" 28277 "`` all normalise to ``"28277"``;
    ``"802"`` becomes ``"00802"``.
    """

    return str(value).strip().rjust(ZIP_CODE_LENGTH, "0")


def geometry_mapping(obj: GeometryLike) -> Mapping[str, Any] | None:
    """Unwrap features and ``__geo_interface__`` objects into a geometry mapping."""

    if obj is None:
        return None

    geo_interface = getattr(obj, "__geo_interface__", None)
    if isinstance(geo_interface, Mapping):
        obj = geo_interface

    if not isinstance(obj, Mapping):
        return None

    if obj.get("type") == "Feature" or ("geometry" in obj and "coordinates" not in obj):
        return geometry_mapping(obj.get("geometry"))

    return obj


def exterior_ring(geometry: GeometryLike) -> Ring | None:
    """Return the raw exterior ring of a Polygon or of a MultiPolygon's first member.

    Holes and any further MultiPolygon members are ignored. ``None`` is
    returned for absent geometries, unsupported types and coordinate arrays
    that are not nested the GeoJSON way.
    """

    mapping = geometry_mapping(geometry)
    if mapping is None:
        return None

    geometry_type = mapping.get("type")
    coordinates = mapping.get("coordinates")
    if geometry_type not in SUPPORTED_GEOMETRY_TYPES or coordinates is None:
        return None

    try:
        if geometry_type == "Polygon":
            ring = coordinates[0]
        else:
            ring = coordinates[0][0]
    except (TypeError, IndexError, KeyError):
        return None

    if not _is_sequence(ring):
        return None
    return ring


def as_coordinate(value: object) -> Coordinate | None:
    """Return ``(x, y)`` floats for a numeric, finite position or ``None``."""

    if not _is_sequence(value) or len(value) < 2:
        return None

    x, y = value[0], value[1]
    if not (_is_number(x) and _is_number(y)):
        return None

    x, y = float(x), float(y)
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return x, y


def polygon_ring(geometry: GeometryLike) -> list[Coordinate] | None:
    """Return the exterior ring as float pairs, or ``None`` if it is unusable.

    A ring is unusable when it cannot be extracted, has a non-numeric
    position, or has fewer than three positions.
    """

    ring = exterior_ring(geometry)
    if ring is None:
        return None

    points: list[Coordinate] = []
    for position in ring:
        coordinate = as_coordinate(position)
        if coordinate is None:
            return None
        points.append(coordinate)

    if len(points) < 3:
        return None
    return points


def freeze_geometry(value: Any) -> Any:
    """Return a read-only copy: mappings become proxies, sequences tuples."""

    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_geometry(item) for key, item in value.items()})
    if _is_sequence(value):
        return tuple(freeze_geometry(item) for item in value)
    return value


def thaw_geometry(value: Any) -> Any:
    """Return a plain ``dict``/``list`` copy of a (possibly frozen) geometry."""

    if isinstance(value, Mapping):
        return {key: thaw_geometry(item) for key, item in value.items()}
    if _is_sequence(value):
        return [thaw_geometry(item) for item in value]
    return value


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class ReferenceEntry:
    """One feature of the reference dataset."""

    zip_code: str
    geometry: Mapping[str, Any] | None


@dataclass(frozen=True, slots=True)
class ZipRecord:
    """A zip code resolved against the reference dataset.

    ``found=False`` together with ``geometry=None`` means the code is not
    present in the dataset.
    """

    zip_code: str
    geometry: Mapping[str, Any] | None = None
    found: bool = False

    @classmethod
    def missing(cls, zip_code: object) -> "ZipRecord":
        return cls(normalize_zip_code(zip_code), None, False)

    def to_shape(self) -> BaseGeometry | None:
        """Return the geometry as a shapely object, ``None`` when absent."""

        if self.geometry is None:
            return None
        return shape(thaw_geometry(self.geometry))

    def as_feature(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "properties": {"zip_code": self.zip_code, "found": self.found},
            "geometry": thaw_geometry(self.geometry),
        }


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis aligned box in degrees."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def center(self) -> tuple[float, float]:
        """``(lat, lng)`` midpoint of the box."""

        return (self.min_lat + self.max_lat) / 2, (self.min_lng + self.max_lng) / 2

    def to_leaflet_bounds(self) -> list[list[float]]:
        """South-west and north-east corners as ``[[lat, lng], [lat, lng]]``."""

        return [[self.min_lat, self.min_lng], [self.max_lat, self.max_lng]]


__all__ = [
    "BoundingBox",
    "Coordinate",
    "GeometryLike",
    "ReferenceEntry",
    "Ring",
    "ZipRecord",
    "as_coordinate",
    "exterior_ring",
    "freeze_geometry",
    "geometry_mapping",
    "normalize_zip_code",
    "polygon_ring",
    "thaw_geometry",
]
