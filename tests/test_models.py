from __future__ import annotations

import pytest
from shapely.geometry import MultiPolygon, Polygon

from zipfinder.models import (
    ZipRecord,
    exterior_ring,
    geometry_mapping,
    normalize_zip_code,
    polygon_ring,
)

RING = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]


@pytest.mark.parametrize("value", [28277, "28277", " 28277 ", "28277\n"])
def test_normalize_zip_code(value):
    assert normalize_zip_code(value) == "28277"


def test_normalize_zip_code_pads_with_zeros():
    assert normalize_zip_code(802) == "00802"
    assert normalize_zip_code(" 501") == "00501"


def test_exterior_ring_from_polygon_ignores_holes():
    hole = [[2, 2], [3, 2], [3, 3], [2, 2]]
    geometry = {"type": "Polygon", "coordinates": [RING, hole]}

    assert exterior_ring(geometry) == RING


def test_exterior_ring_from_multipolygon_uses_first_member():
    other = [[50, 50], [60, 50], [60, 60], [50, 50]]
    geometry = {"type": "MultiPolygon", "coordinates": [[RING], [other]]}

    assert exterior_ring(geometry) == RING


def test_exterior_ring_unwraps_features():
    feature = {"type": "Feature", "properties": {}, "geometry": {"type": "Polygon", "coordinates": [RING]}}
    drawn = {"geometry": {"type": "Polygon", "coordinates": [RING]}}

    assert exterior_ring(feature) == RING
    assert exterior_ring(drawn) == RING


def test_exterior_ring_from_shapely():
    square = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])

    assert polygon_ring(square) == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]
    assert polygon_ring(MultiPolygon([square])) == polygon_ring(square)


@pytest.mark.parametrize(
    "geometry",
    [
        None,
        {},
        {"type": "Point", "coordinates": [1, 2]},
        {"type": "Polygon"},
        {"type": "Polygon", "coordinates": []},
        {"type": "MultiPolygon", "coordinates": [[]]},
        {"type": "Polygon", "coordinates": "abc"},
    ],
)
def test_exterior_ring_rejects_malformed(geometry):
    assert exterior_ring(geometry) is None
    assert polygon_ring(geometry) is None


def test_polygon_ring_rejects_non_numeric_and_short_rings():
    assert polygon_ring({"type": "Polygon", "coordinates": [[[0, 0], ["a", 1], [1, 1]]]}) is None
    assert polygon_ring({"type": "Polygon", "coordinates": [[[0, 0], [1, 1]]]}) is None


def test_geometry_mapping_passes_through_bare_geometry():
    geometry = {"type": "Polygon", "coordinates": [RING]}

    assert geometry_mapping(geometry) is geometry


def test_zip_record_helpers():
    geometry = {"type": "Polygon", "coordinates": [RING]}
    record = ZipRecord("28277", geometry, True)

    assert record.to_shape().area == 100
    assert record.as_feature() == {
        "type": "Feature",
        "properties": {"zip_code": "28277", "found": True},
        "geometry": geometry,
    }


def test_missing_zip_record():
    record = ZipRecord.missing(" 99999 ")

    assert record == ZipRecord("99999", None, False)
    assert record.to_shape() is None
