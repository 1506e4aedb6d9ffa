import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from zipfinder.transform.intersection import intersects


def test_shared_vertex_inside_other_square():
    a = [(0, 0), (10, 0), (10, 10), (0, 10)]
    b = [(5, 5), (15, 5), (15, 15), (5, 15)]

    assert intersects(a, b) is True
    assert intersects(b, a) is True


def test_contained_polygon_intersects():
    outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
    inner = [(4, 4), (6, 4), (6, 6), (4, 6)]

    assert intersects(outer, inner) is True
    assert intersects(inner, outer) is True


def test_disjoint_squares():
    a = [(0, 0), (1, 0), (1, 1), (0, 1)]
    b = [(100, 100), (101, 100), (101, 101), (100, 101)]

    assert intersects(a, b) is False


def test_edge_crossing_without_interior_vertices_is_not_detected():
    # Two long rectangles laid out as a plus sign: the edges cross but no
    # vertex of either lies inside the other, so vertex sampling misses it.
    horizontal = [(0, 40), (100, 40), (100, 60), (0, 60)]
    vertical = [(40, 0), (60, 0), (60, 100), (40, 100)]

    assert intersects(horizontal, vertical) is False
    assert intersects(vertical, horizontal) is False
