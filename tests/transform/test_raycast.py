import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from zipfinder.transform.raycast import contains

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def test_point_inside_square():
    assert contains((5, 5), SQUARE) is True


def test_point_outside_square():
    assert contains((15, 5), SQUARE) is False
    assert contains((5, -1), SQUARE) is False


def test_closed_and_open_rings_agree():
    closed = SQUARE + [SQUARE[0]]

    for point in [(5, 5), (15, 5), (0.5, 9.5), (-3, 3)]:
        assert contains(point, closed) == contains(point, SQUARE)


def test_concave_ring():
    # U shape opening upwards; the notch between the arms is outside.
    ring = [(0, 0), (9, 0), (9, 9), (6, 9), (6, 3), (3, 3), (3, 9), (0, 9)]

    assert contains((1.5, 6), ring) is True
    assert contains((4.5, 6), ring) is False
    assert contains((4.5, 1.5), ring) is True


@pytest.mark.parametrize("ring", [[], [(0, 0)], [(0, 0), (1, 1)]])
def test_degenerate_ring_contains_nothing(ring):
    assert contains((0, 0), ring) is False


def test_boundary_classification_is_deterministic():
    results = {contains((10, 5), SQUARE) for _ in range(5)}

    assert len(results) == 1


def test_geographic_coordinates():
    ring = [[-80.9, 35.0], [-80.8, 35.0], [-80.8, 35.1], [-80.9, 35.1], [-80.9, 35.0]]

    assert contains((-80.85, 35.05), ring) is True
    assert contains((-80.75, 35.05), ring) is False
