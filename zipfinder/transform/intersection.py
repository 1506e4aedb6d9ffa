"""Approximate polygon intersection by vertex sampling.

Two rings are reported as intersecting when a vertex of either one falls
inside the other. Overlaps where only the edges cross (for example two thin
rectangles laid out as a plus sign) have no such vertex and are reported as
disjoint. Zip selection depends on this exact behaviour, so it is not
replaced by true polygon clipping.
"""

from __future__ import annotations

from ..models import Ring
from .raycast import contains


def intersects(ring_a: Ring, ring_b: Ring) -> bool:
    """Return ``True`` if any vertex of one ring lies inside the other.

    Runs in ``O(len(ring_a) * len(ring_b))``.
    """

    if any(contains(point, ring_b) for point in ring_a):
        return True
    return any(contains(point, ring_a) for point in ring_b)


__all__ = ["intersects"]
