"""Point-in-polygon test by ray casting.

A horizontal ray is cast from the point towards +infinity along x and the
ring edges it crosses are counted; an odd count means the point is inside.
Points lying exactly on an edge are classified deterministically but
arbitrarily, which is the usual ray casting boundary behaviour.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import Ring


def contains(point: Sequence[float], ring: Ring) -> bool:
    """Return ``True`` if ``point`` lies inside ``ring``.

    The ring may or may not repeat its first position at the end. Rings with
    fewer than three positions never contain anything.
    """

    count = len(ring)
    if count < 3:
        return False

    x, y = point[0], point[1]
    inside = False

    j = count - 1
    for i in range(count):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]

        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside

        j = i

    return inside


__all__ = ["contains"]
