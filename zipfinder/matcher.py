"""Resolve user input, drawn areas or typed codes, into zip records."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import InvalidGeometry
from .extract.dataset import GeometryStore
from .models import GeometryLike, ZipRecord, normalize_zip_code, polygon_ring, thaw_geometry
from .transform.intersection import intersects

logger = logging.getLogger(__name__)


class ZipMatcher:
    """Match drawn polygons and typed zip codes against a :class:`GeometryStore`."""

    def __init__(self, store: GeometryStore | None = None) -> None:
        self.store = store or GeometryStore()

    async def find_intersecting(self, drawn_polygon: GeometryLike) -> list[ZipRecord]:
        """Return the zip records whose polygon intersects ``drawn_polygon``.

        Records come back in reference dataset order, each zip code at most
        once. Intersection is decided by vertex sampling, see
        :func:`zipfinder.transform.intersection.intersects`.

        Raises:
            InvalidGeometry: ``drawn_polygon`` has no usable exterior ring.
            SourceUnavailable: the reference dataset could not be loaded.
        """

        drawn_ring = polygon_ring(drawn_polygon)
        if drawn_ring is None:
            raise InvalidGeometry("Drawn polygon must be a Polygon or MultiPolygon with at least 3 positions")

        dataset = await self.store.load()

        matches: list[ZipRecord] = []
        seen: set[str] = set()
        unusable = 0
        for entry in dataset:
            if entry.zip_code in seen:
                continue

            candidate_ring = polygon_ring(entry.geometry)
            if candidate_ring is None:
                unusable += 1
                continue

            if intersects(drawn_ring, candidate_ring):
                logger.debug("Zip %s intersects drawn polygon", entry.zip_code)
                matches.append(ZipRecord(entry.zip_code, thaw_geometry(entry.geometry), True))
                seen.add(entry.zip_code)

        if unusable:
            logger.debug("Skipped %s reference entries without a usable ring", unusable)
        logger.info("Drawn polygon intersects %s zip codes", len(matches))
        return matches

    async def lookup_by_code(self, zip_code: object) -> ZipRecord:
        """Resolve a typed zip code; ``found=False`` when it is not in the dataset."""

        return await self.store.lookup(zip_code)

    async def lookup_many(self, zip_codes: Iterable[object]) -> list[ZipRecord]:
        records: list[ZipRecord] = []
        seen: set[str] = set()
        for zip_code in zip_codes:
            normalized = normalize_zip_code(zip_code)
            if normalized in seen:
                continue
            seen.add(normalized)
            records.append(await self.store.lookup(normalized))
        return records


__all__ = ["ZipMatcher"]
