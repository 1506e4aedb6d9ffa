"""Reference dataset of zip code polygons.

The dataset is a GeoJSON FeatureCollection with one feature per zip code,
identified by ``properties.ZCTA5CE10`` (census ZCTA files) or
``properties.zip``. It is fetched once per :class:`GeometryStore` and kept
in memory for the lifetime of the store.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from .. import config as app_config
from ..exceptions import SourceUnavailable
from ..models import ReferenceEntry, ZipRecord, freeze_geometry, normalize_zip_code, thaw_geometry

logger = logging.getLogger(__name__)

ZIP_PROPERTIES = ("ZCTA5CE10", "zip")

Fetcher = Callable[[str, float], Any]
Dataset = tuple[ReferenceEntry, ...]


@dataclass(slots=True)
class DatasetConfig:
    """Where the reference dataset comes from."""

    url: str = field(default_factory=app_config.dataset_url)
    timeout: float = field(default_factory=app_config.dataset_timeout)
    cache_path: Path | None = field(default_factory=app_config.dataset_cache_path)

    def __post_init__(self) -> None:
        if self.cache_path is not None:
            self.cache_path = Path(self.cache_path)


def fetch_geojson(url: str, timeout: float) -> Any:
    """GET ``url`` and decode the JSON body."""

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as exc:
        raise SourceUnavailable(f"Could not fetch zip dataset: {exc}", url=url) from exc
    except ValueError as exc:
        raise SourceUnavailable(f"Zip dataset is not valid JSON: {exc}", url=url) from exc


def _feature_zip_code(properties: Mapping[str, Any]) -> str | None:
    for key in ZIP_PROPERTIES:
        value = properties.get(key)
        if value is not None and str(value).strip():
            return normalize_zip_code(value)
    return None


def parse_feature_collection(document: Any, *, url: str | None = None) -> Dataset:
    """Turn a FeatureCollection document into ordered reference entries.

    Features without a zip identifier are skipped. Geometries are stored as
    read-only copies (see :func:`~zipfinder.models.freeze_geometry`) without
    being validated; consumers decide whether they are usable. ``url`` is
    attached to any :class:`SourceUnavailable` raised here.
    """

    if not isinstance(document, Mapping):
        raise SourceUnavailable("Zip dataset must be a JSON object", url=url)

    features = document.get("features")
    if not isinstance(features, list):
        raise SourceUnavailable("Zip dataset does not contain a 'features' list", url=url)

    entries: list[ReferenceEntry] = []
    skipped = 0
    for feature in features:
        if not isinstance(feature, Mapping):
            skipped += 1
            continue

        properties = feature.get("properties")
        zip_code = _feature_zip_code(properties) if isinstance(properties, Mapping) else None
        if zip_code is None:
            skipped += 1
            continue

        geometry = feature.get("geometry")
        entries.append(ReferenceEntry(zip_code, freeze_geometry(geometry) if isinstance(geometry, Mapping) else None))

    if skipped:
        logger.warning("Skipped %s features without a zip identifier", skipped)

    return tuple(entries)


class GeometryStore:
    """Lazily loaded, read-only cache of the reference dataset.

    Concurrent first calls to :meth:`load` share a single fetch. A failed
    load is not remembered, so the next call tries again.
    """

    def __init__(self, config: DatasetConfig | None = None, *, fetcher: Fetcher = fetch_geojson) -> None:
        self.config = config or DatasetConfig()
        self._fetcher = fetcher
        self._dataset: Dataset | None = None
        self._pending: asyncio.Future[Dataset] | None = None
        self._fetch_count = 0

    @property
    def fetch_count(self) -> int:
        """Number of fetches (network or disk cache reads) issued so far."""

        return self._fetch_count

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    @property
    def is_loading(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def reset(self) -> None:
        """Forget the cached dataset; the next :meth:`load` fetches again.

        A load still in flight is abandoned: its result is not cached.
        """

        self._dataset = None
        self._pending = None

    async def load(self) -> Dataset:
        if self._dataset is not None:
            return self._dataset

        pending = self._pending
        if pending is None or not self._reusable(pending):
            pending = asyncio.ensure_future(self._fetch_dataset())
            pending.add_done_callback(self._on_load_done)
            self._pending = pending

        return await asyncio.shield(pending)

    @staticmethod
    def _reusable(pending: asyncio.Future[Dataset]) -> bool:
        # Tasks die with their event loop, e.g. when an ``asyncio.run`` call ends.
        if pending.get_loop() is not asyncio.get_running_loop() or pending.cancelled():
            return False
        return not pending.done() or pending.exception() is None

    def _on_load_done(self, task: asyncio.Future[Dataset]) -> None:
        if self._pending is not task:
            return

        self._pending = None
        if task.cancelled() or task.exception() is not None:
            return
        self._dataset = task.result()

    async def lookup(self, zip_code: object) -> ZipRecord:
        """Return the record for ``zip_code``, ``found=False`` when absent."""

        normalized = normalize_zip_code(zip_code)
        dataset = await self.load()

        for entry in dataset:
            if entry.zip_code == normalized:
                return ZipRecord(entry.zip_code, thaw_geometry(entry.geometry), True)

        logger.debug("Zip code %s not present in reference dataset", normalized)
        return ZipRecord(normalized, None, False)

    async def _fetch_dataset(self) -> Dataset:
        self._fetch_count += 1
        dataset = await asyncio.to_thread(self._load_sync)
        logger.info("Loaded %s zip geometries from %s", len(dataset), self.config.url)
        return dataset

    def _load_sync(self) -> Dataset:
        cache_path = self.config.cache_path
        if cache_path is not None and cache_path.exists():
            logger.info("Reading zip dataset from cache %s", cache_path)
            try:
                document = json.loads(cache_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise SourceUnavailable(f"Could not read cached zip dataset: {exc}", url=str(cache_path)) from exc
            return parse_feature_collection(document, url=str(cache_path))

        logger.info("Fetching zip dataset from %s", self.config.url)
        document = self._fetcher(self.config.url, self.config.timeout)
        dataset = parse_feature_collection(document, url=self.config.url)

        if cache_path is not None:
            _dump_document_to_cache(document, cache_path)

        return dataset


def _dump_document_to_cache(document: Any, cache_path: Path) -> None:
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps(document), encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Could not write zip dataset cache %s: %s", cache_path, exc)


__all__ = [
    "Dataset",
    "DatasetConfig",
    "GeometryStore",
    "fetch_geojson",
    "parse_feature_collection",
]
