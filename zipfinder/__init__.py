"""Find the zip codes touched by a drawn area."""

from .exceptions import InvalidGeometry, SourceUnavailable, ZipfinderError
from .extract.dataset import DatasetConfig, GeometryStore
from .matcher import ZipMatcher
from .models import BoundingBox, ReferenceEntry, ZipRecord, normalize_zip_code
from .transform.bounds import bounding_box_of

__all__ = [
    "BoundingBox",
    "DatasetConfig",
    "GeometryStore",
    "InvalidGeometry",
    "ReferenceEntry",
    "SourceUnavailable",
    "ZipMatcher",
    "ZipRecord",
    "ZipfinderError",
    "bounding_box_of",
    "normalize_zip_code",
]
