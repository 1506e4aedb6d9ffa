"""Errors raised by the zip finder."""

from __future__ import annotations


class ZipfinderError(Exception):
    """Base class for zip finder errors."""


class SourceUnavailable(ZipfinderError):
    """The reference dataset could not be fetched or parsed."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidGeometry(ZipfinderError, ValueError):
    """A caller supplied geometry has no usable exterior ring."""


__all__ = ["InvalidGeometry", "SourceUnavailable", "ZipfinderError"]
