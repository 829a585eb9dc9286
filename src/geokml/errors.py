"""Typed errors raised by the KML geometry writer."""

from __future__ import annotations


class GeoKMLError(Exception):
    """Base error for the package."""


class UnsupportedGeometryError(GeoKMLError, TypeError):
    """Geometry kind has no KML emitter (raised only in strict mode)."""


class MalformedGeometryError(GeoKMLError, ValueError):
    """Geometry structure cannot be written, e.g. a polygon ring slot
    holding something other than a LinearRing."""
