"""KML geometry writer.

Serializes Point, LineString, LinearRing, Polygon and geometry collections
into indented KML geometry fragments.
"""

from geokml.config import WriterConfig, WriterSettings
from geokml.errors import GeoKMLError, MalformedGeometryError, UnsupportedGeometryError
from geokml.geojson import geometry_from_geojson
from geokml.geometry import (
    Coordinate,
    GeometryCollection,
    GeometryKind,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geokml.writer import KMLWriter, write_geometry

__all__ = [
    "Coordinate",
    "GeoKMLError",
    "GeometryCollection",
    "GeometryKind",
    "KMLWriter",
    "LineString",
    "LinearRing",
    "MalformedGeometryError",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "UnsupportedGeometryError",
    "WriterConfig",
    "WriterSettings",
    "geometry_from_geojson",
    "write_geometry",
]
