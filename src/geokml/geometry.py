"""Geometry model consumed by the KML writer.

Every geometry carries an explicit ``kind`` tag so the writer can dispatch
without relying on subclass order (a LinearRing is also a LineString, and the
Multi* types are also GeometryCollections).

Coordinates are (x, y[, z]); a missing Z is stored as NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Sequence


class GeometryKind(str, Enum):
    """Geometry variants known to the writer."""

    POINT = "Point"
    LINE_STRING = "LineString"
    LINEAR_RING = "LinearRing"
    POLYGON = "Polygon"
    GEOMETRY_COLLECTION = "GeometryCollection"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"


@dataclass(frozen=True)
class Coordinate:
    """A single position. ``z`` is NaN when the coordinate is 2D."""

    x: float
    y: float
    z: float = math.nan

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Coordinate:
        """Build from ``[x, y]`` or ``[x, y, z]``."""
        if len(values) < 2:
            raise ValueError(f"Coordinate needs at least 2 ordinates, got {len(values)}")
        z = values[2] if len(values) > 2 and values[2] is not None else math.nan
        return cls(float(values[0]), float(values[1]), float(z))


def to_coordinates(values: Iterable[Sequence[float] | Coordinate]) -> list[Coordinate]:
    """Normalize a sequence of tuples/Coordinates to a list of Coordinates."""
    return [
        v if isinstance(v, Coordinate) else Coordinate.from_sequence(v)
        for v in values
    ]


@dataclass
class Point:
    coordinate: Coordinate

    kind: ClassVar[GeometryKind] = GeometryKind.POINT


@dataclass
class LineString:
    coordinates: list[Coordinate]

    kind: ClassVar[GeometryKind] = GeometryKind.LINE_STRING

    @classmethod
    def from_tuples(cls, values: Iterable[Sequence[float] | Coordinate]):
        return cls(to_coordinates(values))

    @property
    def num_points(self) -> int:
        return len(self.coordinates)


@dataclass
class LinearRing(LineString):
    """A closed LineString used as a polygon boundary."""

    kind: ClassVar[GeometryKind] = GeometryKind.LINEAR_RING


@dataclass
class Polygon:
    """One exterior ring plus zero or more interior rings (holes)."""

    exterior: LinearRing
    interiors: list[LinearRing] = field(default_factory=list)

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    @property
    def num_interior_rings(self) -> int:
        return len(self.interiors)


@dataclass
class GeometryCollection:
    geometries: list = field(default_factory=list)

    kind: ClassVar[GeometryKind] = GeometryKind.GEOMETRY_COLLECTION

    @property
    def num_geometries(self) -> int:
        return len(self.geometries)


@dataclass
class MultiPoint(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POINT


@dataclass
class MultiLineString(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_LINE_STRING


@dataclass
class MultiPolygon(GeometryCollection):
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON
