"""Build geometries from GeoJSON (RFC 7946) geometry objects.

Accepts a bare geometry dict, a Feature (its ``geometry`` is used), or a
JSON string of either. Positions are ``[x, y]`` or ``[x, y, z]``;
Polygon rings become LinearRings, the first one being the exterior.
"""

from __future__ import annotations

import json
from typing import Any

from geokml.errors import MalformedGeometryError
from geokml.geometry import (
    Coordinate,
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    to_coordinates,
)


def geometry_from_geojson(data: dict | str):
    """Convert a GeoJSON geometry or Feature into a geometry object.

    Raises:
        MalformedGeometryError: If the input is not valid JSON, has no
            geometry, or uses an unknown geometry type.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise MalformedGeometryError(f"Invalid GeoJSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedGeometryError(f"GeoJSON object expected, got {type(data).__name__}")

    if data.get("type") == "Feature":
        data = data.get("geometry")
        if not isinstance(data, dict):
            raise MalformedGeometryError("Feature has no geometry")

    return _parse_geometry(data)


def _parse_geometry(raw: dict):
    if not isinstance(raw, dict):
        raise MalformedGeometryError(f"GeoJSON geometry expected, got {type(raw).__name__}")

    geom_type = raw.get("type", "")

    if geom_type == "GeometryCollection":
        children = raw.get("geometries")
        if children is None:
            children = []
        if not isinstance(children, list):
            raise MalformedGeometryError(
                f"GeometryCollection geometries must be a list, got {type(children).__name__}"
            )
        return GeometryCollection([_parse_geometry(child) for child in children])

    coordinates = raw.get("coordinates")
    if coordinates is None:
        raise MalformedGeometryError(f"{geom_type or 'Geometry'} has no coordinates")

    try:
        if geom_type == "Point":
            return Point(Coordinate.from_sequence(coordinates))
        if geom_type == "LineString":
            return LineString(to_coordinates(coordinates))
        if geom_type == "Polygon":
            return _parse_polygon(coordinates)
        if geom_type == "MultiPoint":
            return MultiPoint([Point(Coordinate.from_sequence(c)) for c in coordinates])
        if geom_type == "MultiLineString":
            return MultiLineString([LineString(to_coordinates(c)) for c in coordinates])
        if geom_type == "MultiPolygon":
            return MultiPolygon([_parse_polygon(rings) for rings in coordinates])
    except (TypeError, ValueError) as e:
        raise MalformedGeometryError(f"Bad {geom_type} coordinates: {e}") from e

    raise MalformedGeometryError(f"Unknown GeoJSON geometry type: {geom_type!r}")


def _parse_polygon(rings: list[Any]) -> Polygon:
    if not rings:
        raise ValueError("Polygon needs at least one ring")
    exterior, *interiors = [LinearRing(to_coordinates(ring)) for ring in rings]
    return Polygon(exterior, interiors)
