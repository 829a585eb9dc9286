"""Tests for building geometries from GeoJSON."""

from __future__ import annotations

import json
import math

import pytest

from geokml import (
    GeometryKind,
    KMLWriter,
    MalformedGeometryError,
    geometry_from_geojson,
)


SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
HOLE = [[2, 2], [4, 2], [4, 4], [2, 2]]


@pytest.mark.unit
class TestGeometryFromGeoJSON:
    def test_point_2d(self):
        point = geometry_from_geojson({"type": "Point", "coordinates": [-122.4194, 37.7749]})
        assert point.kind is GeometryKind.POINT
        assert point.coordinate.x == -122.4194
        assert math.isnan(point.coordinate.z)

    def test_point_3d(self):
        point = geometry_from_geojson({"type": "Point", "coordinates": [1, 2, 30]})
        assert point.coordinate.z == 30

    def test_line_string(self):
        line = geometry_from_geojson({"type": "LineString", "coordinates": [[0, 0], [1, 1]]})
        assert line.kind is GeometryKind.LINE_STRING
        assert line.num_points == 2

    def test_polygon_rings(self):
        polygon = geometry_from_geojson({"type": "Polygon", "coordinates": [SQUARE, HOLE]})
        assert polygon.kind is GeometryKind.POLYGON
        assert polygon.exterior.kind is GeometryKind.LINEAR_RING
        assert polygon.num_interior_rings == 1
        assert polygon.interiors[0].kind is GeometryKind.LINEAR_RING

    def test_multi_types(self):
        multi = geometry_from_geojson({
            "type": "MultiPolygon",
            "coordinates": [[SQUARE], [SQUARE, HOLE]],
        })
        assert multi.kind is GeometryKind.MULTI_POLYGON
        assert multi.num_geometries == 2
        points = geometry_from_geojson({"type": "MultiPoint", "coordinates": [[0, 0], [1, 1]]})
        assert [g.kind for g in points.geometries] == [GeometryKind.POINT] * 2
        lines = geometry_from_geojson({"type": "MultiLineString", "coordinates": [SQUARE]})
        assert lines.geometries[0].kind is GeometryKind.LINE_STRING

    def test_geometry_collection(self):
        collection = geometry_from_geojson({
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Point", "coordinates": [0, 0]},
                {"type": "Polygon", "coordinates": [SQUARE]},
            ],
        })
        assert collection.kind is GeometryKind.GEOMETRY_COLLECTION
        assert [g.kind for g in collection.geometries] == [
            GeometryKind.POINT, GeometryKind.POLYGON,
        ]

    def test_feature_and_string_input(self):
        feature = {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [SQUARE, HOLE]},
            "properties": {"name": "Zone Alpha"},
        }
        polygon = geometry_from_geojson(json.dumps(feature))
        text = KMLWriter().write(polygon)
        assert text.count("<innerBoundaryIs>") == 1
        assert "<coordinates>2,2 4,2 4,4 2,2</coordinates>" in text

    @pytest.mark.parametrize("data", [
        "{not json",
        [1, 2],
        {"type": "Feature", "geometry": None},
        {"type": "Circle", "coordinates": [0, 0]},
        {"type": "Point"},
        {"type": "Point", "coordinates": [1]},
        {"type": "Polygon", "coordinates": []},
        {"type": "GeometryCollection", "geometries": [1]},
        {"type": "GeometryCollection", "geometries": [{"type": "Point", "coordinates": [0, 0]}, "x"]},
        {"type": "GeometryCollection", "geometries": {"a": 1}},
        {"type": "GeometryCollection", "geometries": "abc"},
    ])
    def test_malformed(self, data):
        with pytest.raises(MalformedGeometryError):
            geometry_from_geojson(data)
