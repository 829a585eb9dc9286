"""Write geometries as KML geometry fragments.

The output can be dropped wherever KML accepts an abstract Geometry element
(e.g. inside a Placemark). Elements are indented two spaces per nesting
level, optionally behind a line prefix, and long coordinate lists are
wrapped after ``max_coordinates_per_line`` tuples:

    <Polygon>
      <outerBoundaryIs>
      <LinearRing>
        <coordinates>0,0 10,0 10,10 0,10 0,0</coordinates>
      </LinearRing>
      </outerBoundaryIs>
    </Polygon>

When ``extrude`` or ``altitude_mode`` is configured, the sub-elements follow
every geometry tag, nested rings included.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, TextIO
from xml.sax.saxutils import escape

from loguru import logger

from geokml.config import WriterConfig
from geokml.errors import MalformedGeometryError, UnsupportedGeometryError
from geokml.formatting import CoordinateFormatter
from geokml.geometry import Coordinate, GeometryKind

INDENT = "  "
TUPLE_SEPARATOR = " "


class KMLWriter:
    """Renders geometries to KML text using one immutable WriterConfig.

    Example:
        writer = KMLWriter(WriterConfig(precision=6, extrude=True))
        text = writer.write(polygon)
    """

    def __init__(self, config: Optional[WriterConfig] = None) -> None:
        self._config = config if config is not None else WriterConfig()

    @property
    def config(self) -> WriterConfig:
        return self._config

    def with_options(self, **changes) -> KMLWriter:
        """New writer whose config is this one's with ``changes`` applied."""
        return KMLWriter(self._config.updated(**changes))

    def write(self, geometry) -> str:
        """Return the KML representation of ``geometry``."""
        renderer = _KMLRenderer(self._config)
        renderer.render(geometry, 0)
        return renderer.text()

    def write_to(self, geometry, sink: TextIO) -> None:
        """Write the KML representation of ``geometry`` to a text sink.

        Errors raised by the sink propagate unchanged.
        """
        text = self.write(geometry)
        sink.write(text)


def write_geometry(
    geometry,
    z: Optional[float] = None,
    precision: Optional[int] = None,
    extrude: bool = False,
    altitude_mode: Optional[str] = None,
) -> str:
    """One-shot helper: write ``geometry`` with the given Z, precision,
    extrude flag and altitude mode."""
    config = WriterConfig(
        z_override=z,
        precision=precision,
        extrude=extrude,
        altitude_mode=altitude_mode,
    )
    return KMLWriter(config).write(geometry)


def _as_kind(kind) -> Optional[GeometryKind]:
    """Map a kind tag (enum member or its string value) to GeometryKind."""
    try:
        return GeometryKind(kind)
    except ValueError:
        return None


class _KMLRenderer:
    """Per-call state: the output buffer plus the emitters writing into it."""

    def __init__(self, config: WriterConfig) -> None:
        self._config = config
        self._formatter = CoordinateFormatter(config)
        self._buf: list[str] = []
        self._emitters: dict[GeometryKind, Callable[[object, str, int], None]] = {
            GeometryKind.POINT: self._write_point,
            GeometryKind.LINE_STRING: self._write_line_string,
            GeometryKind.LINEAR_RING: self._write_linear_ring,
            GeometryKind.POLYGON: self._write_polygon,
            GeometryKind.GEOMETRY_COLLECTION: self._write_collection,
            GeometryKind.MULTI_POINT: self._write_collection,
            GeometryKind.MULTI_LINE_STRING: self._write_collection,
            GeometryKind.MULTI_POLYGON: self._write_collection,
        }

    def text(self) -> str:
        return "".join(self._buf)

    # -- dispatch ----------------------------------------------------------

    def render(self, geometry, level: int) -> None:
        kind = getattr(geometry, "kind", None)
        emitter = self._emitters.get(_as_kind(kind))
        if emitter is None:
            label = kind if kind is not None else type(geometry).__name__
            if self._config.strict:
                raise UnsupportedGeometryError(f"Unsupported geometry kind: {label}")
            logger.debug(f"Skipping unsupported geometry kind {label}")
            return
        emitter(geometry, "", level)

    # -- element emitters --------------------------------------------------

    def _write_point(self, point, attributes: str, level: int) -> None:
        self._open_tag("Point", attributes, level)
        self._write_coordinates([point.coordinate], level + 1)
        self._start_line(level, "</Point>\n")

    def _write_line_string(self, line, attributes: str, level: int) -> None:
        self._open_tag("LineString", attributes, level)
        self._write_coordinates(line.coordinates, level + 1)
        self._start_line(level, "</LineString>\n")

    def _write_linear_ring(self, ring, attributes: str, level: int) -> None:
        self._open_tag("LinearRing", attributes, level)
        self._write_coordinates(ring.coordinates, level + 1)
        self._start_line(level, "</LinearRing>\n")

    def _write_polygon(self, polygon, attributes: str, level: int) -> None:
        self._open_tag("Polygon", attributes, level)
        self._write_boundary("outerBoundaryIs", polygon.exterior, level + 1)
        for ring in polygon.interiors:
            self._write_boundary("innerBoundaryIs", ring, level + 1)
        self._start_line(level, "</Polygon>\n")

    def _write_boundary(self, tag: str, ring, level: int) -> None:
        if _as_kind(getattr(ring, "kind", None)) is not GeometryKind.LINEAR_RING:
            raise MalformedGeometryError(
                f"<{tag}> needs a LinearRing, got {type(ring).__name__}"
            )
        self._start_line(level, f"<{tag}>\n")
        # ring shares the wrapper's indentation, one level below <Polygon>
        self._write_linear_ring(ring, "", level)
        self._start_line(level, f"</{tag}>\n")

    def _write_collection(self, collection, attributes: str, level: int) -> None:
        self._start_line(level, "<MultiGeometry>\n")
        for child in collection.geometries:
            self.render(child, level + 1)
        self._start_line(level, "</MultiGeometry>\n")

    # -- line emitter ------------------------------------------------------

    def _start_line(self, level: int, text: str) -> None:
        if self._config.line_prefix is not None:
            self._buf.append(self._config.line_prefix)
        self._buf.append(INDENT * level)
        self._buf.append(text)

    def _open_tag(self, name: str, attributes: str, level: int) -> None:
        if attributes:
            self._start_line(level, f"<{name} {attributes}>\n")
        else:
            self._start_line(level, f"<{name}>\n")
        # repeated on nested geometries too, not only the outermost one
        if self._config.extrude:
            self._start_line(level + 1, "<extrude>1</extrude>\n")
        if self._config.altitude_mode is not None:
            mode = escape(self._config.altitude_mode)
            self._start_line(level + 1, f"<altitudeMode>{mode}</altitudeMode>\n")

    def _write_coordinates(self, coords: Sequence[Coordinate], level: int) -> None:
        per_line = self._config.max_coordinates_per_line
        self._start_line(level, "<coordinates>")
        for i, coord in enumerate(coords):
            if i > 0:
                if i % per_line == 0:
                    self._buf.append("\n")
                    self._start_line(level, INDENT)
                else:
                    self._buf.append(TUPLE_SEPARATOR)
            self._buf.append(self._formatter.format_coordinate(coord))
        self._buf.append("</coordinates>\n")
