"""Ordinate and coordinate tuple formatting for KML ``<coordinates>``.

KML tuples are ``x,y[,z]`` with ``.`` as decimal separator, so number
formatting never goes through the locale.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Optional

from geokml.config import WriterConfig
from geokml.geometry import Coordinate

COORDINATE_SEPARATOR = ","


def format_fixed(value: float, precision: int) -> str:
    """Fixed-point text with at most ``precision`` decimals.

    Rounds half-even, never uses scientific notation, and drops trailing
    zeros and a bare decimal point: ``format_fixed(1 / 3, 2) == "0.33"``,
    ``format_fixed(2.0, 2) == "2"``.
    """
    if not math.isfinite(value):
        return repr(value)
    # exact binary value, so 2.675 (stored as 2.67499...) rounds to 2.67
    number = Decimal(float(value))
    # room for every integer digit plus the requested decimals
    context = Context(prec=max(28, abs(number.adjusted()) + precision + 2))
    quantum = Decimal(1).scaleb(-precision)
    rounded = number.quantize(quantum, rounding=ROUND_HALF_EVEN, context=context)
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_default(value: float) -> str:
    """Shortest round-trip text, with ``.0`` dropped on integral values."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


class CoordinateFormatter:
    """Turns coordinates into KML tuples according to a WriterConfig."""

    def __init__(self, config: WriterConfig) -> None:
        self._precision: Optional[int] = config.precision
        self._z_override: Optional[float] = config.z_override

    def format_number(self, value: float) -> str:
        if self._precision is not None:
            return format_fixed(value, self._precision)
        return format_default(value)

    def resolve_z(self, coord: Coordinate) -> float:
        """Z to write for ``coord``; NaN means the Z ordinate is omitted."""
        if self._z_override is not None:
            return self._z_override
        return coord.z

    def format_coordinate(self, coord: Coordinate) -> str:
        parts = [self.format_number(coord.x), self.format_number(coord.y)]
        z = self.resolve_z(coord)
        if not math.isnan(z):
            parts.append(self.format_number(z))
        return COORDINATE_SEPARATOR.join(parts)
