"""Writer configuration.

``WriterConfig`` is an immutable value read by every part of the writer.
``WriterSettings`` loads defaults from ``GEOKML_*`` environment variables
(or a ``.env`` file) and turns them into a ``WriterConfig``.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_COORDINATES_PER_LINE = 5


class WriterConfig(BaseModel):
    """Options for one KML writer.

    Attributes:
        line_prefix: Text prepended to every output line.
        max_coordinates_per_line: Tuples per physical line inside
            ``<coordinates>``. Values <= 0 become 1.
        z_override: Z value written for every coordinate. ``None`` (or NaN)
            means use each coordinate's own Z.
        extrude: Emit ``<extrude>1</extrude>`` after each geometry tag.
        altitude_mode: Emit ``<altitudeMode>`` with this text after each
            geometry tag.
        precision: Maximum decimal places for ordinates. Negative means unset.
        strict: Raise on unsupported geometry kinds instead of skipping them.
    """

    model_config = ConfigDict(frozen=True)

    line_prefix: Optional[str] = None
    max_coordinates_per_line: int = DEFAULT_MAX_COORDINATES_PER_LINE
    z_override: Optional[float] = None
    extrude: bool = False
    altitude_mode: Optional[str] = None
    precision: Optional[int] = None
    strict: bool = False

    @field_validator("max_coordinates_per_line")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return value if value > 0 else 1

    @field_validator("z_override")
    @classmethod
    def _nan_means_unset(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and math.isnan(value):
            return None
        return value

    @field_validator("precision")
    @classmethod
    def _negative_means_unset(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            return None
        return value

    def updated(self, **changes: Any) -> WriterConfig:
        """Return a validated copy with ``changes`` applied."""
        return WriterConfig.model_validate({**self.model_dump(), **changes})


class WriterSettings(BaseSettings):
    """Writer defaults loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="GEOKML_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    line_prefix: Optional[str] = None
    max_coordinates_per_line: int = DEFAULT_MAX_COORDINATES_PER_LINE
    z_override: Optional[float] = None
    extrude: bool = False
    altitude_mode: Optional[str] = None
    precision: Optional[int] = None
    strict: bool = False

    # Logging (used by the CLI)
    log_level: str = "WARNING"

    def to_config(self, **overrides: Any) -> WriterConfig:
        """Build a WriterConfig from these settings, then apply overrides.

        Overrides whose value is ``None`` are ignored so unset CLI flags
        fall back to the environment.
        """
        values = self.model_dump(exclude={"log_level"})
        values.update({k: v for k, v in overrides.items() if v is not None})
        return WriterConfig.model_validate(values)
