"""Tests for WriterConfig normalization and WriterSettings env loading."""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from geokml import WriterConfig, WriterSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from GEOKML_* variables and any .env in the cwd."""
    for key in list(os.environ):
        if key.upper().startswith("GEOKML_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.mark.unit
class TestWriterConfig:
    def test_defaults(self):
        config = WriterConfig()
        assert config.line_prefix is None
        assert config.max_coordinates_per_line == 5
        assert config.z_override is None
        assert config.extrude is False
        assert config.altitude_mode is None
        assert config.precision is None
        assert config.strict is False

    @pytest.mark.parametrize("value", [0, -1, -100])
    def test_non_positive_width_becomes_one(self, value):
        assert WriterConfig(max_coordinates_per_line=value).max_coordinates_per_line == 1

    def test_nan_override_is_unset(self):
        assert WriterConfig(z_override=float("nan")).z_override is None

    def test_negative_precision_is_unset(self):
        assert WriterConfig(precision=-1).precision is None

    def test_frozen(self):
        config = WriterConfig()
        with pytest.raises(ValidationError):
            config.extrude = True

    def test_updated_validates_and_copies(self):
        base = WriterConfig(precision=3)
        changed = base.updated(max_coordinates_per_line=0, extrude=True)
        assert changed.max_coordinates_per_line == 1
        assert changed.extrude is True
        assert changed.precision == 3
        assert base.extrude is False


@pytest.mark.unit
class TestWriterSettings:
    def test_defaults_match_config(self):
        assert WriterSettings().to_config() == WriterConfig()

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("GEOKML_PRECISION", "3")
        monkeypatch.setenv("GEOKML_EXTRUDE", "true")
        monkeypatch.setenv("GEOKML_ALTITUDE_MODE", "absolute")
        config = WriterSettings().to_config()
        assert config.precision == 3
        assert config.extrude is True
        assert config.altitude_mode == "absolute"

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("GEOKML_MAX_COORDINATES_PER_LINE=2\n")
        assert WriterSettings().to_config().max_coordinates_per_line == 2

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("GEOKML_PRECISION", "3")
        monkeypatch.setenv("GEOKML_Z_OVERRIDE", "12.5")
        config = WriterSettings().to_config(precision=1, z_override=None)
        assert config.precision == 1
        assert config.z_override == 12.5

    def test_overrides_are_normalized(self):
        config = WriterSettings().to_config(max_coordinates_per_line=-4)
        assert config.max_coordinates_per_line == 1
