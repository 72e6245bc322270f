"""Unit tests for configuration loading."""

import logging

import pytest

from chart_decimator.config import (
    MODE_ENV_VAR,
    DecimationMode,
    DecimatorConfig,
    load_config,
)
from chart_decimator.scaling import ScalingMode


class TestDecimationModeParse:
    """Tests for DecimationMode.parse()."""

    @pytest.mark.parametrize("value", ["fast", "FAST", " Fast "])
    def test_fast_any_case(self, value):
        """'fast' is matched case-insensitively."""
        assert DecimationMode.parse(value) is DecimationMode.FAST

    def test_default_is_minmax(self):
        """Missing value selects minmax."""
        assert DecimationMode.parse(None) is DecimationMode.MINMAX

    def test_unknown_falls_back_with_warning(self, caplog):
        """Unknown names select minmax and log a warning."""
        with caplog.at_level(logging.WARNING):
            mode = DecimationMode.parse("turbo")

        assert mode is DecimationMode.MINMAX
        assert "Unknown decimation mode 'turbo'" in caplog.text


class TestLoadConfig:
    """Tests for load_config()."""

    def test_empty_environment(self):
        """No environment variable gives the defaults."""
        assert load_config({}) == DecimatorConfig()

    def test_mode_from_environment(self):
        """Environment variable selects the mode."""
        assert load_config({MODE_ENV_VAR: "fast"}).mode is DecimationMode.FAST

    def test_override_beats_environment(self):
        """Explicit mode overrides the environment."""
        config = load_config({MODE_ENV_VAR: "fast"}, mode="minmax")

        assert config.mode is DecimationMode.MINMAX

    def test_other_overrides(self):
        """Remaining fields are passed through."""
        config = load_config({}, line_width=2.5, max_value_offset=4, scaling="relative")

        assert config.line_width == 2.5
        assert config.max_value_offset == 4
        assert config.scaling is ScalingMode.RELATIVE

    def test_invalid_scaling_raises(self):
        """Unknown scaling name raises ValueError."""
        with pytest.raises(ValueError):
            load_config({}, scaling="logarithmic")

    def test_negative_offset_raises(self):
        """Raise ValueError for a negative max_value_offset."""
        with pytest.raises(ValueError, match="max_value_offset"):
            load_config({}, max_value_offset=-1)
