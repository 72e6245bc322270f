"""Unit tests for the logging setup."""

import logging

from chart_decimator.logging_config import LOG_FORMAT


class TestLogFormat:
    """Tests for LOG_FORMAT."""

    def test_record_layout(self):
        """Records render as time - level - message."""
        formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M")
        record = logging.LogRecord(
            "chart_decimator.minmax", logging.WARNING, __file__, 1, "spike %d", (3,), None
        )

        line = formatter.format(record)

        assert line.endswith(" - WARNING - spike 3")
        assert "chart_decimator.minmax" not in line
