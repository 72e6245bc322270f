"""Unit tests for the painter entry point."""

import numpy as np
import pytest

from chart_decimator.config import DecimationMode, DecimatorConfig
from chart_decimator.geometry import Rect
from chart_decimator.painter import XYPainter
from chart_decimator.results import DISTANCE_UNKNOWN, RenderPoints
from chart_decimator.scaling import ScalingMode
from chart_decimator.series import Series

from conftest import identity_viewport

FULL = Rect(0, 0, 5, 11)


class TestPainterConstruction:
    """Tests for construction and strategy selection."""

    def test_defaults_to_minmax(self):
        """Painter without a mode uses the minmax strategy."""
        painter = XYPainter()

        assert painter.mode is DecimationMode.MINMAX
        assert painter.painting

    def test_from_config(self):
        """Config values are carried over verbatim."""
        config = DecimatorConfig(
            mode=DecimationMode.FAST,
            line_width=3,
            max_value_offset=5,
            scaling=ScalingMode.RELATIVE,
        )

        painter = XYPainter.from_config(config)

        assert painter.config == config

    def test_factories(self):
        """absolute() and relative() set the scaling mode."""
        assert XYPainter.absolute().config.scaling is ScalingMode.ABSOLUTE

        relative = XYPainter.relative(max_value_offset=4)
        assert relative.config.scaling is ScalingMode.RELATIVE
        assert relative.config.max_value_offset == 4

    def test_negative_line_width_raises(self):
        """Raise ValueError for a negative stroke width."""
        with pytest.raises(ValueError, match="line_width"):
            XYPainter(line_width=-1)


class TestRenderPoints:
    """Tests for render_points()."""

    def test_minmax_strategy_used(self, five_samples):
        """Minmax painter keeps both peaks at stride two."""
        viewport = identity_viewport(five_samples, width=3, view_width=2, data_width=4)
        painter = XYPainter.absolute(line_width=0)

        points = painter.render_points(five_samples, Rect(0, 0, 3, 11), viewport)

        assert points.ys.tolist().count(9) == 2

    def test_fast_strategy_used(self, five_samples):
        """Fast painter stride-samples and misses the peaks."""
        viewport = identity_viewport(five_samples, width=3, view_width=2, data_width=4)
        painter = XYPainter.absolute(line_width=0, mode=DecimationMode.FAST)

        points = painter.render_points(five_samples, Rect(0, 0, 3, 11), viewport)

        assert 9 not in points.ys.tolist()

    def test_painting_disabled(self, five_samples, one_to_one_viewport):
        """Disabled painting renders nothing but still selects and bounds."""
        painter = XYPainter.absolute(line_width=0)
        painter.set_painting(False)

        assert painter.render_points(five_samples, FULL, one_to_one_viewport) is None
        assert painter.closest_selection(five_samples, 1, 0, one_to_one_viewport).index == 1
        assert painter.selection_bounds(five_samples, 1, one_to_one_viewport) == Rect(1, 9, 0, 0)

        painter.set_painting(True)
        assert painter.render_points(five_samples, FULL, one_to_one_viewport) is not None

    def test_needs_two_samples(self):
        """A single sample cannot form a line."""
        series = Series()
        series.append(0, 1)
        viewport = identity_viewport(series, width=5)

        assert XYPainter().render_points(series, FULL, viewport) is None

    def test_zero_size_viewport(self, five_samples):
        """Viewport without height renders nothing."""
        viewport = identity_viewport(five_samples, width=5)
        viewport.viewport_height = 0

        assert XYPainter().render_points(five_samples, FULL, viewport) is None


class TestSelectionAndBounds:
    """Tests for closest_selection(), selection_bounds() and view_bounds()."""

    def test_fast_selection_has_unknown_distance(self, five_samples, one_to_one_viewport):
        """Fast painter reports no distance."""
        painter = XYPainter(mode=DecimationMode.FAST)

        selection = painter.closest_selection(five_samples, 2, 0, one_to_one_viewport)

        assert selection.index == 2
        assert selection.distance == DISTANCE_UNKNOWN

    def test_minmax_selection_measures_distance(self, five_samples, one_to_one_viewport):
        """Minmax painter reports the pixel distance."""
        selection = XYPainter().closest_selection(five_samples, 7, 0, one_to_one_viewport)

        assert (selection.index, selection.distance) == (4, 3)

    def test_bounds_include_line_width(self, five_samples, one_to_one_viewport):
        """Painter applies its own stroke width."""
        painter = XYPainter.absolute(line_width=1)

        assert painter.view_bounds(five_samples, None, one_to_one_viewport) == Rect(-1, 1, 6, 9)
        assert painter.selection_bounds(five_samples, -1, one_to_one_viewport) == Rect(0, 0, 5, 11)


class TestFillPolygon:
    """Tests for fill_polygon()."""

    def test_closes_against_baseline(self, five_samples, one_to_one_viewport):
        """Two baseline points close the polyline."""
        painter = XYPainter.absolute(line_width=0)
        points = painter.render_points(five_samples, FULL, one_to_one_viewport)

        polygon = painter.fill_polygon(points, one_to_one_viewport)

        assert polygon.count == points.count + 2
        np.testing.assert_array_equal(polygon.xs[-2:], [4, 0])
        np.testing.assert_array_equal(polygon.ys[-2:], [0, 0])

    def test_baseline_clamped_to_viewport(self, five_samples):
        """Data origin scrolled below the viewport clamps to its bottom edge."""
        viewport = identity_viewport(five_samples, width=5)
        viewport.bottom_based = True
        viewport.view_offset_y = 20
        painter = XYPainter.absolute(line_width=0)
        points = painter.render_points(five_samples, FULL, viewport)

        polygon = painter.fill_polygon(points, viewport)

        assert polygon.ys[-1] == 11

    def test_empty_polyline_unchanged(self, one_to_one_viewport):
        """No points means no polygon to close."""
        empty = RenderPoints(
            x=np.full(4, 99, dtype=np.int64), y=np.full(4, 99, dtype=np.int64), count=0
        )

        polygon = XYPainter.absolute().fill_polygon(empty, one_to_one_viewport)

        assert polygon is empty
        assert polygon.count == 0
