"""
Painter - Entry point tying one chart item to a decimation strategy.

The strategy (fast or minmax) is picked once when the painter is built;
every render or hit test afterwards goes straight to it. Only the
painting toggle may change between calls.
"""

from typing import Iterable, Optional, Protocol
import logging
import math

import numpy as np

from .bounds import selection_bounds, view_bounds
from .config import DecimationMode, DecimatorConfig
from .fast import FastStrategy
from .geometry import Rect
from .minmax import MinMaxStrategy
from .results import RenderPoints, SelectionResult
from .scaling import ScalingMode
from .series import Series
from .viewport import ViewportMapping

logger = logging.getLogger(__name__)


class DecimationStrategy(Protocol):
    name: str

    def decimate(
        self,
        series: Series,
        dirty_area: Rect,
        viewport: ViewportMapping,
        scaling: ScalingMode,
        max_value_offset: float,
        line_width: float,
    ) -> Optional[RenderPoints]: ...

    def select_nearest(
        self,
        series: Series,
        view_x: int,
        view_y: int,
        viewport: ViewportMapping,
    ) -> Optional[SelectionResult]: ...


STRATEGIES: dict[DecimationMode, DecimationStrategy] = {
    DecimationMode.FAST: FastStrategy(),
    DecimationMode.MINMAX: MinMaxStrategy(),
}


class XYPainter:
    """
    Decimates, hit-tests and bounds one series for an XY chart.

    Usage:
        painter = XYPainter.absolute(line_width=2)
        points = painter.render_points(series, dirty_area, viewport)
        selection = painter.closest_selection(series, 120, 40, viewport)
    """

    def __init__(
        self,
        line_width: float = 1.0,
        scaling: ScalingMode = ScalingMode.ABSOLUTE,
        max_value_offset: float = 0.0,
        mode: DecimationMode = DecimationMode.MINMAX,
    ) -> None:
        """
        Initialize the painter.

        Args:
            line_width: Stroke width in pixels (>= 0).
            scaling: Absolute or relative value scaling.
            max_value_offset: Top margin in pixels for relative scaling.
            mode: Decimation strategy, fixed for the painter's lifetime.

        Raises:
            ValueError: if line_width or max_value_offset is negative.
        """
        self.config = DecimatorConfig(
            mode=mode,
            line_width=line_width,
            max_value_offset=max_value_offset,
            scaling=scaling,
        )
        self._strategy = STRATEGIES[mode]
        self._painting = True

    @classmethod
    def from_config(cls, config: DecimatorConfig) -> "XYPainter":
        return cls(
            line_width=config.line_width,
            scaling=config.scaling,
            max_value_offset=config.max_value_offset,
            mode=config.mode,
        )

    @classmethod
    def absolute(
        cls,
        line_width: float = 1.0,
        mode: DecimationMode = DecimationMode.MINMAX,
    ) -> "XYPainter":
        return cls(line_width, ScalingMode.ABSOLUTE, 0.0, mode)

    @classmethod
    def relative(
        cls,
        line_width: float = 1.0,
        max_value_offset: float = 0.0,
        mode: DecimationMode = DecimationMode.MINMAX,
    ) -> "XYPainter":
        return cls(line_width, ScalingMode.RELATIVE, max_value_offset, mode)

    def __repr__(self) -> str:
        return f"XYPainter({self.config}, painting={self._painting})"

    @property
    def mode(self) -> DecimationMode:
        return self.config.mode

    @property
    def painting(self) -> bool:
        return self._painting

    def set_painting(self, painting: bool) -> None:
        """Enable or disable render output; selection and bounds are unaffected."""
        self._painting = bool(painting)

    def render_points(
        self,
        series: Series,
        dirty_area: Rect,
        viewport: ViewportMapping,
    ) -> Optional[RenderPoints]:
        """
        Decimated polyline for the dirty area.

        Returns:
            RenderPoints, or None while painting is disabled, when the series
            has fewer than two samples, or when nothing is visible.
        """
        if not self._painting:
            return None
        if series.values_count < 2:
            return None
        if viewport.viewport_width <= 0 or viewport.viewport_height <= 0:
            return None

        config = self.config
        return self._strategy.decimate(
            series,
            dirty_area,
            viewport,
            config.scaling,
            config.max_value_offset,
            config.line_width,
        )

    def closest_selection(
        self,
        series: Series,
        view_x: int,
        view_y: int,
        viewport: ViewportMapping,
    ) -> Optional[SelectionResult]:
        return self._strategy.select_nearest(series, view_x, view_y, viewport)

    def selection_bounds(
        self,
        series: Series,
        index: int,
        viewport: ViewportMapping,
    ) -> Rect:
        config = self.config
        return selection_bounds(
            series, index, viewport, config.scaling, config.line_width, config.max_value_offset
        )

    def view_bounds(
        self,
        series: Series,
        indexes: Optional[Iterable[int]],
        viewport: ViewportMapping,
    ) -> Rect:
        config = self.config
        return view_bounds(
            series, indexes, viewport, config.scaling, config.line_width, config.max_value_offset
        )

    def fill_polygon(self, points: RenderPoints, viewport: ViewportMapping) -> RenderPoints:
        """
        Close a polyline against the zero baseline for an area fill.

        The baseline is the pixel row of the chart's data origin, clamped
        into the viewport. Two points are appended: below the last point
        and below the first one. An empty polyline is returned unchanged.
        """
        if points.count == 0:
            return points

        zero_y = math.ceil(viewport.map_y(viewport.data_offset_y))
        zero_y = min(max(zero_y, 0), viewport.viewport_height)

        count = points.count
        xs = np.empty(count + 2, dtype=np.int64)
        ys = np.empty(count + 2, dtype=np.int64)
        xs[:count] = points.xs
        ys[:count] = points.ys
        xs[count], ys[count] = xs[count - 1], zero_y
        xs[count + 1], ys[count + 1] = xs[0], zero_y

        return RenderPoints(x=xs, y=ys, count=count + 2)
