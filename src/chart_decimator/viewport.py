"""
Viewport - Data-to-pixel mapping consumed by the decimation engine.

ViewportMapping is the contract the decimators, selectors and bounds
projector rely on. LinearViewport is the stock implementation: a linear
zoomable, pannable mapping over one Series.

Pixel columns are always ceil(map_x(x)). Both lookups below search over
that rounded column, so what they report agrees exactly with what the
decimators compute per sample.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
import logging
import math

import numpy as np

from .geometry import Rect
from .results import ABSENT, ViewRange
from .series import Series

logger = logging.getLogger(__name__)


@runtime_checkable
class ViewportMapping(Protocol):
    """
    Minimal mapping contract.

    map_x/map_y return unrounded pixel coordinates and accept scalars or
    numpy arrays; callers round toward positive infinity.
    """

    viewport_width: int
    viewport_height: int
    view_width: float  # width of the whole data range in pixels
    data_offset_y: float
    data_height: float
    is_right_based: bool
    is_bottom_based: bool

    def map_x(self, x): ...

    def map_y(self, y): ...

    def data_height_of(self, view_height: float) -> float: ...

    def view_width_of(self, data_width: float) -> float: ...

    def visible_index_range(self, rect: Rect) -> ViewRange: ...

    def nearest_index_by_timestamp(self, view_x: int, view_y: int) -> int: ...


@dataclass
class LinearViewport:
    """
    Linear mapping of a Series' data space onto a pixel viewport.

    The whole data range spans view_width x view_height pixels; the
    viewport shows a viewport_width x viewport_height window of it,
    scrolled by (view_offset_x, view_offset_y). A view larger than the
    viewport means the chart is zoomed in.

    Usage:
        viewport = LinearViewport.fit(series, width=800, height=300)
        viewport.visible_index_range(Rect(0, 0, 800, 300))
    """

    series: Series
    data_offset_x: float
    data_offset_y: float
    data_width: float
    data_height: float
    view_width: float
    view_height: float
    viewport_width: int
    viewport_height: int
    view_offset_x: float = 0.0
    view_offset_y: float = 0.0
    bottom_based: bool = True

    @classmethod
    def fit(
        cls,
        series: Series,
        width: int,
        height: int,
        bottom_based: bool = True,
    ) -> "LinearViewport":
        """
        Fit the series' bounds exactly into a width x height viewport.

        The first sample lands in column 0 and the last in column width-1;
        the minimum value lands on the bottom row of a bottom-based chart.

        Args:
            series: Series to display (may be empty).
            width: Viewport width in pixels.
            height: Viewport height in pixels.
            bottom_based: True when values grow upwards.

        Returns:
            New LinearViewport.
        """
        bounds = series.bounds or Rect(0, 0, 0, 0)
        return cls(
            series=series,
            data_offset_x=bounds.x,
            data_offset_y=bounds.y,
            data_width=max(bounds.width, 1),
            data_height=max(bounds.height, 1),
            view_width=max(width - 1, 0),
            view_height=max(height - 1, 0),
            viewport_width=width,
            viewport_height=height,
            bottom_based=bottom_based,
        )

    @property
    def is_right_based(self) -> bool:
        return False

    @property
    def is_bottom_based(self) -> bool:
        return self.bottom_based

    @property
    def scale_x(self) -> float:
        return self.view_width / self.data_width

    @property
    def scale_y(self) -> float:
        return self.view_height / self.data_height

    def map_x(self, x):
        return (x - self.data_offset_x) * self.scale_x - self.view_offset_x

    def map_y(self, y):
        offset = (y - self.data_offset_y) * self.scale_y - self.view_offset_y
        if self.bottom_based:
            return (self.viewport_height - 1) - offset
        return offset

    def data_height_of(self, view_height: float) -> float:
        scale = self.scale_y
        return view_height / scale if scale else 0.0

    def view_width_of(self, data_width: float) -> float:
        return data_width * self.scale_x

    def column_of(self, index: int) -> int:
        """Ceil-rounded pixel column of a sample."""
        return int(math.ceil(self.map_x(self.series.x_value(index))))

    def visible_index_range(self, rect: Rect) -> ViewRange:
        """
        Resolve the samples whose column lies in [rect.x, rect.right).

        O(log N): binary search over the rounded pixel columns.
        """
        count = self.series.values_count
        if count == 0 or rect.width <= 0:
            return ViewRange()

        lo = self._first_column_at_least(rect.x)
        hi = self._first_column_at_least(rect.right)

        if lo < hi:
            first, last = lo, hi - 1
        else:
            first = last = ABSENT

        before = lo - 1 if lo > 0 else ABSENT
        after = hi if hi < count else ABSENT

        return ViewRange(first=first, last=last, before=before, after=after)

    def nearest_index_by_timestamp(self, view_x: int, view_y: int) -> int:
        """
        Index of the sample whose timestamp is nearest the pixel column.

        view_y is accepted for interface symmetry and ignored.

        Returns:
            Sample index, or -1 when the series is empty, the viewport is
            degenerate, or the nearest sample falls outside the viewport.
        """
        count = self.series.values_count
        if count == 0 or self.viewport_width <= 0 or self.viewport_height <= 0:
            return ABSENT

        timestamps = self.series.x_values
        scale = self.scale_x
        if scale:
            data_x = (view_x + self.view_offset_x) / scale + self.data_offset_x
            index = int(np.searchsorted(timestamps, data_x, side="left"))
            if index >= count:
                index = count - 1
            elif index > 0 and data_x - timestamps[index - 1] <= timestamps[index] - data_x:
                index -= 1
        else:
            index = 0

        column = self.column_of(index)
        if column < 0 or column >= self.viewport_width:
            return ABSENT
        return index

    def _first_column_at_least(self, column: int) -> int:
        return bisect_left(
            range(self.series.values_count), column, key=self.column_of
        )
