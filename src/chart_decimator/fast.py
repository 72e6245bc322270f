"""
Fast Decimator - Fixed-stride sampling of the visible range.

Emits one point every `stride` samples, where stride is the number of
samples per horizontal pixel. Output size depends on the viewport width
only, never on the series length. Narrow spikes between two stride
positions are lost; use the minmax strategy when they matter.
"""

from typing import Optional
import logging

import numpy as np

from .geometry import Rect
from .results import ABSENT, DISTANCE_UNKNOWN, RenderPoints, SelectionResult
from .scaling import ScalingMode, value_factor_for, view_x_pixels, view_y_pixels
from .series import Series
from .viewport import ViewportMapping

logger = logging.getLogger(__name__)


def decimate(
    series: Series,
    dirty_area: Rect,
    viewport: ViewportMapping,
    scaling: ScalingMode = ScalingMode.ABSOLUTE,
    max_value_offset: float = 0,
) -> Optional[RenderPoints]:
    """
    Stride-sample the part of the series inside dirty_area.

    Args:
        series: Samples to render.
        dirty_area: Pixel rectangle being repainted.
        viewport: Data-to-pixel mapping.
        scaling: Absolute or relative value scaling.
        max_value_offset: Top margin in pixels for relative scaling.

    Returns:
        RenderPoints, or None when nothing is visible or the viewport is
        degenerate.
    """
    values_count = series.values_count
    if values_count == 0 or dirty_area.is_empty():
        return None
    if viewport.viewport_width <= 0 or viewport.viewport_height <= 0:
        return None
    visible = viewport.visible_index_range(dirty_area)

    first_index = visible.start
    if first_index == ABSENT:
        return None
    # Previous point is needed to draw the line entering the area
    if visible.first != ABSENT and first_index > 0:
        first_index -= 1

    last_index = visible.end
    if last_index == ABSENT:
        last_index = values_count - 1
    if visible.last != ABSENT and last_index < values_count - 1:
        last_index += 1

    # Samples per pixel; a zero-width view puts everything in one column
    stride = int(values_count // max(viewport.view_width, 1))
    if stride == 0:
        stride = 1

    visible_count = last_index - first_index + 1

    if stride > 1:
        first_index -= first_index % stride
        last_index = last_index - last_index % stride + stride
        visible_count = (last_index - first_index) // stride + 1
        last_index = min(last_index, values_count - 1)

    indexes = first_index + np.arange(visible_count, dtype=np.int64) * stride
    # Always end on the real last sample, not on an aligned stride position
    indexes[-1] = last_index

    factor = value_factor_for(series, scaling, viewport, max_value_offset)
    x_points = view_x_pixels(series.x_values[indexes], viewport)
    y_points = view_y_pixels(series, series.y_values[indexes], scaling, viewport, factor)

    logger.debug(
        "Fast decimation: %d samples [%d..%d] stride %d -> %d points",
        values_count, first_index, last_index, stride, visible_count,
    )
    return RenderPoints(x=x_points, y=y_points, count=visible_count)


def select_nearest(
    series: Series,
    view_x: int,
    view_y: int,
    viewport: ViewportMapping,
) -> Optional[SelectionResult]:
    """
    Pick the sample nearest in time to a pixel position.

    Thin pass-through to the viewport's timestamp lookup; no distance is
    measured.
    """
    index = viewport.nearest_index_by_timestamp(view_x, view_y)
    if index == ABSENT:
        return None
    return SelectionResult(index=index, distance=DISTANCE_UNKNOWN)


class FastStrategy:
    """Fixed-stride decimation with timestamp-based selection."""

    name = "fast"

    def decimate(self, series, dirty_area, viewport, scaling, max_value_offset, line_width):
        return decimate(series, dirty_area, viewport, scaling, max_value_offset)

    def select_nearest(self, series, view_x, view_y, viewport):
        return select_nearest(series, view_x, view_y, viewport)
