"""
Bounds Projector - Pixel rectangles covering samples, for repaint regions.
"""

from typing import Iterable, Optional
import logging
import math

from .geometry import Rect
from .results import ABSENT
from .scaling import ScalingMode, item_value_factor
from .series import Series
from .viewport import ViewportMapping

logger = logging.getLogger(__name__)


def selection_bounds(
    series: Series,
    index: int,
    viewport: ViewportMapping,
    scaling: ScalingMode = ScalingMode.ABSOLUTE,
    line_width: float = 0,
    max_value_offset: float = 0,
) -> Rect:
    """
    Pixel rectangle to repaint for a selected sample.

    A selection left over from before a reset (index -1, or any index
    outside the series) has unknown bounds, so the whole viewport is
    returned.
    """
    if not series.contains_index(index):
        logger.debug("Selection %d is stale, invalidating whole viewport", index)
        return _whole_viewport(viewport)
    return view_bounds(series, [index], viewport, scaling, line_width, max_value_offset)


def view_bounds(
    series: Series,
    indexes: Optional[Iterable[int]],
    viewport: ViewportMapping,
    scaling: ScalingMode = ScalingMode.ABSOLUTE,
    line_width: float = 0,
    max_value_offset: float = 0,
) -> Rect:
    """
    Project samples to a pixel rectangle grown by the stroke width.

    Args:
        series: Owner of the samples.
        indexes: Sample indexes to cover; -1 entries are skipped. None or
            no usable index covers the whole series.
        viewport: Data-to-pixel mapping.
        scaling: Absolute or relative value scaling.
        line_width: Stroke width in pixels, added on every side.
        max_value_offset: Top margin in pixels for relative scaling.

    Returns:
        Pixel-space Rect, or the whole viewport when any index (other
        than -1) lies outside the series.
    """
    indexes = list(indexes) if indexes is not None else []
    stale = [i for i in indexes if i != ABSENT and not series.contains_index(i)]
    if stale:
        logger.debug("Indexes %s are stale, invalidating whole viewport", stale)
        return _whole_viewport(viewport)

    data_bounds = _data_bounds(series, indexes)

    if scaling is ScalingMode.RELATIVE:
        view = _relative_view_bounds(data_bounds, series, viewport, max_value_offset)
    else:
        view = _absolute_view_bounds(data_bounds, viewport)

    return view.add_border(int(math.ceil(line_width)))


def _whole_viewport(viewport: ViewportMapping) -> Rect:
    return Rect(0, 0, viewport.viewport_width, viewport.viewport_height)


def _data_bounds(series: Series, indexes: list[int]) -> Rect:
    bounds: Optional[Rect] = None

    for index in indexes:
        if index == ABSENT:
            continue
        x, y = series.x_value(index), series.y_value(index)
        bounds = Rect.from_point(x, y) if bounds is None else bounds.include(x, y)

    if bounds is None:
        bounds = series.bounds or Rect(0, 0, 0, 0)
    return bounds


def _absolute_view_bounds(data_bounds: Rect, viewport: ViewportMapping) -> Rect:
    x1 = math.ceil(viewport.map_x(data_bounds.x))
    x2 = math.ceil(viewport.map_x(data_bounds.right))
    y1 = math.ceil(viewport.map_y(data_bounds.y))
    y2 = math.ceil(viewport.map_y(data_bounds.bottom))

    left, top = min(x1, x2), min(y1, y2)
    return Rect(left, top, max(x1, x2) - left, max(y1, y2) - top)


def _relative_view_bounds(
    data_bounds: Rect,
    series: Series,
    viewport: ViewportMapping,
    max_value_offset: float,
) -> Rect:
    item_bounds = series.bounds or data_bounds
    factor = item_value_factor(viewport, max_value_offset, item_bounds.height)

    value1 = viewport.data_offset_y + factor * (data_bounds.y - item_bounds.y)
    value2 = viewport.data_offset_y + factor * (data_bounds.bottom - item_bounds.y)

    view_x = math.ceil(viewport.map_x(data_bounds.x))
    view_width = math.ceil(viewport.view_width_of(data_bounds.width))
    if viewport.is_right_based:
        view_x -= view_width

    view_y1 = math.ceil(viewport.map_y(value1))
    view_y2 = math.ceil(viewport.map_y(value2))
    if viewport.is_bottom_based:
        view_height = view_y1 - view_y2
    else:
        view_height = view_y2 - view_y1
        view_y2 -= view_height

    return Rect(view_x, view_y2, view_width, view_height)
