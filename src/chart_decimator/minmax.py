"""
MinMax Decimator - Per-pixel-column extrema-preserving sampling.

Stride sampling can step over a one-sample spike. This decimator instead
walks every visible sample and folds all samples sharing a pixel column
into that column's true minimum and maximum, so spikes always survive
while output stays within a small multiple of the dirty area width.

The matching selector returns, for a queried pixel, the topmost sample
of the nearest column: the one the folded polyline visibly reaches.
"""

from bisect import bisect_left
from typing import Optional
import logging
import math

import numpy as np

from .geometry import Rect
from .results import ABSENT, RenderPoints, SelectionResult
from .scaling import (
    ScalingMode,
    value_factor_for,
    view_column,
    view_x_pixels,
    view_y_pixels,
)
from .series import Series
from .viewport import ViewportMapping

logger = logging.getLogger(__name__)

# Samples mapped per numpy call during the selector's forward walk
SCAN_BLOCK = 4096


def decimate(
    series: Series,
    dirty_area: Rect,
    viewport: ViewportMapping,
    scaling: ScalingMode = ScalingMode.ABSOLUTE,
    max_value_offset: float = 0,
    line_width: float = 0,
) -> Optional[RenderPoints]:
    """
    Fold the samples inside dirty_area into per-column min/max points.

    The area is widened by the stroke width so segments entering from
    just outside are kept, and one extra sample on each side of the
    visible range is included for the connecting lines.

    Args:
        series: Samples to render.
        dirty_area: Pixel rectangle being repainted.
        viewport: Data-to-pixel mapping.
        scaling: Absolute or relative value scaling.
        max_value_offset: Top margin in pixels for relative scaling.
        line_width: Stroke width in pixels.

    Returns:
        RenderPoints with at most min(4 * width + 2, range size) points,
        or None when the area or the visible range is empty.
    """
    if dirty_area.is_empty():
        return None
    if viewport.viewport_width <= 0 or viewport.viewport_height <= 0:
        return None

    values_count = series.values_count
    if values_count == 0:
        return None

    area = dirty_area.grow(int(math.ceil(line_width)), 0)

    visible = viewport.visible_index_range(area)
    if not visible.is_resolved():
        return None

    first_index = visible.start
    if visible.first != ABSENT and first_index > 0:
        first_index -= 1  # segment entering from the left

    last_index = visible.end
    if visible.last != ABSENT and last_index < values_count - 1:
        last_index += 1  # segment leaving to the right

    # 4 points per column at most, plus the two off-area neighbours
    max_points = min(area.width * 4 + 2, last_index - first_index + 1)

    factor = value_factor_for(series, scaling, viewport, max_value_offset)
    x_values = view_x_pixels(series.x_values[first_index:last_index + 1], viewport)
    y_values = view_y_pixels(
        series, series.y_values[first_index:last_index + 1], scaling, viewport, factor
    )

    x_points = [0] * (max_points + 2)
    y_points = [0] * (max_points + 2)
    n_points = collapse_columns(x_values.tolist(), y_values.tolist(), x_points, y_points)

    logger.debug(
        "MinMax decimation: samples [%d..%d] in %d px -> %d points",
        first_index, last_index, area.width, n_points,
    )
    return RenderPoints(
        x=np.asarray(x_points, dtype=np.int64),
        y=np.asarray(y_points, dtype=np.int64),
        count=n_points,
    )


def collapse_columns(
    xs: list[int],
    ys: list[int],
    x_points: list[int],
    y_points: list[int],
) -> int:
    """
    Append pixel points to preallocated buffers, folding shared columns.

    Each column keeps at most two points, its minimum and maximum, in the
    order they were first reached. The tail of the buffer is the window
    of points already in the current column:

    - no match: new column. Appended, unless it continues a horizontal
      run, in which case the run's end point slides to this column.
    - one match: appended only if the value differs.
    - two matches: the column holds (min, max). A new extreme replaces
      the one it beats; anything in between is dropped.

    Args:
        xs: Pixel x per sample, non-decreasing.
        ys: Pixel y per sample.
        x_points: Output buffer for x, large enough for the result.
        y_points: Output buffer for y.

    Returns:
        Number of points written.
    """
    n = 0

    for x, y in zip(xs, ys):
        matches = 0
        if n > 0 and x_points[n - 1] == x:
            matches = 1
            if n > 1 and x_points[n - 2] == x:
                matches = 2

        if matches == 0:
            if n > 1 and y_points[n - 1] == y and y_points[n - 2] == y:
                x_points[n - 1] = x
            else:
                x_points[n] = x
                y_points[n] = y
                n += 1

        elif matches == 1:
            if y_points[n - 1] != y:
                x_points[n] = x
                y_points[n] = y
                n += 1

        else:
            entry = y_points[n - 2]
            exit_ = y_points[n - 1]
            if y > max(entry, exit_):
                beaten = max(entry, exit_)
            elif y < min(entry, exit_):
                beaten = min(entry, exit_)
            else:
                continue

            # The surviving extreme was reached before y
            if exit_ != beaten:
                y_points[n - 2] = exit_
            y_points[n - 1] = y

    return n


def select_nearest(
    series: Series,
    view_x: int,
    view_y: int,
    viewport: ViewportMapping,
) -> Optional[SelectionResult]:
    """
    Pick the topmost sample of the visible column nearest to view_x.

    Walks forward from the first visible sample while the horizontal
    distance does not grow. Column x is non-decreasing in index order,
    so the first growth marks the nearest column. Then every sample of
    that column is checked and the one with the largest value wins;
    among equal values the later sample wins.

    Args:
        series: Samples to search.
        view_x: Queried pixel column.
        view_y: Queried pixel row (unused, distance is horizontal).
        viewport: Data-to-pixel mapping.

    Returns:
        SelectionResult with the pixel distance, or None when no sample
        is visible.
    """
    if series.values_count == 0:
        return None

    bounds = Rect(0, 0, viewport.viewport_width, viewport.viewport_height)
    if bounds.is_empty():
        return None

    visible = viewport.visible_index_range(bounds)
    if not visible.is_resolved():
        return None

    first_visible = visible.start
    last_visible = visible.end

    index = first_visible
    column = view_column(series, index, viewport)
    distance = abs(view_x - column)

    position = first_visible + 1
    while position <= last_visible:
        end = min(position + SCAN_BLOCK, last_visible + 1)
        columns = view_x_pixels(series.x_values[position:end], viewport)
        distances = np.abs(view_x - columns)

        previous = np.empty_like(distances)
        previous[0] = distance
        previous[1:] = distances[:-1]
        grown = np.flatnonzero(distances > previous)

        if grown.size:
            stop = int(grown[0])
            if stop > 0:
                column = int(columns[stop - 1])
                distance = int(distances[stop - 1])
                index = position + stop - 1
            break

        column = int(columns[-1])
        distance = int(distances[-1])
        index = end - 1
        position = end

    run_start = first_visible + bisect_left(
        range(first_visible, index + 1),
        column,
        key=lambda i: view_column(series, i, viewport),
    )

    run = series.y_values[run_start:index + 1]
    # Scanning back from index, the first maximum met wins
    top = index - int(np.argmax(run[::-1]))

    logger.debug(
        "MinMax selection at x=%d: column %d samples [%d..%d] -> %d",
        view_x, column, run_start, index, top,
    )
    return SelectionResult(index=top, distance=distance)


class MinMaxStrategy:
    """Extrema-preserving decimation with topmost-sample selection."""

    name = "minmax"

    def decimate(self, series, dirty_area, viewport, scaling, max_value_offset, line_width):
        return decimate(series, dirty_area, viewport, scaling, max_value_offset, line_width)

    def select_nearest(self, series, view_x, view_y, viewport):
        return select_nearest(series, view_x, view_y, viewport)
