"""
Scaling - Absolute and relative value-to-pixel conversion.

Relative items are normalised into the chart's data height minus a
pixel margin (max_value_offset), so several items with different ranges
can share one vertical axis.
"""

from enum import Enum
import math
from typing import TYPE_CHECKING

import numpy as np

from .series import Series

if TYPE_CHECKING:
    from .viewport import ViewportMapping


class ScalingMode(str, Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def item_value_factor(
    viewport: "ViewportMapping",
    max_value_offset: float,
    item_height: float,
) -> float:
    """
    Factor mapping an item's value span onto the chart's usable data height.

    Args:
        viewport: Mapping providing the chart data height.
        max_value_offset: Top margin in pixels kept free of the item.
        item_height: Height of the item's data bounds.

    Returns:
        Data units per item unit. 0.0 for a flat item (zero height), which
        pins every value to the data origin.
    """
    if item_height == 0:
        return 0.0
    usable = viewport.data_height - viewport.data_height_of(max_value_offset)
    return usable / item_height


def view_y_pixels(
    series: Series,
    values: np.ndarray,
    scaling: ScalingMode,
    viewport: "ViewportMapping",
    value_factor: float,
) -> np.ndarray:
    """Ceil-rounded pixel y for an array of the series' values."""
    if scaling is ScalingMode.ABSOLUTE:
        mapped = viewport.map_y(values)
    else:
        normalised = viewport.data_offset_y + value_factor * (values - series.bounds.y)
        mapped = viewport.map_y(normalised)
    return np.ceil(mapped).astype(np.int64)


def view_x_pixels(timestamps: np.ndarray, viewport: "ViewportMapping") -> np.ndarray:
    """Ceil-rounded pixel x for an array of timestamps."""
    return np.ceil(viewport.map_x(timestamps)).astype(np.int64)


def view_column(series: Series, index: int, viewport: "ViewportMapping") -> int:
    """Ceil-rounded pixel column of one sample."""
    return int(math.ceil(viewport.map_x(series.x_value(index))))


def value_factor_for(
    series: Series,
    scaling: ScalingMode,
    viewport: "ViewportMapping",
    max_value_offset: float,
) -> float:
    if scaling is not ScalingMode.RELATIVE:
        return 0.0
    return item_value_factor(viewport, max_value_offset, series.bounds.height)
