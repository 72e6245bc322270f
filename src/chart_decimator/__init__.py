"""
Chart Decimator - Pixel-bounded decimation and hit-testing for time series.
"""

from .bounds import selection_bounds, view_bounds
from .config import DecimationMode, DecimatorConfig, load_config
from .geometry import Rect
from .painter import XYPainter
from .results import DISTANCE_UNKNOWN, RenderPoints, SelectionResult, ViewRange
from .scaling import ScalingMode
from .series import Series
from .traces import create_figure, create_highlight, create_trace
from .viewport import LinearViewport, ViewportMapping

__all__ = [
    "DISTANCE_UNKNOWN",
    "DecimationMode",
    "DecimatorConfig",
    "LinearViewport",
    "Rect",
    "RenderPoints",
    "ScalingMode",
    "SelectionResult",
    "Series",
    "ViewRange",
    "ViewportMapping",
    "XYPainter",
    "create_figure",
    "create_highlight",
    "create_trace",
    "load_config",
    "selection_bounds",
    "view_bounds",
]
