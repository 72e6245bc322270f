"""
Plotly Traces - Hand decimated pixel-space output to plotly.

Coordinates stay in pixels: the figure's axes span the viewport, with the
y axis reversed because pixel rows grow downwards.
"""

from typing import Optional
import logging

import numpy as np
import plotly.graph_objects as go
from plotly.colors import qualitative

from .geometry import Rect
from .results import RenderPoints, SelectionResult
from .scaling import ScalingMode, value_factor_for, view_column, view_y_pixels
from .series import Series
from .viewport import ViewportMapping

logger = logging.getLogger(__name__)

PALETTE = qualitative.Plotly


def get_trace_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def create_trace(
    points: RenderPoints,
    name: str,
    color: Optional[str] = None,
    fill: bool = False,
    line_width: float = 1.0,
) -> go.Scattergl:
    """
    Create a ScatterGL line trace from decimated points.

    Args:
        points: Polyline from a decimator (or a closed fill polygon).
        name: Legend name.
        color: Line colour (default: first palette entry).
        fill: Fill the polygon enclosed by the points.
        line_width: Stroke width in pixels.

    Returns:
        ScatterGL trace with exactly points.count vertices.
    """
    return go.Scattergl(
        x=points.xs,
        y=points.ys,
        mode="lines",
        name=name,
        line=dict(color=color or get_trace_color(0), width=line_width),
        fill="toself" if fill else "none",
        hoverinfo="skip",
    )


def create_highlight(
    series: Series,
    selection: Optional[SelectionResult],
    viewport: ViewportMapping,
    scaling: ScalingMode = ScalingMode.ABSOLUTE,
    max_value_offset: float = 0.0,
    color: Optional[str] = None,
) -> Optional[go.Scattergl]:
    """
    Marker trace for a selected sample, or None without a selection.

    The marker sits on the pixel the decimated polyline draws for that
    sample under the same scaling; the hover text shows its raw timestamp
    and value.
    """
    if selection is None:
        return None

    index = selection.index
    x = view_column(series, index, viewport)
    factor = value_factor_for(series, scaling, viewport, max_value_offset)
    values = np.array([series.y_value(index)], dtype=np.int64)
    y = int(view_y_pixels(series, values, scaling, viewport, factor)[0])

    return go.Scattergl(
        x=[x],
        y=[y],
        mode="markers",
        name="selection",
        marker=dict(color=color or get_trace_color(1), size=9),
        hovertext=[f"t={series.x_value(index)} value={series.y_value(index)}"],
        hoverinfo="text",
        showlegend=False,
    )


def create_figure(
    traces: list,
    viewport: ViewportMapping,
    invalidated: Optional[Rect] = None,
) -> go.Figure:
    """
    Create a pixel-space figure sized to the viewport.

    Args:
        traces: Traces to show (None entries are skipped).
        viewport: Mapping whose viewport size sets the axis ranges.
        invalidated: Optional repaint rectangle, drawn as an outline.

    Returns:
        Plotly Figure.
    """
    layout = go.Layout(
        width=viewport.viewport_width,
        height=viewport.viewport_height,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=True,
        xaxis=dict(range=[0, viewport.viewport_width], visible=False),
        yaxis=dict(range=[viewport.viewport_height, 0], visible=False),
    )

    fig = go.Figure(data=[t for t in traces if t is not None], layout=layout)

    if invalidated is not None:
        fig.add_shape(
            type="rect",
            x0=invalidated.x,
            y0=invalidated.y,
            x1=invalidated.right,
            y1=invalidated.bottom,
            line=dict(dash="dot", width=1),
        )

    logger.debug("Created figure with %d traces", len(fig.data))
    return fig
