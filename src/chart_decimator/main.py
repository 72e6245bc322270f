"""
Chart Decimator - Command line benchmark.

Builds a synthetic random-walk series with a few one-sample spikes,
renders it through the configured decimation strategy (or both, with
--mode both) and reports how many points each produced, how long it took,
and whether the spikes survived. Without --mode, the strategy comes from
the CHART_DECIMATOR_MODE environment variable.
"""

import argparse
import logging
import sys
import time
from typing import Optional

from .logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = 1_000_000
DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 400
SPIKE_COUNT = 5


def build_synthetic_series(samples: int, seed: int, spikes: int = SPIKE_COUNT):
    """
    Random walk with isolated spikes at evenly spread positions.

    Args:
        samples: Number of samples (>= 1).
        seed: Random generator seed.
        spikes: Number of one-sample spikes to inject.

    Returns:
        Tuple of (Series, spike indexes).

    Raises:
        ValueError: if samples < 1.
    """
    import numpy as np
    from .series import Series

    if samples < 1:
        raise ValueError("samples must be >= 1")

    rng = np.random.default_rng(seed)
    timestamps = np.arange(samples, dtype=np.int64) * 10
    values = np.cumsum(rng.integers(-5, 6, size=samples)) + 10_000

    spike_indexes = [int(i) for i in np.linspace(0, samples - 1, spikes + 2)[1:-1]]
    span = int(values.max() - values.min()) + 1
    for n, index in enumerate(spike_indexes):
        # Alternate upward and downward spikes
        values[index] += span if n % 2 == 0 else -span

    series = Series(capacity=samples)
    series.extend(timestamps, values)
    return series, spike_indexes


def spikes_preserved(points, series, viewport, spike_indexes: list[int]) -> bool:
    """True when every spike's pixel row appears among the rendered points."""
    import math

    rows = set(points.ys.tolist())
    return all(
        math.ceil(viewport.map_y(series.y_value(i))) in rows for i in spike_indexes
    )


def run_benchmark(
    samples: int,
    width: int,
    height: int,
    line_width: float,
    seed: int,
    modes: Optional[list] = None,
):
    """
    Render the synthetic series with each mode over the full viewport.

    Returns:
        pandas DataFrame with one row per mode: points, capacity,
        elapsed_ms and spikes_kept.
    """
    import pandas as pd
    from .config import DecimationMode, DecimatorConfig
    from .geometry import Rect
    from .painter import XYPainter
    from .viewport import LinearViewport

    series, spike_indexes = build_synthetic_series(samples, seed)
    viewport = LinearViewport.fit(series, width, height)
    dirty_area = Rect(0, 0, width, height)

    rows = []
    for mode in modes or list(DecimationMode):
        painter = XYPainter.from_config(DecimatorConfig(mode=mode, line_width=line_width))

        started = time.perf_counter()
        points = painter.render_points(series, dirty_area, viewport)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if points is None:
            logger.warning("%s: nothing rendered", mode.value)
            continue

        rows.append({
            "mode": mode.value,
            "points": points.count,
            "capacity": points.capacity,
            "elapsed_ms": round(elapsed_ms, 2),
            "spikes_kept": spikes_preserved(points, series, viewport, spike_indexes),
        })

    return pd.DataFrame(rows, columns=["mode", "points", "capacity", "elapsed_ms", "spikes_kept"])


def main() -> int:
    """
    Main entry point for the chart-decimator benchmark.

    Returns:
        Exit code:
        - 0: Success
        - 1: Invalid arguments, or minmax lost a spike
        - 2: Unexpected error
    """
    parser = argparse.ArgumentParser(
        prog="chart-decimator",
        description="Benchmark pixel-bounded time-series decimation",
    )
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLES,
                        help=f"Number of synthetic samples (default: {DEFAULT_SAMPLES})")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                        help=f"Viewport width in pixels (default: {DEFAULT_WIDTH})")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT,
                        help=f"Viewport height in pixels (default: {DEFAULT_HEIGHT})")
    parser.add_argument("--mode", choices=["fast", "minmax", "both"], default=None,
                        help="Decimation mode to run "
                             "(default: $CHART_DECIMATOR_MODE, else minmax)")
    parser.add_argument("--line-width", type=float, default=1.0,
                        help="Stroke width in pixels (default: 1)")
    parser.add_argument("--seed", type=int, default=0,
                        help="Random seed for the synthetic series")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")

    args = parser.parse_args()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        from .config import DecimationMode, load_config

        overrides = {"line_width": args.line_width}
        if args.mode not in (None, "both"):
            overrides["mode"] = args.mode
        config = load_config(**overrides)

        modes = list(DecimationMode) if args.mode == "both" else [config.mode]

        logger.info(
            "Rendering %d samples into %dx%d px with %s",
            args.samples, args.width, args.height, ", ".join(m.value for m in modes),
        )
        results = run_benchmark(
            samples=args.samples,
            width=args.width,
            height=args.height,
            line_width=config.line_width,
            seed=args.seed,
            modes=modes,
        )
        logger.info("Results:\n%s", results.to_string(index=False))

        minmax = results[results["mode"] == DecimationMode.MINMAX.value]
        if not minmax.empty and not bool(minmax["spikes_kept"].all()):
            logger.error("MinMax decimation dropped a spike")
            return 1
        return 0

    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 1

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
