"""Pytest fixtures for Chart Decimator tests."""

import pytest
import numpy as np

from chart_decimator.series import Series
from chart_decimator.viewport import LinearViewport


def identity_viewport(series, width, height=11, view_width=None, data_width=None):
    """
    Top-based viewport where one data unit is one pixel on both axes.

    view_width/data_width override the horizontal scale only.
    """
    view_width = width - 1 if view_width is None else view_width
    data_width = view_width if data_width is None else data_width
    return LinearViewport(
        series=series,
        data_offset_x=0,
        data_offset_y=0,
        data_width=max(data_width, 1),
        data_height=height - 1,
        view_width=view_width,
        view_height=height - 1,
        viewport_width=width,
        viewport_height=height,
        bottom_based=False,
    )


@pytest.fixture
def five_samples():
    """Two peaks around a trough: values 5, 9, 2, 9, 5 at t = 0..4."""
    series = Series()
    series.extend([0, 1, 2, 3, 4], [5, 9, 2, 9, 5])
    return series


@pytest.fixture
def one_to_one_viewport(five_samples):
    """Columns 0..4 for t = 0..4, pixel row equals value."""
    return identity_viewport(five_samples, width=5)


@pytest.fixture
def single_column_viewport(five_samples):
    """Every sample of five_samples maps to column 0."""
    return identity_viewport(five_samples, width=1, view_width=0, data_width=4)


@pytest.fixture
def unique_random_series():
    """20 000 evenly spaced samples with distinct, shuffled values."""
    rng = np.random.default_rng(1234)
    n = 20_000
    series = Series()
    series.extend(np.arange(n, dtype=np.int64) * 7, rng.permutation(n) * 13)
    return series


@pytest.fixture
def large_walk_factory():
    """Build random-walk series of a requested size."""
    def build(n, seed=7):
        rng = np.random.default_rng(seed)
        series = Series(capacity=n)
        series.extend(np.arange(n, dtype=np.int64), np.cumsum(rng.integers(-3, 4, size=n)))
        return series
    return build


@pytest.fixture
def plateau_series():
    """20 000 samples as 80 flat steps of 250 samples, values 0..7."""
    rng = np.random.default_rng(99)
    n = 20_000
    series = Series()
    series.extend(np.arange(n, dtype=np.int64) * 7, np.repeat(rng.integers(0, 8, size=n // 250), 250))
    return series
