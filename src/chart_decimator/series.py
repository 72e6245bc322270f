"""
Series - Append-only sample storage for one tracked chart item.

Samples are (timestamp, value) integer pairs kept in numpy int64 arrays
that grow geometrically, so appending is amortised O(1) and the decimators
can slice the live prefix without copying. Memory footprint is 16 bytes per
sample plus the unused growth headroom.
"""

from typing import Iterable, Optional
import logging

import numpy as np
import pandas as pd

from .geometry import Rect

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 1024


class Series:
    """
    Ordered sample sequence with a running data-space bounding rectangle.

    Timestamps must be non-decreasing in index order. The owner appends
    samples between render passes; the decimation engine only reads.

    Usage:
        series = Series()
        series.append(1000, 42)
        series.extend([1001, 1002], [40, 47])
        series.bounds  # Rect(x=1000, y=40, width=2, height=7)
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        capacity = max(1, int(capacity))
        self._x = np.zeros(capacity, dtype=np.int64)
        self._y = np.zeros(capacity, dtype=np.int64)
        self._count = 0
        self._bounds: Optional[Rect] = None

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"Series(values_count={self._count}, bounds={self._bounds})"

    @property
    def values_count(self) -> int:
        return self._count

    @property
    def x_values(self) -> np.ndarray:
        """Read-only view of the timestamps."""
        view = self._x[:self._count]
        view.flags.writeable = False
        return view

    @property
    def y_values(self) -> np.ndarray:
        """Read-only view of the values."""
        view = self._y[:self._count]
        view.flags.writeable = False
        return view

    @property
    def bounds(self) -> Optional[Rect]:
        """Data-space bounding rectangle, or None while the series is empty."""
        return self._bounds

    def x_value(self, index: int) -> int:
        self._check_index(index)
        return int(self._x[index])

    def y_value(self, index: int) -> int:
        self._check_index(index)
        return int(self._y[index])

    def contains_index(self, index: int) -> bool:
        return 0 <= index < self._count

    def append(self, x: int, y: int) -> None:
        """
        Append one sample.

        Raises:
            ValueError: if x is smaller than the last timestamp.
        """
        self.extend([x], [y])

    def extend(self, xs: Iterable[int], ys: Iterable[int]) -> None:
        """
        Append a batch of samples.

        Args:
            xs: Timestamps, non-decreasing and not before the last sample.
            ys: Values, same length as xs.

        Raises:
            ValueError: if lengths differ or timestamps would decrease.
        """
        new_x = np.asarray(xs, dtype=np.int64).ravel()
        new_y = np.asarray(ys, dtype=np.int64).ravel()

        if new_x.size != new_y.size:
            raise ValueError(
                f"xs length ({new_x.size}) must match ys length ({new_y.size})"
            )
        if new_x.size == 0:
            return

        if np.any(np.diff(new_x) < 0):
            raise ValueError("Timestamps must be non-decreasing")
        if self._count > 0 and new_x[0] < self._x[self._count - 1]:
            raise ValueError(
                f"Timestamp {int(new_x[0])} precedes last sample "
                f"{int(self._x[self._count - 1])}"
            )

        self._ensure_capacity(self._count + new_x.size)
        end = self._count + new_x.size
        self._x[self._count:end] = new_x
        self._y[self._count:end] = new_y
        self._count = end

        self._update_bounds(new_x, new_y)

    def clear(self) -> None:
        """Drop all samples; existing selections become invalid."""
        self._count = 0
        self._bounds = None

    @classmethod
    def from_pandas(cls, data: pd.Series, value_scale: float = 1.0) -> "Series":
        """
        Build a Series from a pandas Series indexed by time.

        Datetime indexes are converted to int64 nanoseconds; numeric indexes
        are used as-is. Values are multiplied by value_scale and rounded to
        the nearest integer. Rows with a missing value are dropped.

        Args:
            data: Values indexed by timestamp, sorted ascending.
            value_scale: Multiplier applied before rounding (e.g. 100 to keep
                two decimals of a percentage).

        Returns:
            New Series holding the converted samples.

        Raises:
            ValueError: if the index is not sorted ascending.
        """
        missing = int(data.isna().sum())
        if missing:
            logger.warning("Dropped %d samples with missing values", missing)
            data = data.dropna()

        index = data.index.to_numpy()
        if np.issubdtype(index.dtype, np.datetime64):
            xs = index.astype("datetime64[ns]").astype(np.int64)
        else:
            xs = index.astype(np.int64)

        ys = np.rint(data.to_numpy(dtype=np.float64) * value_scale).astype(np.int64)

        series = cls(capacity=max(len(xs), 1))
        series.extend(xs, ys)
        return series

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._count:
            raise IndexError(
                f"Sample index {index} out of range for {self._count} samples"
            )

    def _ensure_capacity(self, required: int) -> None:
        capacity = self._x.size
        if required <= capacity:
            return
        while capacity < required:
            capacity *= 2
        self._x = np.resize(self._x, capacity)
        self._y = np.resize(self._y, capacity)

    def _update_bounds(self, new_x: np.ndarray, new_y: np.ndarray) -> None:
        min_x, max_x = int(new_x[0]), int(new_x[-1])
        min_y, max_y = int(new_y.min()), int(new_y.max())

        if self._bounds is not None:
            min_x = min(min_x, self._bounds.x)
            max_x = max(max_x, self._bounds.right)
            min_y = min(min_y, self._bounds.y)
            max_y = max(max_y, self._bounds.bottom)

        self._bounds = Rect(min_x, min_y, max_x - min_x, max_y - min_y)
